"""
Skille jako konfiguracja: skills.yaml -> SkillDefinition(ScanConfig).

Każdy skill to tylko dane: nazwa, postać i blok `scan` parsowany przez
parse_scan_config. Żaden skill nie ma własnej pętli skanowania.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Iterator, List, Optional

from .targeting import ScanConfig, parse_scan_config


@dataclass(frozen=True)
class SkillDefinition:
    id: str
    name: str
    scan: ScanConfig
    character_id: Optional[int] = None
    description: str = ""

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> SkillDefinition:
        if "scan" not in data:
            raise ValueError(f"Skill '{data.get('id')}' has no 'scan' block")
        return cls(
            id=data["id"],
            name=data.get("name", data["id"]),
            scan=parse_scan_config(data["scan"]),
            character_id=data.get("character_id"),
            description=data.get("description", ""),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "character_id": self.character_id,
            "description": self.description,
            "scan": self.scan.to_dict(),
        }


class SkillBook:
    """Wszystkie skille z skills.yaml, po id."""

    def __init__(self, skills: Iterable[SkillDefinition]):
        self._skills: Dict[str, SkillDefinition] = {s.id: s for s in skills}

    @classmethod
    def from_loader(cls, loader) -> SkillBook:
        return cls(SkillDefinition.from_dict(d) for d in loader.load_all_skills().values())

    def get(self, skill_id: str) -> SkillDefinition:
        if skill_id not in self._skills:
            raise KeyError(f"Unknown skill: '{skill_id}'. Available: {self.ids()}")
        return self._skills[skill_id]

    def ids(self) -> List[str]:
        return list(self._skills)

    def __iter__(self) -> Iterator[SkillDefinition]:
        return iter(self._skills.values())

    def __len__(self) -> int:
        return len(self._skills)
