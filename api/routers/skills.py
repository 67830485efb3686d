"""
Skills router - skille i ich konfiguracja targetingu.
"""

from fastapi import APIRouter
from typing import List, Dict, Any
from pathlib import Path

from hextarget.core.config_loader import ConfigLoader
from hextarget.core.skills import SkillBook


router = APIRouter()

DATA_PATH = Path(__file__).parent.parent.parent / "data"
_loader = ConfigLoader(str(DATA_PATH))


@router.get("/skills")
async def get_skills() -> List[Dict[str, Any]]:
    """Zwraca listę skilli z ich ScanConfig."""
    return [skill.to_dict() for skill in SkillBook.from_loader(_loader)]


@router.get("/skills/{skill_id}")
async def get_skill(skill_id: str) -> Dict[str, Any]:
    try:
        return SkillBook.from_loader(_loader).get(skill_id).to_dict()
    except KeyError:
        return {"error": f"Skill '{skill_id}' not found"}
