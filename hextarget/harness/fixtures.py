"""
Parser fixture'ów markdown dla testów targetingu.

Format pliku:
═══════════════════════════════════════════════════════════════════

    # Arena III - symmetrical-001
    arena: arena3
    notes: dowolny tekst

    ## Enemy Team Positions
    - Character 1: Tile 25
    - Character 2: Tile 32

    ## Test Cases
    character tile: 1
    symmetrical tile: 44
    expected target: 44

Nagłówek "# <arena> - <id testu>" jest wymagany. Linia `arena:`
nadpisuje arenę z nagłówka (klucz z arenas.yaml). Każdy przypadek
testowy to trzy linie: character tile, symmetrical tile, expected
target; `expected target: none` oznacza NoTarget.

Błędy (brak pola, zły numer pola) zgłaszane są przy wczytywaniu jako
ParseError z nazwą pliku i numerem linii. Nic nie jest pomijane po cichu.
"""

from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union
import re

from ..core.hex_grid import BOARD
from ..core.occupancy import OccupancySnapshot


class ParseError(ValueError):
    """Błąd formatu fixture'a."""

    def __init__(self, message: str, source: Optional[str] = None, line: Optional[int] = None):
        self.source = source
        self.line = line
        location = ""
        if source:
            location = f"{source}:{line}: " if line else f"{source}: "
        super().__init__(f"{location}{message}")


@dataclass(frozen=True)
class FixtureCase:
    caster_tile: int
    symmetrical_tile: int
    expected_target: Optional[int]
    line: int = 0


@dataclass(frozen=True)
class FixtureFile:
    """
    Sparsowany plik fixture'a.

    Attributes:
        source: Ścieżka / nazwa pliku
        arena: Klucz albo nazwa areny
        test_id: Id testu z nagłówka
        notes: Opis
        enemies: Pola drużyny enemy
        cases: Przypadki testowe
    """
    source: str
    arena: str
    test_id: str
    notes: str
    enemies: Tuple[int, ...]
    cases: Tuple[FixtureCase, ...]

    def snapshot(self, case: FixtureCase) -> OccupancySnapshot:
        """Zajętość dla przypadku: wrogowie z pliku + caster (ally)."""
        return OccupancySnapshot.of(ally=[case.caster_tile], enemy=self.enemies)


# ─────────────────────────────────────────────────────────────────────────────
# PARSER
# ─────────────────────────────────────────────────────────────────────────────

_HEADING = re.compile(r"^#\s+(?P<arena>.+?)\s+-\s+(?P<test_id>\S.*?)\s*$")
_SECTION = re.compile(r"^##+\s*(?P<title>.+?)\s*$")
_ENEMY = re.compile(r"^[-*]?\s*character\s+(?P<index>\d+)\s*:\s*tile\s+(?P<tile>\S+)\s*$", re.I)
_FIELD = re.compile(r"^[-*]?\s*(?P<key>[a-z ]+?)\s*:\s*(?P<value>.*?)\s*$", re.I)

_CASE_KEYS = {
    "character tile": "caster_tile",
    "symmetrical tile": "symmetrical_tile",
    "expected target": "expected_target",
}


def _parse_tile(value: str, source: str, line: int, allow_none: bool = False) -> Optional[int]:
    cleaned = value.strip().strip("*").strip()
    if allow_none and cleaned.lower() in ("none", "no target", "-"):
        return None
    if not re.fullmatch(r"\d+", cleaned):
        raise ParseError(f"Malformed tile reference: {value!r}", source, line)
    tile = int(cleaned)
    if not BOARD.is_valid(tile):
        raise ParseError(f"Tile {tile} is outside 1..45", source, line)
    return tile


def parse_fixture(text: str, source: str = "<string>") -> FixtureFile:
    """
    Parsuje treść pliku fixture'a.

    Raises:
        ParseError: Brak wymaganego pola albo zły numer pola
    """
    heading: Optional[Tuple[str, str]] = None
    arena_override: Optional[str] = None
    notes = ""
    section: Optional[str] = None
    seen_enemy_section = False

    enemies: List[int] = []
    cases: List[FixtureCase] = []
    pending: Dict[str, Optional[int]] = {}
    pending_line = 0

    def flush() -> None:
        if not pending:
            return
        missing = [k for k, attr in _CASE_KEYS.items() if attr not in pending]
        if missing:
            raise ParseError(
                f"Test case is missing field(s): {', '.join(missing)}", source, pending_line
            )
        cases.append(FixtureCase(line=pending_line, **pending))
        pending.clear()

    for line_no, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        section_match = _SECTION.match(line)
        if section_match:
            title = section_match.group("title").lower()
            if "enemy team positions" in title:
                section = "enemies"
                seen_enemy_section = True
            elif "test cases" in title:
                section = "cases"
            elif section != "cases":
                section = None
            continue

        if line.startswith("#"):
            match = _HEADING.match(line)
            if heading is None:
                if not match:
                    raise ParseError("Heading must read '# <arena> - <test id>'", source, line_no)
                heading = (match.group("arena"), match.group("test_id"))
            continue

        if section == "enemies":
            match = _ENEMY.match(line)
            if not match:
                raise ParseError(f"Malformed enemy position: {line!r}", source, line_no)
            tile = _parse_tile(match.group("tile"), source, line_no)
            if tile in enemies:
                raise ParseError(f"Tile {tile} listed twice", source, line_no)
            enemies.append(tile)
            continue

        field_match = _FIELD.match(line)
        key = field_match.group("key").lower() if field_match else None

        if section == "cases" and key in _CASE_KEYS:
            attr = _CASE_KEYS[key]
            if attr == "caster_tile":
                flush()
                pending_line = line_no
            elif not pending:
                raise ParseError(f"'{key}' before 'character tile'", source, line_no)
            if attr in pending:
                raise ParseError(f"Duplicate '{key}' in test case", source, line_no)
            pending[attr] = _parse_tile(
                field_match.group("value"), source, line_no,
                allow_none=(attr == "expected_target"),
            )
            continue

        if key == "arena":
            arena_override = field_match.group("value")
        elif key == "notes":
            notes = field_match.group("value")

    flush()

    if heading is None:
        raise ParseError("Missing heading '# <arena> - <test id>'", source)
    if not seen_enemy_section:
        raise ParseError("Missing 'Enemy Team Positions' section", source)
    if not cases:
        raise ParseError("No test cases found", source)

    for case in cases:
        if case.caster_tile in enemies:
            raise ParseError(
                f"Character tile {case.caster_tile} is occupied by an enemy", source, case.line
            )

    return FixtureFile(
        source=source,
        arena=arena_override or heading[0],
        test_id=heading[1],
        notes=notes,
        enemies=tuple(enemies),
        cases=tuple(cases),
    )


def load_fixture(path: Union[str, Path]) -> FixtureFile:
    path = Path(path)
    with open(path, 'r', encoding='utf-8') as f:
        return parse_fixture(f.read(), source=path.name)


def load_fixtures(directory: Union[str, Path], pattern: str = "*.md") -> List[FixtureFile]:
    """
    Wczytuje wszystkie fixture'y z katalogu (rekurencyjnie).

    Pliki README.md i FORMAT.md są dokumentacją, nie fixture'ami.
    """
    skipped = {"readme.md", "format.md"}
    return [
        load_fixture(path)
        for path in sorted(Path(directory).rglob(pattern))
        if path.name.lower() not in skipped
    ]
