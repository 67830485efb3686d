"""
Arenas router - układy aren i podgląd planszy.
"""

from fastapi import APIRouter
from typing import List, Dict, Any
from pathlib import Path

from hextarget.core.arena import ArenaRegistry
from hextarget.core.config_loader import ConfigLoader
from hextarget.core.hex_grid import BOARD


router = APIRouter()

DATA_PATH = Path(__file__).parent.parent.parent / "data"
_loader = ConfigLoader(str(DATA_PATH))


def _registry() -> ArenaRegistry:
    return ArenaRegistry.from_loader(_loader)


@router.get("/arenas")
async def get_arenas() -> List[Dict[str, Any]]:
    """
    Zwraca listę wszystkich aren.

    Returns:
        Lista aren z polami ally / enemy / blocked / breakable.
    """
    return [arena.to_dict() for arena in _registry()]


@router.get("/arenas/{arena_key}")
async def get_arena(arena_key: str) -> Dict[str, Any]:
    """
    Zwraca szczegóły areny razem z tekstowym podglądem planszy.

    Legenda podglądu: A = ally, E = enemy, # = blocked, % = breakable.
    """
    try:
        arena = _registry().find(arena_key)
    except KeyError:
        return {"error": f"Arena '{arena_key}' not found"}

    marks: Dict[int, str] = {}
    marks.update({tile: "A" for tile in arena.available_ally})
    marks.update({tile: "E" for tile in arena.available_enemy})
    marks.update({tile: "#" for tile in arena.blocked})
    marks.update({tile: "%" for tile in arena.blocked_breakable})

    result = arena.to_dict()
    result["board"] = BOARD.render(marks).splitlines()
    return result
