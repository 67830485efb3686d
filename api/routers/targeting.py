"""
Targeting router - rozstrzyganie celu skilla dla podanego snapshotu.
"""

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel
from typing import List, Dict, Any, Optional, Union
from pathlib import Path

from hextarget.core.arena import ArenaRegistry
from hextarget.core.config_loader import ConfigLoader
from hextarget.core.hex_grid import BOARD
from hextarget.core.occupancy import Occupant, OccupancySnapshot, Team, TokenKind
from hextarget.core.resolver import TargetResolver
from hextarget.core.skills import SkillBook
from hextarget.core.targeting import Found
from hextarget.events import EventLogger


router = APIRouter()

DATA_PATH = Path(__file__).parent.parent.parent / "data"
_loader = ConfigLoader(str(DATA_PATH))


# ═══════════════════════════════════════════════════════════════════════════
# REQUEST/RESPONSE MODELS
# ═══════════════════════════════════════════════════════════════════════════

class TokenPlacement(BaseModel):
    """Token na planszy."""
    tile: int
    team: str = "enemy"
    kind: str = "main"


class ResolveRequest(BaseModel):
    """
    Request rozstrzygnięcia.

    Podaj `skill` (id z skills.yaml) albo `scan` (string lub dict jak w YAML).
    """
    caster_tile: int
    caster_team: str = "ally"
    skill: Optional[str] = None
    scan: Optional[Union[str, Dict[str, Any]]] = None
    arena: Optional[str] = None
    placements: List[TokenPlacement] = []
    trace: bool = False


# ═══════════════════════════════════════════════════════════════════════════
# ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════

@router.post("/resolve")
async def resolve_target(request: ResolveRequest) -> Dict[str, Any]:
    """
    Rozstrzyga cel skilla.

    Returns:
        found, tile, paired_tile, method, ring, examined
        (+ extra_tiles przy kilku celach, + trace)

    Raises:
        HTTPException 400: Złe pole, zły układ, nieznany skill/arena/strategia
    """
    if request.skill is None and request.scan is None:
        raise HTTPException(status_code=400, detail="Provide either 'skill' or 'scan'")

    logger = EventLogger() if request.trace else None
    resolver = TargetResolver(logger=logger)

    try:
        if request.skill is not None:
            config = SkillBook.from_loader(_loader).get(request.skill).scan
        else:
            config = request.scan

        arena = None
        if request.arena is not None:
            arena = ArenaRegistry.from_loader(_loader).find(request.arena)

        cells = {}
        for placement in request.placements:
            if placement.tile in cells:
                raise ValueError(f"Tile {placement.tile} is occupied twice")
            cells[placement.tile] = Occupant(
                Team.parse(placement.team), TokenKind.parse(placement.kind)
            )
        snapshot = OccupancySnapshot(cells)

        result = resolver.resolve(
            snapshot, request.caster_tile, request.caster_team, config, arena=arena
        )
    except KeyError as exc:
        raise HTTPException(status_code=400, detail=exc.args[0] if exc.args else str(exc))
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    response: Dict[str, Any] = {
        "found": bool(result),
        "caster_tile": request.caster_tile,
        "symmetrical_tile": BOARD.sym(request.caster_tile),
        "examined": list(result.examined),
    }
    if isinstance(result, Found):
        response.update(
            tile=result.tile,
            paired_tile=result.paired_tile,
            method=result.method,
            ring=result.ring,
        )
        if result.extra_tiles:
            response["extra_tiles"] = list(result.extra_tiles)
    if logger is not None:
        response["trace"] = logger.to_dict()["events"]

    return response
