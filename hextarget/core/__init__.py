"""
Core module - silnik rozstrzygania celów na 45-polowej planszy.

Zawiera:
- HexCoord / Direction: Współrzędne axial i nazwane kierunki
- HexGrid / BOARD: Stała topologia planszy (rzędy, sąsiedzi, sym, obrót)
- Team / TokenKind / OccupancySnapshot / TargetView: Zajętość planszy
- perspective: Kierunki skanowania zależne od drużyny
- targeting: Strategie skanowania, ScanConfig, registry
- TargetResolver: Orkiestracja rozstrzygania
- ArenaLayout / ArenaRegistry: Układy aren
- SkillDefinition / SkillBook: Skille jako konfiguracja
- ConfigLoader: Wczytywanie YAML z defaults
"""

from .errors import InvalidTile, IllegalPlacement
from .hex_coord import HexCoord, Direction
from .hex_grid import HexGrid, BOARD
from .occupancy import Team, TokenKind, Occupant, OccupancySnapshot, TargetView
from .perspective import Extreme, TeamPerspective, PERSPECTIVES
from .targeting import (
    Found,
    NoTarget,
    ScanConfig,
    ScanStrategy,
    RearFrontRowScan,
    RingExpansionScan,
    RingIdOrderScan,
    SymmetricalMirrorScan,
    AdjacentPairScan,
    DistanceScan,
    DistancePreference,
    SameRowScan,
    TargetRelation,
    get_strategy,
    parse_scan_config,
    STRATEGY_REGISTRY,
)
from .resolver import TargetResolver
from .arena import ArenaLayout, ArenaRegistry
from .skills import SkillDefinition, SkillBook
from .config_loader import ConfigLoader

__all__ = [
    "InvalidTile", "IllegalPlacement",
    "HexCoord", "Direction", "HexGrid", "BOARD",
    "Team", "TokenKind", "Occupant", "OccupancySnapshot", "TargetView",
    "Extreme", "TeamPerspective", "PERSPECTIVES",
    "Found", "NoTarget", "ScanConfig", "ScanStrategy",
    "RearFrontRowScan", "RingExpansionScan", "RingIdOrderScan", "SymmetricalMirrorScan",
    "AdjacentPairScan", "DistanceScan", "DistancePreference", "SameRowScan",
    "TargetRelation", "get_strategy", "parse_scan_config", "STRATEGY_REGISTRY",
    "TargetResolver", "ArenaLayout", "ArenaRegistry",
    "SkillDefinition", "SkillBook", "ConfigLoader",
]
