"""
TargetResolver - jedno pytanie: "które pole jest celem?".

Resolver jest bezstanowy (poza opcjonalnym loggerem): dostaje snapshot
zajętości, pole i drużynę castera oraz ScanConfig skilla, buduje filtr
kandydatów i oddaje sterowanie strategii.

Przepływ:
    1. walidacja pola castera (InvalidTile) i kluczy snapshotu
    2. opcjonalnie: walidacja snapshotu względem areny (IllegalPlacement)
       i zebranie pól zablokowanych
    3. drużyna docelowa = config.target względem drużyny castera
    4. TargetView(summony, sam caster, blokady) -> strategy.scan(...)
    5. Found / NoTarget (+ zdarzenia w EventLoggerze)
"""

from __future__ import annotations
from typing import Mapping, Optional, Union, TYPE_CHECKING

from .hex_grid import BOARD, HexGrid
from .occupancy import OccupancySnapshot, TargetView, Team
from .targeting import (
    Found,
    ScanConfig,
    SymmetricalMirrorScan,
    TargetResult,
    parse_scan_config,
)

if TYPE_CHECKING:
    from .arena import ArenaLayout
    from ..events.event_logger import EventLogger


class TargetResolver:
    """
    Orkiestracja rozstrzygania celu.

    Attributes:
        grid: Topologia planszy (domyślnie BOARD)
        logger: Opcjonalny EventLogger zbierający ślad rozstrzygnięć
    """

    def __init__(self, grid: HexGrid = BOARD, logger: Optional["EventLogger"] = None):
        self.grid = grid
        self.logger = logger

    def resolve(
        self,
        occupancy: Union[OccupancySnapshot, Mapping],
        caster_tile: int,
        caster_team: Union[Team, str],
        config: Union[ScanConfig, str, dict],
        arena: Optional["ArenaLayout"] = None,
    ) -> TargetResult:
        """
        Rozstrzyga cel skilla.

        Args:
            occupancy: Snapshot (albo mapping tile -> team/Occupant)
            caster_tile: Pole castera
            caster_team: Drużyna castera
            config: ScanConfig albo jego opis z YAML
            arena: Opcjonalny układ areny

        Returns:
            Found albo NoTarget

        Raises:
            InvalidTile: caster_tile lub klucz snapshotu spoza 1..45
            IllegalPlacement: Token na polu niedostępnym na arenie
        """
        self.grid.validate(caster_tile)
        if not isinstance(occupancy, OccupancySnapshot):
            occupancy = OccupancySnapshot(occupancy, self.grid)
        caster_team = Team.parse(caster_team)
        config = parse_scan_config(config)

        blocked = frozenset()
        if arena is not None:
            arena.validate(occupancy)
            blocked = arena.impassable

        view = TargetView(
            snapshot=occupancy,
            include_summons=config.include_summons,
            excluded=frozenset({caster_tile}) if config.exclude_self else frozenset(),
            blocked=blocked,
            grid=self.grid,
        )
        target_team = config.target_team(caster_team)

        if self.logger is not None:
            self.logger.log_resolution_start(
                caster_tile=caster_tile,
                caster_team=caster_team.value,
                strategy=config.to_dict(),
                occupancy={
                    tile: occ.team.value + ("*" if occ.is_summon else "")
                    for tile, occ in occupancy.items()
                },
                arena=arena.key if arena is not None else None,
            )

        result = config.strategy.scan(view, caster_tile, caster_team, target_team)

        if self.logger is not None:
            self._log_result(caster_tile, config, result)

        return result

    def _log_result(self, caster_tile: int, config: ScanConfig, result: TargetResult) -> None:
        if isinstance(config.strategy, SymmetricalMirrorScan):
            self.logger.log_symmetry_lookup(
                caster_tile,
                self.grid.sym(caster_tile),
                hit=isinstance(result, Found) and result.method == "mirror",
            )

        if isinstance(result, Found):
            if result.method in ("ring", "ring_id", "mirror_ring"):
                self.logger.log_ring_search(caster_tile, result.tile, result.ring)
            self.logger.log_target_found(
                caster_tile,
                result.tile,
                result.method,
                list(result.examined),
                paired_tile=result.paired_tile,
                extra_tiles=list(result.extra_tiles),
            )
        else:
            self.logger.log_no_target(caster_tile, list(result.examined))
