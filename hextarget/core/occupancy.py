"""
Zajętość planszy - snapshot tokenów w jednej chwili.

Snapshot to niemutowalne mapowanie: id pola -> Occupant(team, kind).
Tworzy go wywołujący (świeży na każde rozstrzygnięcie), silnik nigdy go
nie modyfikuje. Klucze są walidowane przy konstrukcji (InvalidTile).

TargetView to przefiltrowany widok snapshotu, jedyne co czytają
strategie skanowania:
    - pola zablokowane (blocked / blocked_breakable) nigdy nie są celem
    - summony/klony są niewidoczne, chyba że include_summons=True
    - pola z `excluded` (np. sam caster) są pomijane
"""

from __future__ import annotations
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Union

from .hex_grid import BOARD, HexGrid


# ═══════════════════════════════════════════════════════════════════════════
# DRUŻYNY I TOKENY
# ═══════════════════════════════════════════════════════════════════════════

class Team(Enum):
    """Drużyna tokena (i zarazem perspektywa skanowania)."""
    ALLY = "ally"
    ENEMY = "enemy"

    @property
    def opposing(self) -> Team:
        return Team.ENEMY if self is Team.ALLY else Team.ALLY

    @classmethod
    def parse(cls, value: Union[str, Team]) -> Team:
        if isinstance(value, Team):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown team: {value!r} (expected 'ally' or 'enemy')")


class TokenKind(Enum):
    """Rodzaj tokena. Summony/klony są domyślnie niewidoczne dla targetingu."""
    MAIN = "main"
    SUMMON = "summon"

    @classmethod
    def parse(cls, value: Union[str, TokenKind]) -> TokenKind:
        if isinstance(value, TokenKind):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown token kind: {value!r} (expected 'main' or 'summon')")


@dataclass(frozen=True)
class Occupant:
    team: Team
    kind: TokenKind = TokenKind.MAIN

    @property
    def is_summon(self) -> bool:
        return self.kind is TokenKind.SUMMON


OccupantLike = Union[Occupant, Team, str]


def _to_occupant(value: OccupantLike) -> Occupant:
    if isinstance(value, Occupant):
        return value
    return Occupant(Team.parse(value))


# ═══════════════════════════════════════════════════════════════════════════
# SNAPSHOT
# ═══════════════════════════════════════════════════════════════════════════

class OccupancySnapshot(Mapping):
    """
    Niemutowalne mapowanie tile -> Occupant.

    Example:
        >>> snap = OccupancySnapshot.of(ally=[1, 9], enemy=[25, 33])
        >>> snap[25].team
        <Team.ENEMY: 'enemy'>
        >>> snap.tiles_of(Team.ALLY)
        [1, 9]
    """

    def __init__(
        self,
        cells: Optional[Mapping[int, OccupantLike]] = None,
        grid: HexGrid = BOARD,
    ):
        normalized: Dict[int, Occupant] = {}
        for tile, value in (cells or {}).items():
            normalized[grid.validate(tile)] = _to_occupant(value)
        self._cells = MappingProxyType(normalized)
        self._grid = grid

    @classmethod
    def of(
        cls,
        ally: Iterable[int] = (),
        enemy: Iterable[int] = (),
        ally_summons: Iterable[int] = (),
        enemy_summons: Iterable[int] = (),
        grid: HexGrid = BOARD,
    ) -> OccupancySnapshot:
        """
        Buduje snapshot z list pól.

        Raises:
            InvalidTile: Id spoza 1..45
            ValueError: To samo pole na dwóch listach
        """
        cells: Dict[int, Occupant] = {}
        groups = [
            (ally, Occupant(Team.ALLY)),
            (enemy, Occupant(Team.ENEMY)),
            (ally_summons, Occupant(Team.ALLY, TokenKind.SUMMON)),
            (enemy_summons, Occupant(Team.ENEMY, TokenKind.SUMMON)),
        ]
        for tiles, occupant in groups:
            for tile in tiles:
                grid.validate(tile)
                if tile in cells:
                    raise ValueError(f"Tile {tile} is occupied twice")
                cells[tile] = occupant
        return cls(cells, grid)

    # Mapping API
    def __getitem__(self, tile: int) -> Occupant:
        return self._cells[tile]

    def __iter__(self) -> Iterator[int]:
        return iter(self._cells)

    def __len__(self) -> int:
        return len(self._cells)

    def __repr__(self) -> str:
        body = ", ".join(
            f"{tile}: {occ.team.value}{'*' if occ.is_summon else ''}"
            for tile, occ in sorted(self._cells.items())
        )
        return f"OccupancySnapshot({{{body}}})"

    # ─────────────────────────────────────────────────────────────────────────
    # POMOCNICZE
    # ─────────────────────────────────────────────────────────────────────────

    def tiles_of(self, team: Team, include_summons: bool = True) -> List[int]:
        return sorted(
            tile for tile, occ in self._cells.items()
            if occ.team is team and (include_summons or not occ.is_summon)
        )

    def with_occupant(self, tile: int, occupant: OccupantLike) -> OccupancySnapshot:
        """Kopia snapshotu z dodatkowym (albo podmienionym) tokenem."""
        cells = dict(self._cells)
        cells[self._grid.validate(tile)] = _to_occupant(occupant)
        return OccupancySnapshot(cells, self._grid)

    def mirrored(self) -> OccupancySnapshot:
        """Każdy token przeniesiony na sym(tile), drużyny zamienione."""
        return OccupancySnapshot(
            {
                self._grid.sym(tile): Occupant(occ.team.opposing, occ.kind)
                for tile, occ in self._cells.items()
            },
            self._grid,
        )

    def rotated(self) -> OccupancySnapshot:
        """Każdy token przeniesiony na rotate(tile), drużyny zamienione."""
        return OccupancySnapshot(
            {
                self._grid.rotate(tile): Occupant(occ.team.opposing, occ.kind)
                for tile, occ in self._cells.items()
            },
            self._grid,
        )


# ═══════════════════════════════════════════════════════════════════════════
# WIDOK DLA STRATEGII
# ═══════════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TargetView:
    """
    Filtr kandydatów wspólny dla wszystkich strategii.

    Attributes:
        snapshot: Zajętość planszy
        include_summons: Czy summony/klony mogą być celem
        excluded: Pola pomijane (np. sam caster przy skillach na sojuszników)
        blocked: Pola zablokowane na arenie (zwykłe i zniszczalne)
        grid: Topologia planszy
    """
    snapshot: OccupancySnapshot
    include_summons: bool = False
    excluded: FrozenSet[int] = frozenset()
    blocked: FrozenSet[int] = frozenset()
    grid: HexGrid = field(default=BOARD, repr=False)

    def holds(self, tile: int, team: Team) -> bool:
        """Czy pole zawiera kwalifikujący się token drużyny `team`."""
        if tile in self.blocked or tile in self.excluded:
            return False
        occupant = self.snapshot.get(tile)
        if occupant is None or occupant.team is not team:
            return False
        return self.include_summons or not occupant.is_summon

    def is_blocked(self, tile: int) -> bool:
        return tile in self.blocked
