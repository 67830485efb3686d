"""
TeamPerspective - kierunki skanowania zależne od drużyny.

Zamiast pisać każdy skan dwa razy (dla ally i enemy), strategie pytają
perspektywę o:
    - rząd startowy dla "rearmost" / "frontmost"
    - kolejność pól w rzędzie ("lewo" / "prawo" wg numeracji id)
    - kierunek przejścia rzędu (rearmost od prawej, frontmost od lewej)
    - priorytet kierunków sąsiadów
    - narożnik startowy i zwrot obchodu pierścienia

Wartości są DANYMI (tabela poniżej), wynikają z konwencji numeracji
planszy, a nie z geometrii:

    side   rearmost  frontmost  lewa strona rzędu  sąsiedzi              pierścień
    ───────────────────────────────────────────────────────────────────────────────
    ally   row 1     row 15     większe id         BL, L, BR, R, TL, TR  od TR, zgodnie z zegarem
    enemy  row 15    row 1      mniejsze id        TR, TL, R, BR, L, BL  od BL, przeciwnie

Rearmost przechodzi rząd od prawej strony, frontmost od lewej. Rzędy
mają ciągłe zakresy id, więc rearmost ally to po prostu 1, 2, ..., 45,
a rearmost enemy 45, 44, ..., 1.

Priorytet sąsiadów i obchód pierścienia enemy są lustrem (sym) wartości
ally, więc skany pierścieniowe i parowe dają lustrzane wyniki dla
lustrzanych snapshotów. Skan rzędów jest zgodny z obrotem o 180°.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Tuple, Union

from .hex_coord import Direction
from .hex_grid import ROW_COUNT
from .occupancy import Team


class Extreme(Enum):
    """Który koniec planszy (względem drużyny) skanujemy najpierw."""
    REARMOST = "rearmost"
    FRONTMOST = "frontmost"

    @classmethod
    def parse(cls, value: Union[str, Extreme]) -> Extreme:
        if isinstance(value, Extreme):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown extreme: {value!r} (expected 'rearmost' or 'frontmost')")


@dataclass(frozen=True)
class TeamPerspective:
    side: Team
    rearmost_row: int
    frontmost_row: int
    higher_id_first: bool
    neighbor_priority: Tuple[Direction, ...]
    ring_start: Direction
    ring_clockwise: bool


# ─────────────────────────────────────────────────────────────────────────────
# TABELA PERSPEKTYW
# ─────────────────────────────────────────────────────────────────────────────

PERSPECTIVES: Dict[Team, TeamPerspective] = {
    Team.ALLY: TeamPerspective(
        side=Team.ALLY,
        rearmost_row=1,
        frontmost_row=ROW_COUNT,
        higher_id_first=True,
        neighbor_priority=(
            Direction.BOTTOM_LEFT,
            Direction.LEFT,
            Direction.BOTTOM_RIGHT,
            Direction.RIGHT,
            Direction.TOP_LEFT,
            Direction.TOP_RIGHT,
        ),
        ring_start=Direction.TOP_RIGHT,
        ring_clockwise=True,
    ),
    Team.ENEMY: TeamPerspective(
        side=Team.ENEMY,
        rearmost_row=ROW_COUNT,
        frontmost_row=1,
        higher_id_first=False,
        neighbor_priority=(
            Direction.TOP_RIGHT,
            Direction.TOP_LEFT,
            Direction.RIGHT,
            Direction.BOTTOM_RIGHT,
            Direction.LEFT,
            Direction.BOTTOM_LEFT,
        ),
        ring_start=Direction.BOTTOM_LEFT,
        ring_clockwise=False,
    ),
}


def perspective(side: Team) -> TeamPerspective:
    return PERSPECTIVES[Team.parse(side)]


# ─────────────────────────────────────────────────────────────────────────────
# HELPERY
# ─────────────────────────────────────────────────────────────────────────────

def extreme_row(side: Team, which: Extreme) -> int:
    """Rząd (1..15), od którego zaczyna się skan rearmost/frontmost."""
    view = perspective(side)
    if Extreme.parse(which) is Extreme.REARMOST:
        return view.rearmost_row
    return view.frontmost_row


def rows_from(side: Team, which: Extreme) -> List[int]:
    """Rzędy w kolejności skanu: od extreme_row do przeciwnego końca."""
    start = extreme_row(side, which)
    if start == 1:
        return list(range(1, ROW_COUNT + 1))
    return list(range(ROW_COUNT, 0, -1))


def row_order(side: Team) -> Callable[[int], int]:
    """Klucz sortowania pól w rzędzie ("od lewej" dla danej strony)."""
    if perspective(side).higher_id_first:
        return lambda tile: -tile
    return lambda tile: tile


def row_scan_order(side: Team, which: Extreme) -> Callable[[int], int]:
    """Klucz sortowania pól w rzędzie podczas skanu rearmost/frontmost."""
    left_first = row_order(side)
    if Extreme.parse(which) is Extreme.REARMOST:
        return lambda tile: -left_first(tile)
    return left_first


def neighbor_priority(side: Team) -> Tuple[Direction, ...]:
    return perspective(side).neighbor_priority


def ring_walk_order(side: Team) -> Tuple[Direction, bool]:
    """(narożnik startowy, czy zgodnie z zegarem)."""
    view = perspective(side)
    return view.ring_start, view.ring_clockwise
