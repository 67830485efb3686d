"""
System współrzędnych hexagonalnych (Axial Coordinates) planszy areny.

Używamy Axial Coordinates (q, r) gdzie:
- q = kolumna (oś pozioma)
- r = wiersz (oś ukośna)

Konwersja do Cube Coordinates:
    s = -q - r
    Cube: (q, r, s) gdzie q + r + s = 0

Układ sąsiadów (pointy-top hexagons, zgodnie z zegarem od prawej):
    Kierunek          (dq, dr)
    ────────────────────────────
    RIGHT        (→)  (+1,  0)
    BOTTOM_RIGHT (↘)  ( 0, +1)
    BOTTOM_LEFT  (↙)  (-1, +1)
    LEFT         (←)  (-1,  0)
    TOP_LEFT     (↖)  ( 0, -1)
    TOP_RIGHT    (↗)  (+1, -1)

Odległość między hexami:
    distance = max(|dq|, |dr|, |dq + dr|)

Pierścienie (ring) są obchodzone od wybranego narożnika, zgodnie lub
przeciwnie do ruchu wskazówek zegara. Kolejność obchodu jest częścią
semantyki targetingu (pierwszy trafiony hex wygrywa), więc jest tu
wyrażona jawnie, bez żadnych obliczeń kątów.

Przykład użycia:
    >>> a = HexCoord(0, 0)
    >>> a.distance(HexCoord(2, 1))
    3
    >>> a.ring(1, start=Direction.TOP_RIGHT)[:2]
    [HexCoord(q=1, r=-1), HexCoord(q=1, r=0)]
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import List, Tuple, Iterator


# Kierunki sąsiadów w układzie axial (pointy-top)
# Kolejność: RIGHT, BOTTOM_RIGHT, BOTTOM_LEFT, LEFT, TOP_LEFT, TOP_RIGHT
HEX_DIRECTIONS: List[Tuple[int, int]] = [
    (+1, 0),   # RIGHT
    (0, +1),   # BOTTOM_RIGHT
    (-1, +1),  # BOTTOM_LEFT
    (-1, 0),   # LEFT
    (0, -1),   # TOP_LEFT
    (+1, -1),  # TOP_RIGHT
]


class Direction(IntEnum):
    """Nazwany kierunek; wartość to indeks w HEX_DIRECTIONS."""
    RIGHT = 0
    BOTTOM_RIGHT = 1
    BOTTOM_LEFT = 2
    LEFT = 3
    TOP_LEFT = 4
    TOP_RIGHT = 5

    @property
    def delta(self) -> Tuple[int, int]:
        return HEX_DIRECTIONS[self]

    @property
    def mirrored(self) -> Direction:
        """Kierunek po odbiciu (q, r) -> (r, q)."""
        dq, dr = HEX_DIRECTIONS[self]
        return Direction(HEX_DIRECTIONS.index((dr, dq)))

    @property
    def opposite(self) -> Direction:
        return Direction((self + 3) % 6)


@dataclass(frozen=True)
class HexCoord:
    """
    Współrzędna hexagonalna w systemie axial (q, r).

    Klasa jest niemutowalna (frozen=True), może być kluczem słownika.

    Attributes:
        q (int): Współrzędna kolumny (oś pozioma)
        r (int): Współrzędna wiersza (oś ukośna)
    """
    q: int
    r: int

    # ─────────────────────────────────────────────────────────────────────────
    # WŁAŚCIWOŚCI
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def s(self) -> int:
        """Trzecia współrzędna w systemie cube (q + r + s = 0)."""
        return -self.q - self.r

    @property
    def axial(self) -> Tuple[int, int]:
        return (self.q, self.r)

    # ─────────────────────────────────────────────────────────────────────────
    # ODLEGŁOŚĆ
    # ─────────────────────────────────────────────────────────────────────────

    def distance(self, other: HexCoord) -> int:
        """
        Odległość w krokach między dwoma hexami (cube distance).

        Example:
            >>> HexCoord(0, 0).distance(HexCoord(2, 1))
            3
        """
        dq = abs(self.q - other.q)
        dr = abs(self.r - other.r)
        ds = abs(self.s - other.s)
        return (dq + dr + ds) // 2

    # ─────────────────────────────────────────────────────────────────────────
    # SĄSIEDZI
    # ─────────────────────────────────────────────────────────────────────────

    def neighbors(self) -> List[HexCoord]:
        """6 sąsiadów w kolejności Direction (zgodnie z zegarem od RIGHT)."""
        return [
            HexCoord(self.q + dq, self.r + dr)
            for dq, dr in HEX_DIRECTIONS
        ]

    def neighbor(self, direction: int) -> HexCoord:
        """
        Zwraca sąsiada w określonym kierunku.

        Args:
            direction: Direction albo indeks 0-5

        Raises:
            IndexError: Jeśli direction nie jest w zakresie 0-5
        """
        dq, dr = HEX_DIRECTIONS[direction]
        return HexCoord(self.q + dq, self.r + dr)

    # ─────────────────────────────────────────────────────────────────────────
    # RING I SPIRAL
    # ─────────────────────────────────────────────────────────────────────────

    def ring(
        self,
        radius: int,
        start: Direction = Direction.TOP_LEFT,
        clockwise: bool = True,
    ) -> List[HexCoord]:
        """
        Zwraca wszystkie hexy w pierścieniu o danym promieniu.

        Obchód zaczyna się w narożniku `start * radius` (ten hex jest
        pierwszy na liście) i idzie krawędziami do kolejnych narożników.
        Krok z narożnika k do następnego to kierunek k + 2 (zgodnie
        z zegarem) albo k - 2 (przeciwnie).

        Args:
            radius: Promień pierścienia (>= 0)
            start: Narożnik startowy
            clockwise: Kierunek obchodu

        Returns:
            List[HexCoord]: 6 * radius hexów (albo [self] dla radius=0)
        """
        if radius < 0:
            raise ValueError(f"Ring radius must be >= 0, got {radius}")
        if radius == 0:
            return [self]

        results: List[HexCoord] = []
        dq, dr = HEX_DIRECTIONS[start]
        current = HexCoord(self.q + dq * radius, self.r + dr * radius)

        for edge in range(6):
            if clockwise:
                step = (start + 2 + edge) % 6
            else:
                step = (start - 2 - edge) % 6
            for _ in range(radius):
                results.append(current)
                current = current.neighbor(step)

        return results

    def spiral(
        self,
        radius: int,
        start: Direction = Direction.TOP_LEFT,
        clockwise: bool = True,
    ) -> Iterator[HexCoord]:
        """Generator hexów warstwami: centrum, ring(1), ring(2), ..."""
        for r in range(radius + 1):
            for hex_coord in self.ring(r, start, clockwise):
                yield hex_coord

    # ─────────────────────────────────────────────────────────────────────────
    # SYMETRIE
    # ─────────────────────────────────────────────────────────────────────────

    def mirrored(self) -> HexCoord:
        """Odbicie względem przekątnej q == r."""
        return HexCoord(self.r, self.q)

    def __add__(self, other: HexCoord) -> HexCoord:
        return HexCoord(self.q + other.q, self.r + other.r)

    def __neg__(self) -> HexCoord:
        """Obrót o 180° względem origin."""
        return HexCoord(-self.q, -self.r)

    # ─────────────────────────────────────────────────────────────────────────
    # REPREZENTACJA
    # ─────────────────────────────────────────────────────────────────────────

    def __repr__(self) -> str:
        return f"HexCoord(q={self.q}, r={self.r})"

    def __str__(self) -> str:
        return f"({self.q}, {self.r})"
