"""
HexGrid - stała topologia 45-polowej areny.

Plansza to 9 rzędów axial (r = -4..4) z niezmienną numeracją pól 1..45.
Dla każdego rzędu axial podajemy przesunięcie q pierwszego pola oraz
listę id od lewej do prawej:

    r=-4:          43 45
    r=-3:     35 38 40 42 44
    r=-2:   28 31 34 37 39 41
    r=-1:  21 24 27 30 33 36
    r= 0: 14 17 20 23 26 29 32
    r= 1:  10 13 16 19 22 25
    r= 2: 5  7  9  12 15 18
    r= 3:  2  4  6  8  11
    r= 4:    1  3

Rzędy targetingu (1..15) to przekątne q - r = const:
    row = q - r + 8
Rząd 1 = {1, 2} (tył drużyny ally), rząd 15 = {44, 45} (tył enemy),
rząd 8 = {22, 23, 24} (środek). Szerokości rzędów są symetryczne:
2, 3, 2, 3, 4, 3, 4, 3, 4, 3, 4, 3, 2, 3, 2.

Symetria (sym):
    Rząd r jest lustrem rzędu 16 - r, na tej samej pozycji w rzędzie
    (pozycja = kolejność rosnących id). Geometrycznie jest to odbicie
    (q, r) -> (r, q), więc pola środkowej przekątnej 22, 23, 24 są
    swoimi własnymi partnerami.

Obrót (rotate):
    Obrót o 180° wokół pola 23: (q, r) -> (-q, -r), czyli id -> 46 - id.

Wszystkie tabele są liczone raz, przy imporcie (BOARD). Każda operacja
przyjmująca id pola rzuca InvalidTile dla id spoza 1..45.
"""

from __future__ import annotations
from collections import deque
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .errors import InvalidTile
from .hex_coord import HexCoord, Direction


# (r, q pierwszego pola, id od lewej do prawej)
BOARD_LAYOUT: List[Tuple[int, int, List[int]]] = [
    (-4, 2, [43, 45]),
    (-3, 0, [35, 38, 40, 42, 44]),
    (-2, -1, [28, 31, 34, 37, 39, 41]),
    (-1, -2, [21, 24, 27, 30, 33, 36]),
    (0, -3, [14, 17, 20, 23, 26, 29, 32]),
    (1, -3, [10, 13, 16, 19, 22, 25]),
    (2, -4, [5, 7, 9, 12, 15, 18]),
    (3, -4, [2, 4, 6, 8, 11]),
    (4, -3, [1, 3]),
]

TILE_COUNT = 45
ROW_COUNT = 15
MIDDLE_ROW = 8


class HexGrid:
    """
    Niezmienna topologia planszy: współrzędne, rzędy, sąsiedzi, symetrie.

    Attributes:
        tiles (Tuple[int, ...]): Wszystkie id pól, rosnąco
        rows (Tuple[Tuple[int, ...], ...]): Rzędy 1..15 (indeks 0 = rząd 1)
    """

    def __init__(self, layout: Iterable[Tuple[int, int, List[int]]] = BOARD_LAYOUT):
        self._layout = [(r, q_start, list(ids)) for r, q_start, ids in layout]
        self._coords: Dict[int, HexCoord] = {}
        self._tiles: Dict[HexCoord, int] = {}

        for r, q_start, ids in self._layout:
            for i, tile in enumerate(ids):
                coord = HexCoord(q_start + i, r)
                self._coords[tile] = coord
                self._tiles[coord] = tile

        if sorted(self._coords) != list(range(1, TILE_COUNT + 1)):
            raise ValueError("Board layout must number tiles 1..45 exactly once")

        self.tiles: Tuple[int, ...] = tuple(sorted(self._coords))

        # Rzędy targetingu
        rows: Dict[int, List[int]] = {}
        for tile, coord in self._coords.items():
            rows.setdefault(coord.q - coord.r + MIDDLE_ROW, []).append(tile)
        if sorted(rows) != list(range(1, ROW_COUNT + 1)):
            raise ValueError("Board layout must produce diagonal rows 1..15")

        self.rows: Tuple[Tuple[int, ...], ...] = tuple(
            tuple(sorted(rows[row])) for row in range(1, ROW_COUNT + 1)
        )
        self._row_of: Dict[int, int] = {}
        self._ordinal: Dict[int, int] = {}
        for row, members in enumerate(self.rows, start=1):
            for ordinal, tile in enumerate(members):
                self._row_of[tile] = row
                self._ordinal[tile] = ordinal

        # Symetria: rząd r <-> rząd 16 - r, ta sama pozycja
        self._sym: Dict[int, int] = {}
        for row, members in enumerate(self.rows, start=1):
            partner = self.rows[ROW_COUNT - row]
            if len(partner) != len(members):
                raise ValueError(f"Rows {row} and {ROW_COUNT + 1 - row} differ in width")
            for ordinal, tile in enumerate(members):
                self._sym[tile] = partner[ordinal]

        # Obrót o 180° wokół środka planszy
        self._rot: Dict[int, int] = {}
        for tile, coord in self._coords.items():
            rotated = self._tiles.get(-coord)
            if rotated is None:
                raise ValueError(f"Tile {tile} has no rotation partner on the board")
            self._rot[tile] = rotated

        # Sąsiedzi w kolejności Direction, bez pól poza planszą
        self._neighbors: Dict[int, Tuple[Tuple[Direction, int], ...]] = {}
        for tile, coord in self._coords.items():
            found = []
            for direction in Direction:
                other = self._tiles.get(coord.neighbor(direction))
                if other is not None:
                    found.append((direction, other))
            self._neighbors[tile] = tuple(found)

    # ─────────────────────────────────────────────────────────────────────────
    # WALIDACJA
    # ─────────────────────────────────────────────────────────────────────────

    def validate(self, tile) -> int:
        """
        Sprawdza id pola.

        Raises:
            InvalidTile: Gdy tile nie jest int z zakresu 1..45
        """
        if isinstance(tile, bool) or not isinstance(tile, int):
            raise InvalidTile(tile)
        if tile not in self._coords:
            raise InvalidTile(tile)
        return tile

    def is_valid(self, tile) -> bool:
        try:
            self.validate(tile)
        except InvalidTile:
            return False
        return True

    # ─────────────────────────────────────────────────────────────────────────
    # LOOKUPY
    # ─────────────────────────────────────────────────────────────────────────

    def coord(self, tile: int) -> HexCoord:
        return self._coords[self.validate(tile)]

    def tile_at(self, coord: HexCoord) -> Optional[int]:
        """Id pola pod współrzędną albo None poza planszą."""
        return self._tiles.get(coord)

    def row(self, tile: int) -> int:
        """Rząd targetingu 1..15."""
        return self._row_of[self.validate(tile)]

    def ordinal(self, tile: int) -> int:
        """Pozycja w rzędzie (0 = najmniejsze id)."""
        return self._ordinal[self.validate(tile)]

    def row_tiles(self, row: int) -> Tuple[int, ...]:
        if not 1 <= row <= ROW_COUNT:
            raise ValueError(f"Row must be in 1..{ROW_COUNT}, got {row}")
        return self.rows[row - 1]

    def neighbors(self, tile: int) -> List[Tuple[Direction, int]]:
        """
        Sąsiedzi pola jako lista (kierunek, id).

        Kolejność: RIGHT, BOTTOM_RIGHT, BOTTOM_LEFT, LEFT, TOP_LEFT,
        TOP_RIGHT. Pola brzegowe mają mniej niż 6 wpisów.
        """
        return list(self._neighbors[self.validate(tile)])

    def neighbor(self, tile: int, direction: Direction) -> Optional[int]:
        return self._tiles.get(self.coord(tile).neighbor(direction))

    def distance(self, a: int, b: int) -> int:
        """Minimalna liczba kroków między polami."""
        return self.coord(a).distance(self.coord(b))

    def sym(self, tile: int) -> int:
        """Partner lustrzany (rząd r -> rząd 16 - r)."""
        return self._sym[self.validate(tile)]

    def rotate(self, tile: int) -> int:
        """Partner po obrocie o 180° wokół pola 23."""
        return self._rot[self.validate(tile)]

    # ─────────────────────────────────────────────────────────────────────────
    # PIERŚCIENIE
    # ─────────────────────────────────────────────────────────────────────────

    def ring(
        self,
        origin: int,
        radius: int,
        start: Direction = Direction.TOP_RIGHT,
        clockwise: bool = True,
    ) -> List[int]:
        """
        Pola planszy dokładnie w odległości `radius` od origin.

        Kolejność to obchód HexCoord.ring od narożnika `start`; hexy poza
        planszą są pomijane.
        """
        center = self.coord(origin)
        return [
            tile
            for tile in (self._tiles.get(c) for c in center.ring(radius, start, clockwise))
            if tile is not None
        ]

    def max_distance_from(self, origin: int) -> int:
        center = self.coord(origin)
        return max(center.distance(c) for c in self._coords.values())

    def hop_distances(self, origin: int) -> Dict[int, int]:
        """BFS po tabeli sąsiadów; zwraca tile -> liczba kroków."""
        self.validate(origin)
        seen = {origin: 0}
        queue = deque([origin])
        while queue:
            current = queue.popleft()
            for _, other in self._neighbors[current]:
                if other not in seen:
                    seen[other] = seen[current] + 1
                    queue.append(other)
        return seen

    # ─────────────────────────────────────────────────────────────────────────
    # DEBUG
    # ─────────────────────────────────────────────────────────────────────────

    def render(self, marks: Optional[Mapping[int, str]] = None) -> str:
        """
        Tekstowa reprezentacja planszy.

        Args:
            marks: Opcjonalne etykiety pól (np. {23: "A", 41: "E"});
                pozostałe pola pokazują swoje id.
        """
        marks = marks or {}
        columns = {tile: 2 * c.q + c.r for tile, c in self._coords.items()}
        left = min(columns.values())

        lines = []
        for _, _, ids in self._layout:
            line = ""
            for tile in ids:
                pad = (columns[tile] - left) * 2 - len(line)
                line += " " * max(pad, 0) + f"{marks.get(tile, tile):>3}"
            lines.append(line.rstrip())
        return "\n".join(lines)

    def __repr__(self) -> str:
        return f"HexGrid(tiles={len(self.tiles)}, rows={len(self.rows)})"


# Jedyna instancja planszy w procesie
BOARD = HexGrid()
