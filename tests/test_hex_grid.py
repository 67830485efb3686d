"""
Testy dla topologii planszy (HexCoord, HexGrid).

Testuje rzędy, sąsiadów, odległość, symetrię i obrót.
"""

import pytest
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from hextarget.core.errors import InvalidTile
from hextarget.core.hex_coord import HexCoord, Direction
from hextarget.core.hex_grid import BOARD, HexGrid, ROW_COUNT


# ═══════════════════════════════════════════════════════════════════════════
# TEST: HEX COORD
# ═══════════════════════════════════════════════════════════════════════════

def test_hexcoord_distance():
    """Odległość cube między hexami."""
    assert HexCoord(0, 0).distance(HexCoord(2, 1)) == 3
    assert HexCoord(0, 0).distance(HexCoord(0, 0)) == 0
    assert HexCoord(-1, 1).distance(HexCoord(1, -1)) == 2


def test_hexcoord_ring_sizes():
    """Pierścień n ma 6*n hexów, wszystkie w odległości n."""
    center = HexCoord(0, 0)
    assert center.ring(0) == [center]
    for radius in range(1, 5):
        ring = center.ring(radius, Direction.TOP_RIGHT)
        assert len(ring) == 6 * radius
        assert len(set(ring)) == 6 * radius
        assert all(center.distance(h) == radius for h in ring)


def test_hexcoord_ring_walk_clockwise_from_top_right():
    """Obchód pierścienia 1 zgodnie z zegarem od TR."""
    ring = HexCoord(0, 0).ring(1, Direction.TOP_RIGHT, clockwise=True)
    assert ring == [
        HexCoord(1, -1),   # TR
        HexCoord(1, 0),    # R
        HexCoord(0, 1),    # BR
        HexCoord(-1, 1),   # BL
        HexCoord(-1, 0),   # L
        HexCoord(0, -1),   # TL
    ]


def test_hexcoord_ring_walk_counter_clockwise_from_bottom_left():
    """Obchód pierścienia 1 przeciwnie do zegara od BL."""
    ring = HexCoord(0, 0).ring(1, Direction.BOTTOM_LEFT, clockwise=False)
    assert ring == [
        HexCoord(-1, 1),   # BL
        HexCoord(0, 1),    # BR
        HexCoord(1, 0),    # R
        HexCoord(1, -1),   # TR
        HexCoord(0, -1),   # TL
        HexCoord(-1, 0),   # L
    ]


def test_hexcoord_ring_starts_at_corner():
    """Pierwszy hex pierścienia n to narożnik start * n."""
    ring = HexCoord(0, 0).ring(3, Direction.TOP_RIGHT)
    assert ring[0] == HexCoord(3, -3)
    assert ring[3] == HexCoord(3, 0)  # narożnik R


def test_hexcoord_negative_radius_raises():
    with pytest.raises(ValueError):
        HexCoord(0, 0).ring(-1)


def test_direction_mirrored():
    """Odbicie (q, r) -> (r, q) zamienia TR<->BL, R<->BR, L<->TL."""
    assert Direction.TOP_RIGHT.mirrored is Direction.BOTTOM_LEFT
    assert Direction.BOTTOM_LEFT.mirrored is Direction.TOP_RIGHT
    assert Direction.RIGHT.mirrored is Direction.BOTTOM_RIGHT
    assert Direction.LEFT.mirrored is Direction.TOP_LEFT
    for direction in Direction:
        assert direction.mirrored.mirrored is direction


# ═══════════════════════════════════════════════════════════════════════════
# TEST: BOARD / ROWS
# ═══════════════════════════════════════════════════════════════════════════

def test_board_has_45_tiles_and_15_rows():
    assert BOARD.tiles == tuple(range(1, 46))
    assert len(BOARD.rows) == ROW_COUNT == 15


def test_row_widths_are_symmetric():
    """Rzędy wąskie na końcach, najszersze w środku, symetryczne."""
    widths = [len(row) for row in BOARD.rows]
    assert widths == [2, 3, 2, 3, 4, 3, 4, 3, 4, 3, 4, 3, 2, 3, 2]
    assert widths == widths[::-1]


def test_rows_partition_the_board():
    tiles = [tile for row in BOARD.rows for tile in row]
    assert sorted(tiles) == list(range(1, 46))


def test_row_and_ordinal_examples():
    assert BOARD.row(1) == 1
    assert BOARD.row(2) == 1
    assert BOARD.row(23) == 8
    assert BOARD.row(45) == 15
    assert BOARD.row_tiles(8) == (22, 23, 24)
    assert BOARD.row_tiles(14) == (41, 42, 43)
    assert BOARD.ordinal(22) == 0
    assert BOARD.ordinal(24) == 2


def test_row_tiles_out_of_range():
    with pytest.raises(ValueError):
        BOARD.row_tiles(0)
    with pytest.raises(ValueError):
        BOARD.row_tiles(16)


# ═══════════════════════════════════════════════════════════════════════════
# TEST: NEIGHBORS / DISTANCE
# ═══════════════════════════════════════════════════════════════════════════

def test_center_tile_has_six_neighbors():
    """Pole 23 (środek) ma wszystkich 6 sąsiadów."""
    assert BOARD.neighbors(23) == [
        (Direction.RIGHT, 26),
        (Direction.BOTTOM_RIGHT, 19),
        (Direction.BOTTOM_LEFT, 16),
        (Direction.LEFT, 20),
        (Direction.TOP_LEFT, 27),
        (Direction.TOP_RIGHT, 30),
    ]


def test_corner_tile_omits_off_board_neighbors():
    """Pole 1 (róg) ma tylko 3 sąsiadów, bez wartości pustych."""
    assert BOARD.neighbors(1) == [
        (Direction.RIGHT, 3),
        (Direction.TOP_LEFT, 4),
        (Direction.TOP_RIGHT, 6),
    ]
    assert BOARD.neighbor(1, Direction.LEFT) is None


def test_neighbors_are_mutual():
    """b sąsiaduje z a w kierunku d <=> a sąsiaduje z b w kierunku przeciwnym."""
    for tile in BOARD.tiles:
        for direction, other in BOARD.neighbors(tile):
            assert (direction.opposite, tile) in BOARD.neighbors(other)


def test_distance_to_self_is_zero():
    for tile in BOARD.tiles:
        assert BOARD.distance(tile, tile) == 0


def test_distance_equals_neighbor_hops():
    """Odległość = minimalna liczba kroków po tabeli sąsiadów (BFS)."""
    for origin in BOARD.tiles:
        hops = BOARD.hop_distances(origin)
        assert len(hops) == 45
        for tile, steps in hops.items():
            assert BOARD.distance(origin, tile) == steps


# ═══════════════════════════════════════════════════════════════════════════
# TEST: SYMMETRY / ROTATION
# ═══════════════════════════════════════════════════════════════════════════

def test_sym_is_involution():
    for tile in BOARD.tiles:
        assert BOARD.sym(BOARD.sym(tile)) == tile


def test_sym_maps_row_to_mirror_row_same_position():
    for tile in BOARD.tiles:
        partner = BOARD.sym(tile)
        assert BOARD.row(partner) == 16 - BOARD.row(tile)
        assert BOARD.ordinal(partner) == BOARD.ordinal(tile)


def test_sym_fixed_points_are_middle_row():
    """Rząd 8 (22, 23, 24) jest swoim lustrem; każde inne pole ma partnera."""
    fixed = {tile for tile in BOARD.tiles if BOARD.sym(tile) == tile}
    assert fixed == {22, 23, 24}


@pytest.mark.parametrize("tile,partner", [
    (1, 44), (2, 45), (3, 41), (4, 42), (6, 39), (7, 40),
    (9, 37), (10, 38), (16, 30),
])
def test_sym_fixture_pairs(tile, partner):
    assert BOARD.sym(tile) == partner
    assert BOARD.sym(partner) == tile


def test_sym_is_reflection_across_middle_diagonal():
    for tile in BOARD.tiles:
        assert BOARD.coord(BOARD.sym(tile)) == BOARD.coord(tile).mirrored()


def test_rotate_is_46_minus_id():
    """Obrót o 180° wokół pola 23."""
    for tile in BOARD.tiles:
        assert BOARD.rotate(tile) == 46 - tile
        assert BOARD.row(BOARD.rotate(tile)) == 16 - BOARD.row(tile)
    assert [t for t in BOARD.tiles if BOARD.rotate(t) == t] == [23]


# ═══════════════════════════════════════════════════════════════════════════
# TEST: RINGS
# ═══════════════════════════════════════════════════════════════════════════

def test_ring_zero_is_origin():
    for tile in BOARD.tiles:
        assert BOARD.ring(tile, 0) == [tile]


def test_rings_partition_board():
    """Pierścienie 0..max pokrywają planszę dokładnie raz, z poprawną odległością."""
    for origin in BOARD.tiles:
        seen = []
        for radius in range(BOARD.max_distance_from(origin) + 1):
            ring = BOARD.ring(origin, radius)
            assert all(BOARD.distance(origin, t) == radius for t in ring)
            seen.extend(ring)
        assert sorted(seen) == list(range(1, 46))


def test_ring_on_board_keeps_walk_order():
    """Pierścień 1 wokół 41 (brzeg) zachowuje kolejność obchodu bez pól poza planszą."""
    assert BOARD.ring(41, 1, Direction.TOP_RIGHT, clockwise=True) == [36, 39, 44]


# ═══════════════════════════════════════════════════════════════════════════
# TEST: INVALID TILE
# ═══════════════════════════════════════════════════════════════════════════

@pytest.mark.parametrize("bad", [0, 46, -1, 100, "5", 5.0, True, None])
def test_invalid_tile_raises(bad):
    with pytest.raises(InvalidTile):
        BOARD.sym(bad)
    with pytest.raises(InvalidTile):
        BOARD.row(bad)
    with pytest.raises(InvalidTile):
        BOARD.neighbors(bad)
    with pytest.raises(InvalidTile):
        BOARD.distance(bad, 1)


def test_invalid_tile_is_value_error():
    with pytest.raises(ValueError):
        BOARD.validate(46)


def test_render_contains_every_tile():
    text = BOARD.render()
    for tile in BOARD.tiles:
        assert f"{tile:>3}" in text
    assert len(text.splitlines()) == 9


def test_bad_layout_rejected():
    with pytest.raises(ValueError):
        HexGrid(layout=[(0, 0, [1, 2, 3])])


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
