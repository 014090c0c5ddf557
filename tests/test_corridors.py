from mempal.core.rng import SeededRandom
from mempal.dungeon.corridors import closest_pair, l_shaped_corridor
from mempal.dungeon.grid import Point, Rect, Room


def test_wide_corridor_clipped_at_grid_edge():
    bounds = Rect(0, 0, 10, 5)
    # Both lanes of the horizontal run along the bottom row would spill to y=5
    for seed in range(8):
        corridor = l_shaped_corridor(Point(1, 4), Point(8, 4), 2, SeededRandom(seed), bounds)
        assert all(bounds.contains(p) for p in corridor.tiles)
        assert {Point(x, 4) for x in range(1, 9)} <= set(corridor.tiles)


def test_unbounded_corridor_keeps_full_footprint():
    corridor = l_shaped_corridor(Point(1, 4), Point(8, 4), 2, SeededRandom(0))
    assert Point(1, 5) in corridor.tiles
    assert Point(8, 5) in corridor.tiles


def test_corridor_tiles_unique_and_joined():
    corridor = l_shaped_corridor(Point(2, 2), Point(7, 9), 1, SeededRandom(4))
    assert len(corridor.tiles) == len(set(corridor.tiles))
    assert Point(2, 2) in corridor.tiles
    assert Point(7, 9) in corridor.tiles
    # one lane: 6 columns + 8 rows sharing the corner
    assert len(corridor.tiles) == 6 + 8 - 1


def test_closest_pair_first_found_wins_ties():
    a = Room("room-0", Rect(0, 0, 3, 3))
    b = Room("room-1", Rect(0, 10, 3, 3))
    c = Room("room-2", Rect(10, 0, 3, 3))
    d = Room("room-3", Rect(10, 10, 3, 3))
    assert closest_pair([a, d], [b, c]) == (a, b)
