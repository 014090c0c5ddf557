from grid_factory import make_grid

from mempal.dungeon.grid import Point
from mempal.dungeon.movement import can_step, max_step, try_move
from mempal.dungeon.tiles import TileType


def test_max_step():
    assert max_step(TileType.FLOOR, TileType.FLOOR) == 0
    assert max_step(TileType.STAIR, TileType.FLOOR) == 1
    assert max_step(TileType.FLOOR, TileType.STAIR) == 1


def test_stair_at_bottom_unlocks_climb_both_ways():
    # Only the lower cell carries the stair; either end being a stair is enough
    grid = make_grid([[0, 1]], ["S."])
    assert can_step(grid, 0, 0, 1, 0)
    assert can_step(grid, 1, 0, 0, 0)


def test_two_levels_never_walkable():
    grid = make_grid([[0, 2]], ["SS"])
    assert not can_step(grid, 0, 0, 1, 0)


def test_walls_and_void_block():
    grid = make_grid([[0, 0, 0]], [".#W"])
    assert not can_step(grid, 0, 0, 1, 0)
    assert not can_step(grid, 1, 0, 2, 0)


def test_diagonal_needs_both_corners():
    grid = make_grid([[0, 0], [0, 0]], ["..", "#."])
    assert not can_step(grid, 0, 0, 1, 1)
    grid = make_grid([[0, 1], [0, 0]])
    assert not can_step(grid, 0, 0, 1, 1)


def test_no_out_of_bounds_movement():
    grid = make_grid([[0] * 4 for _ in range(3)])
    corners = [(0, 0), (grid.width - 1, 0), (0, grid.height - 1), (grid.width - 1, grid.height - 1)]
    outward = {
        (0, 0): [(-1, 0), (0, -1), (-1, -1)],
        (grid.width - 1, 0): [(1, 0), (0, -1), (1, -1)],
        (0, grid.height - 1): [(-1, 0), (0, 1), (-1, 1)],
        (grid.width - 1, grid.height - 1): [(1, 0), (0, 1), (1, 1)],
    }
    for cx, cy in corners:
        pos = Point(cx, cy)
        for dx, dy in outward[(cx, cy)]:
            result = try_move(grid, pos, dx, dy)
            assert not result.moved
            assert result.new_pos == pos


def test_try_move_succeeds_on_floor():
    grid = make_grid([[0, 0]])
    result = try_move(grid, Point(0, 0), 1, 0)
    assert result.moved
    assert result.new_pos == Point(1, 0)
