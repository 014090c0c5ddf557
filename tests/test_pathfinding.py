from grid_factory import make_grid

from mempal.config import DungeonGeneratorConfig
from mempal.dungeon.generator import generate_dungeon
from mempal.dungeon.isometric import iso_to_screen
from mempal.dungeon.movement import can_step
from mempal.dungeon.pathfinding import PathfindingGrid, find_path


def _cells(path):
    return [(n.iso_x, n.iso_y) for n in path]


def test_straight_corridor():
    grid = make_grid([[0, 0, 0, 0, 0]])
    path = find_path((0, 0), (4, 0), grid)
    assert len(path) == 5
    assert [n.iso_x for n in path] == [0, 1, 2, 3, 4]
    assert all(n.iso_y == 0 for n in path)
    assert all(n.iso_z == 0 for n in path)


def test_nodes_carry_projection():
    grid = make_grid([[1, 1, 1]])
    path = find_path((0, 0), (2, 0), grid)
    for n in path:
        assert (n.screen_x, n.screen_y) == iso_to_screen(n.iso_x, n.iso_y, n.iso_z)


def test_custom_projection():
    grid = make_grid([[0, 0]])
    path = find_path((0, 0), (1, 0), grid, project=lambda x, y, z: (x * 10, y * 10 + z))
    assert [(n.screen_x, n.screen_y) for n in path] == [(0, 0), (10, 0)]


def test_ring_of_blocked_tiles_is_unreachable():
    grid = make_grid(
        [[0] * 5 for _ in range(5)],
        [
            ".....",
            ".###.",
            ".#.#.",
            ".###.",
            ".....",
        ],
    )
    assert find_path((0, 0), (2, 2), grid) == []


def test_elevation_step_without_stair_fails():
    grid = make_grid([[0, 1]])
    assert find_path((0, 0), (1, 0), grid) == []


def test_elevation_step_takes_stair_detour():
    # Direct step (0,0)->(1,0) climbs without a stair; (0,1) is a stair at the bottom of the step
    grid = make_grid(
        [
            [0, 1],
            [0, 1],
        ],
        [
            "..",
            "S.",
        ],
    )
    path = find_path((0, 0), (1, 0), grid)
    assert _cells(path) == [(0, 0), (0, 1), (1, 0)]
    assert [n.iso_z for n in path] == [0, 0, 1]


def test_no_diagonal_corner_cutting():
    grid = make_grid(
        [[0, 0], [0, 0]],
        [
            ".#",
            "#.",
        ],
    )
    assert find_path((0, 0), (1, 1), grid) == []


def test_diagonal_allowed_when_corners_open():
    grid = make_grid([[0, 0], [0, 0]])
    assert _cells(find_path((0, 0), (1, 1), grid)) == [(0, 0), (1, 1)]


def test_diagonal_rejected_past_cliff_corner():
    grid = make_grid([[0, 3], [0, 0]])
    path = find_path((0, 0), (1, 1), grid)
    assert _cells(path) == [(0, 0), (0, 1), (1, 1)]


def test_start_equals_goal():
    grid = make_grid([[2]])
    path = find_path((0, 0), (0, 0), grid)
    assert len(path) == 1
    assert path[0].iso_z == 2


def test_out_of_bounds_and_impassable_goal():
    grid = make_grid([[0, 0, 0]], [".#W"])
    assert find_path((0, 0), (5, 0), grid) == []
    assert find_path((-1, 0), (0, 0), grid) == []
    assert find_path((0, 0), (1, 0), grid) == []
    assert find_path((0, 0), (2, 0), grid) == []


def test_missing_tile_types_means_all_floor():
    grid = PathfindingGrid(width=3, height=3, height_map=[[0] * 3 for _ in range(3)])
    assert _cells(find_path((0, 0), (2, 2), grid)) == [(0, 0), (1, 1), (2, 2)]


def test_prefers_flat_route_over_climb():
    # Going over the bump costs the elevation penalty twice; the flat detour is cheaper
    grid = make_grid(
        [
            [0, 1, 0],
            [0, 0, 0],
        ],
        [
            "S.S",
            "...",
        ],
    )
    path = find_path((0, 0), (2, 0), grid)
    assert (1, 0) not in _cells(path)
    assert _cells(path)[0] == (0, 0) and _cells(path)[-1] == (2, 0)


def test_paths_in_generated_dungeon_are_legal_and_grid_untouched():
    for seed in (3, 17, 256):
        grid = generate_dungeon(DungeonGeneratorConfig(seed=seed)).grid
        before = grid.snapshot()
        start = (grid.spawn_point.x, grid.spawn_point.y)
        for room in grid.rooms:
            goal = (room.center().x, room.center().y)
            path = find_path(start, goal, grid)
            assert path, f"No path to {room.id} in {grid.id}"
            assert (path[0].iso_x, path[0].iso_y) == start
            assert (path[-1].iso_x, path[-1].iso_y) == goal
            for a, b in zip(path, path[1:]):
                assert can_step(grid, a.iso_x, a.iso_y, b.iso_x, b.iso_y)
        assert grid.snapshot() == before
