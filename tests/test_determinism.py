import json

from mempal.config import DungeonGeneratorConfig
from mempal.dungeon.generator import generate_dungeon, generate_portal_room, generate_portal_room_for


def test_same_seed_same_dungeon():
    cfg = DungeonGeneratorConfig(seed=12345)
    d1 = generate_dungeon(cfg)
    d2 = generate_dungeon(cfg)

    assert d1.grid.snapshot() == d2.grid.snapshot(), "Maps differ with same seed"
    assert d1.rooms == d2.rooms
    assert d1.corridors == d2.corridors
    assert d1.portals == d2.portals
    assert d1.grid.spawn_point == d2.grid.spawn_point


def test_different_seeds_change_layout():
    a = generate_dungeon(DungeonGeneratorConfig(grid_width=40, grid_height=40, seed=1))
    b = generate_dungeon(DungeonGeneratorConfig(grid_width=40, grid_height=40, seed=2))
    different = a.grid.snapshot() != b.grid.snapshot() or a.rooms != b.rooms
    assert different, "Different seeds should result in different layouts"


def test_portal_room_idempotent():
    r1 = generate_portal_room(777)
    r2 = generate_portal_room(777)
    assert r1.grid.width == 15 and r1.grid.height == 15
    assert r1.grid.snapshot() == r2.grid.snapshot()
    assert r1.to_dict() == r2.to_dict()


def test_portal_room_stays_within_one_tier():
    for seed in range(20):
        grid = generate_portal_room(seed).grid
        assert all(z in (0, 1) for row in grid.height_map for z in row)


def test_portal_room_for_portal_id_is_stable():
    a = generate_portal_room_for("portal-room-2")
    b = generate_portal_room_for("portal-room-2")
    assert a.grid.snapshot() == b.grid.snapshot()
    assert a.grid.id == b.grid.id


def test_to_dict_is_json_serializable():
    d = generate_dungeon(DungeonGeneratorConfig(seed=5))
    text = json.dumps(d.to_dict(), sort_keys=True)
    data = json.loads(text)
    assert data["grid"]["width"] == 25
    assert len(data["grid"]["tile_type_map"]) == 25
    assert data["wall_layout"]["depth"] == 3
