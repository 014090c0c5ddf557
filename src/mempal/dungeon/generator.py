from __future__ import annotations

import logging
from typing import List, Optional

from ..config import PORTAL_ROOM_CONFIG, DungeonGeneratorConfig
from ..core.rng import SeededRandom, seed_from_string, time_seed
from .bsp import BSPNode, place_rooms, split
from .connectivity import ensure_connectivity
from .corridors import connect_siblings
from .elevation import assign_elevations
from .grid import DEFAULT_WALL_LAYOUT, Corridor, GeneratedDungeon, Rect, RoomGrid
from .portals import place_portals
from .stairs import resolve_stairs

logger = logging.getLogger(__name__)


class DungeonGenerator:
    """
    BSP (Binary Space Partition) room + corridor generator with elevations.

    Guarantees:
    - Deterministic layout given the config seed
    - Spawn at the center of the first room, on elevation 0
    - Every room center reachable from spawn under the movement rule
    - No two adjacent passable tiles more than one level apart
    """

    def __init__(self, config: DungeonGeneratorConfig) -> None:
        self.config = config.validate()

    def generate(self) -> GeneratedDungeon:
        cfg = self.config
        seed = cfg.seed if cfg.seed is not None else time_seed()
        rng = SeededRandom(seed)
        logger.info("Generating dungeon: seed=%d size=%dx%d", seed, cfg.grid_width, cfg.grid_height)

        # Partition and rooms
        root = BSPNode(Rect(0, 0, cfg.grid_width, cfg.grid_height))
        split(root, cfg.min_room_size, rng)
        rooms = place_rooms(root, cfg.min_room_size, cfg.max_room_size, rng)
        if len(rooms) < cfg.min_rooms:
            logger.warning("Generated %d rooms, fewer than min_rooms=%d", len(rooms), cfg.min_rooms)

        assign_elevations(rooms, cfg.max_elevation, rng)

        corridors: List[Corridor] = []
        connect_siblings(root, corridors, cfg.corridor_width, rng)

        # Carve: rooms take precedence over corridors wherever they overlap
        grid = RoomGrid.blank(f"dungeon-{seed}", "Generated Dungeon", cfg.grid_width, cfg.grid_height)
        grid.rooms = rooms
        grid.corridors = corridors
        for room in rooms:
            grid.carve_room(room)
        for corridor in corridors:
            grid.carve_corridor(corridor)

        resolve_stairs(grid)
        grid.portals = place_portals(rooms, grid, rng)
        grid.spawn_point = rooms[0].center()

        repaired = ensure_connectivity(grid, cfg.corridor_width)
        logger.debug(
            "Dungeon %s: %d rooms, %d corridors (%d repairs), %d portals",
            grid.id,
            len(rooms),
            len(grid.corridors),
            len(repaired),
            len(grid.portals),
        )
        return GeneratedDungeon(grid=grid, wall_layout=DEFAULT_WALL_LAYOUT)


def generate_dungeon(config: Optional[DungeonGeneratorConfig] = None) -> GeneratedDungeon:
    return DungeonGenerator(config or DungeonGeneratorConfig()).generate()


def generate_portal_room(seed: int) -> GeneratedDungeon:
    """Small dungeon behind a portal; the same seed always rebuilds the same room."""
    return generate_dungeon(PORTAL_ROOM_CONFIG.with_seed(seed))


def generate_portal_room_for(portal_id: str) -> GeneratedDungeon:
    return generate_portal_room(seed_from_string(portal_id))
