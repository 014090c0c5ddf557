from __future__ import annotations

import logging
from collections import deque
from typing import List, Set, Tuple

from ..core.rng import SeededRandom
from .corridors import l_shaped_corridor
from .grid import Corridor, Point, Rect, RoomGrid
from .movement import can_step
from .stairs import resolve_stairs

logger = logging.getLogger(__name__)

REPAIR_SEED_STRIDE = 31337


def flood_fill(grid: RoomGrid, start: Point) -> Set[Tuple[int, int]]:
    """Cells reachable from start with 4-directional moves under the movement rule."""
    visited: Set[Tuple[int, int]] = set()
    if not grid.in_bounds(start.x, start.y):
        return visited
    visited.add((start.x, start.y))
    dq = deque([(start.x, start.y)])
    while dq:
        x, y = dq.popleft()
        for n in grid.neighbors_4(x, y):
            if (n.x, n.y) in visited:
                continue
            if can_step(grid, x, y, n.x, n.y):
                visited.add((n.x, n.y))
                dq.append((n.x, n.y))
    return visited


def ensure_connectivity(grid: RoomGrid, corridor_width: int) -> List[Corridor]:
    """
    Carve an emergency corridor from the spawn point to every room whose center
    is unreachable, re-resolving stairs after each carve. Returns the corridors
    added (they are also appended to grid.corridors).
    """
    added: List[Corridor] = []
    spawn = grid.spawn_point
    reachable = flood_fill(grid, spawn)
    for i, room in enumerate(grid.rooms):
        if i == 0:
            continue
        center = room.center()
        if (center.x, center.y) in reachable:
            continue
        rng = SeededRandom(i * REPAIR_SEED_STRIDE)
        corridor = l_shaped_corridor(spawn, center, corridor_width, rng, Rect(0, 0, grid.width, grid.height))
        grid.corridors.append(corridor)
        grid.carve_corridor(corridor)
        resolve_stairs(grid)
        added.append(corridor)
        logger.debug("Repaired unreachable %s with emergency corridor (%d tiles)", room.id, len(corridor.tiles))
        reachable = flood_fill(grid, spawn)
    return added


def unreachable_rooms(grid: RoomGrid) -> List[str]:
    """Ids of rooms whose center cannot be reached from the spawn point."""
    reachable = flood_fill(grid, grid.spawn_point)
    return [r.id for r in grid.rooms if (r.center().x, r.center().y) not in reachable]
