from __future__ import annotations

import logging

from .grid import RoomGrid
from .tiles import TileType

logger = logging.getLogger(__name__)


def insert_ramps(grid: RoomGrid) -> int:
    """
    Raise the lower cell of every passable pair that is two or more levels apart
    until no such pair remains. Returns the number of raises performed.
    """
    raises = 0
    changed = True
    while changed:
        changed = False
        for y in range(grid.height):
            for x in range(grid.width):
                if not grid.is_passable(x, y):
                    continue
                for n in grid.neighbors_4(x, y):
                    if not grid.is_passable(n.x, n.y):
                        continue
                    elev = grid.height_map[y][x]
                    n_elev = grid.height_map[n.y][n.x]
                    if abs(n_elev - elev) >= 2:
                        if elev < n_elev:
                            grid.height_map[y][x] = elev + 1
                        else:
                            grid.height_map[n.y][n.x] = n_elev + 1
                        raises += 1
                        changed = True
    return raises


def mark_stairs(grid: RoomGrid) -> int:
    """Mark a FLOOR cell STAIR when a passable neighbor sits exactly one level higher.

    Only the lower cell of a step is marked; movement treats a step as legal
    when either end is a stair.
    """
    marked = 0
    for y in range(grid.height):
        for x in range(grid.width):
            if grid.tile_type_map[y][x] != TileType.FLOOR:
                continue
            elev = grid.height_map[y][x]
            for n in grid.neighbors_4(x, y):
                if not grid.is_passable(n.x, n.y):
                    continue
                if grid.height_map[n.y][n.x] - elev == 1:
                    grid.tile_type_map[y][x] = TileType.STAIR
                    marked += 1
                    break
    return marked


def resolve_stairs(grid: RoomGrid) -> None:
    raises = insert_ramps(grid)
    marked = mark_stairs(grid)
    logger.debug("Stair resolver: %d ramp raises, %d stairs marked", raises, marked)
