from __future__ import annotations

import logging
from typing import List

from ..core.rng import SeededRandom
from .grid import CARDINAL, Point, Portal, Room, RoomGrid
from .tiles import TileType

logger = logging.getLogger(__name__)


def portal_candidates(room: Room, grid: RoomGrid) -> List[Point]:
    """Perimeter FLOOR tiles of the room that touch a BLOCKED tile or the grid edge."""
    bounds = room.bounds
    out: List[Point] = []
    for xx in range(bounds.x, bounds.right):
        for yy in range(bounds.y, bounds.bottom):
            if not bounds.is_perimeter(xx, yy):
                continue
            if not grid.in_bounds(xx, yy) or grid.tile_type_map[yy][xx] != TileType.FLOOR:
                continue
            for dx, dy in CARDINAL:
                ax, ay = xx + dx, yy + dy
                if not grid.in_bounds(ax, ay) or grid.tile_type_map[ay][ax] == TileType.BLOCKED:
                    out.append(Point(xx, yy))
                    break
    return out


def place_portals(rooms: List[Room], grid: RoomGrid, rng: SeededRandom) -> List[Portal]:
    portals: List[Portal] = []
    for room in rooms:
        candidates = portal_candidates(room, grid)
        if not candidates:
            logger.debug("No wall-adjacent perimeter tile in %s; no portal", room.id)
            continue
        pos = rng.pick(candidates)
        portals.append(Portal(id=f"portal-{room.id}", source_room_id=room.id, source_position=pos))
    return portals
