from __future__ import annotations

import logging
from typing import List

from ..core.rng import SeededRandom
from .grid import Room

logger = logging.getLogger(__name__)


def assign_elevations(rooms: List[Room], max_elevation: int, rng: SeededRandom) -> None:
    """Give each room an elevation tier; the spawn room (index 0) stays on the ground.

    Rolls are independent per room. Adjacent rooms may end up two tiers apart;
    the stair resolver ramps those transitions after carving.
    """
    for i, room in enumerate(rooms):
        if i == 0:
            room.elevation = 0
            continue
        roll = rng.next()
        if roll < 0.4:
            room.elevation = 0
        elif roll < 0.75:
            room.elevation = min(1, max_elevation)
        else:
            room.elevation = min(2, max_elevation)
    logger.debug("Room elevations: %s", [r.elevation for r in rooms])
