from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from ..core.rng import SeededRandom
from .bsp import BSPNode, rooms_in_subtree
from .grid import Corridor, Point, Rect, Room, manhattan

logger = logging.getLogger(__name__)


def l_shaped_corridor(
    start: Point,
    end: Point,
    width: int,
    rng: SeededRandom,
    bounds: Optional[Rect] = None,
) -> Corridor:
    """
    Two straight runs, `width` tiles thick, joining start to end.

    The thickness grows toward +y on horizontal runs and +x on vertical runs,
    so the run through start/end itself is always the first lane. Lanes that
    spill past `bounds` (the grid) are clipped. Tiles crossing a room are kept:
    the corridor is its footprint, and carving leaves room floor untouched.
    """
    seen: Dict[Tuple[int, int], None] = {}

    def h_run(x1: int, x2: int, y: int) -> None:
        for xx in range(min(x1, x2), max(x1, x2) + 1):
            for w in range(width):
                seen.setdefault((xx, y + w))

    def v_run(y1: int, y2: int, x: int) -> None:
        for yy in range(min(y1, y2), max(y1, y2) + 1):
            for w in range(width):
                seen.setdefault((x + w, yy))

    if rng.next() > 0.5:
        # horizontal then vertical
        h_run(start.x, end.x, start.y)
        v_run(start.y, end.y, end.x)
    else:
        # vertical then horizontal
        v_run(start.y, end.y, start.x)
        h_run(start.x, end.x, end.y)
    tiles = [Point(x, y) for x, y in seen]
    if bounds is not None:
        tiles = [p for p in tiles if bounds.contains(p)]
    return Corridor(tiles=tiles, elevation=0)


def closest_pair(left: List[Room], right: List[Room]) -> Tuple[Room, Room]:
    """Pair with the smallest Manhattan distance between centers; first found wins ties."""
    best = (left[0], right[0])
    best_dist = None
    for a in left:
        for b in right:
            d = manhattan(a.center(), b.center())
            if best_dist is None or d < best_dist:
                best_dist = d
                best = (a, b)
    return best


def connect_siblings(
    node: BSPNode,
    corridors: List[Corridor],
    width: int,
    rng: SeededRandom,
    bounds: Optional[Rect] = None,
) -> None:
    """Post-order walk joining each pair of sibling subtrees with one corridor.

    Corridors are clipped to `bounds`, which defaults to the rect of the node
    the walk starts from.
    """
    bounds = bounds or node.rect
    if not node.left or not node.right:
        return
    connect_siblings(node.left, corridors, width, rng, bounds)
    connect_siblings(node.right, corridors, width, rng, bounds)

    left_rooms = rooms_in_subtree(node.left)
    right_rooms = rooms_in_subtree(node.right)
    if not left_rooms or not right_rooms:
        return
    a, b = closest_pair(left_rooms, right_rooms)
    corridors.append(l_shaped_corridor(a.center(), b.center(), width, rng, bounds))
    logger.debug("Connected %s -> %s", a.id, b.id)
