from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from ..core.rng import SeededRandom
from .grid import Rect, Room

logger = logging.getLogger(__name__)

MAX_SPLIT_DEPTH = 5


@dataclass
class BSPNode:
    rect: Rect
    left: Optional['BSPNode'] = None
    right: Optional['BSPNode'] = None
    room: Optional[Room] = None

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None


def split(
    node: BSPNode,
    min_room_size: int,
    rng: SeededRandom,
    depth: int = 0,
    max_depth: int = MAX_SPLIT_DEPTH,
) -> None:
    """
    Recursively partition node.rect in place.

    An axis qualifies when both halves can keep min_room_size plus a one tile
    gap. With two qualifying axes the longer one is split; a square rect picks
    at random.
    """
    if depth > max_depth:
        return

    rect = node.rect
    min_dim = min_room_size * 2 + 1
    can_split_h = rect.height >= min_dim
    can_split_v = rect.width >= min_dim
    if not can_split_h and not can_split_v:
        return

    if can_split_v and not can_split_h:
        split_vertically = True
    elif can_split_h and not can_split_v:
        split_vertically = False
    elif rect.width != rect.height:
        split_vertically = rect.width > rect.height
    else:
        split_vertically = rng.next() > 0.5

    if split_vertically:
        split_min = rect.x + min_room_size
        split_max = rect.right - min_room_size
        if split_min >= split_max:
            return
        pos = rng.int_range(split_min, split_max)
        node.left = BSPNode(Rect(rect.x, rect.y, pos - rect.x, rect.height))
        node.right = BSPNode(Rect(pos, rect.y, rect.right - pos, rect.height))
    else:
        split_min = rect.y + min_room_size
        split_max = rect.bottom - min_room_size
        if split_min >= split_max:
            return
        pos = rng.int_range(split_min, split_max)
        node.left = BSPNode(Rect(rect.x, rect.y, rect.width, pos - rect.y))
        node.right = BSPNode(Rect(rect.x, pos, rect.width, rect.bottom - pos))

    split(node.left, min_room_size, rng, depth + 1, max_depth)
    split(node.right, min_room_size, rng, depth + 1, max_depth)


def leaves(node: BSPNode) -> List[BSPNode]:
    if node.is_leaf():
        return [node]
    out: List[BSPNode] = []
    if node.left:
        out.extend(leaves(node.left))
    if node.right:
        out.extend(leaves(node.right))
    return out


def rooms_in_subtree(node: BSPNode) -> List[Room]:
    if node.is_leaf():
        return [node.room] if node.room else []
    out: List[Room] = []
    if node.left:
        out.extend(rooms_in_subtree(node.left))
    if node.right:
        out.extend(rooms_in_subtree(node.right))
    return out


def place_room(
    partition: Rect,
    min_size: int,
    max_size: int,
    room_id: str,
    rng: SeededRandom,
) -> Optional[Room]:
    """Place a random room inset at least one tile inside partition, or None if it cannot fit."""
    max_w = min(max_size, partition.width - 2)
    max_h = min(max_size, partition.height - 2)
    if max_w < min_size or max_h < min_size:
        return None

    w = rng.int_range(min_size, max_w + 1)
    h = rng.int_range(min_size, max_h + 1)
    x = rng.int_range(partition.x + 1, partition.right - w)
    y = rng.int_range(partition.y + 1, partition.bottom - h)
    return Room(id=room_id, bounds=Rect(x, y, w, h))


def place_rooms(root: BSPNode, min_size: int, max_size: int, rng: SeededRandom) -> List[Room]:
    """Attach a room to every leaf that can hold one; returns rooms in leaf order."""
    rooms: List[Room] = []
    for leaf in leaves(root):
        room = place_room(leaf.rect, min_size, max_size, f"room-{len(rooms)}", rng)
        if room:
            leaf.room = room
            rooms.append(room)

    if not rooms and not root.is_leaf():
        # Splits can leave every leaf too narrow; fall back to one room in the whole area
        room = place_room(root.rect, min_size, max_size, "room-0", rng)
        if room:
            logger.warning("No BSP leaf could hold a room; placed a single room in %s", root.rect)
            root.left = root.right = None
            root.room = room
            rooms.append(room)
    logger.debug("Placed %d rooms in %d leaves", len(rooms), len(leaves(root)))
    return rooms
