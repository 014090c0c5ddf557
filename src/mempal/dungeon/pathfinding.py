from __future__ import annotations

import heapq
import itertools
import logging
import math
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Set, Tuple

from .isometric import iso_to_screen
from .movement import GridLike, can_step, in_bounds, tile_type

logger = logging.getLogger(__name__)

Projection = Callable[[int, int, int], Tuple[float, float]]

DIAGONAL_COST = math.sqrt(2)
ELEVATION_PENALTY = 0.5

# Cardinals first, then diagonals
DIRECTIONS: Tuple[Tuple[int, int, float], ...] = (
    (0, -1, 1.0),
    (1, 0, 1.0),
    (0, 1, 1.0),
    (-1, 0, 1.0),
    (1, -1, DIAGONAL_COST),
    (1, 1, DIAGONAL_COST),
    (-1, 1, DIAGONAL_COST),
    (-1, -1, DIAGONAL_COST),
)


@dataclass(frozen=True)
class PathNode:
    iso_x: int
    iso_y: int
    iso_z: int
    screen_x: float
    screen_y: float


@dataclass
class PathfindingGrid:
    """Plain grid description for hand-authored maps.

    A missing tile_type_map means every cell is FLOOR.
    """

    width: int
    height: int
    height_map: List[List[int]]
    tile_type_map: Optional[List[List[int]]] = None


def heuristic(ax: int, ay: int, bx: int, by: int) -> float:
    """Chebyshev distance."""
    return max(abs(ax - bx), abs(ay - by))


def find_path(
    start: Tuple[int, int],
    goal: Tuple[int, int],
    grid: GridLike,
    project: Projection = iso_to_screen,
) -> List[PathNode]:
    """
    A* from start to goal over an elevation grid with 8-directional movement.

    Returns the nodes from start to goal inclusive, or an empty list when an
    endpoint is out of bounds, the goal is impassable, or no legal route
    exists. The grid is never modified.
    """
    sx, sy = start
    gx, gy = goal
    if not in_bounds(grid, sx, sy) or not in_bounds(grid, gx, gy):
        return []
    if not tile_type(grid, gx, gy).is_passable:
        return []

    if (sx, sy) == (gx, gy):
        return [_node(sx, sy, grid, project)]

    counter = itertools.count()
    open_heap: List[Tuple[float, int, Tuple[int, int]]] = []
    heapq.heappush(open_heap, (heuristic(sx, sy, gx, gy), next(counter), (sx, sy)))
    g_scores: Dict[Tuple[int, int], float] = {(sx, sy): 0.0}
    parents: Dict[Tuple[int, int], Tuple[int, int]] = {}
    closed: Set[Tuple[int, int]] = set()

    while open_heap:
        _f, _tie, current = heapq.heappop(open_heap)
        if current in closed:
            # stale entry superseded by a cheaper push
            continue
        if current == (gx, gy):
            return _reconstruct(parents, current, grid, project)
        closed.add(current)

        cx, cy = current
        cz = grid.height_map[cy][cx]
        for dx, dy, cost in DIRECTIONS:
            nx, ny = cx + dx, cy + dy
            if (nx, ny) in closed:
                continue
            if not can_step(grid, cx, cy, nx, ny):
                continue
            tentative = g_scores[current] + cost + abs(grid.height_map[ny][nx] - cz) * ELEVATION_PENALTY
            existing = g_scores.get((nx, ny))
            if existing is not None and tentative >= existing:
                continue
            g_scores[(nx, ny)] = tentative
            parents[(nx, ny)] = current
            heapq.heappush(open_heap, (tentative + heuristic(nx, ny, gx, gy), next(counter), (nx, ny)))

    logger.debug("No path from %s to %s after expanding %d nodes", start, goal, len(closed))
    return []


def _node(x: int, y: int, grid: GridLike, project: Projection) -> PathNode:
    z = grid.height_map[y][x]
    screen_x, screen_y = project(x, y, z)
    return PathNode(iso_x=x, iso_y=y, iso_z=z, screen_x=screen_x, screen_y=screen_y)


def _reconstruct(
    parents: Dict[Tuple[int, int], Tuple[int, int]],
    end: Tuple[int, int],
    grid: GridLike,
    project: Projection,
) -> List[PathNode]:
    cells = [end]
    while cells[-1] in parents:
        cells.append(parents[cells[-1]])
    cells.reverse()
    return [_node(x, y, grid, project) for x, y in cells]
