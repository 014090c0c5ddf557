from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

from .grid import Point
from .tiles import TileType


class GridLike(Protocol):
    width: int
    height: int
    height_map: Sequence[Sequence[int]]
    tile_type_map: Optional[Sequence[Sequence[int]]]


def in_bounds(grid: GridLike, x: int, y: int) -> bool:
    return 0 <= x < grid.width and 0 <= y < grid.height


def tile_type(grid: GridLike, x: int, y: int) -> TileType:
    if grid.tile_type_map is None:
        return TileType.FLOOR
    return TileType(grid.tile_type_map[y][x])


def max_step(a: TileType, b: TileType) -> int:
    """Largest elevation change allowed between two tiles: one level if either is a stair."""
    return 1 if (a.is_stair or b.is_stair) else 0


def can_step(grid: GridLike, x: int, y: int, nx: int, ny: int) -> bool:
    """
    Single legality rule shared by flood fill, A* and tile-by-tile moves.

    The target must be passable and within the elevation bound. A diagonal
    step also needs both shared cardinal corners passable and within that
    bound of the current tile, so blocked or cliff corners cannot be cut.
    """
    if not in_bounds(grid, nx, ny):
        return False
    here = tile_type(grid, x, y)
    there = tile_type(grid, nx, ny)
    if not there.is_passable:
        return False
    z = grid.height_map[y][x]
    bound = max_step(here, there)
    if abs(grid.height_map[ny][nx] - z) > bound:
        return False

    dx, dy = nx - x, ny - y
    if dx != 0 and dy != 0:
        for cx, cy in ((x + dx, y), (x, y + dy)):
            if not tile_type(grid, cx, cy).is_passable:
                return False
            if abs(grid.height_map[cy][cx] - z) > bound:
                return False
    return True


@dataclass
class MoveResult:
    new_pos: Point
    moved: bool


def try_move(grid: GridLike, pos: Point, dx: int, dy: int) -> MoveResult:
    """
    Attempt to move from pos by (dx, dy). Never performs out-of-bounds tile
    access; treats out-of-bounds as non-walkable. Returns MoveResult with new
    position if moved.
    """
    if not in_bounds(grid, pos.x, pos.y):
        return MoveResult(new_pos=pos, moved=False)
    target = Point(pos.x + dx, pos.y + dy)
    if not can_step(grid, pos.x, pos.y, target.x, target.y):
        return MoveResult(new_pos=pos, moved=False)
    return MoveResult(new_pos=target, moved=True)
