from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .tiles import TileType

logger = logging.getLogger(__name__)

# N, E, S, W. Ordered for deterministic traversal.
CARDINAL: Tuple[Tuple[int, int], ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


@dataclass(frozen=True)
class Point:
    x: int
    y: int


@dataclass(frozen=True)
class Rect:
    x: int
    y: int
    width: int
    height: int

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    def center(self) -> Point:
        return Point(self.x + self.width // 2, self.y + self.height // 2)

    def contains(self, p: Point) -> bool:
        return (self.x <= p.x < self.right) and (self.y <= p.y < self.bottom)

    def inset(self, n: int = 1) -> "Rect":
        """Shrink by n on every side, never below 1x1."""
        return Rect(
            self.x + n,
            self.y + n,
            max(1, self.width - 2 * n),
            max(1, self.height - 2 * n),
        )

    def is_perimeter(self, x: int, y: int) -> bool:
        return x in (self.x, self.right - 1) or y in (self.y, self.bottom - 1)

    def cells(self) -> Iterable[Point]:
        for yy in range(self.y, self.bottom):
            for xx in range(self.x, self.right):
                yield Point(xx, yy)


def manhattan(a: Point, b: Point) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


@dataclass
class Room:
    id: str
    bounds: Rect
    elevation: int = 0
    placement_zone: Optional[Rect] = None

    def __post_init__(self) -> None:
        if self.placement_zone is None:
            self.placement_zone = self.bounds.inset(1)

    def center(self) -> Point:
        return self.bounds.center()


@dataclass
class Corridor:
    tiles: List[Point] = field(default_factory=list)
    elevation: int = 0


@dataclass
class Portal:
    id: str
    source_room_id: str
    source_position: Point
    target_room_id: str = ""
    target_position: Point = Point(0, 0)
    active: bool = False

    @property
    def is_linked(self) -> bool:
        return self.target_room_id != ""


@dataclass(frozen=True)
class VerticalWallSpan:
    x_offset: float
    y_start: float
    y_end: float


@dataclass(frozen=True)
class HorizontalWallSpan:
    x_start: float
    x_end: float
    y_offset: float


@dataclass(frozen=True)
class WallLayout:
    """Wall sprite anchors in isometric tile units, relative to a floor tile.

    Upper walls sit behind the tile (north and west edges); lower walls hang
    below it (south and east edges, facing the camera).
    """

    upper_se: VerticalWallSpan
    upper_sw: HorizontalWallSpan
    lower_sw: HorizontalWallSpan
    lower_se: VerticalWallSpan
    depth: int


DEFAULT_WALL_LAYOUT = WallLayout(
    upper_se=VerticalWallSpan(x_offset=-1.5, y_start=-1, y_end=0),
    upper_sw=HorizontalWallSpan(x_start=-1, x_end=0, y_offset=-1.5),
    lower_sw=HorizontalWallSpan(x_start=0, x_end=1, y_offset=0.5),
    lower_se=VerticalWallSpan(x_offset=0.5, y_start=0, y_end=1),
    depth=3,
)


@dataclass
class RoomGrid:
    """
    The shared tile grid: per-cell elevation and tile type plus generation
    metadata. Maps are indexed [y][x]; (0,0) is top-left.
    """

    id: str
    name: str
    width: int
    height: int
    height_map: List[List[int]]
    tile_type_map: List[List[TileType]]
    rooms: List[Room] = field(default_factory=list)
    corridors: List[Corridor] = field(default_factory=list)
    portals: List[Portal] = field(default_factory=list)
    spawn_point: Point = Point(0, 0)

    @classmethod
    def blank(cls, grid_id: str, name: str, width: int, height: int) -> "RoomGrid":
        """A fully BLOCKED grid at elevation 0."""
        return cls(
            id=grid_id,
            name=name,
            width=width,
            height=height,
            height_map=[[0 for _ in range(width)] for _ in range(height)],
            tile_type_map=[[TileType.BLOCKED for _ in range(width)] for _ in range(height)],
        )

    # ---- Safety / Bounds -------------------------------------------------
    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def set_tile(self, x: int, y: int, t: TileType, elevation: Optional[int] = None) -> None:
        if not self.in_bounds(x, y):
            logger.error("Attempt to write out-of-bounds tile at (%d,%d)", x, y)
            return
        self.tile_type_map[y][x] = t
        if elevation is not None:
            self.height_map[y][x] = elevation

    # ---- Query -----------------------------------------------------------
    def is_passable(self, x: int, y: int) -> bool:
        if not self.in_bounds(x, y):
            return False
        return TileType(self.tile_type_map[y][x]).is_passable

    def neighbors_4(self, x: int, y: int) -> Iterable[Point]:
        for dx, dy in CARDINAL:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                yield Point(nx, ny)

    # ---- Carving helpers -------------------------------------------------
    def carve_room(self, room: Room) -> None:
        for p in room.bounds.cells():
            if self.in_bounds(p.x, p.y):
                self.set_tile(p.x, p.y, TileType.FLOOR, room.elevation)

    def carve_corridor(self, corridor: Corridor) -> int:
        """Carve corridor tiles that are still BLOCKED; returns tiles carved.

        Room floor is never overwritten, so a room keeps its elevation where a
        corridor runs through it.
        """
        carved = 0
        for p in corridor.tiles:
            if self.in_bounds(p.x, p.y) and self.tile_type_map[p.y][p.x] == TileType.BLOCKED:
                self.set_tile(p.x, p.y, TileType.FLOOR, corridor.elevation)
                carved += 1
        return carved

    # ---- Export / Compare -----------------------------------------------
    def to_str_lines(self) -> List[str]:
        """ASCII rendering: elevation digit for floor, '/' stairs, 'O' portals, '@' spawn."""
        portal_cells = {(p.source_position.x, p.source_position.y) for p in self.portals}
        lines: List[str] = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                t = TileType(self.tile_type_map[y][x])
                if (x, y) == (self.spawn_point.x, self.spawn_point.y):
                    row.append('@')
                elif (x, y) in portal_cells:
                    row.append('O')
                elif t is TileType.FLOOR:
                    row.append(str(self.height_map[y][x]))
                else:
                    row.append(t.glyph)
            lines.append(''.join(row))
        return lines

    def snapshot(self) -> Tuple[Tuple[Tuple[int, ...], ...], Tuple[Tuple[int, ...], ...]]:
        """
        Deterministic, hashable snapshot of both maps for equality tests.
        """
        heights = tuple(tuple(row) for row in self.height_map)
        types = tuple(tuple(int(t) for t in row) for row in self.tile_type_map)
        return heights, types

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "width": self.width,
            "height": self.height,
            "height_map": [list(row) for row in self.height_map],
            "tile_type_map": [[int(t) for t in row] for row in self.tile_type_map],
            "rooms": [asdict(r) for r in self.rooms],
            "corridors": [asdict(c) for c in self.corridors],
            "portals": [asdict(p) for p in self.portals],
            "spawn_point": asdict(self.spawn_point),
        }


@dataclass
class GeneratedDungeon:
    grid: RoomGrid
    wall_layout: WallLayout = DEFAULT_WALL_LAYOUT

    @property
    def rooms(self) -> List[Room]:
        return self.grid.rooms

    @property
    def corridors(self) -> List[Corridor]:
        return self.grid.corridors

    @property
    def portals(self) -> List[Portal]:
        return self.grid.portals

    def to_dict(self) -> Dict[str, Any]:
        return {"grid": self.grid.to_dict(), "wall_layout": asdict(self.wall_layout)}
