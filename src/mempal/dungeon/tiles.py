from enum import IntEnum


class TileType(IntEnum):
    """Tile categories stored in a grid's tile_type_map.

    - FLOOR: Walkable ground
    - BLOCKED: Unused void between rooms and corridors
    - STAIR: Walkable tile that mediates a one-level elevation change
    - WALL: Non-walkable obstacle (hand-authored grids only)
    """

    FLOOR = 0
    BLOCKED = 1
    STAIR = 2
    WALL = 3

    @property
    def is_passable(self) -> bool:
        return self in (TileType.FLOOR, TileType.STAIR)

    @property
    def is_stair(self) -> bool:
        return self is TileType.STAIR

    @property
    def glyph(self) -> str:
        """A single-character visualization useful for logs/debug."""
        return {
            TileType.FLOOR: '.',
            TileType.BLOCKED: ' ',
            TileType.STAIR: '/',
            TileType.WALL: '#',
        }[self]
