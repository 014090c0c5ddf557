"""
Dungeon systems for mempal.

BSP floor generation with elevation tiers, stairs and portals, plus the
movement rule and A* pathfinding that agree on which steps are legal.
"""
from .generator import DungeonGenerator, generate_dungeon, generate_portal_room, generate_portal_room_for
from .grid import GeneratedDungeon, Point, Portal, Rect, Room, RoomGrid
from .pathfinding import PathfindingGrid, PathNode, find_path
from .tiles import TileType

__all__ = [
    "DungeonGenerator",
    "GeneratedDungeon",
    "PathNode",
    "PathfindingGrid",
    "Point",
    "Portal",
    "Rect",
    "Room",
    "RoomGrid",
    "TileType",
    "find_path",
    "generate_dungeon",
    "generate_portal_room",
    "generate_portal_room_for",
]
