"""Isometric projection between grid tiles and screen pixels (2:1 diamond tiles)."""
from typing import Tuple

TILE_WIDTH = 128
TILE_HEIGHT = 64

GRID_OFFSET_X = 200
GRID_OFFSET_Y = 100

# pixels per elevation level
ELEVATION_HEIGHT = 32


def iso_to_screen(iso_x: int, iso_y: int, iso_z: int = 0) -> Tuple[float, float]:
    screen_x = (iso_x - iso_y) * (TILE_WIDTH / 2) + GRID_OFFSET_X
    screen_y = (iso_x + iso_y) * (TILE_HEIGHT / 2) + GRID_OFFSET_Y - iso_z * ELEVATION_HEIGHT
    return screen_x, screen_y


def screen_to_iso(screen_x: float, screen_y: float) -> Tuple[int, int]:
    """Nearest grid cell for a screen position, ignoring elevation."""
    adjusted_x = screen_x - GRID_OFFSET_X
    adjusted_y = screen_y - GRID_OFFSET_Y
    iso_x = (adjusted_x / (TILE_WIDTH / 2) + adjusted_y / (TILE_HEIGHT / 2)) / 2
    iso_y = (adjusted_y / (TILE_HEIGHT / 2) - adjusted_x / (TILE_WIDTH / 2)) / 2
    return round(iso_x), round(iso_y)
