"""Screen -> world -> tile coordinate mapping.

Pure functions shared by mouse and touch input. Every function takes a
single normalised screen point (Vec2 in global screen pixels), so the caller
decides which device produced it.

Coordinate spaces:
- Screen: global pixels, top-left origin (event.globalPos())
- Viewport: pixels relative to the surface's top-left corner
- World: unbounded plane, origin at the viewport center when the camera is
  at (0, 0); camera position is in screen pixels, divided by scale
- Tile: integer row/col, cells centered on multiples of tile_size so row/col
  0 spans [-tile_size/2, tile_size/2)
"""
import math

from models.transform import Vec2, TileCell, validate_tile_size
from models.errors import InvalidInputError, InvalidGestureError


# ========================================
# ATOMICS
# ========================================

def screen_to_world(screen_pos, viewport_rect, viewport, camera_x, camera_y, scale):
    """Convert a screen point to world coordinates.

    Args:
        screen_pos: Vec2 in global screen pixels
        viewport_rect: Vec2 on-page position of the surface's top-left corner
        viewport: Viewport size
        camera_x, camera_y: Camera position
        scale: Camera scale

    Returns:
        Vec2 in world coordinates
    """
    world_x = (screen_pos.x - viewport_rect.x - viewport.width / 2 + camera_x) / scale
    world_y = (screen_pos.y - viewport_rect.y - viewport.height / 2 + camera_y) / scale
    return Vec2(world_x, world_y)


def world_to_screen(world_pos, viewport_rect, viewport, camera_x, camera_y, scale):
    """Inverse of screen_to_world."""
    screen_x = world_pos.x * scale - camera_x + viewport.width / 2 + viewport_rect.x
    screen_y = world_pos.y * scale - camera_y + viewport.height / 2 + viewport_rect.y
    return Vec2(screen_x, screen_y)


def world_to_tile(world_pos, tile_size):
    """Convert world coordinates to the tile cell containing them.

    Raises:
        InvalidInputError: If tile_size is not a positive number, or the
            world point is not finite (camera pushed past float range)
    """
    validate_tile_size(tile_size)
    half = tile_size / 2
    rows = (world_pos.y + half) / tile_size
    cols = (world_pos.x + half) / tile_size
    if not (math.isfinite(rows) and math.isfinite(cols)):
        raise InvalidInputError(f"World point out of range: ({world_pos.x}, {world_pos.y})")
    return TileCell(math.floor(rows), math.floor(cols))


# ========================================
# HELPERS
# ========================================

def screen_to_tile(screen_pos, viewport_rect, viewport, camera, tile_size):
    """Resolve the tile cell under a screen point (HELPER - uses atomics only).

    Args:
        screen_pos: Vec2 in global screen pixels
        viewport_rect: Vec2 on-page position of the surface
        viewport: Viewport size
        camera: Camera (or anything with x, y, scale)
        tile_size: World size of one cell

    Returns:
        TileCell
    """
    world_pos = screen_to_world(screen_pos, viewport_rect, viewport, camera.x, camera.y, camera.scale)
    return world_to_tile(world_pos, tile_size)


def primary_point(points):
    """Pick the primary contact of a (multi-)touch event.

    Args:
        points: Sequence of Vec2 contact points, primary first

    Returns:
        Vec2 of the first contact

    Raises:
        InvalidGestureError: If there are no contact points
    """
    if not points:
        raise InvalidGestureError("Touch event carries no contact points")
    return points[0]
