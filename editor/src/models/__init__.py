"""
Tilemap Editor - Data Models

Camera state and the plain records it is built from. This is the MODEL
side of the editor: no widget code lives here.
"""

from .transform import Vec2, Transform, Viewport, TileGeometry, TileCell
from .camera import Camera
from .errors import ViewportError, InvalidInputError, InvalidGestureError, StoreUnavailable

__all__ = [
    'Vec2', 'Transform', 'Viewport', 'TileGeometry', 'TileCell',
    'Camera',
    'ViewportError', 'InvalidInputError', 'InvalidGestureError', 'StoreUnavailable',
]
