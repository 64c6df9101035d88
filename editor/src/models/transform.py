"""Transform data structures for camera and coordinate state."""
import math
from dataclasses import dataclass, asdict

from constants import DEFAULT_CAMERA_X, DEFAULT_CAMERA_Y, DEFAULT_ZOOM, ZOOM_MIN, ZOOM_MAX
from models.errors import InvalidInputError


def clamp_zoom(zoom):
    """Clamp a zoom value into [ZOOM_MIN, ZOOM_MAX]."""
    return max(ZOOM_MIN, min(ZOOM_MAX, zoom))


@dataclass
class Vec2:
    """2D vector for coordinate pairs.

    Used for any x/y coordinate pair across different spaces:
    - Screen pixels (global, top-left origin)
    - Viewport pixels (center-origin)
    - World coordinates
    """
    x: float
    y: float

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))


@dataclass
class Transform:
    """Persisted camera state: position and zoom.

    x, y are the camera offset of the viewport center in screen pixels,
    zoom is the world-to-screen scale. One record exists per context key
    (per project for the tilemap, per tileset tab for the tileset preview).
    """
    x: float = DEFAULT_CAMERA_X
    y: float = DEFAULT_CAMERA_Y
    zoom: float = DEFAULT_ZOOM

    def copy(self):
        return Transform(self.x, self.y, self.zoom)

    def to_dict(self):
        return asdict(self)

    @classmethod
    def from_dict(cls, data):
        """Build a Transform from a stored record.

        Args:
            data: Mapping with numeric 'x', 'y' and 'zoom'

        Returns:
            Transform with zoom clamped into range

        Raises:
            InvalidInputError: If the record is not a mapping or a field is
                missing, non-numeric or not finite
        """
        if not isinstance(data, dict):
            raise InvalidInputError(f"Transform record must be an object, got {type(data).__name__}")
        values = []
        for field_name in ('x', 'y', 'zoom'):
            value = data.get(field_name)
            # bool is an int subclass but never a valid coordinate
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise InvalidInputError(f"Transform field '{field_name}' is not a number: {value!r}")
            if not math.isfinite(value):
                raise InvalidInputError(f"Transform field '{field_name}' is not finite: {value!r}")
            values.append(float(value))
        x, y, zoom = values
        return cls(x, y, clamp_zoom(zoom))


@dataclass
class Viewport:
    """Size of the rendering surface in pixels."""
    width: float
    height: float


@dataclass
class TileGeometry:
    """World-space size of one grid cell."""
    tile_size: float

    def __post_init__(self):
        validate_tile_size(self.tile_size)


@dataclass(frozen=True)
class TileCell:
    """Row/column address of a grid cell."""
    row: int
    col: int

    def __iter__(self):
        return iter((self.row, self.col))


def validate_tile_size(tile_size):
    """Raise InvalidInputError unless tile_size is a positive finite number."""
    if isinstance(tile_size, bool) or not isinstance(tile_size, (int, float)):
        raise InvalidInputError(f"Tile size must be a number, got {tile_size!r}")
    if not math.isfinite(tile_size) or tile_size <= 0:
        raise InvalidInputError(f"Tile size must be positive, got {tile_size!r}")
    return tile_size
