"""Infinite dashed reference grid.

Only the part of the (infinite) grid that is visible is generated: the
visible world rectangle is computed from the viewport size and camera,
snapped outwards to tile boundaries, and one dashed line is produced per
tile step. Lines are regenerated only when scale or camera position changed
since the last draw (checked once per frame tick), when the tile size
changes, or after invalidate().

Cells are centered on multiples of tile_size, so grid lines sit on
half-tile offsets: tile (0, 0) spans [-tile_size/2, tile_size/2).
"""
import math
import logging
from dataclasses import dataclass, field

import numpy as np
from PyQt5.QtCore import Qt, QRectF, QPointF, QLineF
from PyQt5.QtGui import QPen, QColor

from constants import (
    GRID_MIN_SCALE, GRID_LINE_WIDTH, GRID_LINE_COLOR, GRID_DASH_PATTERN,
    ORIGIN_MARKER_SIZE, ORIGIN_MARKER_COLOR, ORIGIN_LABEL_TEXT, ORIGIN_LABEL_OFFSET_Y
)
from models.transform import Vec2, validate_tile_size


def _empty_segments():
    return np.empty((0, 4), dtype=float)


@dataclass
class WorldRect:
    """Visible region in world coordinates."""
    left: float
    right: float
    top: float
    bottom: float


@dataclass
class GridDrawCache:
    """Viewport state the current lines were drawn for."""
    last_scale: float = None
    last_camera_x: float = None
    last_camera_y: float = None

    def matches(self, scale, camera_x, camera_y):
        return (self.last_scale == scale
                and self.last_camera_x == camera_x
                and self.last_camera_y == camera_y)


@dataclass
class GridLines:
    """Output of one draw pass.

    vertical / horizontal hold one row per segment: (x1, y1, x2, y2) in
    world coordinates. line_width is in world units (1 screen pixel).
    """
    vertical: np.ndarray = field(default_factory=_empty_segments)
    horizontal: np.ndarray = field(default_factory=_empty_segments)
    line_width: float = GRID_LINE_WIDTH

    @property
    def count(self):
        return len(self.vertical) + len(self.horizontal)


class InfiniteGrid:
    """Grid renderer bound to a camera, a viewport size and a tile geometry.

    Args:
        camera: Camera providing x, y and scale
        viewport: Viewport whose width/height track the surface size
        geometry: TileGeometry shared with the surface's tile lookup
    """

    def __init__(self, camera, viewport, geometry):
        self._logger = logging.getLogger('InfiniteGrid')
        self.camera = camera
        self.viewport = viewport
        self.geometry = geometry

        self.cache = GridDrawCache()
        self.lines = GridLines()
        self.draw_count = 0
        self._dirty = True

        # Fixed scene items, created once and never part of the redraw cycle
        half = ORIGIN_MARKER_SIZE / 2
        self.origin_marker = QRectF(-half, -half, ORIGIN_MARKER_SIZE, ORIGIN_MARKER_SIZE)
        self.origin_label = (ORIGIN_LABEL_TEXT, Vec2(0.0, ORIGIN_LABEL_OFFSET_Y))

    # ========================================
    # Tile size
    # ========================================

    @property
    def tile_size(self):
        return self.geometry.tile_size

    @tile_size.setter
    def tile_size(self, tile_size):
        """Change the cell size and redraw immediately (bypasses the dirty check)."""
        self.geometry.tile_size = validate_tile_size(tile_size)
        self.draw_lines()

    # ========================================
    # Dirty check
    # ========================================

    def invalidate(self):
        """Force a redraw on the next update() tick."""
        self._dirty = True

    def update(self):
        """Per-frame tick: redraw only if the view changed.

        Returns:
            True if a draw pass ran
        """
        scale = self.camera.scale
        camera_x = self.camera.x
        camera_y = self.camera.y
        if not self._dirty and self.cache.matches(scale, camera_x, camera_y):
            return False
        self.cache = GridDrawCache(scale, camera_x, camera_y)
        self.draw_lines()
        return True

    # ========================================
    # Geometry
    # ========================================

    def visible_rect(self):
        """World rectangle covered by the viewport at the current camera."""
        scale = self.camera.scale
        half_w = self.viewport.width / 2 / scale
        half_h = self.viewport.height / 2 / scale
        center_x = self.camera.x / scale
        center_y = self.camera.y / scale
        return WorldRect(
            left=-half_w + center_x,
            right=half_w + center_x,
            top=-half_h + center_y,
            bottom=half_h + center_y,
        )

    def draw_lines(self):
        """Regenerate the line segments for the visible rectangle."""
        self._dirty = False
        self.draw_count += 1

        scale = self.camera.scale
        if scale < GRID_MIN_SCALE:
            # Too dense to read: clear and draw nothing
            self.lines = GridLines(line_width=GRID_LINE_WIDTH / scale)
            return self.lines

        ts = self.geometry.tile_size
        half = ts / 2
        rect = self.visible_rect()

        first_col = math.floor(rect.left / ts)
        last_col = math.ceil(rect.right / ts)
        first_row = math.floor(rect.top / ts)
        last_row = math.ceil(rect.bottom / ts)

        start_x = first_col * ts + half
        end_x = last_col * ts + half
        start_y = first_row * ts + half
        end_y = last_row * ts + half

        xs = start_x + ts * np.arange(last_col - first_col, dtype=float)
        ys = start_y + ts * np.arange(last_row - first_row, dtype=float)

        vertical = np.column_stack([
            xs,
            np.full_like(xs, start_y - half),
            xs,
            np.full_like(xs, end_y + half),
        ])
        horizontal = np.column_stack([
            np.full_like(ys, start_x - half),
            ys,
            np.full_like(ys, end_x + half),
            ys,
        ])

        self.lines = GridLines(vertical, horizontal, GRID_LINE_WIDTH / scale)
        self._logger.debug(
            f"Grid redrawn: {len(vertical)} vertical, {len(horizontal)} horizontal at scale {scale}"
        )
        return self.lines

    # ========================================
    # Painting
    # ========================================

    def paint(self, painter):
        """Paint grid lines and origin items.

        The painter must already carry the world transform (translate to the
        viewport center, scale, then offset by the camera).
        """
        pen = QPen(QColor(GRID_LINE_COLOR))
        pen.setWidthF(self.lines.line_width)
        pen.setStyle(Qt.CustomDashLine)
        pen.setDashPattern(GRID_DASH_PATTERN)
        painter.setPen(pen)
        for segments in (self.lines.vertical, self.lines.horizontal):
            for x1, y1, x2, y2 in segments:
                painter.drawLine(QLineF(x1, y1, x2, y2))

        painter.fillRect(self.origin_marker, QColor(ORIGIN_MARKER_COLOR))
        text, pos = self.origin_label
        painter.setPen(QColor(ORIGIN_MARKER_COLOR))
        painter.drawText(QPointF(pos.x, pos.y), text)
