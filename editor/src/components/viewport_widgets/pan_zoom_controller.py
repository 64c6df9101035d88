"""Pointer-driven pan/zoom state machine for a viewport.

States:
- IDLE: no pointer held
- DRAGGING: pointer held; every move pans the camera by the pointer delta

Pointer-up ends the drag. If the pointer travelled less than
CLICK_THRESHOLD_PX on both axes the gesture is a click and the tile under
the pointer is reported; otherwise it was a pan and nothing is selected.

Wheel zoom is independent of the drag state. The controller has no Qt
dependency: the surface widget translates Qt events into the calls below.
"""
import logging

from constants import CLICK_THRESHOLD_PX, WHEEL_ZOOM_DIVISOR
from models.transform import Vec2
from models.errors import InvalidInputError, InvalidGestureError
from services.coordinate_mapper import primary_point
from utils.logger import loggerRecover
from .gesture_state import GestureState, GestureResult, DragState


class PanZoomController:
    """Gesture state machine producing Camera mutations.

    Args:
        camera: Camera to pan/zoom (persist() is called after each mutation)
        cell_at: Callable(Vec2 screen point) -> TileCell, resolves the cell
            under a pointer; None disables selection and hover reporting
        on_tile_selected: Callable(TileCell) invoked for click gestures
        on_tile_hovered: Callable(TileCell) invoked when the hovered cell changes
    """

    def __init__(self, camera, cell_at=None, on_tile_selected=None, on_tile_hovered=None):
        self._logger = logging.getLogger('PanZoomController')
        self.camera = camera
        self.cell_at = cell_at
        self.on_tile_selected = on_tile_selected
        self.on_tile_hovered = on_tile_hovered

        self.state = GestureState.IDLE
        self.drag = None
        self.hovered_cell = None

    @property
    def is_dragging(self):
        return self.state is GestureState.DRAGGING

    # ========================================
    # Pointer events (screen pixels)
    # ========================================

    def pointer_down(self, pos):
        """IDLE -> DRAGGING: remember origin and last pointer position."""
        self.drag = DragState.start(pos.x, pos.y)
        self.state = GestureState.DRAGGING

    def pointer_move(self, pos):
        """Pan the camera by the pointer delta while dragging.

        Returns:
            True if the camera moved
        """
        moved = False
        if self.is_dragging:
            dx = pos.x - self.drag.last_x
            dy = pos.y - self.drag.last_y
            self.drag.last_x = pos.x
            self.drag.last_y = pos.y
            if dx or dy:
                self.camera.set_position(self.camera.x + dx, self.camera.y + dy)
                self.camera.persist()
                moved = True
        self._update_hover(pos)
        return moved

    def pointer_up(self, pos):
        """DRAGGING -> IDLE, classifying the gesture as click or drag.

        Returns:
            GestureResult.CLICK or GestureResult.DRAG, None if no drag was active
        """
        if not self.is_dragging:
            return None
        travel_x, travel_y = self.drag.displacement(pos.x, pos.y)
        self._end_drag()
        if travel_x < CLICK_THRESHOLD_PX and travel_y < CLICK_THRESHOLD_PX:
            self._select_at(pos)
            return GestureResult.CLICK
        return GestureResult.DRAG

    def pointer_leave(self):
        """Pointer left the surface: end any drag at the last known position."""
        self.hovered_cell = None
        if not self.is_dragging:
            return None
        return self.pointer_up(Vec2(self.drag.last_x, self.drag.last_y))

    def cancel(self):
        """Abort the gesture (surface hidden/detached). No selection happens.

        Returns:
            GestureResult.CANCELLED if a drag was active, else None
        """
        if not self.is_dragging:
            return None
        self._end_drag()
        return GestureResult.CANCELLED

    def wheel(self, delta_y):
        """Zoom by delta_y / WHEEL_ZOOM_DIVISOR (clamped by the camera).

        Args:
            delta_y: Wheel delta, +100 per notch towards the user

        Returns:
            True - the event is consumed and the platform scroll suppressed
        """
        self.camera.set_scale(self.camera.zoom + delta_y / WHEEL_ZOOM_DIVISOR)
        self.camera.persist()
        return True

    # ========================================
    # Touch events (primary contact only)
    # ========================================

    def touch_down(self, points):
        pos = self._primary(points)
        if pos is not None:
            self.pointer_down(pos)

    def touch_move(self, points):
        pos = self._primary(points)
        if pos is None:
            return False
        return self.pointer_move(pos)

    def touch_up(self, points):
        pos = self._primary(points)
        if pos is None:
            # Never leave a drag dangling on bad input
            return self.cancel()
        return self.pointer_up(pos)

    # ========================================
    # Internals
    # ========================================

    def _primary(self, points):
        try:
            return primary_point(points)
        except InvalidGestureError as e:
            loggerRecover(e, "Ignoring touch event", self._logger)
            return None

    def _end_drag(self):
        self.drag.active = False
        self.drag = None
        self.state = GestureState.IDLE

    def _resolve(self, pos):
        if self.cell_at is None:
            return None
        try:
            return self.cell_at(pos)
        except InvalidInputError as e:
            loggerRecover(e, "Cannot resolve tile under pointer", self._logger)
            return None

    def _select_at(self, pos):
        cell = self._resolve(pos)
        if cell is None:
            return
        self._logger.debug(f"Tile selected: row={cell.row} col={cell.col}")
        if self.on_tile_selected:
            self.on_tile_selected(cell)

    def _update_hover(self, pos):
        if self.on_tile_hovered is None:
            return
        cell = self._resolve(pos)
        if cell is None or cell == self.hovered_cell:
            return
        self.hovered_cell = cell
        self.on_tile_hovered(cell)
