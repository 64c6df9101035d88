# PyQt5 imports
from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import Qt, QEvent, QPoint, QTimer, pyqtSignal
from PyQt5.QtGui import QPainter, QColor

# Local imports
from constants import (
    FRAME_INTERVAL_MS, QT_WHEEL_NOTCH, WHEEL_NOTCH_DELTA, VIEWPORT_BACKGROUND_COLOR
)
from models.transform import Vec2, Viewport, TileGeometry
from services.coordinate_mapper import screen_to_tile
from .viewport_widgets.infinite_grid import InfiniteGrid
from .viewport_widgets.pan_zoom_controller import PanZoomController


class ViewportWidget(QWidget):
    """Pannable, zoomable rendering surface with an infinite tile grid.

    Qt mouse, wheel and touch events are forwarded to a PanZoomController.
    A frame timer runs the grid's dirty check once per tick and repaints
    only when the grid actually redrew, so a burst of events within one
    tick costs a single repaint.

    Scene content is supplied through scene_items: callables taking a
    QPainter already set up in world coordinates.
    """

    tileSelected = pyqtSignal(int, int)  # row, col (click gestures only)
    tileHovered = pyqtSignal(int, int)  # row, col (when the hovered cell changes)

    def __init__(self, camera, tile_size, parent=None):
        super().__init__(parent)
        self.setMouseTracking(True)
        self.setAttribute(Qt.WA_AcceptTouchEvents)
        self.setFocusPolicy(Qt.StrongFocus)

        self.camera = camera
        self.viewport = Viewport(self.width(), self.height())
        self.geometry = TileGeometry(tile_size)
        self.grid = InfiniteGrid(camera, self.viewport, self.geometry)
        self.scene_items = []

        self.controller = PanZoomController(
            camera,
            cell_at=self.cell_at,
            on_tile_selected=lambda cell: self.tileSelected.emit(cell.row, cell.col),
            on_tile_hovered=lambda cell: self.tileHovered.emit(cell.row, cell.col),
        )

        self.frame_timer = QTimer(self)
        self.frame_timer.timeout.connect(self.tick)
        self.frame_timer.start(FRAME_INTERVAL_MS)

    # ========================================
    # Surface state
    # ========================================

    @property
    def tile_size(self):
        return self.grid.tile_size

    def set_tile_size(self, tile_size):
        """Change cell size; the grid redraws immediately."""
        self.grid.tile_size = tile_size
        self.update()

    def viewport_rect(self):
        """On-screen position of the surface's top-left corner."""
        origin = self.mapToGlobal(QPoint(0, 0))
        return Vec2(origin.x(), origin.y())

    def cell_at(self, screen_pos):
        """Tile cell under a global screen point."""
        return screen_to_tile(screen_pos, self.viewport_rect(), self.viewport, self.camera, self.geometry.tile_size)

    def tick(self):
        """Frame tick: grid dirty check, repaint if it redrew."""
        if self.grid.update():
            self.update()

    # ========================================
    # Qt events
    # ========================================

    def resizeEvent(self, event):
        """Track the surface size; the visible rectangle changed."""
        self.viewport.width = event.size().width()
        self.viewport.height = event.size().height()
        self.grid.invalidate()
        super().resizeEvent(event)

    def hideEvent(self, event):
        """Detached/hidden mid-gesture: drop the drag."""
        self.controller.cancel()
        super().hideEvent(event)

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)
        painter.fillRect(self.rect(), QColor(VIEWPORT_BACKGROUND_COLOR))

        # World transform: viewport center, camera offset, then scale
        painter.translate(self.viewport.width / 2 - self.camera.x, self.viewport.height / 2 - self.camera.y)
        painter.scale(self.camera.scale, self.camera.scale)

        for item in self.scene_items:
            item(painter)
        self.grid.paint(painter)
        painter.end()

    def mousePressEvent(self, event):
        """Start a pan/click gesture"""
        if event.button() == Qt.LeftButton:
            self.controller.pointer_down(self._global_pos(event))
            self.setCursor(Qt.ClosedHandCursor)
            event.accept()
        else:
            super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        """Pan while dragging, track hovered cell otherwise"""
        self.controller.pointer_move(self._global_pos(event))
        event.accept()

    def mouseReleaseEvent(self, event):
        """End the gesture (click selects a tile)"""
        if event.button() == Qt.LeftButton:
            self.controller.pointer_up(self._global_pos(event))
            self.setCursor(Qt.ArrowCursor)
            event.accept()
        else:
            super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        """Pointer left the surface: treat as drag end"""
        self.controller.pointer_leave()
        self.setCursor(Qt.ArrowCursor)
        super().leaveEvent(event)

    def wheelEvent(self, event):
        """Zoom; the event is always consumed so nothing scrolls"""
        # Qt: +120 per notch away from the user; delta_y: +100 per notch towards
        delta_y = -event.angleDelta().y() / QT_WHEEL_NOTCH * WHEEL_NOTCH_DELTA
        self.controller.wheel(delta_y)
        event.accept()

    def event(self, event):
        """Route touch events to the controller (primary contact only)"""
        event_type = event.type()
        if event_type in (QEvent.TouchBegin, QEvent.TouchUpdate, QEvent.TouchEnd, QEvent.TouchCancel):
            points = [Vec2(tp.screenPos().x(), tp.screenPos().y()) for tp in event.touchPoints()]
            if event_type == QEvent.TouchBegin:
                self.controller.touch_down(points)
            elif event_type == QEvent.TouchUpdate:
                self.controller.touch_move(points)
            elif event_type == QEvent.TouchEnd:
                self.controller.touch_up(points)
            else:
                self.controller.cancel()
            event.accept()
            return True
        return super().event(event)

    @staticmethod
    def _global_pos(event):
        pos = event.globalPos()
        return Vec2(pos.x(), pos.y())
