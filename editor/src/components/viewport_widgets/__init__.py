"""
Tilemap Editor - Viewport Interaction Components

This package contains the Qt-independent parts of the viewport surface:
- gesture_state.py: Gesture states and drag bookkeeping
- pan_zoom_controller.py: Pointer/wheel/touch state machine driving the camera
- infinite_grid.py: Visible-region grid line generation with dirty check
"""

from .gesture_state import GestureState, GestureResult, DragState
from .pan_zoom_controller import PanZoomController
from .infinite_grid import InfiniteGrid, GridLines, GridDrawCache, WorldRect

__all__ = [
    'GestureState', 'GestureResult', 'DragState',
    'PanZoomController',
    'InfiniteGrid', 'GridLines', 'GridDrawCache', 'WorldRect',
]
