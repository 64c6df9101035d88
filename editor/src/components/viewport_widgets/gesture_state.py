"""Gesture state for the pan/zoom controller.

One explicit state value plus a drag record that only exists while a
pointer is held down.
"""

from dataclasses import dataclass
from enum import Enum


class GestureState(Enum):
    IDLE = 'idle'
    DRAGGING = 'dragging'


class GestureResult(Enum):
    """How a finished pointer gesture was classified."""
    CLICK = 'click'
    DRAG = 'drag'
    CANCELLED = 'cancelled'


@dataclass
class DragState:
    """Pointer positions tracked from pointer-down to pointer-up (screen pixels)."""
    origin_x: float
    origin_y: float
    last_x: float
    last_y: float
    active: bool = True

    @classmethod
    def start(cls, x, y):
        return cls(origin_x=x, origin_y=y, last_x=x, last_y=y)

    def displacement(self, x, y):
        """Absolute per-axis travel from the origin."""
        return abs(x - self.origin_x), abs(y - self.origin_y)
