"""UI components for the Tilemap Editor

This package contains the editor's widgets:
- viewport_widgets: Gesture state machine and infinite grid behind the surface
- viewport_widget: Qt rendering surface hosting a camera and grid
- number_input: Labeled numeric fields bound to camera / tile values
- tilemap_section / tileset_section: The two editor panes
"""

from .viewport_widget import ViewportWidget
from .number_input import NumberInput
from .tilemap_section import TilemapSection
from .tileset_section import TilesetSection

__all__ = [
    'ViewportWidget',
    'NumberInput',
    'TilemapSection',
    'TilesetSection',
]
