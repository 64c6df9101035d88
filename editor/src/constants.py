"""
Tilemap Editor - Constants and Configuration

This module contains all constant values used throughout the application:
- Camera defaults and zoom limits
- Pointer gesture thresholds
- Infinite grid drawing constants
- Tile geometry defaults
- Persistence locations
"""

# ======================================================================
# CAMERA / TRANSFORM
# ======================================================================

# Default transform for a context that has never been viewed
DEFAULT_CAMERA_X = 0.0
DEFAULT_CAMERA_Y = 0.0
DEFAULT_ZOOM = 1.0

# Zoom is clamped, never rejected
ZOOM_MIN = 0.1
ZOOM_MAX = 10.0

# ======================================================================
# POINTER GESTURES
# ======================================================================

# Pointer travel (pixels, per axis) below which a press/release is a click
CLICK_THRESHOLD_PX = 5

# Wheel delta (100 per notch) per unit of zoom
WHEEL_ZOOM_DIVISOR = 100.0

# Qt reports 120 angle units per wheel notch; one notch is 100 wheel delta units
QT_WHEEL_NOTCH = 120
WHEEL_NOTCH_DELTA = 100.0

# ======================================================================
# INFINITE GRID
# ======================================================================

# Below this scale the grid is too dense to read and is not drawn
GRID_MIN_SCALE = 1.0

# Line width in screen pixels (divided by scale when drawing in world space)
GRID_LINE_WIDTH = 1.0
GRID_LINE_COLOR = '#707070'
GRID_DASH_PATTERN = [4.0, 4.0]

# Origin marker: 2x2 world units centred on (0, 0)
ORIGIN_MARKER_SIZE = 2.0
ORIGIN_MARKER_COLOR = '#ff0000'
ORIGIN_LABEL_TEXT = '(0, 0)'
ORIGIN_LABEL_OFFSET_Y = 10.0

# Frame tick for the grid dirty check (~60 fps)
FRAME_INTERVAL_MS = 16

# Surface background
VIEWPORT_BACKGROUND_COLOR = '#bfbfbf'

# ======================================================================
# TILE GEOMETRY
# ======================================================================

DEFAULT_TILE_SIZE = 32

# ======================================================================
# PERSISTENCE
# ======================================================================

CONFIG_DIR_NAME = '.tilemap_editor'
TRANSFORM_STORE_SUBDIR = 'transforms'

# Store namespaces (formatted with the project id)
TILEMAP_TRANSFORM_NAMESPACE = 'tilemap-transform-{project_id}'
TILESET_TRANSFORM_NAMESPACE = 'tileset-transform-{project_id}'

# Key of the single transform record in a tilemap namespace
TILEMAP_TRANSFORM_KEY = 'view'
