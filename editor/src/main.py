import sys
import os
import argparse
import logging

# Add editor/src to path so imports work when running directly
if __name__ == "__main__":
    # Get the directory containing this file (editor/src)
    current_dir = os.path.dirname(os.path.abspath(__file__))
    # Add it to the Python path
    if current_dir not in sys.path:
        sys.path.insert(0, current_dir)

# PyQt5 import/s
from PyQt5.QtWidgets import QMainWindow, QSplitter, QApplication, QStatusBar, QLabel
from PyQt5.QtCore import Qt

# Component imports
from components.tilemap_section import TilemapSection
from components.tileset_section import TilesetSection

# Service imports
from services.transform_store import open_transform_store, default_store_dir

# Utility imports
from utils.logger import set_main_window, loggerRaise
from constants import DEFAULT_TILE_SIZE, TILEMAP_TRANSFORM_NAMESPACE, TILESET_TRANSFORM_NAMESPACE


class TilemapEditor(QMainWindow):
    """Editor window: tilemap view on the left, tileset tabs on the right.

    Wires the sections' upward notifications together:
    - tileset tileSelected -> tilemap brush (set_tile)
    - tilemap tileSizeChanged -> tileset grid
    """

    def __init__(self, project_id, tilesets, tile_size=DEFAULT_TILE_SIZE, store_dir=None):
        super().__init__()
        self._logger = logging.getLogger('Editor')
        self.project_id = project_id
        self.setWindowTitle(f"{project_id} - Tilemap Editor")
        self.resize(1280, 720)

        # One store per namespace, owned by this editor session
        self.tilemap_store = open_transform_store(
            TILEMAP_TRANSFORM_NAMESPACE.format(project_id=project_id), store_dir)
        self.tileset_store = open_transform_store(
            TILESET_TRANSFORM_NAMESPACE.format(project_id=project_id), store_dir)

        # Initialize global logger with main window reference
        set_main_window(self)

        self.setup_ui(tilesets, tile_size)

    # ============= UI Setup =============

    def setup_ui(self, tilesets, tile_size):
        splitter = QSplitter(Qt.Horizontal)
        self.setCentralWidget(splitter)

        self.tilemap_section = TilemapSection(self.project_id, tile_size, store=self.tilemap_store)
        self.tileset_section = TilesetSection(self.project_id, tile_size, tilesets, store=self.tileset_store)
        splitter.addWidget(self.tilemap_section)
        splitter.addWidget(self.tileset_section)
        splitter.setSizes([800, 480])

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.hover_label = QLabel("")
        self.brush_label = QLabel("No tile selected")
        self.status_bar.addWidget(self.hover_label)
        self.status_bar.addPermanentWidget(self.brush_label)

        self.tileset_section.tileSelected.connect(self._on_tileset_tile_selected)
        self.tilemap_section.tileSizeChanged.connect(self.tileset_section.set_tile_size)
        self.tilemap_section.tileSelected.connect(self._on_tilemap_tile_selected)
        self.tilemap_section.tileHovered.connect(self._on_tilemap_tile_hovered)

    # ============= Notifications =============

    def _on_tileset_tile_selected(self, tileset_id, row, col):
        try:
            self.tilemap_section.set_tile(tileset_id, row, col)
            self.brush_label.setText(f"Brush: {tileset_id} ({row}, {col})")
        except Exception as e:
            loggerRaise(e, f"Failed to set brush from tileset '{tileset_id}'")

    def _on_tilemap_tile_selected(self, project_id, row, col):
        self._logger.info(f"Tile ({row}, {col}) selected in {project_id}")

    def _on_tilemap_tile_hovered(self, row, col):
        self.hover_label.setText(f"Row {row}, Col {col}")


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Tilemap editor with a pannable, zoomable infinite grid.',
    )
    parser.add_argument(
        '-p', '--project',
        default='default',
        help='Project id; view transforms are stored per project (default: default).',
    )
    parser.add_argument(
        '-t', '--tile-size',
        type=int,
        default=DEFAULT_TILE_SIZE,
        help=f'Tile size in world units (default: {DEFAULT_TILE_SIZE}).',
    )
    parser.add_argument(
        '--tileset',
        action='append',
        default=[],
        help='Tileset id to open as a tab (repeatable).',
    )
    parser.add_argument(
        '--config-dir',
        default=None,
        help=f'Directory for stored view transforms (default: {default_store_dir()}).',
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose logging.',
    )
    args = parser.parse_args(argv)

    # Logging
    level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    if args.tile_size <= 0:
        parser.error("--tile-size must be positive")

    app = QApplication(sys.argv[:1])
    window = TilemapEditor(args.project, args.tileset, args.tile_size, args.config_dir)
    window.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
