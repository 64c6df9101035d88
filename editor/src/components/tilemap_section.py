# PyQt5 imports
from PyQt5.QtWidgets import QFrame, QVBoxLayout, QHBoxLayout, QToolButton
from PyQt5.QtCore import pyqtSignal

# Local imports
import logging
from constants import TILEMAP_TRANSFORM_NAMESPACE, TILEMAP_TRANSFORM_KEY
from models.camera import Camera
from services.transform_store import open_transform_store, TransformSession
from .viewport_widget import ViewportWidget
from .number_input import NumberInput, parse_tile_size


class TilemapSection(QFrame):
	"""Tilemap view: tile size field, viewport with infinite grid, X/Y/Zoom fields
	
	One transform per project, stored under
	'tilemap-transform-<project_id>'. Clicking a cell reports it upward via
	tileSelected; the map itself is not modified here.
	"""
	
	tileSizeChanged = pyqtSignal(int)
	tileSelected = pyqtSignal(str, int, int)  # project_id, row, col
	tileHovered = pyqtSignal(int, int)
	
	def __init__(self, project_id, tile_size, store=None, parent=None):
		super().__init__(parent)
		self._logger = logging.getLogger('TilemapSection')
		self.project_id = project_id
		
		if store is None:
			store = open_transform_store(TILEMAP_TRANSFORM_NAMESPACE.format(project_id=project_id))
		self.store = store
		self.session = TransformSession(store)
		self.camera = Camera(store, TILEMAP_TRANSFORM_KEY, self.session.transform_for(TILEMAP_TRANSFORM_KEY))
		
		# Brush picked in the tileset section: (tileset_id, row, col)
		self.selected_tile = None
		
		self._setup_ui(tile_size)
		self.camera.add_listener(self._sync_inputs)
	
	def _setup_ui(self, tile_size):
		"""Setup header / main / footer layout"""
		layout = QVBoxLayout(self)
		layout.setContentsMargins(0, 0, 0, 0)
		layout.setSpacing(0)
		
		# Header: tile size
		header = QHBoxLayout()
		self.tile_size_input = NumberInput("Tile Size", tile_size, parser=parse_tile_size)
		self.tile_size_input.valueChanged.connect(self._on_tile_size_input)
		header.addWidget(self.tile_size_input)
		header.addStretch()
		layout.addLayout(header)
		
		# Main: rendering surface
		self.viewport_widget = ViewportWidget(self.camera, tile_size)
		self.viewport_widget.tileSelected.connect(self._on_tile_clicked)
		self.viewport_widget.tileHovered.connect(self.tileHovered.emit)
		layout.addWidget(self.viewport_widget, stretch=1)
		
		# Footer: camera fields
		footer = QHBoxLayout()
		self.x_input = NumberInput("X", self.camera.x)
		self.y_input = NumberInput("Y", self.camera.y)
		self.zoom_input = NumberInput("Zoom", self.camera.zoom)
		self.x_input.valueChanged.connect(self._on_x_input)
		self.y_input.valueChanged.connect(self._on_y_input)
		self.zoom_input.valueChanged.connect(self._on_zoom_input)
		for field in (self.x_input, self.y_input, self.zoom_input):
			footer.addWidget(field)
		self.reset_btn = QToolButton()
		self.reset_btn.setText("Reset")
		self.reset_btn.setToolTip("Reset view to the origin at 100%")
		self.reset_btn.clicked.connect(self._on_reset)
		footer.addWidget(self.reset_btn)
		footer.addStretch()
		layout.addLayout(footer)
	
	# ============= Input bindings =============
	
	def _on_x_input(self, value):
		self.camera.set_position(value, self.camera.y)
		self.camera.persist()
	
	def _on_y_input(self, value):
		self.camera.set_position(self.camera.x, value)
		self.camera.persist()
	
	def _on_zoom_input(self, value):
		self.camera.set_scale(value)
		self.camera.persist()
	
	def _on_reset(self):
		self.camera.reset()
		self.camera.persist()
	
	def _on_tile_size_input(self, value):
		self.set_tile_size(int(value))
		self.tileSizeChanged.emit(int(value))
	
	def _sync_inputs(self, camera):
		"""Reflect camera changes (drag, wheel, clamping) in the fields"""
		self.x_input.set_value(camera.x)
		self.y_input.set_value(camera.y)
		self.zoom_input.set_value(camera.zoom)
	
	# ============= Tiles =============
	
	@property
	def tile_size(self):
		return self.viewport_widget.tile_size
	
	def set_tile_size(self, tile_size):
		"""Apply a new tile size to the grid and the field"""
		self.tile_size_input.set_value(tile_size)
		self.viewport_widget.set_tile_size(tile_size)
	
	def set_tile(self, tileset_id, row, col):
		"""Set the brush tile picked in a tileset"""
		self.selected_tile = (tileset_id, row, col)
		self._logger.debug(f"Brush set to {tileset_id} ({row}, {col})")
	
	def _on_tile_clicked(self, row, col):
		self.tileSelected.emit(self.project_id, row, col)
