# PyQt5 imports
from PyQt5.QtWidgets import QFrame, QVBoxLayout, QHBoxLayout, QTabBar, QToolButton
from PyQt5.QtCore import pyqtSignal

# Local imports
import logging
from constants import TILESET_TRANSFORM_NAMESPACE
from models.camera import Camera
from services.transform_store import open_transform_store, TransformSession
from .viewport_widget import ViewportWidget
from .number_input import NumberInput


class TilesetSection(QFrame):
	"""Tileset preview: one tab per tileset sharing a single viewport
	
	Every tab keeps its own transform, stored in
	'tileset-transform-<project_id>' under the tileset id. Switching tabs
	re-attaches the camera to that tab's record. Clicking a cell emits
	tileSelected(tileset_id, row, col).
	"""
	
	tileSelected = pyqtSignal(str, int, int)  # tileset_id, row, col
	
	def __init__(self, project_id, tile_size, tilesets, store=None, parent=None):
		super().__init__(parent)
		self._logger = logging.getLogger('TilesetSection')
		self.project_id = project_id
		# tileset_id -> asset path (asset loading belongs to the editor)
		self.tilesets = dict.fromkeys(tilesets) if not isinstance(tilesets, dict) else dict(tilesets)
		
		if store is None:
			store = open_transform_store(TILESET_TRANSFORM_NAMESPACE.format(project_id=project_id))
		self.store = store
		self.session = TransformSession(store)
		self.camera = Camera(store)
		self.current_tileset = None
		
		self._setup_ui(tile_size)
		self.camera.add_listener(self._sync_inputs)
		
		if self.tilesets:
			self.select_tileset(next(iter(self.tilesets)))
	
	def _setup_ui(self, tile_size):
		"""Setup tabs / main / footer layout"""
		layout = QVBoxLayout(self)
		layout.setContentsMargins(0, 0, 0, 0)
		layout.setSpacing(0)
		
		# Tabs (signals connected after population so init selects explicitly)
		self.tab_bar = QTabBar()
		for tileset_id in self.tilesets:
			self.tab_bar.addTab(tileset_id)
		self.tab_bar.currentChanged.connect(self._on_tab_changed)
		layout.addWidget(self.tab_bar)
		
		# Main: rendering surface
		self.viewport_widget = ViewportWidget(self.camera, tile_size)
		self.viewport_widget.tileSelected.connect(self._on_tile_clicked)
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
	
	# ============= Tabs =============
	
	def select_tileset(self, tileset_id):
		"""Make tileset_id the active tab and load its transform"""
		if tileset_id not in self.tilesets:
			self._logger.warning(f"Unknown tileset '{tileset_id}'")
			return
		index = list(self.tilesets).index(tileset_id)
		if self.tab_bar.currentIndex() != index:
			# currentChanged calls back into _on_tab_changed
			self.tab_bar.setCurrentIndex(index)
			return
		self._activate(tileset_id)
	
	def _on_tab_changed(self, index):
		if 0 <= index < len(self.tilesets):
			self._activate(list(self.tilesets)[index])
	
	def _activate(self, tileset_id):
		# A drag in progress belongs to the previous tab
		self.viewport_widget.controller.cancel()
		self.current_tileset = tileset_id
		self.camera.attach(self.session.transform_for(tileset_id), tileset_id)
	
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
	
	def _sync_inputs(self, camera):
		"""Reflect camera changes (drag, wheel, tab switch) in the fields"""
		self.x_input.set_value(camera.x)
		self.y_input.set_value(camera.y)
		self.zoom_input.set_value(camera.zoom)
	
	# ============= Tiles =============
	
	@property
	def tile_size(self):
		return self.viewport_widget.tile_size
	
	def set_tile_size(self, tile_size):
		"""Follow the tilemap's tile size"""
		self.viewport_widget.set_tile_size(tile_size)
	
	def _on_tile_clicked(self, row, col):
		if self.current_tileset is None:
			return
		self.tileSelected.emit(self.current_tileset, row, col)
