"""
Tests for the tilemap / tileset sections and the editor window wiring.

Covers:
- X/Y/Zoom field bindings (valid text applied and persisted, invalid ignored)
- Fields following camera changes
- Tile size field driving the grid
- Per-tileset transforms restored on tab switch
- Upward tile selection notifications
- Editor wiring between the sections
"""
import pytest

from models.transform import Transform
from services.transform_store import InMemoryTransformStore
from components.tilemap_section import TilemapSection
from components.tileset_section import TilesetSection


# ══════════════════════════════════════════════════════════════════════════
# Tilemap section
# ══════════════════════════════════════════════════════════════════════════

class TestTilemapSection:

    @pytest.fixture
    def store(self):
        return InMemoryTransformStore("tilemap-transform-demo")

    @pytest.fixture
    def section(self, qtbot, store):
        widget = TilemapSection("demo", 32, store=store)
        qtbot.addWidget(widget)
        widget.viewport_widget.frame_timer.stop()
        return widget

    def test_starts_at_default_transform(self, section):
        assert (section.camera.x, section.camera.y, section.camera.zoom) == (0, 0, 1)
        assert section.x_input.text() == "0"
        assert section.zoom_input.text() == "1"

    def test_restores_stored_transform(self, qtbot, store):
        store.set("view", Transform(64, -32, 2))
        widget = TilemapSection("demo", 32, store=store)
        qtbot.addWidget(widget)
        assert (widget.camera.x, widget.camera.y, widget.camera.zoom) == (64, -32, 2)
        assert widget.x_input.text() == "64"

    def test_x_input_moves_and_persists(self, section, store):
        section.x_input.submit_text("120")
        assert section.camera.x == 120
        assert store.get("view") == Transform(120, 0, 1)

    def test_y_input_moves(self, section):
        section.y_input.submit_text("-8.5")
        assert section.camera.y == -8.5

    def test_invalid_input_ignored(self, section, store):
        section.x_input.submit_text("left")
        assert section.camera.x == 0
        assert section.x_input.text() == "0"
        assert store.get("view") is None

    def test_zoom_input_clamped_and_reflected(self, section):
        section.zoom_input.submit_text("50")
        assert section.camera.zoom == 10
        assert section.zoom_input.text() == "10"

    def test_fields_follow_camera(self, section):
        section.camera.set_position(5, 6)
        assert section.x_input.text() == "5"
        assert section.y_input.text() == "6"

    def test_tile_size_input(self, section, qtbot):
        with qtbot.waitSignal(section.tileSizeChanged) as blocker:
            section.tile_size_input.submit_text("64")
        assert blocker.args == [64]
        assert section.tile_size == 64

    def test_bad_tile_size_ignored(self, section, qtbot):
        with qtbot.assertNotEmitted(section.tileSizeChanged):
            section.tile_size_input.submit_text("0")
        assert section.tile_size == 32

    def test_click_reports_project_and_cell(self, section, qtbot):
        with qtbot.waitSignal(section.tileSelected) as blocker:
            section.viewport_widget.tileSelected.emit(3, -2)
        assert blocker.args == ["demo", 3, -2]

    def test_reset_button_restores_default_view(self, section, store):
        section.camera.set_position(40, -12)
        section.camera.set_scale(3)
        section.reset_btn.click()
        assert section.camera.transform == Transform(0, 0, 1)
        assert store.get("view") == Transform(0, 0, 1)
        assert section.x_input.text() == "0"
        assert section.zoom_input.text() == "1"

    def test_set_tile_records_brush(self, section):
        section.set_tile("grass", 1, 2)
        assert section.selected_tile == ("grass", 1, 2)


# ══════════════════════════════════════════════════════════════════════════
# Tileset section
# ══════════════════════════════════════════════════════════════════════════

class TestTilesetSection:

    @pytest.fixture
    def store(self):
        return InMemoryTransformStore("tileset-transform-demo")

    @pytest.fixture
    def section(self, qtbot, store):
        widget = TilesetSection("demo", 32, ["grass", "water"], store=store)
        qtbot.addWidget(widget)
        widget.viewport_widget.frame_timer.stop()
        return widget

    def test_tabs(self, section):
        assert section.tab_bar.count() == 2
        assert section.tab_bar.tabText(1) == "water"

    def test_first_tab_active(self, section):
        assert section.current_tileset == "grass"
        assert section.camera.context_key == "grass"

    def test_transforms_are_per_tab(self, section):
        section.camera.set_position(10, 20)
        section.select_tileset("water")
        assert (section.camera.x, section.camera.y) == (0, 0)
        section.select_tileset("grass")
        assert (section.camera.x, section.camera.y) == (10, 20)

    def test_tab_bar_click_switches(self, section):
        section.camera.set_scale(4)
        section.tab_bar.setCurrentIndex(1)
        assert section.current_tileset == "water"
        assert section.camera.zoom == 1

    def test_input_persists_under_tileset_key(self, section, store):
        section.select_tileset("water")
        section.x_input.submit_text("33")
        assert store.get("water") == Transform(33, 0, 1)
        assert store.get("grass") is None

    def test_stored_transform_loaded_on_switch(self, qtbot, store):
        store.set("water", Transform(5, 6, 2))
        widget = TilesetSection("demo", 32, ["grass", "water"], store=store)
        qtbot.addWidget(widget)
        widget.select_tileset("water")
        assert (widget.camera.x, widget.camera.y, widget.camera.zoom) == (5, 6, 2)
        assert widget.zoom_input.text() == "2"

    def test_unknown_tileset_ignored(self, section):
        section.select_tileset("lava")
        assert section.current_tileset == "grass"

    def test_switch_cancels_drag(self, section):
        controller = section.viewport_widget.controller
        controller.pointer_down(section.viewport_widget.viewport_rect())
        section.select_tileset("water")
        assert not controller.is_dragging

    def test_click_reports_tileset_and_cell(self, section, qtbot):
        section.select_tileset("water")
        with qtbot.waitSignal(section.tileSelected) as blocker:
            section.viewport_widget.tileSelected.emit(0, 4)
        assert blocker.args == ["water", 0, 4]

    def test_no_tilesets(self, qtbot, store):
        widget = TilesetSection("demo", 32, [], store=store)
        qtbot.addWidget(widget)
        assert widget.current_tileset is None
        with qtbot.assertNotEmitted(widget.tileSelected):
            widget.viewport_widget.tileSelected.emit(0, 0)

    def test_reset_button_only_resets_active_tab(self, section, store):
        section.camera.set_position(10, 10)
        section.select_tileset("water")
        section.camera.set_position(99, 99)
        section.reset_btn.click()
        assert store.get("water") == Transform(0, 0, 1)
        section.select_tileset("grass")
        assert (section.camera.x, section.camera.y) == (10, 10)

    def test_set_tile_size(self, section):
        section.set_tile_size(16)
        assert section.tile_size == 16


# ══════════════════════════════════════════════════════════════════════════
# Editor window
# ══════════════════════════════════════════════════════════════════════════

class TestEditorWiring:

    @pytest.fixture
    def editor(self, qtbot, store_dir):
        from main import TilemapEditor
        window = TilemapEditor("demo", ["grass", "water"], 32, store_dir=store_dir)
        qtbot.addWidget(window)
        return window

    def test_tileset_pick_sets_brush(self, editor):
        editor.tileset_section.tileSelected.emit("water", 1, 2)
        assert editor.tilemap_section.selected_tile == ("water", 1, 2)
        assert editor.brush_label.text() == "Brush: water (1, 2)"

    def test_tile_size_follows_tilemap(self, editor):
        editor.tilemap_section.tile_size_input.submit_text("48")
        assert editor.tileset_section.tile_size == 48

    def test_hover_label(self, editor):
        editor.tilemap_section.tileHovered.emit(-1, 3)
        assert editor.hover_label.text() == "Row -1, Col 3"

    def test_transforms_saved_between_sessions(self, qtbot, editor, store_dir):
        from main import TilemapEditor
        editor.tilemap_section.x_input.submit_text("77")
        editor.tileset_section.select_tileset("water")
        editor.tileset_section.zoom_input.submit_text("3")

        reopened = TilemapEditor("demo", ["grass", "water"], 32, store_dir=store_dir)
        qtbot.addWidget(reopened)
        assert reopened.tilemap_section.camera.x == 77
        reopened.tileset_section.select_tileset("water")
        assert reopened.tileset_section.camera.zoom == 3
