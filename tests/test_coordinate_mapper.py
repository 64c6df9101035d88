"""
Tests for screen -> world -> tile mapping.

Covers:
- Viewport center maps to tile (0, 0) at the default camera
- Half-tile cell alignment (row/col 0 spans [-ts/2, ts/2))
- Camera offset and zoom in the mapping
- Inverse consistency of world_to_screen
- Touch primary point selection and empty-touch rejection
- Tile size validation
"""
import pytest

from models.camera import Camera
from models.transform import Vec2, Viewport, TileCell, TileGeometry
from models.errors import InvalidInputError, InvalidGestureError
from services.coordinate_mapper import (
    screen_to_world, world_to_screen, world_to_tile, screen_to_tile, primary_point
)


class TestViewportCenter:

    @pytest.mark.parametrize("tile_size", [1, 7, 16, 32, 33.5, 256])
    def test_center_is_tile_zero(self, viewport, origin, tile_size):
        camera = Camera()
        center = Vec2(viewport.width / 2, viewport.height / 2)
        assert screen_to_tile(center, origin, viewport, camera, tile_size) == TileCell(0, 0)

    def test_center_with_offset_rect(self, viewport):
        camera = Camera()
        rect = Vec2(120, 45)
        center = Vec2(rect.x + viewport.width / 2, rect.y + viewport.height / 2)
        assert screen_to_tile(center, rect, viewport, camera, 32) == TileCell(0, 0)


class TestScreenToWorld:

    def test_default_camera(self, viewport, origin):
        world = screen_to_world(Vec2(500, 300), origin, viewport, 0, 0, 1)
        assert (world.x, world.y) == (100, 0)

    def test_camera_offset_added_before_scale(self, viewport, origin):
        world = screen_to_world(Vec2(400, 300), origin, viewport, 64, -32, 2)
        assert (world.x, world.y) == (32, -16)

    def test_zoom_divides(self, viewport, origin):
        world = screen_to_world(Vec2(600, 500), origin, viewport, 0, 0, 4)
        assert (world.x, world.y) == (50, 50)

    @pytest.mark.parametrize("camera_x,camera_y,scale", [(0, 0, 1), (37, -12, 2.5), (-500, 800, 0.1)])
    def test_world_to_screen_inverts(self, viewport, camera_x, camera_y, scale):
        rect = Vec2(10, 20)
        screen = Vec2(123, 456)
        world = screen_to_world(screen, rect, viewport, camera_x, camera_y, scale)
        back = world_to_screen(world, rect, viewport, camera_x, camera_y, scale)
        assert back.x == pytest.approx(screen.x)
        assert back.y == pytest.approx(screen.y)


class TestWorldToTile:

    @pytest.mark.parametrize("world_x,expected_col", [
        (-16.0, 0),
        (0.0, 0),
        (15.999, 0),
        (16.0, 1),
        (-16.001, -1),
        (47.9, 1),
        (48.0, 2),
    ])
    def test_half_tile_alignment(self, world_x, expected_col):
        assert world_to_tile(Vec2(world_x, 0), 32).col == expected_col

    def test_rows_follow_y(self):
        assert world_to_tile(Vec2(0, 100), 32) == TileCell(3, 0)
        assert world_to_tile(Vec2(0, -100), 32) == TileCell(-3, 0)

    @pytest.mark.parametrize("tile_size", [0, -32, float('nan'), "32", None])
    def test_rejects_bad_tile_size(self, tile_size):
        with pytest.raises(InvalidInputError):
            world_to_tile(Vec2(0, 0), tile_size)

    @pytest.mark.parametrize("world", [
        Vec2(float('inf'), 0),
        Vec2(0, float('-inf')),
        Vec2(float('nan'), 0),
        Vec2(1.7e308, 0),
    ])
    def test_rejects_non_finite_world_point(self, world):
        with pytest.raises(InvalidInputError):
            world_to_tile(world, 0.5)

    def test_overflowing_screen_point_rejected(self, viewport, origin):
        camera = Camera()
        camera.set_position(1.7e308, 0)
        camera.set_scale(0.1)
        with pytest.raises(InvalidInputError):
            screen_to_tile(Vec2(400, 300), origin, viewport, camera, 32)

    def test_cell_unpacks(self):
        row, col = world_to_tile(Vec2(40, -40), 32)
        assert (row, col) == (-1, 1)


class TestScreenToTile:

    def test_zoomed_and_panned(self, viewport, origin):
        camera = Camera()
        camera.set_position(64, 0)
        camera.set_scale(2)
        # (400 - 400 + 64) / 2 = 32 -> col 1
        assert screen_to_tile(Vec2(400, 300), origin, viewport, camera, 32) == TileCell(0, 1)

    def test_tile_geometry_validates(self):
        with pytest.raises(InvalidInputError):
            TileGeometry(0)
        assert TileGeometry(16).tile_size == 16


class TestPrimaryPoint:

    def test_single_touch(self):
        assert primary_point([Vec2(3, 4)]) == Vec2(3, 4)

    def test_multi_touch_uses_first(self):
        assert primary_point([Vec2(1, 1), Vec2(9, 9)]) == Vec2(1, 1)

    def test_empty_touch_rejected(self):
        with pytest.raises(InvalidGestureError):
            primary_point([])

    def test_gesture_error_is_input_error(self):
        assert issubclass(InvalidGestureError, InvalidInputError)
