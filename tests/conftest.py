"""
Shared fixtures for Tilemap Editor tests.

Provides transform stores, cameras and a standard 800x600 viewport.
"""
import sys
import os
import pytest

# Ensure editor/src is on the path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'editor', 'src'))

# Widgets are created without a display
os.environ.setdefault('QT_QPA_PLATFORM', 'offscreen')


# ── Stores ──────────────────────────────────────────────────────────────

@pytest.fixture
def store_dir(tmp_path):
    """Empty directory for JSON transform stores"""
    return str(tmp_path / "transforms")


@pytest.fixture
def memory_store():
    """In-memory transform store"""
    from services.transform_store import InMemoryTransformStore
    return InMemoryTransformStore("test-namespace")


@pytest.fixture
def json_store(store_dir):
    """JSON-backed transform store in a temp directory"""
    from services.transform_store import JsonTransformStore
    return JsonTransformStore("tileset-transform-demo", store_dir=store_dir)


# ── Camera / viewport ───────────────────────────────────────────────────

@pytest.fixture
def camera(memory_store):
    """Camera at {0, 0, 1} persisting to an in-memory store"""
    from models.camera import Camera
    return Camera(memory_store, "view")


@pytest.fixture
def viewport():
    """800x600 viewport"""
    from models.transform import Viewport
    return Viewport(800, 600)


@pytest.fixture
def origin():
    """Viewport on-screen rect at the screen origin"""
    from models.transform import Vec2
    return Vec2(0, 0)
