"""Camera model - position and zoom of a viewport.

The camera mutates the Transform record of the active context in place.
Records come from a per-session mapping (context key -> Transform) backed by
a transform store, both injected by the owning section. Persisting is the
caller's job: setters never touch the store, so hot pointer-move paths only
write when something actually changed.
"""
import logging

from models.transform import Transform, clamp_zoom
from models.errors import StoreUnavailable
from utils.logger import loggerRecover


class Camera:
    """Viewport camera bound to one context's Transform at a time.

    Args:
        store: Transform store used by persist() (may be None)
        context_key: Key of the active context inside the store
        transform: Record to start on (defaults to a fresh {0, 0, 1})
    """

    def __init__(self, store=None, context_key=None, transform=None):
        self._logger = logging.getLogger('Camera')
        self.store = store
        self.context_key = context_key
        self.transform = transform if transform is not None else Transform()
        self._listeners = []

    # ========================================
    # State access
    # ========================================

    @property
    def x(self):
        return self.transform.x

    @property
    def y(self):
        return self.transform.y

    @property
    def zoom(self):
        return self.transform.zoom

    # Grid and coordinate code speak of "scale"; same value as zoom
    scale = zoom

    # ========================================
    # Mutation
    # ========================================

    def set_position(self, x, y):
        """Set camera position. No clamping."""
        self.transform.x = x
        self.transform.y = y
        self._notify()

    def set_scale(self, zoom):
        """Set zoom, silently clamped into [ZOOM_MIN, ZOOM_MAX]."""
        self.transform.zoom = clamp_zoom(zoom)
        self._notify()

    def reset(self):
        """Return the active record to the default {0, 0, 1}."""
        default = Transform()
        self.transform.x = default.x
        self.transform.y = default.y
        self.transform.zoom = default.zoom
        self._notify()

    def attach(self, transform, context_key=None):
        """Switch to another context's record (e.g. on tab change).

        Args:
            transform: Transform record to mutate from now on
            context_key: Store key for persist(); keeps the current key if None
        """
        self.transform = transform
        if context_key is not None:
            self.context_key = context_key
        self._notify()

    def persist(self):
        """Write the active record to the store under the active key."""
        if self.store is None or self.context_key is None:
            return
        try:
            self.store.set(self.context_key, self.transform)
        except StoreUnavailable as e:
            loggerRecover(e, f"Transform for '{self.context_key}' kept in memory only", self._logger)

    # ========================================
    # Scale conversion
    # ========================================

    def to_world_delta(self, screen_delta):
        """Convert a screen-pixel distance to world units."""
        return screen_delta / self.transform.zoom

    def to_screen_delta(self, world_delta):
        """Convert a world-unit distance to screen pixels."""
        return world_delta * self.transform.zoom

    # ========================================
    # Listeners
    # ========================================

    def add_listener(self, callback):
        """Register callback(camera) invoked after every mutation."""
        if callback not in self._listeners:
            self._listeners.append(callback)

    def remove_listener(self, callback):
        if callback in self._listeners:
            self._listeners.remove(callback)

    def _notify(self):
        for callback in self._listeners:
            callback(self)
