"""Keyed persistent storage of camera transforms.

One JSON file per namespace (e.g. ``tilemap-transform-<projectId>``) inside
the editor config directory, holding ``{key: {"x": .., "y": .., "zoom": ..}}``.

Reads are synchronous, writes are fire-and-forget and idempotent. When the
backing file cannot be used the store switches itself off: ``get`` returns
None and ``set`` does nothing, while cameras keep working on their
in-memory records. Nothing here is fatal.
"""
import os
import re
import json
import logging

from constants import CONFIG_DIR_NAME, TRANSFORM_STORE_SUBDIR
from models.transform import Transform
from models.errors import InvalidInputError, StoreUnavailable
from utils.logger import loggerRecover


def default_store_dir():
    """Directory holding the transform namespaces (~/.tilemap_editor/transforms)."""
    return os.path.join(os.path.expanduser("~"), CONFIG_DIR_NAME, TRANSFORM_STORE_SUBDIR)


def _namespace_filename(namespace):
    """Map a namespace to a safe file name."""
    safe = re.sub(r'[^A-Za-z0-9_.-]', '_', namespace)
    return f"{safe}.json"


class InMemoryTransformStore:
    """Transform store kept in process memory only.

    Same contract as JsonTransformStore. Values are copied on the way in and
    out so callers mutating their record do not change stored state.
    """

    def __init__(self, namespace=''):
        self.namespace = namespace
        self._records = {}

    def get(self, key):
        transform = self._records.get(key)
        return transform.copy() if transform is not None else None

    def set(self, key, transform):
        self._records[key] = transform.copy()

    def keys(self):
        return list(self._records.keys())


class JsonTransformStore(InMemoryTransformStore):
    """Transform store persisted to a JSON file per namespace.

    Args:
        namespace: Context-derived namespace, e.g. 'tileset-transform-demo'
        store_dir: Directory for namespace files (defaults to default_store_dir())
    """

    def __init__(self, namespace, store_dir=None):
        super().__init__(namespace)
        self._logger = logging.getLogger('TransformStore')
        self.store_dir = store_dir or default_store_dir()
        self.path = os.path.join(self.store_dir, _namespace_filename(namespace))
        self.available = True
        self._raw = {}
        try:
            self._raw = self._load()
        except StoreUnavailable as e:
            self._degrade(e)

    # ========================================
    # Store contract
    # ========================================

    def get(self, key):
        """Return the stored Transform for key, or None if absent/unusable."""
        if not self.available:
            return None
        cached = super().get(key)
        if cached is not None:
            return cached
        data = self._raw.get(key)
        if data is None:
            return None
        try:
            transform = Transform.from_dict(data)
        except InvalidInputError as e:
            loggerRecover(e, f"Ignoring malformed transform '{key}' in {self.path}", self._logger)
            return None
        self._records[key] = transform
        return transform.copy()

    def set(self, key, transform):
        """Store transform under key; writes the file only if the value changed."""
        if not self.available:
            return
        record = transform.to_dict()
        unchanged = self._raw.get(key) == record
        super().set(key, transform)
        if unchanged:
            return
        self._raw[key] = record
        try:
            self._save()
        except StoreUnavailable as e:
            self._degrade(e)

    def keys(self):
        return list(dict.fromkeys(list(self._raw.keys()) + super().keys()))

    # ========================================
    # Backing file
    # ========================================

    def _load(self):
        """Read the namespace file.

        Returns:
            dict of key -> raw record (empty if the file does not exist)

        Raises:
            StoreUnavailable: If the file exists but cannot be read or parsed
        """
        if not os.path.exists(self.path):
            return {}
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, ValueError) as e:
            raise StoreUnavailable(f"Cannot read {self.path}: {e}") from e
        if not isinstance(data, dict):
            raise StoreUnavailable(f"{self.path} does not hold a JSON object")
        return data

    def _save(self):
        """Write all records of the namespace.

        Raises:
            StoreUnavailable: If the directory or file cannot be written
        """
        try:
            os.makedirs(self.store_dir, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(self._raw, f, indent=2)
        except OSError as e:
            raise StoreUnavailable(f"Cannot write {self.path}: {e}") from e

    def _degrade(self, error):
        """Switch to memory-only operation after the backing file failed."""
        self.available = False
        loggerRecover(error, f"Transform store '{self.namespace}' unavailable, using memory only", self._logger)


def open_transform_store(namespace, store_dir=None):
    """Open the durable store for a namespace."""
    return JsonTransformStore(namespace, store_dir=store_dir)


class TransformSession:
    """Live Transform records of one editor session, keyed by context.

    Records are created on first access from the store (or {0, 0, 1} when
    the store has nothing usable) and then shared by reference, so a camera
    attached to a record mutates the session's copy directly.
    """

    def __init__(self, store):
        self.store = store
        self._transforms = {}

    def transform_for(self, key):
        """Return the live record for key, loading or creating it on first use."""
        transform = self._transforms.get(key)
        if transform is None:
            transform = self.store.get(key) or Transform()
            self._transforms[key] = transform
        return transform

    def __contains__(self, key):
        return key in self._transforms

    def keys(self):
        return list(self._transforms.keys())
