"""A named, mutable node holding the fields of one JSON object."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from driftjson.core.keys import normalize_key
from driftjson.core.tree import build_storage, resolve_value
from driftjson.core.value import NavigableValue
from driftjson.json_types import ABSENT
from driftjson.models import KeyCodingStyle

if TYPE_CHECKING:
    from driftjson.cache.manager import CacheManager
    from driftjson.json_types import StoredValue

logger = logging.getLogger(__name__)

ITEMS_KEY = "items"


class ModelInstance:
    """Dynamic key/value model built from decoded JSON.

    Reads never raise: ``model.get("userId")`` (or ``model.user_id``, or
    ``model["user_id"]``) returns a :class:`NavigableValue` even when the key is
    missing. Keys are normalised with the instance's key coding style on both
    write and read, so ``user_id`` and ``userId`` address the same field.

    Attribute sugar only reaches keys that do not collide with the methods and
    properties below (``name``, ``get``, ``map``, ...); use ``get`` or item
    access for those.
    """

    def __init__(
        self,
        name: str,
        cache: CacheManager | None = None,
        key_style: KeyCodingStyle = KeyCodingStyle.CAMEL_CASE,
    ) -> None:
        self._name = name
        self._cache = cache
        self._key_style = key_style
        self._storage: dict[str, StoredValue] = {}
        self._lock = threading.RLock()
        self._restore_from_cache()

    @property
    def name(self) -> str:
        return self._name

    # -- reads ---------------------------------------------------------------

    def get(self, key: str) -> NavigableValue:
        canonical = normalize_key(key, self._key_style)
        with self._lock:
            raw = self._storage.get(canonical, ABSENT)
        return NavigableValue(raw, key=canonical, owner=self._name)

    def all_keys(self) -> set[str]:
        with self._lock:
            return set(self._storage)

    def has_key(self, key: str) -> bool:
        canonical = normalize_key(key, self._key_style)
        with self._lock:
            return canonical in self._storage

    def storage_snapshot(self) -> dict[str, StoredValue]:
        with self._lock:
            return dict(self._storage)

    # -- writes --------------------------------------------------------------

    def set(self, key: str, value: Any) -> None:
        canonical = normalize_key(key, self._key_style)
        resolved = resolve_value(value, self._name, canonical, self._make_child, self._key_style)
        with self._lock:
            self._storage[canonical] = resolved
            snapshot = dict(self._storage)
        self._persist(snapshot)

    def map(self, json: Any) -> None:
        """Replace this model's fields with a decoded JSON object.

        A JSON array is stored under ``"items"`` instead, leaving every other
        key untouched. Anything else is ignored.
        """
        if isinstance(json, Mapping):
            storage = build_storage(json, self._name, self._make_child, self._key_style)
            with self._lock:
                self._storage = storage
                snapshot = dict(storage)
            self._persist(snapshot)
            logger.debug("[%s] Mapped %d key(s).", self._name, len(storage))
        elif isinstance(json, (list, tuple)):
            items = resolve_value(json, self._name, ITEMS_KEY, self._make_child, self._key_style)
            with self._lock:
                self._storage[ITEMS_KEY] = items
                snapshot = dict(self._storage)
            self._persist(snapshot)
            logger.debug("[%s] Mapped array of %d item(s).", self._name, len(json))
        else:
            logger.warning("[%s] Ignored mapping input of type %s", self._name, type(json).__name__)

    def assign_storage(self, storage: dict[str, StoredValue]) -> None:
        """Swap in already-resolved storage without persisting it."""
        with self._lock:
            self._storage = storage

    def clear(self) -> None:
        with self._lock:
            self._storage = {}
        self.clear_cache()
        logger.debug("[%s] Cleared all values.", self._name)

    def clear_cache(self) -> None:
        if self._cache is not None:
            self._cache.clear(self._name)

    # -- python sugar --------------------------------------------------------

    def __getattr__(self, key: str) -> NavigableValue:
        if key.startswith("_"):
            raise AttributeError(key)
        return self.get(key)

    def __setattr__(self, key: str, value: Any) -> None:
        if key.startswith("_") or hasattr(type(self), key):
            object.__setattr__(self, key, value)
        else:
            self.set(key, value)

    def __getitem__(self, key: str) -> NavigableValue:
        return self.get(key)

    def __setitem__(self, key: str, value: Any) -> None:
        self.set(key, value)

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and self.has_key(key)

    def __len__(self) -> int:
        with self._lock:
            return len(self._storage)

    def __repr__(self) -> str:
        return f"ModelInstance(name={self._name!r}, keys={len(self)})"

    # -- internals -----------------------------------------------------------

    def _make_child(self, name: str) -> ModelInstance:
        return ModelInstance(name, cache=None, key_style=self._key_style)

    def _persist(self, snapshot: dict[str, StoredValue]) -> None:
        if self._cache is not None:
            self._cache.persist(snapshot, self._name)

    def _restore_from_cache(self) -> None:
        if self._cache is None:
            return
        restored = self._cache.restore(self._name)
        if restored is None:
            return
        with self._lock:
            self._storage = dict(restored)
        logger.debug("[%s] Restored from cache.", self._name)
