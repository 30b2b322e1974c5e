"""Persistence of model storage under the configured cache policy.

Entries live in a ``KeyValueStore`` under two keys per model::

    driftjson.cache.<model name>            -> {key: JSON-compatible value}
    driftjson.cache.<model name>.timestamp  -> seconds since the epoch

Only primitives, nulls and arrays made solely of those are written. Nested
model instances are skipped: they are rebuilt by the next ``map`` call.
"""

from __future__ import annotations

import logging
import threading
import time
from collections.abc import Callable, Mapping
from decimal import Decimal
from typing import Any

from driftjson.core.ports.store import KeyValueStore
from driftjson.models import CachePolicyKind, Configuration

logger = logging.getLogger(__name__)

KEY_PREFIX = "driftjson.cache."
TIMESTAMP_SUFFIX = ".timestamp"


def cache_key(model_name: str) -> str:
    return KEY_PREFIX + model_name


def timestamp_key(model_name: str) -> str:
    return cache_key(model_name) + TIMESTAMP_SUFFIX


def _serializable_scalar(value: Any) -> tuple[bool, Any]:
    if value is None or isinstance(value, (str, bool, int, float)):
        return True, value
    if isinstance(value, Decimal):
        # NaN and infinities have no JSON form
        if not value.is_finite():
            return False, None
        return True, float(value)
    return False, None


def serializable_subset(storage: Mapping[str, Any]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in storage.items():
        ok, plain = _serializable_scalar(value)
        if ok:
            result[key] = plain
            continue
        if isinstance(value, list):
            converted = [_serializable_scalar(element) for element in value]
            if all(ok for ok, _ in converted):
                result[key] = [plain for _, plain in converted]
    return result


class CacheManager:
    def __init__(
        self,
        configuration: Configuration,
        store: KeyValueStore,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._configuration = configuration
        self._store = store
        self._clock = clock
        self._lock = threading.Lock()
        self._session_started = clock()

    @property
    def store(self) -> KeyValueStore:
        return self._store

    def persist(self, storage: Mapping[str, Any], model_name: str) -> None:
        if not self._configuration.cache_policy.persists:
            return
        try:
            subset = serializable_subset(storage)
            with self._lock:
                self._store.set(cache_key(model_name), subset)
                self._store.set(timestamp_key(model_name), self._clock())
        except Exception:
            logger.warning("[Cache] Failed to persist model %s", model_name, exc_info=True)
            return
        logger.debug("[Cache] Persisted %d key(s) for model: %s", len(subset), model_name)

    def restore(self, model_name: str) -> dict[str, Any] | None:
        policy = self._configuration.cache_policy
        if not policy.persists:
            return None
        try:
            with self._lock:
                if self._is_stale(model_name):
                    self._delete(model_name)
                    logger.debug("[Cache] Entry expired for model: %s", model_name)
                    return None
                stored = self._store.get(cache_key(model_name))
        except Exception:
            logger.warning("[Cache] Failed to restore model %s", model_name, exc_info=True)
            return None
        if not isinstance(stored, dict):
            return None
        logger.debug("[Cache] Restored %d key(s) for model: %s", len(stored), model_name)
        return stored

    def clear(self, model_name: str) -> None:
        try:
            with self._lock:
                self._delete(model_name)
        except Exception:
            logger.warning("[Cache] Failed to clear model %s", model_name, exc_info=True)

    def clear_all(self) -> None:
        try:
            with self._lock:
                for key in self._store.keys(KEY_PREFIX):
                    self._store.delete(key)
        except Exception:
            logger.warning("[Cache] Failed to clear all entries", exc_info=True)
            return
        logger.info("[Cache] Cleared all entries.")

    def entries(self) -> list[str]:
        """Names of the models that currently have a cache entry."""
        try:
            with self._lock:
                keys = self._store.keys(KEY_PREFIX)
        except Exception:
            logger.warning("[Cache] Failed to list entries", exc_info=True)
            return []
        present = set(keys)
        names = []
        for key in keys:
            if key.endswith(TIMESTAMP_SUFFIX) and key[: -len(TIMESTAMP_SUFFIX)] in present:
                continue
            names.append(key[len(KEY_PREFIX) :])
        return sorted(names)

    def _is_stale(self, model_name: str) -> bool:
        kind = self._configuration.cache_policy.kind
        if kind not in (CachePolicyKind.TTL, CachePolicyKind.UNTIL_PROCESS_EXIT):
            return False
        written = self._store.get(timestamp_key(model_name))
        if not isinstance(written, (int, float)) or isinstance(written, bool):
            # a missing timestamp reads as "written at the epoch"
            written = 0.0
        if kind is CachePolicyKind.TTL:
            return self._clock() - written > self._configuration.ttl_seconds
        return written < self._session_started

    def _delete(self, model_name: str) -> None:
        self._store.delete(cache_key(model_name))
        self._store.delete(timestamp_key(model_name))
