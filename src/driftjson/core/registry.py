from __future__ import annotations

import logging
import threading
from types import TracebackType

from driftjson.cache.manager import CacheManager
from driftjson.core.instance import ModelInstance
from driftjson.core.ports.store import KeyValueStore
from driftjson.db.memory import InMemoryStore
from driftjson.log import apply_log_level
from driftjson.models import Configuration

logger = logging.getLogger(__name__)


class Registry:
    """Name -> :class:`ModelInstance` map shared by one application.

    Build one registry at start-up with the final :class:`Configuration` and
    pass it to whatever needs models. ``registry.login_model`` and
    ``registry["login_model"]`` are shorthands for ``instance_for``. Call
    :meth:`close` (or use the registry as a context manager) on shutdown.
    """

    def __init__(
        self,
        configuration: Configuration | None = None,
        store: KeyValueStore | None = None,
    ) -> None:
        self._configuration = configuration or Configuration()
        self._store = store if store is not None else InMemoryStore()
        self._cache = CacheManager(self._configuration, self._store)
        self._instances: dict[str, ModelInstance] = {}
        self._lock = threading.Lock()
        apply_log_level(self._configuration.log_level)
        logger.info("Registry configured (cache policy: %s).", self._configuration.cache_policy)

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def cache(self) -> CacheManager:
        return self._cache

    def instance_for(self, name: str) -> ModelInstance:
        with self._lock:
            existing = self._instances.get(name)
            if existing is not None:
                return existing
            instance = ModelInstance(name, cache=self._cache, key_style=self._configuration.key_coding_style)
            self._instances[name] = instance
        logger.debug("Model instance created: %s", name)
        return instance

    def remove(self, name: str) -> None:
        with self._lock:
            instance = self._instances.pop(name, None)
        if instance is not None:
            instance.clear_cache()
        else:
            self._cache.clear(name)
        logger.debug("Model instance removed: %s", name)

    def remove_all(self) -> None:
        with self._lock:
            instances = list(self._instances.values())
            self._instances.clear()
        for instance in instances:
            instance.clear_cache()
        logger.info("All model instances removed.")

    def names(self) -> set[str]:
        with self._lock:
            return set(self._instances)

    def clear_cache(self) -> None:
        """Drop every cache entry written by this library, registered or not."""
        self._cache.clear_all()

    def close(self) -> None:
        with self._lock:
            self._instances.clear()
        self._store.dispose()

    def __enter__(self) -> Registry:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __getattr__(self, name: str) -> ModelInstance:
        if name.startswith("_"):
            raise AttributeError(name)
        return self.instance_for(name)

    def __getitem__(self, name: str) -> ModelInstance:
        return self.instance_for(name)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._instances
