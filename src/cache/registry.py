# src/cache/registry.py - v1
"""Cache registry: one entity cache per entity type.

Managers receive a registry instead of reaching for module-level caches.
The registry creates a cache on first request for a type and hands the
same instance to every later caller. A process-wide default registry is
available for callers that do not inject one; tests build their own.
"""

from __future__ import annotations

import logging
import threading
from typing import TypeVar

from psbridge.cache.base_cache_store import BaseEntityCache
from psbridge.cache.memory_store import InMemoryEntityCache
from psbridge.cache.models import CacheStats
from psbridge.cache.null_store import NullEntityCache
from psbridge.core.models import Entity

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)

SUPPORTED_BACKENDS = ("memory", "none")


class CacheRegistry:
    """Lazily built set of entity caches, keyed by entity type."""

    def __init__(self, backend: str = "memory", max_entries: int = 0) -> None:
        if backend not in SUPPORTED_BACKENDS:
            raise ValueError(f"Unsupported cache backend: {backend!r}")
        if max_entries < 0:
            raise ValueError("max_entries must be >= 0")
        self._backend = backend
        self._max_entries = max_entries
        self._stores: dict[type[Entity], BaseEntityCache] = {}
        self._lock = threading.Lock()

    @property
    def backend(self) -> str:
        return self._backend

    @property
    def entity_types(self) -> list[type[Entity]]:
        """Entity types that currently have a cache."""
        with self._lock:
            return list(self._stores)

    def store_for(self, entity_type: type[E]) -> BaseEntityCache[E]:
        """Return the cache for an entity type, creating it on first use."""
        with self._lock:
            store = self._stores.get(entity_type)
            if store is None:
                store = self._create(entity_type)
                self._stores[entity_type] = store
                logger.debug(
                    "Created %s cache for %s", self._backend, entity_type.__name__
                )
            return store

    def remove_all(self) -> None:
        """Flush every cache but keep the instances registered."""
        with self._lock:
            stores = list(self._stores.values())
        for store in stores:
            store.remove_all()

    def shutdown(self) -> None:
        """Flush every cache and forget it."""
        with self._lock:
            stores = list(self._stores.values())
            self._stores.clear()
        for store in stores:
            store.remove_all()
        logger.info("Cache registry shut down (%d caches released)", len(stores))

    def stats(self) -> list[CacheStats]:
        with self._lock:
            stores = list(self._stores.values())
        return [store.stats() for store in stores]

    def __contains__(self, entity_type: object) -> bool:
        with self._lock:
            return entity_type in self._stores

    def _create(self, entity_type: type[E]) -> BaseEntityCache[E]:
        if self._backend == "none":
            return NullEntityCache(entity_type)
        return InMemoryEntityCache(entity_type, max_entries=self._max_entries)


_default_registry: CacheRegistry | None = None
_default_lock = threading.Lock()


def get_default_registry() -> CacheRegistry:
    """Return the process-wide registry, built from settings on first use."""
    global _default_registry
    with _default_lock:
        if _default_registry is None:
            from psbridge.cache.cache_factory import create_cache_registry
            from psbridge.config.settings import load_settings

            _default_registry = create_cache_registry(load_settings())
        return _default_registry


def reset_default_registry() -> None:
    """Shut down and drop the process-wide registry."""
    global _default_registry
    with _default_lock:
        registry, _default_registry = _default_registry, None
    if registry is not None:
        registry.shutdown()
