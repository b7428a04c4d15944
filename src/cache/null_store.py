# src/cache/null_store.py - v2
"""Disabled entity cache (CACHE_BACKEND=none).

Every lookup misses and every write is dropped, so managers always go to
the service. Writes are still validated so that a write-through bug shows
up whichever backend is configured.
"""

from __future__ import annotations

import threading
from typing import TypeVar

from psbridge.cache.base_cache_store import BaseEntityCache
from psbridge.cache.models import CacheStats
from psbridge.core.exceptions import NonIdentifiableEntityError
from psbridge.core.models import Entity

E = TypeVar("E", bound=Entity)


class NullEntityCache(BaseEntityCache[E]):
    """Cache that stores nothing."""

    def __init__(self, entity_type: type[E], name: str | None = None) -> None:
        self._entity_type = entity_type
        self._name = name or entity_type.__name__.lower()
        self._misses = 0
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return self._name

    @property
    def entity_type(self) -> type[E]:
        return self._entity_type

    def get(self, entity_id: int | None) -> E | None:
        if entity_id is not None:
            self._record_miss()
        return None

    def get_by_key(self, key: str | None) -> E | None:
        if key is not None:
            self._record_miss()
        return None

    def put(self, entity: E) -> None:
        if not isinstance(entity, self._entity_type):
            raise TypeError(
                f"Cache {self._name!r} holds {self._entity_type.__name__}, "
                f"not {type(entity).__name__}"
            )
        if entity.id is None:
            raise NonIdentifiableEntityError(type(entity).__name__)

    def get_version(self, key: str | None) -> int | None:
        return None

    def remove(self, key: str | None) -> None:
        return None

    def remove_all(self) -> None:
        return None

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(name=self._name, misses=self._misses)

    def __len__(self) -> int:
        return 0

    def _record_miss(self) -> None:
        with self._lock:
            self._misses += 1
