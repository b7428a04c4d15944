# src/cache/memory_store.py - v1
"""In-memory entity cache (default CACHE_BACKEND=memory).

Entries live in an id-indexed ordered dict; keys resolve through a
``KeyIndex`` to the id. Both indexes are guarded by one re-entrant lock and
every public operation is a single critical section over in-memory dicts,
so a reader observes a store either before or after any write, never in
between. No I/O happens under the lock.
"""

from __future__ import annotations

import logging
import threading
import time
from collections import OrderedDict
from typing import TypeVar

from psbridge.cache.base_cache_store import BaseEntityCache
from psbridge.cache.key_index import KeyIndex
from psbridge.cache.models import CacheEntry, CacheStats
from psbridge.core.exceptions import NonIdentifiableEntityError
from psbridge.core.models import Entity

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)


def _now_ms() -> int:
    return time.time_ns() // 1_000_000


class InMemoryEntityCache(BaseEntityCache[E]):
    """Thread-safe cache for one entity type.

    With ``max_entries == 0`` entries are eternal until removed. Otherwise,
    inserting a new id beyond the bound evicts the entry with the oldest
    write, together with its key mapping.
    """

    def __init__(
        self,
        entity_type: type[E],
        max_entries: int = 0,
        name: str | None = None,
    ) -> None:
        if max_entries < 0:
            raise ValueError("max_entries must be >= 0")
        self._entity_type = entity_type
        self._name = name or entity_type.__name__.lower()
        self._max_entries = max_entries
        self._entries: OrderedDict[int, CacheEntry[E]] = OrderedDict()
        self._keys = KeyIndex()
        self._lock = threading.RLock()
        self._last_version = 0
        self._hits = 0
        self._misses = 0
        self._puts = 0
        self._removals = 0
        self._evictions = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def entity_type(self) -> type[E]:
        return self._entity_type

    @property
    def max_entries(self) -> int:
        return self._max_entries

    # --- Lookups ---

    def get(self, entity_id: int | None) -> E | None:
        """Retrieve the entity stored under an id."""
        if entity_id is None:
            return None
        with self._lock:
            return self._record(self._entries.get(entity_id))

    def get_by_key(self, key: str | None) -> E | None:
        """Retrieve the entity mapped from a key.

        Unmapped keys and stale mappings both return None.
        """
        if key is None:
            return None
        with self._lock:
            return self._record(self._lookup_key(key))

    def get_version(self, key: str | None) -> int | None:
        if key is None:
            return None
        with self._lock:
            entry = self._lookup_key(key)
            return entry.version if entry is not None else None

    # --- Writes ---

    def put(self, entity: E) -> None:
        """Store an entity; the last write for an id wins entirely.

        Raises:
            TypeError: If the entity is not of this cache's type.
            NonIdentifiableEntityError: If the entity has no id.
        """
        if not isinstance(entity, self._entity_type):
            raise TypeError(
                f"Cache {self._name!r} holds {self._entity_type.__name__}, "
                f"not {type(entity).__name__}"
            )
        entity_id = entity.id
        if entity_id is None:
            raise NonIdentifiableEntityError(type(entity).__name__)
        key = entity.key

        with self._lock:
            previous = self._entries.pop(entity_id, None)
            if previous is not None:
                old_key = previous.entity.key
                if old_key is not None and old_key != key:
                    # Renamed: the old key must no longer reach this id.
                    self._keys.invalidate_if(old_key, entity_id)
            if key is not None:
                self._keys.update(key, entity_id)
            self._entries[entity_id] = CacheEntry(
                entity=entity, version=self._next_version()
            )
            self._puts += 1
            if previous is None:
                self._evict_overflow()

    def remove(self, key: str | None) -> None:
        """Remove the entry addressed by a key.

        The key mapping is dropped first; the entry it pointed at is removed
        only if it still carries that key.
        """
        if key is None:
            return
        with self._lock:
            entity_id = self._keys.invalidate(key)
            if entity_id is None:
                return
            entry = self._entries.get(entity_id)
            if entry is not None and entry.entity.key == key:
                del self._entries[entity_id]
                self._removals += 1

    def remove_all(self) -> None:
        with self._lock:
            count = len(self._entries)
            self._entries.clear()
            self._keys.clear()
        logger.debug("Flushed %d entries from cache %s", count, self._name)

    # --- Introspection ---

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                name=self._name,
                entries=len(self._entries),
                keys=len(self._keys),
                max_entries=self._max_entries,
                hits=self._hits,
                misses=self._misses,
                puts=self._puts,
                removals=self._removals,
                evictions=self._evictions,
            )

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, entity_id: object) -> bool:
        with self._lock:
            return entity_id in self._entries

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self._name!r}, "
            f"max_entries={self._max_entries})"
        )

    # --- Internals (caller holds the lock) ---

    def _lookup_key(self, key: str) -> CacheEntry[E] | None:
        """Two-pass lookup: first the id for the key, then the entry.

        An entry whose entity no longer carries the key is a stale mapping
        and does not count as a hit.
        """
        entity_id = self._keys.resolve(key)
        if entity_id is None:
            return None
        entry = self._entries.get(entity_id)
        if entry is None or entry.entity.key != key:
            return None
        return entry

    def _record(self, entry: CacheEntry[E] | None) -> E | None:
        if entry is None:
            self._misses += 1
            return None
        self._hits += 1
        return entry.entity

    def _next_version(self) -> int:
        version = max(_now_ms(), self._last_version + 1)
        self._last_version = version
        return version

    def _evict_overflow(self) -> None:
        if not self._max_entries:
            return
        while len(self._entries) > self._max_entries:
            entity_id, entry = self._entries.popitem(last=False)
            key = entry.entity.key
            if key is not None:
                self._keys.invalidate_if(key, entity_id)
            self._evictions += 1
            logger.debug(
                "Evicted %s id=%s from cache %s", key, entity_id, self._name
            )
