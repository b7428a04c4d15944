# src/cache/base_cache_store.py - v2
"""Abstract entity cache interface.

One cache holds the entities of a single type. The numeric id is the
primary index; the entity key (username, group name, URL) is a secondary
index that always resolves through the id.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Generic, TypeVar

from psbridge.cache.models import CacheStats
from psbridge.core.models import Entity

E = TypeVar("E", bound=Entity)


class BaseEntityCache(ABC, Generic[E]):
    """Unified interface for entity cache backends."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Cache name, derived from the entity type."""

    @abstractmethod
    def get(self, entity_id: int | None) -> E | None:
        """Retrieve the entity stored under an id; None id returns None."""

    @abstractmethod
    def get_by_key(self, key: str | None) -> E | None:
        """Retrieve the entity currently mapped from a secondary key."""

    @abstractmethod
    def put(self, entity: E) -> None:
        """Store an entity, replacing any entry with the same id.

        Raises:
            NonIdentifiableEntityError: If the entity has no id.
        """

    @abstractmethod
    def get_version(self, key: str | None) -> int | None:
        """Return the write version of the entry mapped from a key."""

    @abstractmethod
    def remove(self, key: str | None) -> None:
        """Remove the entry addressed by a key; unknown keys are ignored."""

    @abstractmethod
    def remove_all(self) -> None:
        """Remove every entry and every key mapping."""

    @abstractmethod
    def stats(self) -> CacheStats:
        """Return a counters snapshot."""

    def get_entity(self, entity: E) -> E | None:
        """Retrieve the cached version of an entity.

        Non-identifiable entities are never looked up. The key is preferred
        over the id when both are present.
        """
        if not entity.is_identifiable:
            return None
        key = entity.key
        if key is not None:
            return self.get_by_key(key)
        return self.get(entity.id)
