# src/cache/models.py - v2
"""Cache domain models: CacheEntry, CacheStats."""

from __future__ import annotations

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict

from psbridge.core.models import Entity

E = TypeVar("E", bound=Entity)


class CacheEntry(BaseModel, Generic[E]):
    """Slot of the primary index: the last-written entity and its version.

    ``version`` is the write time in epoch milliseconds. Stores keep it
    strictly increasing so two writes never share a version.
    """

    model_config = ConfigDict(frozen=True)

    entity: E
    version: int


class CacheStats(BaseModel):
    """Counters snapshot for one entity cache."""

    name: str
    entries: int = 0
    keys: int = 0
    max_entries: int = 0
    hits: int = 0
    misses: int = 0
    puts: int = 0
    removals: int = 0
    evictions: int = 0

    @property
    def hit_rate(self) -> float:
        total = self.hits + self.misses
        return self.hits / total if total else 0.0
