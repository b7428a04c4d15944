# src/cache/key_index.py - v1
"""Secondary key to primary id side table.

The index holds no lock of its own: the owning cache calls it from inside
its critical section, so a key update and the matching primary write are
one atomic step for any observer.
"""

from __future__ import annotations


class KeyIndex:
    """Mapping of entity key to entity id, one id per key."""

    def __init__(self) -> None:
        self._ids: dict[str, int] = {}

    def resolve(self, key: str) -> int | None:
        """Return the id mapped from a key, without fallback."""
        return self._ids.get(key)

    def update(self, key: str, entity_id: int) -> None:
        """Map a key to an id, overwriting any previous mapping."""
        self._ids[key] = entity_id

    def invalidate(self, key: str) -> int | None:
        """Drop a mapping and return the id it pointed at."""
        return self._ids.pop(key, None)

    def invalidate_if(self, key: str, entity_id: int) -> bool:
        """Drop a mapping only if it still points at ``entity_id``."""
        if self._ids.get(key) == entity_id:
            del self._ids[key]
            return True
        return False

    def clear(self) -> None:
        self._ids.clear()

    def __len__(self) -> int:
        return len(self._ids)

    def __contains__(self, key: object) -> bool:
        return key in self._ids
