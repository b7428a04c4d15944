# tests/unit/cache/test_null_store.py - v1
"""Tests for cache/null_store.py - disabled cache backend."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from psbridge.cache.null_store import NullEntityCache
from psbridge.core.exceptions import NonIdentifiableEntityError
from psbridge.core.models import Group, Member


class TestNullEntityCache:
    def test_always_misses(self, sample_member):
        cache = NullEntityCache(Member)
        cache.put(sample_member)
        assert cache.get(101) is None
        assert cache.get_by_key("jsmith") is None
        assert cache.get_entity(sample_member) is None
        assert cache.get_version("jsmith") is None
        assert len(cache) == 0

    def test_put_still_requires_id(self):
        with pytest.raises(NonIdentifiableEntityError):
            NullEntityCache(Member).put(Member(username="ghost"))

    def test_put_still_checks_type(self):
        with pytest.raises(TypeError):
            NullEntityCache(Member).put(Group(id=1, name="acme"))  # type: ignore[arg-type]

    def test_remove_is_noop(self):
        cache = NullEntityCache(Member)
        cache.remove("jsmith")
        cache.remove(None)
        cache.remove_all()

    def test_stats_count_misses(self):
        cache = NullEntityCache(Member)
        cache.get(1)
        cache.get_by_key("a")
        cache.get(None)
        stats = cache.stats()
        assert stats.name == "member"
        assert stats.misses == 2
        assert stats.hits == 0

    def test_concurrent_misses_all_counted(self):
        cache = NullEntityCache(Member)

        def lookup(i: int) -> None:
            cache.get(i)
            cache.get_by_key(f"user{i}")

        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lookup, range(1000)))

        assert cache.stats().misses == 2000
