# src/cache/cache_factory.py - v3
"""Factory for cache registry instantiation."""

from __future__ import annotations

from psbridge.cache.registry import SUPPORTED_BACKENDS, CacheRegistry
from psbridge.config.settings import Settings


def create_cache_registry(settings: Settings | None = None) -> CacheRegistry:
    """Instantiate a registry for the configured cache backend.

    Args:
        settings: Application settings. Defaults to eternal in-memory caches.

    Returns:
        Configured CacheRegistry.
    """
    backend = "memory" if settings is None else settings.cache_backend
    max_entries = 0 if settings is None else settings.cache_max_entries

    if backend not in SUPPORTED_BACKENDS:
        raise ValueError(f"Unsupported cache backend: {backend!r}")

    return CacheRegistry(backend=backend, max_entries=max_entries)
