# src/__init__.py - v1
"""psbridge: thread-safe entity caches and cache-backed managers."""

__version__ = "0.1.0"
