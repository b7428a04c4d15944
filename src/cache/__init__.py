# src/cache/__init__.py - v1
"""Per-type entity caches and their registry."""
