# src/api/__init__.py - v1
"""Service port and manager facades."""
