# src/core/__init__.py - v1
"""Entity models, validity rules and exceptions."""
