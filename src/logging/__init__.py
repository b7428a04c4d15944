# src/logging/__init__.py - v1
