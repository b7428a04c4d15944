# src/logging/handlers.py - v3
"""Size-based rotating file handler for the psbridge logger."""

from __future__ import annotations

import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_SIZE_PATTERN = re.compile(r"^(\d+)\s*([KMG])B$", re.IGNORECASE)
_UNITS = {"K": 1 << 10, "M": 1 << 20, "G": 1 << 30}


def parse_size(size_str: str) -> int:
    """Convert a size such as ``10MB`` or ``512kb`` to bytes.

    Raises:
        ValueError: If the unit is not KB, MB or GB.
    """
    match = _SIZE_PATTERN.match(size_str.strip())
    if match is None:
        raise ValueError(f"Invalid size format: {size_str!r} (expected e.g. '10MB')")
    count, unit = match.groups()
    return int(count) * _UNITS[unit.upper()]


def create_rotating_handler(
    log_file: str | Path,
    rotation: str = "10MB",
    retention: int = 5,
) -> RotatingFileHandler:
    """Open ``log_file`` for appending, creating missing parent directories."""
    target = Path(log_file).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        target,
        maxBytes=parse_size(rotation),
        backupCount=retention,
        encoding="utf-8",
    )
