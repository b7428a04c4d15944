# src/logging/logger.py - v3
"""Logger factory and the two record layouts used by psbridge.

Every module logs through ``logging.getLogger(__name__)``, which places it
under the ``psbridge`` logger. ``setup_logging`` configures that logger
only; the host application's root logger is left alone.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from psbridge.logging.context import get_context

if TYPE_CHECKING:
    from psbridge.config.settings import Settings

ROOT_LOGGER = "psbridge"


def _timestamp(record: logging.LogRecord) -> datetime:
    return datetime.fromtimestamp(record.created, tz=timezone.utc)


class JsonFormatter(logging.Formatter):
    """One JSON object per record; the bridge context is nested under "context"."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": _timestamp(record).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        context = get_context().as_dict()
        if context:
            payload["context"] = context
        data = getattr(record, "data", None)
        if data:
            payload["data"] = data
        if record.exc_info and record.exc_info[1] is not None:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, default=str)


class TextFormatter(logging.Formatter):
    """Single-line layout: ``time [LEVEL] logger <request> [Type] (op) - message``."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = get_context()
        line = (
            f"{_timestamp(record):%Y-%m-%d %H:%M:%S} "
            f"[{record.levelname:<8}] {record.name}"
        )
        if ctx.request_id:
            line += f" <{ctx.request_id}>"
        if ctx.entity_type:
            line += f" [{ctx.entity_type}]"
        if ctx.operation:
            line += f" ({ctx.operation})"
        line += f" - {record.getMessage()}"
        if record.exc_info and record.exc_info[1] is not None:
            line = f"{line}\n{self.formatException(record.exc_info)}"
        return line


def get_logger(name: str) -> logging.Logger:
    """Return ``psbridge.<name>`` for code living outside the package."""
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def setup_logging(
    level: str = "INFO",
    log_format: str = "text",
    log_file: str | None = None,
    rotation: str = "10MB",
    retention: int = 5,
) -> logging.Logger:
    """Install handlers on the ``psbridge`` logger, replacing earlier ones.

    Args:
        level: DEBUG, INFO, WARNING or ERROR.
        log_format: "json" or "text".
        log_file: Optional file that receives a copy of stderr output.
        rotation: Size that triggers a rollover of ``log_file``.
        retention: Rolled-over files kept next to ``log_file``.

    Returns:
        The configured ``psbridge`` logger.
    """
    bridge_logger = logging.getLogger(ROOT_LOGGER)
    bridge_logger.setLevel(level.upper())
    for handler in list(bridge_logger.handlers):
        bridge_logger.removeHandler(handler)
        handler.close()

    formatter = JsonFormatter() if log_format == "json" else TextFormatter()
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        from psbridge.logging.handlers import create_rotating_handler

        handlers.append(create_rotating_handler(log_file, rotation, retention))

    for handler in handlers:
        handler.setFormatter(formatter)
        bridge_logger.addHandler(handler)
    return bridge_logger


def setup_logging_from_settings(settings: Settings) -> logging.Logger:
    """Apply the LOG_* section of a Settings instance."""
    return setup_logging(
        level=settings.log_level,
        log_format=settings.log_format,
        log_file=str(settings.log_file) if settings.log_file else None,
        rotation=settings.log_rotation,
        retention=settings.log_retention,
    )
