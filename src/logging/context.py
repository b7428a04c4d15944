# src/logging/context.py - v2
"""Contextual logging support: attach request_id, entity_type, operation to records."""

from __future__ import annotations

import contextvars
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any

# Context variables for structured logging, set per manager call.
_request_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "request_id", default=None
)
_entity_type: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "entity_type", default=None
)
_operation: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "operation", default=None
)


@dataclass
class LogContext:
    """Immutable snapshot of current logging context."""

    request_id: str | None = None
    entity_type: str | None = None
    operation: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields as dict for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    """Snapshot current context variables."""
    return LogContext(
        request_id=_request_id.get(),
        entity_type=_entity_type.get(),
        operation=_operation.get(),
    )


def set_request_context(request_id: str) -> None:
    """Set the caller-supplied correlation id."""
    _request_id.set(request_id)


@contextmanager
def operation_context(entity_type: str, operation: str) -> Iterator[None]:
    """Scope the entity type and operation to a block, restoring the outer values."""
    type_token = _entity_type.set(entity_type)
    op_token = _operation.set(operation)
    try:
        yield
    finally:
        _operation.reset(op_token)
        _entity_type.reset(type_token)


def clear_context() -> None:
    """Reset all context variables."""
    _request_id.set(None)
    _entity_type.set(None)
    _operation.set(None)
