# src/core/exceptions.py - v1
"""Exception hierarchy shared by the cache, the managers and the service port."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from psbridge.core.validity import EntityValidity


class BridgeError(Exception):
    """Base exception for bridge operations."""


class NonIdentifiableEntityError(BridgeError, ValueError):
    """Raised when an entity without a server id is written to a cache."""

    def __init__(self, entity_type: str, message: str = "") -> None:
        self.entity_type = entity_type
        super().__init__(
            message or f"{entity_type} has no id and cannot be cached"
        )


class InvalidEntityError(BridgeError):
    """Raised when an entity violates a server-side constraint."""

    def __init__(self, entity_type: str, validity: EntityValidity) -> None:
        self.entity_type = entity_type
        self.validity = validity
        super().__init__(f"Invalid {entity_type}: {validity.value}")


class ServiceError(BridgeError):
    """Raised when the remote service reports a failure."""

    def __init__(self, message: str, status: int | None = None) -> None:
        self.status = status
        super().__init__(message)
