# src/api/service.py - v1
"""Abstract service client: the boundary to the remote web service.

Transport, authentication and response parsing live behind this port.
Implementations build a fresh entity value per response and raise
``ServiceError`` when the server reports a failure.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, TypeVar

from psbridge.core.models import Entity

E = TypeVar("E", bound=Entity)


class BaseServiceClient(ABC):
    """Unified interface for loading entities from the server."""

    @abstractmethod
    def fetch(
        self,
        entity_type: type[E],
        identifier: str,
        seed: E | None = None,
    ) -> E | None:
        """Load one entity.

        Args:
            entity_type: Kind of entity to load.
            identifier: Id as text, or the entity key.
            seed: Instance already known to the caller, if any. A response
                parser may use it to resolve relative attributes.

        Returns:
            The entity built from the response, or None if the server has
            no such entity.

        Raises:
            ServiceError: If the request fails.
        """

    @abstractmethod
    def fetch_many(self, entity_type: type[E], **params: Any) -> list[E]:
        """Load every entity matching service parameters."""
