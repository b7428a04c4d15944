# tests/conftest.py - v2
"""Shared test fixtures for all unit tests.

Provides sample entities, a fresh cache registry per test and a mocked
service client. No network: the service port is always a MagicMock.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from psbridge.api.service import BaseServiceClient
from psbridge.cache.memory_store import InMemoryEntityCache
from psbridge.cache.registry import CacheRegistry, reset_default_registry
from psbridge.core.models import Document, Folder, Group, Member, Membership
from psbridge.logging.context import clear_context


# === FIXTURES: Sample entities ===


@pytest.fixture
def sample_member() -> Member:
    """Fully populated member."""
    return Member(
        id=101,
        username="jsmith",
        firstname="Jane",
        surname="Smith",
        email="jsmith@example.org",
    )


@pytest.fixture
def sample_group() -> Group:
    return Group(id=7, name="acme-docs", owner="acme", description="Acme documentation")


@pytest.fixture
def sample_membership(sample_group: Group, sample_member: Member) -> Membership:
    return Membership(id=5001, group=sample_group, member=sample_member)


@pytest.fixture
def sample_document() -> Document:
    return Document(
        id=3001,
        scheme="https",
        host="ps.example.org",
        path="/ps/acme/docs/guide.psml",
        title="Guide",
        media_type="application/vnd.pageseeder.psml+xml",
    )


@pytest.fixture
def sample_folder() -> Folder:
    return Folder(
        id=3002,
        path="/ps/acme/docs/",
        title="docs",
        media_type="folder",
    )


# === FIXTURES: Caches ===


@pytest.fixture
def member_cache() -> InMemoryEntityCache[Member]:
    """Unbounded member cache."""
    return InMemoryEntityCache(Member)


@pytest.fixture
def registry():
    """Fresh registry, shut down after the test."""
    reg = CacheRegistry()
    yield reg
    reg.shutdown()


@pytest.fixture(autouse=True)
def _isolate_globals():
    """Each test starts with no default registry and an empty log context."""
    clear_context()
    yield
    reset_default_registry()
    clear_context()


# === FIXTURES: Service port ===


@pytest.fixture
def mock_service() -> MagicMock:
    """Service client that returns nothing unless configured."""
    service = MagicMock(spec=BaseServiceClient)
    service.fetch.return_value = None
    service.fetch_many.return_value = []
    return service
