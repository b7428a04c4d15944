# src/api/managers.py - v1
"""Read-through / write-through facades, one per entity type.

Usage:
    from psbridge.api.managers import MemberManager
    members = MemberManager(service)
    member = members.get_by_username("jsmith")

A manager answers from its entity cache when it can. On a miss it asks the
service client, reconciles the response with any instance it was given as
a seed, stores the result and returns it. Service calls happen outside the
cache's critical sections.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Generic, TypeVar

from psbridge.api.service import BaseServiceClient
from psbridge.cache.base_cache_store import BaseEntityCache
from psbridge.cache.registry import CacheRegistry, get_default_registry
from psbridge.core.exceptions import InvalidEntityError, ServiceError
from psbridge.core.models import (
    Comment,
    Document,
    Entity,
    ExternalURI,
    Folder,
    Group,
    GroupFolder,
    Member,
    Membership,
    Project,
    XRef,
)
from psbridge.core.validity import EntityValidity
from psbridge.logging.context import operation_context

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Entity)


class BaseManager(Generic[E]):
    """Cache-backed access to one entity type.

    Args:
        service: Client used on cache misses.
        registry: Registry providing the cache. Defaults to the
            process-wide registry.
    """

    entity_type: ClassVar[type[Entity]] = Entity

    def __init__(
        self,
        service: BaseServiceClient,
        registry: CacheRegistry | None = None,
    ) -> None:
        self._service = service
        self._registry = registry if registry is not None else get_default_registry()
        self._cache: BaseEntityCache[E] = self._registry.store_for(self.entity_type)  # type: ignore[arg-type]

    @property
    def cache(self) -> BaseEntityCache[E]:
        return self._cache

    # --- Read-through ---

    def get(self, entity_id: int | None) -> E | None:
        """Return the entity with this id, loading it on a cache miss."""
        if entity_id is None:
            return None
        cached = self._cache.get(entity_id)
        if cached is not None:
            return cached
        return self._load(str(entity_id), seed=None, operation="get")

    def get_by_key(self, key: str | None) -> E | None:
        """Return the entity with this key, loading it on a cache miss."""
        if key is None:
            return None
        cached = self._cache.get_by_key(key)
        if cached is not None:
            return cached
        return self._load(key, seed=None, operation="get_by_key")

    def get_entity(self, entity: E) -> E | None:
        """Return the full version of a partially known entity.

        The given instance seeds the response on a miss, so attributes the
        server leaves out are kept.
        """
        cached = self._cache.get_entity(entity)
        if cached is not None:
            return cached
        identifier = self._identifier_for(entity)
        if identifier is None:
            return None
        return self._load(identifier, seed=entity, operation="get_entity")

    def refresh(self, entity: E) -> E | None:
        """Reload an entity from the service, bypassing the cache lookup.

        The cached version, overridden by the attributes set on ``entity``,
        seeds the response.
        """
        identifier = self._identifier_for(entity)
        if identifier is None:
            return None
        cached = self._cache.get_entity(entity)
        seed = entity.seeded_from(cached) if cached is not None else entity
        return self._load(identifier, seed=seed, operation="refresh")

    def find(self, **params: Any) -> list[E]:
        """Load a list from the service and cache every entity with an id."""
        with operation_context(self.entity_type.__name__, "find"):
            entities = self._service.fetch_many(self.entity_type, **params)  # type: ignore[arg-type]
            for entity in entities:
                if entity.id is not None:
                    self._cache.put(entity)
            logger.debug("Found %d %s entities", len(entities), self.entity_type.__name__)
        return entities

    # --- Write-through ---

    def saved(self, entity: E) -> None:
        """Record an entity the caller has just written to the service.

        Raises:
            InvalidEntityError: If the entity breaks a server constraint.
            NonIdentifiableEntityError: If the entity has no id.
        """
        validity = entity.check_valid()
        if validity is not EntityValidity.OK:
            raise InvalidEntityError(type(entity).__name__, validity)
        self._cache.put(entity)

    def invalidate(self, key: str | None) -> None:
        """Forget the entity cached under a key."""
        self._cache.remove(key)

    def evict(self, entity: E) -> None:
        """Forget an entity, falling back to its cached key when it has none."""
        key = entity.key
        if key is None and entity.id is not None:
            cached = self._cache.get(entity.id)
            key = cached.key if cached is not None else None
        self._cache.remove(key)

    # --- Internals ---

    def _identifier_for(self, entity: E) -> str | None:
        return entity.identifier

    def _load(self, identifier: str, seed: E | None, operation: str) -> E | None:
        with operation_context(self.entity_type.__name__, operation):
            logger.debug("Loading %s %s", self.entity_type.__name__, identifier)
            fetched = self._service.fetch(self.entity_type, identifier, seed=seed)  # type: ignore[arg-type]
            if fetched is None:
                return None
            entity = fetched.seeded_from(seed) if seed is not None else fetched
            if entity.id is None:
                logger.warning(
                    "%s %s returned without an id; not cached",
                    self.entity_type.__name__, identifier,
                )
            else:
                self._cache.put(entity)
        return entity


class MemberManager(BaseManager[Member]):
    entity_type = Member

    def get_by_username(self, username: str) -> Member | None:
        return self.get_by_key(username)


class GroupManager(BaseManager[Group]):
    """Groups and projects share one cache."""

    entity_type = Group

    def get_group(self, name: str) -> Group | None:
        return self.get_by_key(name)

    def get_project(self, name: str) -> Project | None:
        """Return the project with this name.

        Raises:
            ServiceError: If the name belongs to a group that is not a project.
        """
        group = self.get_by_key(name)
        if group is None:
            return None
        if not isinstance(group, Project):
            raise ServiceError(f"Not a project: {name}")
        return group

    def find_groups(self, **params: Any) -> list[Group]:
        return self.find(**params)

    def group_is_renamed(self, group: Group, old_name: str | None = None) -> None:
        """Record a rename done on the server; the old name stops resolving."""
        if old_name is not None and old_name != group.name:
            self.invalidate(old_name)
        self._cache.put(group)

    def group_is_archived(self, group: Group) -> None:
        self.evict(group)


class DocumentManager(BaseManager[Document]):
    entity_type = Document

    def get_by_url(self, url: str) -> Document | None:
        return self.get_by_key(url)

    def document_is_moved(self, document: Document, old_url: str | None = None) -> None:
        """Record a move done on the server; the old URL stops resolving."""
        if old_url is not None and old_url != document.url:
            self.invalidate(old_url)
        self._cache.put(document)

    def properties_changed(self, document: Document) -> None:
        """Drop a document whose properties were edited with a partial response."""
        self.evict(document)


class FolderManager(BaseManager[Folder]):
    entity_type = Folder

    def get_by_url(self, url: str) -> Folder | None:
        return self.get_by_key(url)


class GroupFolderManager(BaseManager[GroupFolder]):
    entity_type = GroupFolder

    def get_by_url(self, url: str) -> GroupFolder | None:
        return self.get_by_key(url)


class ExternalURIManager(BaseManager[ExternalURI]):
    entity_type = ExternalURI

    def get_by_url(self, url: str) -> ExternalURI | None:
        return self.get_by_key(url)


class CommentManager(BaseManager[Comment]):
    entity_type = Comment


class XRefManager(BaseManager[XRef]):
    entity_type = XRef


class MembershipManager(BaseManager[Membership]):
    """Memberships are keyed by ``<group>/<member>``."""

    entity_type = Membership

    def get_membership(self, group: Group, member: Member) -> Membership | None:
        return self.get_entity(Membership(group=group, member=member))

    def _identifier_for(self, entity: Membership) -> str | None:
        return entity.identifier or entity.key
