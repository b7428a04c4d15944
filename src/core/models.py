# src/core/models.py - v1
"""Entity models for the resources exposed by the remote service.

All models are frozen: a response never mutates a cached instance. When a
partial response should keep attributes from an earlier one, the caller
builds a new value with ``Entity.seeded_from`` and writes that back.
"""

from __future__ import annotations

import re
from datetime import datetime
from enum import Enum
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field

from psbridge.core.validity import (
    FOLDER_MEDIA_TYPE,
    EntityValidity,
    check_details,
    check_group,
    check_member,
    check_uri,
)

_E = TypeVar("_E", bound="Entity")
_A = TypeVar("_A", bound="Addressable")

_URL_PATTERN = re.compile(
    r"^(?:(https?):)?(?://([\da-z.-]+)(?::(\d{1,5}))?)?(/[^?]*)?$"
)


# === ENUMS ===


class Role(str, Enum):
    """Role of a member within a group."""

    GUEST = "guest"
    REVIEWER = "reviewer"
    CONTRIBUTOR = "contributor"
    MANAGER = "manager"
    MODERATOR = "moderator"
    APPROVER = "approver"
    MODERATOR_AND_APPROVER = "moderator_and_approver"


class Notification(str, Enum):
    """Email notification preference for a membership."""

    NONE = "none"
    IMMEDIATE = "immediate"
    DAILY = "daily"


class MemberStatus(str, Enum):
    ACTIVATED = "activated"
    SET_PASSWORD = "set-password"
    UNACTIVATED = "unactivated"


# === BASE ===


class Entity(BaseModel):
    """A resource known to the server by a numeric id and, often, a key.

    The id is assigned by the server and is the only index a cache trusts.
    The key is a human-readable alternative (username, group name, URL)
    that subclasses derive from their own attributes.
    """

    model_config = ConfigDict(frozen=True)

    id: int | None = None

    @property
    def key(self) -> str | None:
        """Secondary key, or None when this kind has none."""
        return None

    @property
    def is_identifiable(self) -> bool:
        """Whether the server could locate this entity from its attributes."""
        return self.id is not None or self.key is not None

    @property
    def identifier(self) -> str | None:
        """Identifier to send to the server; the id wins over the key."""
        if self.id is not None:
            return str(self.id)
        return self.key

    def check_valid(self) -> EntityValidity:
        return EntityValidity.OK

    @property
    def is_valid(self) -> bool:
        return self.check_valid() is EntityValidity.OK

    def seeded_from(self: _E, previous: Entity | None) -> _E:
        """Return a copy of ``previous`` overridden by the fields set on self.

        Only fields explicitly provided when this instance was built take
        precedence, so a partial response keeps the attributes it did not
        mention. ``previous`` is left untouched.
        """
        if previous is None or previous is self:
            return self
        fields = type(self).model_fields
        data = {
            name: getattr(previous, name)
            for name in previous.model_fields_set
            if name in fields
        }
        data.update({name: getattr(self, name) for name in self.model_fields_set})
        return type(self)(**data)


# === MEMBERS AND GROUPS ===


class Member(Entity):
    """A user account; keyed by username."""

    username: str | None = None
    firstname: str | None = None
    surname: str | None = None
    email: str | None = None
    status: MemberStatus | None = None

    @property
    def key(self) -> str | None:
        return self.username

    def check_valid(self) -> EntityValidity:
        return check_member(self.firstname, self.surname, self.username, self.email)


class Group(Entity):
    """A group of members; keyed by its full name (e.g. ``acme-docs``)."""

    name: str | None = None
    owner: str | None = None
    description: str | None = None
    default_role: Role | None = None
    default_notification: Notification | None = None
    details_type: str | None = None
    template: str | None = None

    @property
    def key(self) -> str | None:
        return self.name

    def check_valid(self) -> EntityValidity:
        return check_group(
            self.name, self.owner, self.description, self.details_type, self.template
        )


class Project(Group):
    """A group that contains other groups."""


class Membership(Entity):
    """Link between a member and a group.

    Keyed by ``<group name>/<username>`` when both sides are known. Without
    an id, a membership is identifiable only through both sides.
    """

    group: Group | None = None
    member: Member | None = None
    listed: bool = True
    notification: Notification | None = None
    role: Role | None = None
    created: datetime | None = None
    details: dict[str, str | None] = Field(default_factory=dict)
    status: str | None = None

    @property
    def key(self) -> str | None:
        if self.group is None or self.member is None:
            return None
        if self.group.key is None or self.member.key is None:
            return None
        return f"{self.group.key}/{self.member.key}"

    @property
    def is_identifiable(self) -> bool:
        if self.id is not None:
            return True
        return (
            self.group is not None
            and self.member is not None
            and self.group.is_identifiable
            and self.member.is_identifiable
        )

    @property
    def identifier(self) -> str | None:
        return str(self.id) if self.id is not None else None

    def check_valid(self) -> EntityValidity:
        return check_details(self.details)


# === ADDRESSABLE RESOURCES ===


class Addressable(Entity):
    """A resource reachable at a URL; keyed by that URL."""

    scheme: str | None = None
    host: str | None = None
    port: int | None = None
    path: str | None = None

    @classmethod
    def from_url(cls: type[_A], url: str, **fields: object) -> _A:
        """Build an instance from a URL, keeping only the parts it contains.

        Raises:
            ValueError: If the URL cannot be decomposed.
        """
        match = _URL_PATTERN.match(url)
        if match is None:
            raise ValueError(f"Invalid url: {url!r}")
        scheme, host, port, path = match.groups()
        return cls(
            scheme=scheme,
            host=host,
            port=int(port) if port else None,
            path=path,
            **fields,
        )

    @property
    def url(self) -> str | None:
        if self.host is None and self.path is None:
            return None
        parts: list[str] = []
        if self.host is not None:
            if self.scheme:
                parts.append(f"{self.scheme}:")
            parts.append(f"//{self.host}")
            if self.port is not None and self.port > 0:
                parts.append(f":{self.port}")
        if self.path is not None:
            parts.append(self.path)
        return "".join(parts)

    @property
    def key(self) -> str | None:
        return self.url


class GroupFolder(Addressable):
    """Root folder of a group's documents."""

    external: bool = False


class URI(Addressable):
    """Common attributes of documents, folders and external links."""

    docid: str | None = None
    title: str | None = None
    description: str | None = None
    media_type: str | None = None
    created: datetime | None = None
    modified: datetime | None = None
    labels: list[str] = Field(default_factory=list)

    def check_valid(self) -> EntityValidity:
        return check_uri(self.docid, self.media_type, self.title, self.labels)


class Document(URI):
    document_type: str = "default"

    def check_valid(self) -> EntityValidity:
        validity = super().check_valid()
        if self.media_type == FOLDER_MEDIA_TYPE:
            return EntityValidity.DOCUMENT_IS_A_FOLDER
        return validity


class Folder(URI):
    def check_valid(self) -> EntityValidity:
        validity = super().check_valid()
        if self.media_type != FOLDER_MEDIA_TYPE:
            return EntityValidity.FOLDER_IS_NOT_A_FOLDER
        return validity


class ExternalURI(URI):
    """Link to a resource outside the server."""

    folder: bool = False


# === ID-KEYED RESOURCES ===


class Comment(Entity):
    """A comment or workflow task; only its id identifies it."""

    title: str | None = None
    content: str | None = None
    media_type: str = "text/plain"
    comment_type: str | None = None
    labels: list[str] = Field(default_factory=list)
    properties: dict[str, str] = Field(default_factory=dict)
    author: Member | None = None
    author_name: str | None = None
    status: str | None = None
    priority: str | None = None
    assigned_to: Member | None = None
    due: datetime | None = None
    context_group: str | None = None
    context_uri: str | None = None
    context_fragment: str | None = None

    @property
    def key(self) -> str | None:
        return str(self.id) if self.id is not None else None


class XRef(Entity):
    """Cross-reference from a document fragment to another document."""

    source_uri_id: int | None = None
    source_fragment: str | None = None
    target_uri_id: int | None = None
    target_href: str | None = None
    target_fragment: str | None = "default"
    title: str | None = None
    reverse_link: bool = True
    reverse_title: str | None = None
    xref_type: str | None = None
    labels: list[str] = Field(default_factory=list)

    @property
    def key(self) -> str | None:
        return str(self.id) if self.id is not None else None
