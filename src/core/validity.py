# src/core/validity.py - v1
"""Server-side constraints on entity attributes.

Checks operate on plain values so entity models can call them without
import cycles. Each check returns the first violated rule, or
``EntityValidity.OK``.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Mapping
from enum import Enum


class EntityValidity(str, Enum):
    """Outcome of validating an entity against known server constraints."""

    OK = "ok"
    DOCUMENT_DOCID_IS_TOO_LONG = "document_docid_is_too_long"
    DOCUMENT_TITLE_IS_TOO_LONG = "document_title_is_too_long"
    DOCUMENT_LABELS_ARE_TOO_LONG = "document_labels_are_too_long"
    DOCUMENT_IS_A_FOLDER = "document_is_a_folder"
    FOLDER_IS_NOT_A_FOLDER = "folder_is_not_a_folder"
    GROUP_NAME_IS_TOO_LONG = "group_name_is_too_long"
    GROUP_OWNER_IS_TOO_LONG = "group_owner_is_too_long"
    GROUP_DESCRIPTION_IS_TOO_LONG = "group_description_is_too_long"
    GROUP_DETAILTYPE_IS_TOO_LONG = "group_detailtype_is_too_long"
    GROUP_TEMPLATE_IS_TOO_LONG = "group_template_is_too_long"
    GROUP_NAME_IS_INVALID = "group_name_is_invalid"
    MEMBER_FIRSTNAME_IS_TOO_LONG = "member_firstname_is_too_long"
    MEMBER_SURNAME_IS_TOO_LONG = "member_surname_is_too_long"
    MEMBER_USERNAME_IS_TOO_LONG = "member_username_is_too_long"
    MEMBER_EMAIL_IS_TOO_LONG = "member_email_is_too_long"
    DETAIL_FIELD_VALUE_IS_TOO_LONG = "detail_field_value_is_too_long"


GROUP_NAME_PATTERN = re.compile(r"^[a-z][a-z0-9_~\-]+$")

RESERVED_GROUP_NAMES: frozenset[str] = frozenset({
    "page", "block", "tree", "uri", "fullpage", "embed", "psadmin", "bundle",
    "service", "error", "weborganic", "woconfig", "servlet", "psdoc",
    "filter", "group", "home", "member", "project",
})

FOLDER_MEDIA_TYPE = "folder"


def _too_long(value: str | None, limit: int) -> bool:
    return value is not None and len(value) > limit


def is_valid_group_name(name: str | None) -> bool:
    """Whether a group name is well-formed and not reserved.

    The project prefix (text before the first dash) must not be a reserved
    word, and silent groups or empty segments are rejected.
    """
    if not name:
        return False
    project = name.split("-", 1)[0]
    return (
        GROUP_NAME_PATTERN.match(name) is not None
        and project not in RESERVED_GROUP_NAMES
        and not name.endswith("-silent")
        and "--" not in name
    )


def check_member(
    firstname: str | None,
    surname: str | None,
    username: str | None,
    email: str | None,
) -> EntityValidity:
    if _too_long(firstname, 50):
        return EntityValidity.MEMBER_FIRSTNAME_IS_TOO_LONG
    if _too_long(surname, 50):
        return EntityValidity.MEMBER_SURNAME_IS_TOO_LONG
    if _too_long(username, 100):
        return EntityValidity.MEMBER_USERNAME_IS_TOO_LONG
    if _too_long(email, 100):
        return EntityValidity.MEMBER_EMAIL_IS_TOO_LONG
    return EntityValidity.OK


def check_group(
    name: str | None,
    owner: str | None,
    description: str | None,
    details_type: str | None,
    template: str | None,
) -> EntityValidity:
    if _too_long(name, 60):
        return EntityValidity.GROUP_NAME_IS_TOO_LONG
    if _too_long(owner, 100):
        return EntityValidity.GROUP_OWNER_IS_TOO_LONG
    if _too_long(description, 250):
        return EntityValidity.GROUP_DESCRIPTION_IS_TOO_LONG
    if _too_long(details_type, 150):
        return EntityValidity.GROUP_DETAILTYPE_IS_TOO_LONG
    if _too_long(template, 60):
        return EntityValidity.GROUP_TEMPLATE_IS_TOO_LONG
    if not is_valid_group_name(name):
        return EntityValidity.GROUP_NAME_IS_INVALID
    return EntityValidity.OK


def check_uri(
    docid: str | None,
    media_type: str | None,
    title: str | None,
    labels: Iterable[str],
) -> EntityValidity:
    """Constraints shared by documents, folders and external URIs."""
    if _too_long(docid, 100):
        return EntityValidity.DOCUMENT_DOCID_IS_TOO_LONG
    # The server reports an oversized media type as a title error.
    if _too_long(media_type, 100) or _too_long(title, 250):
        return EntityValidity.DOCUMENT_TITLE_IS_TOO_LONG
    length = 0
    for label in labels:
        length += len(label) + 1
        if length > 250:
            return EntityValidity.DOCUMENT_LABELS_ARE_TOO_LONG
    return EntityValidity.OK


def check_details(fields: Mapping[str, str | None]) -> EntityValidity:
    for value in fields.values():
        if _too_long(value, 100):
            return EntityValidity.DETAIL_FIELD_VALUE_IS_TOO_LONG
    return EntityValidity.OK
