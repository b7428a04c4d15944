# tests/unit/core/test_exceptions.py - v1
"""Tests for core/exceptions.py."""

from __future__ import annotations

from psbridge.core.exceptions import (
    BridgeError,
    InvalidEntityError,
    NonIdentifiableEntityError,
    ServiceError,
)
from psbridge.core.validity import EntityValidity


class TestExceptions:
    def test_non_identifiable(self):
        err = NonIdentifiableEntityError("Member")
        assert isinstance(err, BridgeError)
        assert isinstance(err, ValueError)
        assert err.entity_type == "Member"
        assert "no id" in str(err)

    def test_invalid_entity(self):
        err = InvalidEntityError("Group", EntityValidity.GROUP_NAME_IS_INVALID)
        assert err.validity is EntityValidity.GROUP_NAME_IS_INVALID
        assert str(err) == "Invalid Group: group_name_is_invalid"

    def test_service_error_status(self):
        err = ServiceError("Not found", status=404)
        assert err.status == 404
        assert ServiceError("boom").status is None
