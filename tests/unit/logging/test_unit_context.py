# tests/unit/logging/test_unit_context.py - v2
"""Tests for logging/context.py - contextual logging variables."""

from __future__ import annotations

import pytest

from psbridge.logging.context import (
    clear_context,
    get_context,
    operation_context,
    set_request_context,
)


class TestLogContext:
    def setup_method(self):
        clear_context()

    def teardown_method(self):
        clear_context()

    def test_initial_state(self):
        ctx = get_context()
        assert ctx.request_id is None
        assert ctx.entity_type is None
        assert ctx.operation is None

    def test_set_request_context(self):
        set_request_context("req-1")
        assert get_context().request_id == "req-1"

    def test_operation_context_scoped(self):
        with operation_context("Member", "get_by_key"):
            ctx = get_context()
            assert ctx.entity_type == "Member"
            assert ctx.operation == "get_by_key"
        ctx = get_context()
        assert ctx.entity_type is None
        assert ctx.operation is None

    def test_nested_restores_outer(self):
        with operation_context("Group", "find"):
            with operation_context("Member", "get"):
                assert get_context().entity_type == "Member"
            assert get_context().entity_type == "Group"
            assert get_context().operation == "find"

    def test_restored_on_error(self):
        with pytest.raises(RuntimeError):
            with operation_context("Member", "get"):
                raise RuntimeError("boom")
        assert get_context().operation is None

    def test_as_dict_filters_none(self):
        set_request_context("req-1")
        d = get_context().as_dict()
        assert d == {"request_id": "req-1"}

    def test_clear(self):
        set_request_context("req-1")
        clear_context()
        assert get_context().request_id is None
