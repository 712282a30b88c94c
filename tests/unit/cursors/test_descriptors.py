"""Unit tests for descriptors, column definitions and LoadingState."""

from __future__ import annotations

import pytest

from schema_cursors.cursors import (
    CollectionFilterDescriptor,
    CollectionSortDescriptor,
    CursorColumnDefinition,
    FilterOperator,
    LoadingState,
    SortDirection,
)
from schema_cursors.kernel.errors import ValidationError


class TestLoadingState:
    def test_ordering(self) -> None:
        assert LoadingState.UNINITIALIZED < LoadingState.LOADING < LoadingState.READY

    def test_everything_else_is_past_uninitialized(self) -> None:
        for state in (LoadingState.EMPTY, LoadingState.ERROR):
            assert state > LoadingState.UNINITIALIZED

    def test_settled_states(self) -> None:
        assert LoadingState.READY.is_settled
        assert LoadingState.EMPTY.is_settled
        assert not LoadingState.LOADING.is_settled
        assert not LoadingState.ERROR.is_settled


class TestSortDirection:
    def test_inverse(self) -> None:
        assert SortDirection.ASCENDING.inverse() is SortDirection.DESCENDING
        assert SortDirection.DESCENDING.inverse() is SortDirection.ASCENDING

    def test_unknown_direction_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CollectionSortDescriptor("/v", "sideways")


class TestFilterDescriptor:
    def test_invalid_pointer_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CollectionFilterDescriptor(path="Name", operator=FilterOperator.EQUALS, value=1)

    def test_equality_by_value(self) -> None:
        a = CollectionFilterDescriptor("/a", FilterOperator.IN, [1, 2])
        b = CollectionFilterDescriptor("/a", FilterOperator.IN, [1, 2])
        assert a == b


class TestCursorColumnDefinition:
    def test_default_path_upper_firsts_name(self) -> None:
        assert CursorColumnDefinition(name="firstName").resolved_path == "/FirstName"

    def test_explicit_path(self) -> None:
        assert CursorColumnDefinition(name="age", path="/person/age").resolved_path == "/person/age"

    def test_flags_default_false(self) -> None:
        col = CursorColumnDefinition(name="x")
        assert not col.filterable
        assert not col.sortable

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CursorColumnDefinition(name="")

    def test_from_schema(self) -> None:
        col = CursorColumnDefinition.from_schema(
            {"id": "age", "path": "/Age", "type": "integer", "sortable": True}
        )
        assert col.name == "age"
        assert col.type == "integer"
        assert col.sortable
        assert not col.filterable

    def test_from_schema_reports_every_problem(self) -> None:
        with pytest.raises(ValidationError) as exc_info:
            CursorColumnDefinition.from_schema({"id": "age", "filterable": "yes"})
        fields = {e["field"] for e in exc_info.value.errors}
        assert fields == {"path", "type", "filterable"}

    def test_from_schema_requires_mapping(self) -> None:
        with pytest.raises(ValidationError):
            CursorColumnDefinition.from_schema(["id"])  # type: ignore[arg-type]
