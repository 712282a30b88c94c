"""Filter, sort and column descriptors – plain data, no evaluation logic."""
from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from enum import Enum
from typing import Any

from schema_cursors.kernel.errors import ValidationError
from schema_cursors.kernel.types import parse_pointer, upper_first


class FilterOperator(str, Enum):
    CONTAINS = "contains"
    NOT_CONTAINS = "not_contains"
    EQUALS = "equals"
    NOT_EQUALS = "not_equals"
    LESS_THAN = "less_than"
    LESS_THAN_OR_EQUALS = "less_than_or_equals"
    GREATER_THAN = "greater_than"
    GREATER_THAN_OR_EQUALS = "greater_than_or_equals"
    IN = "in"
    NOT_IN = "not_in"


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    def inverse(self) -> "SortDirection":
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


@dataclasses.dataclass(frozen=True)
class CollectionFilterDescriptor:
    """Keep elements whose value at *path* satisfies *operator* against *value*.

    *operator* is normally a :class:`FilterOperator`; any other value is kept
    as-is so the engine can apply its unknown-operator policy.
    """

    path: str
    operator: FilterOperator | str
    value: Any = None

    def __post_init__(self) -> None:
        parse_pointer(self.path)
        if not isinstance(self.operator, FilterOperator):
            try:
                object.__setattr__(self, "operator", FilterOperator(self.operator))
            except ValueError:
                pass


@dataclasses.dataclass(frozen=True)
class CollectionSortDescriptor:
    path: str
    direction: SortDirection = SortDirection.ASCENDING

    def __post_init__(self) -> None:
        parse_pointer(self.path)
        try:
            object.__setattr__(self, "direction", SortDirection(self.direction))
        except ValueError as exc:
            raise ValidationError(f"Unknown sort direction {self.direction!r}") from exc


@dataclasses.dataclass(frozen=True)
class CursorColumnDefinition:
    """A named column of a cursor's items.

    When *path* is omitted it defaults to ``/`` followed by *name* with its
    first letter upper-cased (``name`` → ``/Name``).
    """

    name: str
    path: str | None = None
    filterable: bool = False
    sortable: bool = False
    type: str | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name:
            raise ValidationError("Column name must be a non-empty string")
        if self.path:
            parse_pointer(self.path)

    @property
    def resolved_path(self) -> str:
        return self.path or f"/{upper_first(self.name)}"

    @classmethod
    def from_schema(cls, schema: Mapping[str, Any]) -> "CursorColumnDefinition":
        """Build a column from its schema form.

        The schema form requires ``id``, ``path`` and ``type`` and accepts
        optional boolean ``filterable`` / ``sortable`` flags.
        """
        if not isinstance(schema, Mapping):
            raise ValidationError(f"Column schema must be a mapping, got {type(schema).__name__}")
        errors: list[dict[str, Any]] = []
        for key in ("id", "path", "type"):
            if not isinstance(schema.get(key), str) or not schema.get(key):
                errors.append({"field": key, "error": "required non-empty string"})
        for key in ("filterable", "sortable"):
            if key in schema and not isinstance(schema[key], bool):
                errors.append({"field": key, "error": "must be a boolean"})
        if errors:
            raise ValidationError(
                f"Invalid column schema for {schema.get('id')!r}",
                errors=errors,
            )
        return cls(
            name=schema["id"],
            path=schema["path"],
            type=schema["type"],
            filterable=schema.get("filterable", False),
            sortable=schema.get("sortable", False),
        )


__all__ = [
    "CollectionFilterDescriptor",
    "CollectionSortDescriptor",
    "CursorColumnDefinition",
    "FilterOperator",
    "SortDirection",
]
