"""In-memory filter, search and sort evaluation for cursor descriptors."""
from __future__ import annotations

import dataclasses
import math
from collections.abc import Callable, Iterable, Mapping, Sequence
from enum import Enum
from typing import Any, TypeVar

from schema_cursors.cursors.descriptors import (
    CollectionFilterDescriptor,
    CollectionSortDescriptor,
    FilterOperator,
    SortDirection,
)
from schema_cursors.kernel.types import resolve_pointer
from schema_cursors.observability.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class UnknownOperatorPolicy(str, Enum):
    """What a filter with an unrecognised operator does to an element."""

    EXCLUDE = "exclude"
    INCLUDE = "include"


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _as_text(value: Any) -> str:
    """Text form of *value* as it reads in JSON (``true``, ``null``, ``1`` for ``1.0``)."""
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _measure(value: Any) -> int | float | None:
    """Numbers compare by value, strings and sequences by length."""
    if _is_number(value):
        return value
    if isinstance(value, (str, list, tuple)):
        return len(value)
    return None


def _as_number(target: Any) -> int | float | None:
    if _is_number(target):
        return target
    if isinstance(target, str):
        try:
            number = float(target)
        except ValueError:
            return None
        return number if math.isfinite(number) else None
    return None


def _compare(value: Any, target: Any, op: Callable[[Any, Any], bool]) -> bool:
    measured = _measure(value)
    bound = _as_number(target)
    if measured is None or bound is None:
        return False
    return op(measured, bound)


def _is_collection(value: Any) -> bool:
    return isinstance(value, (list, tuple, set, frozenset))


_PREDICATES: dict[FilterOperator, Callable[[Any, Any], bool]] = {
    FilterOperator.CONTAINS: lambda v, t: _as_text(t) in _as_text(v),
    FilterOperator.NOT_CONTAINS: lambda v, t: _as_text(t) not in _as_text(v),
    FilterOperator.EQUALS: lambda v, t: _as_text(v) == _as_text(t),
    FilterOperator.NOT_EQUALS: lambda v, t: _as_text(v) != _as_text(t),
    FilterOperator.LESS_THAN: lambda v, t: _compare(v, t, lambda a, b: a < b),
    FilterOperator.LESS_THAN_OR_EQUALS: lambda v, t: _compare(v, t, lambda a, b: a <= b),
    FilterOperator.GREATER_THAN: lambda v, t: _compare(v, t, lambda a, b: a > b),
    FilterOperator.GREATER_THAN_OR_EQUALS: lambda v, t: _compare(v, t, lambda a, b: a >= b),
    FilterOperator.IN: lambda v, t: v in t if _is_collection(t) else _as_text(v) == _as_text(t),
    FilterOperator.NOT_IN: lambda v, t: v not in t if _is_collection(t) else _as_text(v) != _as_text(t),
}


def apply_filter(
    descriptor: CollectionFilterDescriptor,
    value: Any,
    policy: UnknownOperatorPolicy = UnknownOperatorPolicy.EXCLUDE,
) -> bool:
    """Evaluate a single filter against an already-resolved *value*."""
    predicate = _PREDICATES.get(descriptor.operator)  # type: ignore[arg-type]
    if predicate is None:
        logger.error("filter.unknown_operator", operator=str(descriptor.operator), policy=policy.value)
        return policy is UnknownOperatorPolicy.INCLUDE
    return predicate(value, descriptor.value)


def filter_collection_by(
    collection: Iterable[T],
    filters: Sequence[CollectionFilterDescriptor],
    policy: UnknownOperatorPolicy = UnknownOperatorPolicy.EXCLUDE,
) -> list[T]:
    """Keep the elements that satisfy every filter."""
    return [
        item
        for item in collection
        if all(apply_filter(f, resolve_pointer(item, f.path), policy) for f in filters)
    ]


def _fields(item: Any) -> Iterable[Any]:
    if isinstance(item, Mapping):
        return item.values()
    if dataclasses.is_dataclass(item) and not isinstance(item, type):
        return (getattr(item, f.name) for f in dataclasses.fields(item))
    if hasattr(item, "__dict__"):
        return (v for k, v in vars(item).items() if not k.startswith("_"))
    return (item,)


def search_collection_by(collection: Iterable[T], terms: str | None) -> list[T]:
    """Keep elements where any field's text contains *terms*, case-insensitively."""
    items = list(collection)
    if not terms:
        return items
    query = terms.lower()
    return [
        item
        for item in items
        if any(query in _as_text(v).lower() for v in _fields(item) if v is not None)
    ]


def _sort_key(value: Any) -> tuple[int, Any]:
    # Total order across mixed types: numbers, then text, then missing.
    if value is None:
        return (2, "")
    if _is_number(value):
        return (0, value)
    if isinstance(value, str):
        return (1, value)
    return (1, str(value))


def sort_collection_by(collection: Iterable[T], sorters: Sequence[CollectionSortDescriptor]) -> list[T]:
    """Stable multi-key sort; the first sorter is the primary key."""
    items = list(collection)
    for sorter in reversed(sorters):
        items.sort(
            key=lambda x, path=sorter.path: _sort_key(resolve_pointer(x, path)),
            reverse=sorter.direction is SortDirection.DESCENDING,
        )
    return items


__all__ = [
    "UnknownOperatorPolicy",
    "apply_filter",
    "filter_collection_by",
    "search_collection_by",
    "sort_collection_by",
]
