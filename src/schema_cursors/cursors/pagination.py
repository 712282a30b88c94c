"""Pagination metadata normalisation and page request parameters.

Hypermedia APIs disagree on what to call the page items, the total item
count and the page count, and on where to put them (top level, headers, or a
``meta``/``pagination`` wrapper). :func:`normalize` tries a fixed, ordered
list of rules against each source and keeps the first acceptable value per
field, so the cursors above it only ever see :class:`PaginationInfo`.

Source priority is part of the contract: body, then headers, then the first
body key named ``pagination`` or ``meta`` (case-insensitive). A field resolved
by an earlier source is never overridden by a later one.
"""
from __future__ import annotations

import dataclasses
import math
import re
from collections.abc import Callable, Iterator, Mapping
from typing import Any, Final, Generic, TypeVar

from schema_cursors.cursors.ports import AgentResponse
from schema_cursors.kernel.types import key_variants

T = TypeVar("T")

PAGE_PARAMETER_KEYS: Final = ("index", "page", "pageNumber")
LIMIT_PARAMETER_KEYS: Final = ("limit", "perPage")
COUNT_KEYS: Final = ("totalCount", "itemCount")
TOTAL_PAGES_KEYS: Final = ("pages", "numPages", "length", "size")
ITEMS_KEYS: Final = ("items", "data", "collection")
META_KEYS: Final = ("pagination", "meta")

_INTEGER_TEXT: Final = re.compile(r"^\s*\d+\s*$")


@dataclasses.dataclass
class PaginationInfo(Generic[T]):
    """Canonical page shape. ``None`` marks a field no source could resolve."""

    items: list[T] | None = None
    total_pages: int | None = None
    count: int | None = None

    @property
    def unresolved(self) -> tuple[str, ...]:
        return tuple(f.name for f in dataclasses.fields(self) if getattr(self, f.name) is None)


def _is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def _is_array(value: Any) -> bool:
    return isinstance(value, list)


@dataclasses.dataclass(frozen=True)
class PaginationRule:
    """Fill ``field`` from the first of ``candidates`` whose value ``accepts``."""

    field: str
    candidates: tuple[str, ...]
    accepts: Callable[[Any], bool]

    def lookup(self, source: Mapping[str, Any]) -> Any:
        for key in self.candidates:
            for variant in key_variants(key):
                value = source.get(variant)
                if value is not None and self.accepts(value):
                    return value
        return None


PAGINATION_RULES: Final = (
    PaginationRule("count", COUNT_KEYS, _is_finite_number),
    PaginationRule("total_pages", TOTAL_PAGES_KEYS, _is_finite_number),
    PaginationRule("items", ITEMS_KEYS, _is_array),
)


class _HeaderSource(Mapping[str, Any]):
    """Header view whose integer-looking string values read back as ints."""

    def __init__(self, headers: Mapping[str, Any]) -> None:
        self._headers = headers

    def __getitem__(self, key: str) -> Any:
        value = self._headers[key]
        if isinstance(value, str) and _INTEGER_TEXT.match(value):
            return int(value)
        return value

    def __iter__(self) -> Iterator[str]:
        return iter(self._headers)

    def __len__(self) -> int:
        return len(self._headers)


def _sources(response: AgentResponse) -> Iterator[Mapping[str, Any]]:
    body = response.body
    if isinstance(body, Mapping):
        yield body
    if response.headers:
        yield _HeaderSource(response.headers)
    if isinstance(body, Mapping):
        for key, value in body.items():
            if isinstance(key, str) and key.lower() in META_KEYS:
                if isinstance(value, Mapping):
                    yield value
                break


def _integral(value: Any) -> Any:
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value


def normalize(response: AgentResponse, rules: tuple[PaginationRule, ...] = PAGINATION_RULES) -> PaginationInfo[Any]:
    """Extract items, item count and page count from *response*.

    Never raises on unexpected payload shapes; anything it cannot find is
    left as ``None``.
    """
    info: PaginationInfo[Any] = PaginationInfo()
    for source in _sources(response):
        for rule in rules:
            if getattr(info, rule.field) is not None:
                continue
            value = rule.lookup(source)
            if value is not None:
                setattr(info, rule.field, _integral(value))
        if not info.unresolved:
            break
    return info


def build_page_params(page: int, limit: int) -> dict[str, Any]:
    """Request parameters naming *page* and *limit* in every common spelling."""
    params: dict[str, Any] = {}
    for key in PAGE_PARAMETER_KEYS:
        for variant in key_variants(key):
            params[variant] = page
    for key in LIMIT_PARAMETER_KEYS:
        for variant in key_variants(key):
            params[variant] = limit
    return params


PaginationInfoExtractor = Callable[[AgentResponse], PaginationInfo[Any]]
PaginationRequestGenerator = Callable[[int, int], dict[str, Any]]

__all__ = [
    "PAGINATION_RULES",
    "PaginationInfo",
    "PaginationInfoExtractor",
    "PaginationRequestGenerator",
    "PaginationRule",
    "build_page_params",
    "normalize",
]
