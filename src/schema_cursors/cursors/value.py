"""Cursor over an in-memory sequence."""
from __future__ import annotations

import math
from collections.abc import Sequence
from typing import TypeVar

from schema_cursors.config.settings import CursorSettings
from schema_cursors.cursors.base import BaseCursor, check_page_number
from schema_cursors.cursors.descriptors import (
    CollectionFilterDescriptor,
    CollectionSortDescriptor,
    CursorColumnDefinition,
    FilterOperator,
    SortDirection,
)
from schema_cursors.cursors.engine import (
    UnknownOperatorPolicy,
    filter_collection_by,
    search_collection_by,
    sort_collection_by,
)
from schema_cursors.cursors.state import LoadingState
from schema_cursors.kernel.errors import (
    ColumnNotFoundError,
    ColumnNotSupportedError,
    PageOutOfRangeError,
    ValidationError,
)
from schema_cursors.observability.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


def _as_list(value: object, kind: type) -> list:
    if isinstance(value, kind):
        return [value]
    if isinstance(value, (list, tuple)):
        return list(value)
    raise ValidationError(f"Expected a {kind.__name__} or a sequence of them, got {type(value).__name__}")


class ValueCursor(BaseCursor[T]):
    """Page, filter, search and sort a fully materialised sequence.

    Everything is synchronous. Filter, sort, search and column mutators only
    record the change and return the cursor so calls chain::

        cursor.filter_by(f).sort_by(s).select(1)

    Nothing is recomputed until :meth:`select` (or :meth:`refresh`) runs;
    :attr:`pending` tells whether recorded changes are still unapplied.
    Each page is a slice of the filtered, searched and sorted view.
    """

    def __init__(
        self,
        wrapped: Sequence[T],
        columns: Sequence[CursorColumnDefinition] = (),
        *,
        limit: int | None = None,
        settings: CursorSettings | None = None,
    ) -> None:
        super().__init__(limit, settings)
        self._wrapped: list[T] = list(wrapped)
        self._count = len(self._wrapped)
        self._columns: list[CursorColumnDefinition] = []
        self.columns = columns
        self._filters: list[CollectionFilterDescriptor] = []
        self._sorters: list[CollectionSortDescriptor] = []
        self._terms: str | None = None
        self.policy = UnknownOperatorPolicy(self._settings.unknown_operator_policy)
        self.is_search_applied = True
        self.are_filters_applied = True
        self.are_sorters_applied = True

        self.select(1)
        self._loading_state = LoadingState.EMPTY if not self._wrapped else LoadingState.READY

    @property
    def terms(self) -> str | None:
        return self._terms

    @property
    def columns(self) -> tuple[CursorColumnDefinition, ...]:
        return tuple(self._columns)

    @columns.setter
    def columns(self, value: Sequence[CursorColumnDefinition]) -> None:
        if isinstance(value, (str, bytes)) or not isinstance(value, Sequence):
            raise ValidationError(f"Expected a sequence of columns, got {type(value).__name__}")
        self._columns = list(value)

    @property
    def filters(self) -> tuple[CollectionFilterDescriptor, ...]:
        """Filters limiting the items in this cursor."""
        return tuple(self._filters)

    @property
    def sorters(self) -> tuple[CollectionSortDescriptor, ...]:
        """Sorters altering the order of the items in this cursor."""
        return tuple(self._sorters)

    @property
    def are_columns_applied(self) -> bool:
        return self.are_filters_applied and self.are_sorters_applied

    @property
    def pending(self) -> bool:
        """Whether any recorded filter/sort/search change awaits :meth:`select`."""
        return not (self.is_search_applied and self.are_columns_applied)

    # ------------------------------------------------------------------
    # Page changing
    # ------------------------------------------------------------------

    def next(self) -> list[T]:
        if not self.has_next():
            raise PageOutOfRangeError("This is the last page!", page=self._current, total_pages=self._total_pages)
        return self.select(self._current + 1)

    def previous(self) -> list[T]:
        if not self.has_previous():
            raise PageOutOfRangeError("This is the first page!", page=self._current, total_pages=self._total_pages)
        return self.select(self._current - 1)

    def refresh(self) -> list[T]:
        return self.select(self._current, force_reload=True)

    def select(self, page: int = 1, force_reload: bool = False) -> list[T]:  # noqa: ARG002
        """Recompute the view and show its 1-indexed *page*.

        The view is always rebuilt, so *force_reload* only exists to mirror
        the remote cursor's signature.
        """
        check_page_number(page)
        view = self._view()
        self._total_pages = max(1, math.ceil(len(view) / self._limit))
        self._items = self._page_of(view, page, self._limit)
        self._current = page
        self.is_search_applied = True
        self.are_filters_applied = True
        self.are_sorters_applied = True
        logger.debug("cursor.page_selected", page=page, matched=len(view), items=len(self._items))
        return self.items

    def all(self, limit: int | None = None) -> list[T]:
        """Every item of the current view, gathered page by page."""
        page_size = check_page_number(limit, "limit") if limit is not None else self._limit
        view = self._view()
        result: list[T] = []
        for page in range(1, max(1, math.ceil(len(view) / page_size)) + 1):
            result.extend(self._page_of(view, page, page_size))
        return result

    def _view(self) -> list[T]:
        items = filter_collection_by(self._wrapped, self._filters, self.policy)
        items = search_collection_by(items, self._terms)
        return sort_collection_by(items, self._sorters)

    @staticmethod
    def _page_of(view: list[T], page: int, limit: int) -> list[T]:
        return view[(page - 1) * limit : page * limit]

    def _reload_for_limit(self) -> None:
        self.select(self._current)

    def _reload_for_current(self, page: int) -> None:
        self.select(page)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def search(self, terms: str | None) -> "ValueCursor[T]":
        """Record *terms* as the active search; applied on the next select."""
        self._terms = terms
        self.is_search_applied = False
        return self

    # ------------------------------------------------------------------
    # Filters
    # ------------------------------------------------------------------

    def filter_by(
        self,
        filter: CollectionFilterDescriptor | Sequence[CollectionFilterDescriptor],  # noqa: A002
        replace: bool = False,
    ) -> "ValueCursor[T]":
        """Add the given filter(s), or use them instead of the current ones."""
        added = _as_list(filter, CollectionFilterDescriptor)
        self._filters = added if replace else [*self._filters, *added]
        self.are_filters_applied = False
        return self

    def clear_filter(
        self,
        filter: CollectionFilterDescriptor | Sequence[CollectionFilterDescriptor],  # noqa: A002
    ) -> "ValueCursor[T]":
        removed = _as_list(filter, CollectionFilterDescriptor)
        self._filters = [f for f in self._filters if f not in removed]
        self.are_filters_applied = False
        return self

    def clear_filters(self) -> "ValueCursor[T]":
        self._filters = []
        self.are_filters_applied = False
        return self

    # ------------------------------------------------------------------
    # Sorters
    # ------------------------------------------------------------------

    def sort_by(
        self,
        sort: CollectionSortDescriptor | Sequence[CollectionSortDescriptor],
        replace: bool = False,
    ) -> "ValueCursor[T]":
        """Add the given sorter(s), or use them instead of the current ones."""
        added = _as_list(sort, CollectionSortDescriptor)
        self._sorters = added if replace else [*self._sorters, *added]
        self.are_sorters_applied = False
        return self

    def clear_sort(
        self,
        sort: CollectionSortDescriptor | Sequence[CollectionSortDescriptor],
    ) -> "ValueCursor[T]":
        removed = _as_list(sort, CollectionSortDescriptor)
        self._sorters = [s for s in self._sorters if s not in removed]
        self.are_sorters_applied = False
        return self

    def clear_sorters(self) -> "ValueCursor[T]":
        self._sorters = []
        self.are_sorters_applied = False
        return self

    # ------------------------------------------------------------------
    # Columns
    # ------------------------------------------------------------------

    def _column(self, name: str) -> CursorColumnDefinition:
        for column in self._columns:
            if column.name == name:
                return column
        raise ColumnNotFoundError(name)

    def sort_by_column(self, name: str, direction: SortDirection = SortDirection.ASCENDING) -> "ValueCursor[T]":
        column = self._column(name)
        if not column.sortable:
            raise ColumnNotSupportedError(name, "sort")
        return self.sort_by(CollectionSortDescriptor(path=column.resolved_path, direction=direction))

    def filter_by_column(
        self,
        name: str,
        operator: FilterOperator,
        value: object,
    ) -> "ValueCursor[T]":
        column = self._column(name)
        if not column.filterable:
            raise ColumnNotSupportedError(name, "filter")
        return self.filter_by(CollectionFilterDescriptor(path=column.resolved_path, operator=operator, value=value))


__all__ = ["ValueCursor"]
