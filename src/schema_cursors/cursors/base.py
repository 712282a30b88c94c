"""State and validation shared by remote and in-memory cursors."""
from __future__ import annotations

import abc
from typing import Any, Generic, TypeVar

from schema_cursors.config.settings import CursorSettings
from schema_cursors.cursors.state import LoadingState
from schema_cursors.kernel.errors import ValidationError
from schema_cursors.observability.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


def is_page_number(value: Any) -> bool:
    """Positive integers only; ``True`` is not a page number."""
    return isinstance(value, int) and not isinstance(value, bool) and value >= 1


def check_page_number(value: Any, name: str = "page") -> int:
    if not is_page_number(value):
        raise ValidationError(
            f"{name} has to be an integer of 1 or higher, got {value!r}.",
            errors=[{"field": name, "value": repr(value)}],
        )
    return value


class BaseCursor(abc.ABC, Generic[T]):
    """Paging state every cursor exposes.

    The cursor owns ``items``, ``count`` and ``total_pages``; callers read them
    through properties and change them only by navigating.
    """

    def __init__(self, limit: int | None = None, settings: CursorSettings | None = None) -> None:
        self._settings = settings or CursorSettings()
        self._limit: int = self._settings.default_limit
        if limit is not None:
            self._limit = check_page_number(limit, "limit")
        self._current = 1
        self._count = 0
        self._total_pages = 1
        self._items: list[T] = []
        self._loading_state = LoadingState.UNINITIALIZED
        self.auto_reload = False

    @property
    def limit(self) -> int:
        """Maximum number of items on a page (a.k.a. "per page")."""
        return self._limit

    @limit.setter
    def limit(self, value: int) -> None:
        if not is_page_number(value):
            logger.warning("cursor.invalid_limit", value=repr(value), cursor=type(self).__name__)
            return
        if value == self._limit:
            return
        self._limit = value
        if self.auto_reload:
            self._reload_for_limit()

    @property
    def current(self) -> int:
        """The 1-indexed page ``items`` reflects."""
        return self._current

    @current.setter
    def current(self, value: int) -> None:
        if not is_page_number(value):
            logger.warning("cursor.invalid_current", value=repr(value), cursor=type(self).__name__)
            return
        if not self.auto_reload:
            logger.warning(
                "cursor.current_requires_auto_reload",
                value=value,
                cursor=type(self).__name__,
                hint="call select() explicitly",
            )
            return
        self._reload_for_current(value)

    @property
    def count(self) -> int:
        """Total number of items in the whole collection."""
        return self._count

    @property
    def total_pages(self) -> int:
        return self._total_pages

    @property
    def items(self) -> list[T]:
        """Items on the current page (a copy)."""
        return list(self._items)

    @property
    def loading_state(self) -> LoadingState:
        return self._loading_state

    def has_previous(self) -> bool:
        return self._current > 1

    def has_next(self) -> bool:
        return self._current < self._total_pages

    @abc.abstractmethod
    def _reload_for_limit(self) -> None:
        """Reload the current page after ``limit`` changed."""

    @abc.abstractmethod
    def _reload_for_current(self, page: int) -> None:
        """Navigate to *page* after ``current`` was assigned."""

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(current={self._current}, total_pages={self._total_pages}, "
            f"limit={self._limit}, count={self._count}, state={self._loading_state.name})"
        )


__all__ = ["BaseCursor", "check_page_number", "is_page_number"]
