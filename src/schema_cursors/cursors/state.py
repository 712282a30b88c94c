"""Cursor loading lifecycle."""
from __future__ import annotations

from enum import IntEnum


class LoadingState(IntEnum):
    """Where a cursor is in its load cycle.

    ``UNINITIALIZED < LOADING < READY`` is meaningful: anything past
    ``UNINITIALIZED`` has issued (or finished) at least one load. ``EMPTY`` and
    ``ERROR`` sit above ``READY`` so the same comparison holds for them.
    """

    UNINITIALIZED = 0
    LOADING = 1
    READY = 2
    EMPTY = 3
    ERROR = 4

    @property
    def is_settled(self) -> bool:
        """Whether the cursor holds a page that reflects its last completed load."""
        return self in (LoadingState.READY, LoadingState.EMPTY)


__all__ = ["LoadingState"]
