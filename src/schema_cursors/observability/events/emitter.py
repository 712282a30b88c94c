from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

__all__ = [
    "CursorEvent",
    "EventEmitter",
    "PageChangeEvent",
    "PageErrorEvent",
]

T = TypeVar("T")

Listener = Callable[[Any], None]


class CursorEvent(str, Enum):
    """Lifecycle events fired by remote cursors."""

    BEFORE_PAGE_CHANGE = "before_page_change"
    AFTER_PAGE_CHANGE = "after_page_change"
    ERROR = "error"


@dataclass(frozen=True)
class PageChangeEvent(Generic[T]):
    page: int
    items: list[T] | None = None


@dataclass(frozen=True)
class PageErrorEvent:
    page: int
    cause: BaseException


@dataclass
class _Subscription:
    listener: Listener
    once: bool = False


class EventEmitter:
    """Synchronous named-event fan-out.

    Listeners run in registration order on the emitting call stack; a
    ``once`` listener is removed before it is invoked so re-entrant emits
    never call it twice.
    """

    def __init__(self) -> None:
        self._subscriptions: dict[str, list[_Subscription]] = {}

    @staticmethod
    def _key(name: str | CursorEvent) -> str:
        return name.value if isinstance(name, CursorEvent) else name

    def on(self, name: str | CursorEvent, listener: Listener) -> "EventEmitter":
        self._subscriptions.setdefault(self._key(name), []).append(_Subscription(listener))
        return self

    def once(self, name: str | CursorEvent, listener: Listener) -> "EventEmitter":
        self._subscriptions.setdefault(self._key(name), []).append(_Subscription(listener, once=True))
        return self

    def off(self, name: str | CursorEvent, listener: Listener) -> "EventEmitter":
        key = self._key(name)
        self._subscriptions[key] = [s for s in self._subscriptions.get(key, []) if s.listener != listener]
        return self

    def emit(self, name: str | CursorEvent, payload: Any = None) -> bool:
        """Invoke every listener of *name*; return whether any was registered."""
        key = self._key(name)
        subscriptions = list(self._subscriptions.get(key, []))
        if not subscriptions:
            return False
        self._subscriptions[key] = [s for s in self._subscriptions[key] if not s.once]
        for subscription in subscriptions:
            subscription.listener(payload)
        return True

    def listener_count(self, name: str | CursorEvent) -> int:
        return len(self._subscriptions.get(self._key(name), []))
