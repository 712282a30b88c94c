"""Observability – cursor lifecycle events."""
from schema_cursors.observability.events.emitter import (
    CursorEvent,
    EventEmitter,
    PageChangeEvent,
    PageErrorEvent,
)

__all__ = [
    "CursorEvent",
    "EventEmitter",
    "PageChangeEvent",
    "PageErrorEvent",
]
