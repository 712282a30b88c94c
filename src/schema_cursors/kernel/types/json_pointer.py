"""JSON pointer resolution over dicts, sequences and plain objects.

Paths follow RFC 6901 (``/a/0/b``, ``~1`` for ``/`` and ``~0`` for ``~``)
with one relaxation used by column and descriptor paths: both ``""`` and
``"/"`` address the whole value.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Final

from schema_cursors.kernel.errors.domain import ValidationError

_MISSING: Final = object()


def parse_pointer(path: str) -> tuple[str, ...]:
    """Split *path* into unescaped reference tokens."""
    if not isinstance(path, str):
        raise ValidationError(f"JSON pointer must be a string, got {type(path).__name__}")
    if path in ("", "/"):
        return ()
    if not path.startswith("/"):
        raise ValidationError(f"JSON pointer must start with '/': {path!r}")
    return tuple(token.replace("~1", "/").replace("~0", "~") for token in path[1:].split("/"))


def _step(node: Any, token: str) -> Any:
    if isinstance(node, Mapping):
        return node.get(token, _MISSING)
    if isinstance(node, Sequence) and not isinstance(node, (str, bytes)):
        if not token.isdigit():
            return _MISSING
        index = int(token)
        return node[index] if index < len(node) else _MISSING
    if token and not token.startswith("_"):
        return getattr(node, token, _MISSING)
    return _MISSING


def resolve_pointer(document: Any, path: str, default: Any = None) -> Any:
    """Return the value *path* points at inside *document*, or *default*."""
    node = document
    for token in parse_pointer(path):
        node = _step(node, token)
        if node is _MISSING:
            return default
    return node


__all__ = ["parse_pointer", "resolve_pointer"]
