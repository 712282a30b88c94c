"""Key casing helpers used to match loosely named API fields."""

from __future__ import annotations

import re
from typing import Final

_WORD_BOUNDARY: Final = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SEPARATORS: Final = re.compile(r"[\s_\-]+")


def _words(key: str) -> list[str]:
    spaced = _WORD_BOUNDARY.sub(" ", key)
    return [w.lower() for w in _SEPARATORS.split(spaced) if w]


def snake_case(key: str) -> str:
    """``totalCount`` → ``total_count``."""
    return "_".join(_words(key))


def kebab_case(key: str) -> str:
    """``totalCount`` → ``total-count``."""
    return "-".join(_words(key))


def key_variants(key: str) -> tuple[str, ...]:
    """Return *key* verbatim, snake_cased and kebab-cased, without duplicates."""
    return tuple(dict.fromkeys((key, snake_case(key), kebab_case(key))))


def upper_first(value: str) -> str:
    return value[:1].upper() + value[1:]


__all__ = ["kebab_case", "key_variants", "snake_case", "upper_first"]
