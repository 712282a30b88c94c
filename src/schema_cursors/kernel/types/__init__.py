"""Kernel types – JSON pointer and key casing helpers."""
from schema_cursors.kernel.types.casing import kebab_case, key_variants, snake_case, upper_first
from schema_cursors.kernel.types.json_pointer import parse_pointer, resolve_pointer

__all__ = [
    "kebab_case",
    "key_variants",
    "parse_pointer",
    "resolve_pointer",
    "snake_case",
    "upper_first",
]
