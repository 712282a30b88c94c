"""Config settings – CursorSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from schema_cursors.config.settings.base import Settings
from schema_cursors.config.validation import InvalidSettingValueError

UNKNOWN_OPERATOR_POLICIES = ("exclude", "include")


@dataclasses.dataclass
class CursorSettings(Settings):
    """Defaults applied to cursors that are not given explicit values.

    Environment variables (``CURSOR_`` prefix)::

        CURSOR_DEFAULT_LIMIT=40
        CURSOR_SEARCH_TERM_PROPERTY=search
        CURSOR_LINK_RELATIONS=list,collection,index
        CURSOR_UNKNOWN_OPERATOR_POLICY=exclude
    """

    _prefix: ClassVar[str] = "CURSOR"

    default_limit: int = 40
    search_term_property: str = "search"
    link_relations: list[str] = dataclasses.field(
        default_factory=lambda: ["list", "collection", "index"]
    )
    unknown_operator_policy: str = "exclude"

    def _validate(self) -> None:
        if isinstance(self.default_limit, bool) or not isinstance(self.default_limit, int) or self.default_limit < 1:
            raise InvalidSettingValueError("default_limit", self.default_limit, "must be a positive integer")
        if not self.search_term_property:
            raise InvalidSettingValueError("search_term_property", self.search_term_property, "must not be empty")
        if not self.link_relations:
            raise InvalidSettingValueError("link_relations", self.link_relations, "needs at least one relation")
        if self.unknown_operator_policy not in UNKNOWN_OPERATOR_POLICIES:
            raise InvalidSettingValueError(
                "unknown_operator_policy",
                self.unknown_operator_policy,
                f"expected one of {', '.join(UNKNOWN_OPERATOR_POLICIES)}",
            )


__all__ = ["CursorSettings", "UNKNOWN_OPERATOR_POLICIES"]
