"""Config settings – LoggingSettings."""
from __future__ import annotations

import dataclasses
from typing import ClassVar

from schema_cursors.config.settings.base import Settings
from schema_cursors.config.validation import InvalidSettingValueError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMATS = ("json", "console")


@dataclasses.dataclass
class LoggingSettings(Settings):
    """How :func:`~schema_cursors.observability.logging.configure_logging` renders events.

    Environment variables (``CURSOR_LOG`` prefix)::

        CURSOR_LOG_LEVEL=INFO
        CURSOR_LOG_FORMAT=json
        CURSOR_LOG_NAMESPACED=true
    """

    _prefix: ClassVar[str] = "CURSOR_LOG"

    level: str = "INFO"
    format: str = "json"
    namespaced: bool = True

    def _validate(self) -> None:
        self.level = self.level.upper()
        if self.level not in LOG_LEVELS:
            raise InvalidSettingValueError("level", self.level, f"expected one of {', '.join(LOG_LEVELS)}")
        if self.format not in LOG_FORMATS:
            raise InvalidSettingValueError("format", self.format, f"expected one of {', '.join(LOG_FORMATS)}")


__all__ = ["LOG_FORMATS", "LOG_LEVELS", "LoggingSettings"]
