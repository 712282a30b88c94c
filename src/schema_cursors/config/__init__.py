"""Config – cursor settings, loaders and validation errors."""

from schema_cursors.config.settings import (
    CursorSettings,
    EnvSettingsLoader,
    LoggingSettings,
    Settings,
    SettingsLoader,
)
from schema_cursors.config.validation import (
    ConfigError,
    InvalidSettingValueError,
    MissingRequiredSettingError,
)

__all__ = [
    "ConfigError",
    "CursorSettings",
    "EnvSettingsLoader",
    "InvalidSettingValueError",
    "LoggingSettings",
    "MissingRequiredSettingError",
    "Settings",
    "SettingsLoader",
]
