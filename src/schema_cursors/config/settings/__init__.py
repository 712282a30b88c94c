"""Config settings – env-based configuration."""
from schema_cursors.config.settings.base import Settings
from schema_cursors.config.settings.cursor import CursorSettings
from schema_cursors.config.settings.loaders import EnvSettingsLoader, SettingsLoader
from schema_cursors.config.settings.log import LoggingSettings

__all__ = ["CursorSettings", "EnvSettingsLoader", "LoggingSettings", "Settings", "SettingsLoader"]
