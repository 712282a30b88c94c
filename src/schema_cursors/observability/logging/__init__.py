"""Observability – structured logging helpers."""
from schema_cursors.observability.logging.processors import LoggerNamespaceProcessor, get_logger
from schema_cursors.observability.logging.protocol import Logger
from schema_cursors.observability.logging.setup import configure_logging

__all__ = ["Logger", "LoggerNamespaceProcessor", "configure_logging", "get_logger"]
