"""Observability – configure_logging."""
from __future__ import annotations

import logging
from typing import Any

import structlog

from schema_cursors.config.settings import LoggingSettings
from schema_cursors.observability.logging.processors import LoggerNamespaceProcessor


def _renderer(fmt: str) -> Any:
    if fmt == "console":
        return structlog.dev.ConsoleRenderer(colors=False)
    return structlog.processors.JSONRenderer()


def configure_logging(settings: LoggingSettings | None = None) -> None:
    """Route every cursor log event through stdlib logging on stderr.

    Events keep their dotted names (``cursor.page_loaded``) and key/value
    context; with ``namespaced`` the ``logger`` field reads
    ``schema:endpoint:cursor`` and friends instead of the module path.
    Replaces any handlers already installed on the root logger.
    """
    settings = settings or LoggingSettings()
    shared: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]
    if settings.namespaced:
        shared.append(LoggerNamespaceProcessor())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    handler = logging.StreamHandler()
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(settings.format),
            ],
        )
    )
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(settings.level)


__all__ = ["configure_logging"]
