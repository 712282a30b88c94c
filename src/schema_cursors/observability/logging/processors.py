"""Observability – get_logger helper and the cursor-name processor."""
from __future__ import annotations

from typing import Any

import structlog

from schema_cursors.observability.logging.protocol import Logger


class LoggerNamespaceProcessor:
    """structlog processor that renames ``logger`` to a ``schema:<area>`` namespace.

    ``schema_cursors.cursors.endpoint`` becomes ``schema:endpoint:cursor``,
    which keeps log filtering stable if modules are moved around.
    """

    _NAMESPACES = {
        "schema_cursors.cursors.endpoint": "schema:endpoint:cursor",
        "schema_cursors.cursors.value": "schema:value:cursor",
        "schema_cursors.cursors.pagination": "schema:pagination",
        "schema_cursors.cursors.engine": "schema:value:cursor",
        "schema_cursors.adapters.http.agent": "schema:agent:http",
    }

    def __call__(
        self,
        logger: Any,           # noqa: ARG002
        method_name: str,      # noqa: ARG002
        event_dict: dict[str, Any],
    ) -> dict[str, Any]:
        name = event_dict.get("logger")
        if name in self._NAMESPACES:
            event_dict["logger"] = self._NAMESPACES[name]
        return event_dict


def get_logger(name: str | None = None, **initial_values: Any) -> Logger:
    """Return a bound structlog logger.

    Parameters
    ----------
    name:
        Logger name (typically ``__name__`` of the calling module).
    **initial_values:
        Key-value pairs to bind on the returned logger.
    """
    logger = structlog.get_logger(name)
    if initial_values:
        logger = logger.bind(**initial_values)
    return logger


__all__ = ["LoggerNamespaceProcessor", "get_logger"]
