"""Root error class for the schema-cursors error hierarchy."""

from __future__ import annotations

import json
from typing import Any


class BaseError(Exception):
    """Root of every error a cursor, loader or agent raises.

    ``code`` is a stable slug callers can branch on. ``detail`` carries the
    cursor context of the failure (page, column, link relation, status code)
    and is what :meth:`log_context` hands to structlog.
    """

    default_code: str = "base_error"

    def __init__(
        self,
        message: str,
        *,
        code: str | None = None,
        detail: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code
        self.detail: dict[str, Any] = dict(detail or {})
        self.cause = cause
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.message!r}, code={self.code!r})"

    def log_context(self) -> dict[str, Any]:
        """Key/value pairs for a structured log event about this error."""
        context: dict[str, Any] = {"error_code": self.code, "error": self.message}
        context.update(self.detail)
        return context

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "detail": self.detail,
        }
        if self.cause is not None:
            payload["cause"] = repr(self.cause)
        return payload

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False, default=str)


def error_log_context(exc: BaseException) -> dict[str, Any]:
    """:meth:`BaseError.log_context` for our errors, ``repr`` for anything else."""
    if isinstance(exc, BaseError):
        return exc.log_context()
    return {"error": repr(exc)}


__all__ = ["BaseError", "error_log_context"]
