"""Infrastructure errors – agent transport failures."""

from __future__ import annotations

from typing import Any

from schema_cursors.kernel.errors.base import BaseError


class InfrastructureError(BaseError):
    """Transport / I/O failure that is not a cursor rule violation."""

    default_code = "infrastructure_error"


class TimeoutError(InfrastructureError):  # noqa: A001
    """A request to the remote collection exceeded its deadline."""

    default_code = "infrastructure_timeout"


class ExternalServiceError(InfrastructureError):
    """The remote API returned an unexpected response."""

    default_code = "external_service_error"

    def __init__(
        self,
        service: str,
        message: str | None = None,
        *,
        status_code: int | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message or f"External service '{service}' error", **kwargs)
        self.service = service
        self.status_code = status_code
        self.detail.update(service=service)
        if status_code is not None:
            self.detail.update(status_code=status_code)


__all__ = ["ExternalServiceError", "InfrastructureError", "TimeoutError"]
