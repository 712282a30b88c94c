"""Domain errors – invalid cursor input and unsatisfiable lookups."""

from __future__ import annotations

from typing import Any

from schema_cursors.kernel.errors.base import BaseError


class DomainError(BaseError):
    """Raised when a cursor rule is violated by caller input."""

    default_code = "domain_error"


class ValidationError(DomainError):
    """Input value does not meet validation rules.

    ``errors`` is a list of field-level validation failures.
    """

    default_code = "validation_error"

    def __init__(
        self,
        message: str,
        *,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(message, **kwargs)
        self.errors: list[dict[str, Any]] = errors or []

    def to_dict(self) -> dict[str, Any]:
        base = super().to_dict()
        base["errors"] = self.errors
        return base


class NotFoundError(DomainError):
    """A named thing the cursor needs does not exist."""

    default_code = "not_found"

    def __init__(
        self,
        resource: str,
        identifier: Any = None,
        *,
        message: str | None = None,
        **kwargs: Any,
    ) -> None:
        msg = f"{resource} not found"
        if identifier is not None:
            msg = f"{resource} {identifier!r} not found"
        super().__init__(message or msg, **kwargs)
        self.resource = resource
        self.identifier = identifier


class LinkNotFoundError(NotFoundError):
    """No link relation on the schema can serve page requests."""

    default_code = "link_not_found"

    def __init__(self, candidates: list[str], **kwargs: Any) -> None:
        super().__init__(
            "Link",
            " | ".join(candidates),
            message=(
                "Unable to find a link for this cursor to fetch any pages "
                f"(tried: {', '.join(candidates)})"
            ),
            **kwargs,
        )
        self.candidates = list(candidates)
        self.detail.update(candidates=self.candidates)


class ColumnNotFoundError(NotFoundError):
    """The cursor has no column with the requested name."""

    default_code = "column_not_found"

    def __init__(self, column: str, **kwargs: Any) -> None:
        super().__init__("Column", column, **kwargs)
        self.column = column
        self.detail.update(column=column)


class InvariantViolationError(DomainError):
    """A cursor invariant would be broken by the requested change."""

    default_code = "invariant_violation"


class ColumnNotSupportedError(InvariantViolationError):
    """A column was used for an operation its definition does not allow."""

    default_code = "column_not_supported"

    def __init__(self, column: str, operation: str, **kwargs: Any) -> None:
        super().__init__(
            f'Unable to {operation} for column "{column}", it says it cant be {operation}ed on.',
            **kwargs,
        )
        self.column = column
        self.operation = operation
        self.detail.update(column=column, operation=operation)


__all__ = [
    "ColumnNotFoundError",
    "ColumnNotSupportedError",
    "DomainError",
    "InvariantViolationError",
    "LinkNotFoundError",
    "NotFoundError",
    "ValidationError",
]
