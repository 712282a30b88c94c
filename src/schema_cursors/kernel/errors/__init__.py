"""Kernel error hierarchy – public re-export surface.

Hierarchy::

    BaseError
    ├── DomainError              (domain.py)
    │   ├── ValidationError
    │   ├── NotFoundError
    │   │   ├── LinkNotFoundError
    │   │   └── ColumnNotFoundError
    │   └── InvariantViolationError
    │       └── ColumnNotSupportedError
    ├── ApplicationError         (application.py)
    │   └── PageOutOfRangeError
    └── InfrastructureError      (infrastructure.py)
        ├── TimeoutError
        └── ExternalServiceError
"""

from schema_cursors.kernel.errors.application import ApplicationError, PageOutOfRangeError
from schema_cursors.kernel.errors.base import BaseError, error_log_context
from schema_cursors.kernel.errors.domain import (
    ColumnNotFoundError,
    ColumnNotSupportedError,
    DomainError,
    InvariantViolationError,
    LinkNotFoundError,
    NotFoundError,
    ValidationError,
)
from schema_cursors.kernel.errors.infrastructure import (
    ExternalServiceError,
    InfrastructureError,
    TimeoutError,
)

__all__ = [
    "ApplicationError",
    "BaseError",
    "ColumnNotFoundError",
    "ColumnNotSupportedError",
    "DomainError",
    "ExternalServiceError",
    "InfrastructureError",
    "InvariantViolationError",
    "LinkNotFoundError",
    "NotFoundError",
    "PageOutOfRangeError",
    "TimeoutError",
    "ValidationError",
    "error_log_context",
]
