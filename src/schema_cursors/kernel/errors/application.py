"""Application-layer errors – navigation requests the cursor cannot honour."""

from __future__ import annotations

from typing import Any

from schema_cursors.kernel.errors.base import BaseError


class ApplicationError(BaseError):
    """Cross-cutting cursor usage error."""

    default_code = "application_error"


class PageOutOfRangeError(ApplicationError):
    """``next()`` on the last page or ``previous()`` on the first one."""

    default_code = "page_out_of_range"

    def __init__(self, message: str, *, page: int, total_pages: int, **kwargs: Any) -> None:
        super().__init__(message, **kwargs)
        self.page = page
        self.total_pages = total_pages
        self.detail.update(page=page, total_pages=total_pages)


__all__ = ["ApplicationError", "PageOutOfRangeError"]
