"""Cursor over a paginated hypermedia endpoint.

The cursor asks its agent for the collection link, sends every common
spelling of the page/limit parameters, and reads the response back through a
pagination info extractor (:func:`~schema_cursors.cursors.pagination.normalize`
by default).

Only the most recently issued :meth:`EndpointCursor.select` may change the
cursor: a response that lands after a newer request was issued is returned
to its own caller but otherwise ignored.
"""
from __future__ import annotations

import asyncio
import math
from typing import Any, ClassVar, TypeVar

from schema_cursors.config.settings import CursorSettings
from schema_cursors.cursors.base import BaseCursor, check_page_number
from schema_cursors.cursors.pagination import (
    PaginationInfo,
    PaginationInfoExtractor,
    PaginationRequestGenerator,
    build_page_params,
    normalize,
)
from schema_cursors.cursors.ports import Agent, LinkDescriptor
from schema_cursors.cursors.state import LoadingState
from schema_cursors.kernel.errors import LinkNotFoundError, PageOutOfRangeError, error_log_context
from schema_cursors.observability.events import (
    CursorEvent,
    EventEmitter,
    PageChangeEvent,
    PageErrorEvent,
)
from schema_cursors.observability.logging import get_logger

T = TypeVar("T")

logger = get_logger(__name__)


class EndpointCursor(BaseCursor[T], EventEmitter):
    """Page through the collection behind *link_name* on *agent*'s schema.

    Events (see :class:`~schema_cursors.observability.events.CursorEvent`):
    ``before_page_change`` fires for every request :meth:`select` issues and is
    followed by exactly one ``after_page_change`` or ``error`` unless a newer
    request superseded it. A cancelled request emits neither; the cursor falls
    back to the state it had before that request.
    """

    global_search_term_property: ClassVar[str] = "search"

    def __init__(
        self,
        agent: Agent,
        link_name: str | None = None,
        *,
        limit: int | None = None,
        settings: CursorSettings | None = None,
        search_term_property: str | None = None,
        pagination_info_extractor: PaginationInfoExtractor = normalize,
        pagination_request_generator: PaginationRequestGenerator = build_page_params,
    ) -> None:
        BaseCursor.__init__(self, limit, settings)
        EventEmitter.__init__(self)
        self._agent = agent
        self._link_name = link_name
        if search_term_property is None:
            search_term_property = (
                settings.search_term_property if settings is not None else self.global_search_term_property
            )
        self.search_term_property = search_term_property
        self._extract = pagination_info_extractor
        self._generate = pagination_request_generator
        self._terms: str | None = None
        self._request_token = 0
        self._last_outcome = LoadingState.UNINITIALIZED
        self._page_waiters: set[asyncio.Future[list[T] | None]] = set()
        self.reload_task: asyncio.Task[list[T]] | None = None

    @classmethod
    async def open(
        cls,
        agent: Agent,
        link_name: str | None = None,
        initial_page: int = 1,
        **kwargs: Any,
    ) -> "EndpointCursor[T]":
        """Create a cursor and load *initial_page* before returning it."""
        cursor: EndpointCursor[T] = cls(agent, link_name, **kwargs)
        logger.debug("cursor.initial_page", link=cursor._link_label, page=initial_page)
        await cursor.select(initial_page)
        return cursor

    @property
    def terms(self) -> str | None:
        """Currently active search terms."""
        return self._terms

    @property
    def _link_label(self) -> str:
        return self._link_name or "|".join(self._settings.link_relations)

    # ------------------------------------------------------------------
    # Page changing
    # ------------------------------------------------------------------

    async def next(self) -> list[T]:
        if not self.has_next():
            raise PageOutOfRangeError("This is the last page!", page=self._current, total_pages=self._total_pages)
        return await self.select(self._current + 1)

    async def previous(self) -> list[T]:
        if not self.has_previous():
            raise PageOutOfRangeError("This is the first page!", page=self._current, total_pages=self._total_pages)
        return await self.select(self._current - 1)

    async def refresh(self) -> list[T]:
        return await self.select(self._current, force_reload=True)

    async def search(self, terms: str | None, initial_page: int = 1) -> list[T]:
        """Load *initial_page* with *terms* as the active search."""
        self._terms = terms
        return await self.select(initial_page, force_reload=True)

    async def select(self, page: int, force_reload: bool = False) -> list[T]:
        """Load the 1-indexed *page* and return its items.

        Selecting the page already held is a no-op unless *force_reload*.
        Failures raised by the agent propagate unchanged; the cursor keeps the
        page it had.
        """
        check_page_number(page)
        if page == self._current and not force_reload and self._loading_state.is_settled:
            return self.items

        link = self._resolve_link()
        params = self._page_params(page, self._limit)

        self._request_token += 1
        token = self._request_token
        self._loading_state = LoadingState.LOADING
        self.emit(CursorEvent.BEFORE_PAGE_CHANGE, PageChangeEvent(page=page))

        try:
            response = await self._agent.execute(link, None, params)
            info = self._extract(response)
        except asyncio.CancelledError:
            if token == self._request_token:
                self._loading_state = self._last_outcome
                logger.debug("cursor.fetch_cancelled", link=self._link_label, page=page)
                self._release_page_waiters()
            raise
        except Exception as exc:
            context = {
                **error_log_context(exc),
                "link": self._link_label,
                "page": page,
                "total_pages": self._total_pages,
                "limit": self._limit,
            }
            if token != self._request_token:
                logger.debug("cursor.failure_superseded", **context)
                raise
            self._loading_state = self._last_outcome = LoadingState.ERROR
            logger.warning("cursor.fetch_failed", **context)
            self.emit(CursorEvent.ERROR, PageErrorEvent(page=page, cause=exc))
            raise

        if token != self._request_token:
            logger.debug("cursor.response_superseded", link=self._link_label, page=page)
            return list(info.items or [])

        self._apply(page, info)
        self.emit(CursorEvent.AFTER_PAGE_CHANGE, PageChangeEvent(page=page, items=self.items))
        return self.items

    def _resolve_link(self) -> LinkDescriptor:
        schema = self._agent.schema
        if self._link_name:
            link = schema.get_link(self._link_name)
            candidates = [self._link_name]
        else:
            candidates = list(self._settings.link_relations)
            link = schema.get_first_link(candidates)
        if link is None:
            raise LinkNotFoundError(candidates)
        return link

    def _page_params(self, page: int, limit: int) -> dict[str, Any]:
        params = self._generate(page, limit)
        if self._terms:
            params[self.search_term_property] = self._terms
        return params

    def _apply(self, page: int, info: PaginationInfo[T]) -> None:
        if info.unresolved:
            logger.warning("pagination.unresolved", link=self._link_label, page=page, fields=list(info.unresolved))
        items = list(info.items) if info.items is not None else []
        self._current = page
        self._items = items
        self._total_pages = _page_count(info.total_pages, self._link_label)
        self._count = info.count if info.count is not None else len(items)
        if len(items) > self._limit:
            logger.warning(
                "cursor.page_overflow",
                link=self._link_label,
                returned=len(items),
                limit=self._limit,
            )
        empty = not items and self._count == 0
        self._loading_state = self._last_outcome = LoadingState.EMPTY if empty else LoadingState.READY
        logger.debug("cursor.page_loaded", link=self._link_label, page=page, items=len(items))

    # ------------------------------------------------------------------
    # Whole collection
    # ------------------------------------------------------------------

    async def all(self, limit: int | None = None) -> list[T]:
        """Every item of the collection, in page order.

        The page the cursor already holds is reused rather than requested
        again; when a load is in flight, its result is awaited instead.
        Beware: collections can be very large, check :attr:`count` first.
        """
        logger.debug("cursor.fetch_all", link=self._link_label)
        if limit is not None and check_page_number(limit, "limit") != self._limit:
            return await self._collect(limit, held_page=None, held_items=[])

        while self._loading_state is LoadingState.LOADING:
            logger.debug("cursor.all_waits_for_page", link=self._link_label)
            await self._wait_for_page_change()
        if self._loading_state is LoadingState.UNINITIALIZED:
            await self.select(1)
        elif self._loading_state is LoadingState.ERROR:
            await self.refresh()
        return await self._collect(self._limit, held_page=self._current, held_items=self.items)

    async def _collect(self, limit: int, held_page: int | None, held_items: list[T]) -> list[T]:
        link = self._resolve_link()
        pages: dict[int, list[T]] = {}
        total_pages = self._total_pages
        if held_page is None:
            first = await self._fetch(link, 1, limit)
            pages[1] = list(first.items or [])
            total_pages = _page_count(first.total_pages, self._link_label)
        else:
            pages[held_page] = held_items

        missing = [p for p in range(1, total_pages + 1) if p not in pages]
        fetched = await asyncio.gather(*(self._fetch(link, p, limit) for p in missing))
        for page, info in zip(missing, fetched):
            pages[page] = list(info.items or [])
        return [item for page in sorted(pages) for item in pages[page]]

    async def _fetch(self, link: LinkDescriptor, page: int, limit: int) -> PaginationInfo[T]:
        response = await self._agent.execute(link, None, self._page_params(page, limit))
        return self._extract(response)

    def _wait_for_page_change(self) -> asyncio.Future[list[T] | None]:
        """Settle on the next ``after_page_change`` or ``error``.

        Resolves to ``None`` when the in-flight request is cancelled instead.
        """
        future: asyncio.Future[list[T] | None] = asyncio.get_running_loop().create_future()

        def on_after(event: PageChangeEvent[T]) -> None:
            if not future.done():
                future.set_result(list(event.items or []))

        def on_error(event: PageErrorEvent) -> None:
            if not future.done():
                future.set_exception(event.cause)

        def detach(_: asyncio.Future[list[T] | None]) -> None:
            self.off(CursorEvent.AFTER_PAGE_CHANGE, on_after)
            self.off(CursorEvent.ERROR, on_error)
            self._page_waiters.discard(future)

        self.on(CursorEvent.AFTER_PAGE_CHANGE, on_after)
        self.on(CursorEvent.ERROR, on_error)
        self._page_waiters.add(future)
        future.add_done_callback(detach)
        return future

    def _release_page_waiters(self) -> None:
        for future in list(self._page_waiters):
            if not future.done():
                future.set_result(None)

    # ------------------------------------------------------------------
    # Setter-triggered reloads
    # ------------------------------------------------------------------

    def _reload_for_limit(self) -> None:
        self._schedule(self._current, force_reload=True)

    def _reload_for_current(self, page: int) -> None:
        self._schedule(page, force_reload=False)

    def _schedule(self, page: int, force_reload: bool) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.warning("cursor.reload_without_event_loop", link=self._link_label, page=page)
            return
        task = loop.create_task(self.select(page, force_reload=force_reload))
        task.add_done_callback(_consume_task_error)
        self.reload_task = task


def _page_count(value: int | float | None, link: str) -> int:
    """Page count as a whole number of at least 1; fractions round up."""
    if value is None:
        return 1
    pages = max(1, math.ceil(value))
    if pages != value:
        logger.warning("pagination.page_count_adjusted", link=link, reported=value, used=pages)
    return pages


def _consume_task_error(task: asyncio.Task[Any]) -> None:
    # Failures were already logged and emitted as ``error`` events by select().
    if not task.cancelled():
        task.exception()


__all__ = ["EndpointCursor"]
