"""Testing fakes – InMemoryCollectionAgent."""
from __future__ import annotations

import asyncio
import math
from collections.abc import Callable, Mapping, Sequence
from typing import Any

from schema_cursors.adapters.http.schema import StaticSchema
from schema_cursors.cursors.ports import AgentResponse, LinkDescriptor

Envelope = Callable[[list[Any], int, int], AgentResponse]


def meta_envelope(items: list[Any], count: int, pages: int) -> AgentResponse:
    """``{"data": [...], "meta": {"total_count": n, "num_pages": p}}``"""
    return AgentResponse(body={"data": items, "meta": {"total_count": count, "num_pages": pages}})


class InMemoryCollectionAgent:
    """Serve *items* page by page the way a paginated endpoint would.

    Reads the ``page``/``limit`` request params (and ``search`` when present),
    records every call in :attr:`calls`, and can be told to fail
    (:attr:`fail_with`) or to hold a page until its gate is released
    (:meth:`hold`).
    """

    def __init__(
        self,
        items: Sequence[Any],
        *,
        links: Sequence[LinkDescriptor] = (LinkDescriptor(rel="list", href="/items"),),
        envelope: Envelope = meta_envelope,
        search_param: str = "search",
    ) -> None:
        self.items = list(items)
        self._schema = StaticSchema(links)
        self._envelope = envelope
        self._search_param = search_param
        self._gates: dict[int, asyncio.Event] = {}
        self.calls: list[dict[str, Any]] = []
        self.fail_with: BaseException | None = None

    @property
    def schema(self) -> StaticSchema:
        return self._schema

    @property
    def pages_requested(self) -> list[int]:
        return [call["page"] for call in self.calls]

    def hold(self, page: int) -> asyncio.Event:
        """Block responses for *page* until the returned event is set."""
        gate = self._gates[page] = asyncio.Event()
        return gate

    async def execute(
        self,
        link: LinkDescriptor,
        body: Any = None,  # noqa: ARG002
        params: Mapping[str, Any] | None = None,
    ) -> AgentResponse:
        query = dict(params or {})
        self.calls.append(query)
        page, limit = int(query["page"]), int(query["limit"])
        gate = self._gates.get(page)
        if gate is not None:
            await gate.wait()
        if self.fail_with is not None:
            raise self.fail_with
        terms = query.get(self._search_param)
        source = [i for i in self.items if str(terms).lower() in str(i).lower()] if terms else self.items
        chunk = source[(page - 1) * limit : page * limit]
        pages = max(1, math.ceil(len(source) / limit))
        return self._envelope(chunk, len(source), pages)


__all__ = ["InMemoryCollectionAgent", "meta_envelope"]
