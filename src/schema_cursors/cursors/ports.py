"""Cursor ports – the two narrow contracts consumed from the agent layer."""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable


@dataclass(frozen=True)
class LinkDescriptor:
    """A hyperlink exposed by a resource schema."""

    rel: str
    href: str
    method: str = "GET"
    title: str | None = None


@dataclass(frozen=True)
class AgentResponse:
    """Decoded response handed back by :meth:`Agent.execute`."""

    body: Any = None
    headers: Mapping[str, Any] = field(default_factory=dict)


@runtime_checkable
class Schema(Protocol):
    """Link lookup surface of a hypermedia resource schema."""

    def get_link(self, name: str) -> LinkDescriptor | None: ...
    def get_first_link(self, candidates: Sequence[str]) -> LinkDescriptor | None: ...


@runtime_checkable
class Agent(Protocol):
    """Turns a link plus parameters into a request and returns the response."""

    @property
    def schema(self) -> Schema: ...

    async def execute(
        self,
        link: LinkDescriptor,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> AgentResponse: ...


__all__ = ["Agent", "AgentResponse", "LinkDescriptor", "Schema"]
