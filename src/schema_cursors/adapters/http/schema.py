"""HTTP adapter – StaticSchema."""
from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from typing import Any

from schema_cursors.cursors.ports import LinkDescriptor
from schema_cursors.kernel.errors import ValidationError


class StaticSchema:
    """Link lookup over a fixed set of links, keyed by relation name."""

    def __init__(self, links: Iterable[LinkDescriptor] = ()) -> None:
        self._links: dict[str, LinkDescriptor] = {}
        for link in links:
            self._links.setdefault(link.rel, link)

    @classmethod
    def from_hyper_schema(cls, document: Mapping[str, Any]) -> "StaticSchema":
        """Read the ``links`` array of a JSON hyper-schema document."""
        links = []
        for entry in document.get("links", []):
            if not isinstance(entry, Mapping) or "rel" not in entry or "href" not in entry:
                raise ValidationError(f"Invalid link entry: {entry!r}")
            links.append(
                LinkDescriptor(
                    rel=entry["rel"],
                    href=entry["href"],
                    method=entry.get("method", "GET"),
                    title=entry.get("title"),
                )
            )
        return cls(links)

    def get_link(self, name: str) -> LinkDescriptor | None:
        return self._links.get(name)

    def get_first_link(self, candidates: Sequence[str]) -> LinkDescriptor | None:
        for name in candidates:
            if name in self._links:
                return self._links[name]
        return None

    def __contains__(self, name: object) -> bool:
        return name in self._links


__all__ = ["StaticSchema"]
