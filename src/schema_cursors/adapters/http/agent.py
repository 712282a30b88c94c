"""HTTP adapter – HttpxSchemaAgent."""
from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, Final

import httpx

from schema_cursors.cursors.ports import AgentResponse, LinkDescriptor, Schema
from schema_cursors.kernel.errors import ExternalServiceError, TimeoutError as AgentTimeoutError
from schema_cursors.observability.logging import get_logger

logger = get_logger(__name__)

_PLACEHOLDER: Final = re.compile(r"\{([^{}]+)\}")


def expand_href(href: str, params: dict[str, Any]) -> str:
    """Substitute ``{name}`` placeholders in *href*, consuming those params."""

    def _replace(match: re.Match[str]) -> str:
        name = match.group(1)
        if name not in params:
            raise ExternalServiceError(service=href, message=f"Missing value for link placeholder {{{name}}}")
        return str(params.pop(name))

    return _PLACEHOLDER.sub(_replace, href)


class HttpxSchemaAgent:
    """Thin async httpx agent: link + params in, decoded body + headers out.

    Remaining params go on the query string; *body* (when given) is sent as
    JSON. Retries, auth and pooling policy belong to the injected client.
    """

    def __init__(
        self,
        schema: Schema,
        base_url: str = "",
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
        **kwargs: Any,
    ) -> None:
        self._schema = schema
        self._client = client or httpx.AsyncClient(base_url=base_url, timeout=timeout, **kwargs)

    @property
    def schema(self) -> Schema:
        return self._schema

    async def __aenter__(self) -> "HttpxSchemaAgent":
        await self._client.__aenter__()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self._client.__aexit__(*args)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def execute(
        self,
        link: LinkDescriptor,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> AgentResponse:
        query = dict(params or {})
        url = expand_href(link.href, query)
        method = link.method.upper()
        request_kwargs: dict[str, Any] = {"params": query}
        if body is not None:
            request_kwargs["json"] = body
        try:
            response = await self._client.request(method, url, **request_kwargs)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise AgentTimeoutError(f"HTTP request timed out: {method} {url}", cause=exc) from exc
        except httpx.HTTPStatusError as exc:
            raise ExternalServiceError(
                service=url,
                message=f"HTTP {exc.response.status_code} from {method} {url}",
                status_code=exc.response.status_code,
                cause=exc,
            ) from exc
        except httpx.HTTPError as exc:
            raise ExternalServiceError(service=url, message=str(exc), cause=exc) from exc

        logger.debug("agent.response", method=method, url=url, status=response.status_code, rel=link.rel)
        return AgentResponse(body=self._decode(response), headers=response.headers)

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        if not response.content:
            return None
        if "json" in response.headers.get("content-type", ""):
            try:
                return response.json()
            except ValueError as exc:
                raise ExternalServiceError(
                    service=str(response.url),
                    message=f"Invalid JSON body from {response.url}",
                    status_code=response.status_code,
                    cause=exc,
                ) from exc
        return response.text


__all__ = ["HttpxSchemaAgent", "expand_href"]
