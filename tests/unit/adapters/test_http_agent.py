"""Unit tests – HTTP adapter (httpx agent and static schema)."""
from __future__ import annotations

import asyncio
import json
from typing import Any

import httpx
import pytest
import respx

from schema_cursors.adapters.http import HttpxSchemaAgent, StaticSchema, expand_href
from schema_cursors.cursors import EndpointCursor, LinkDescriptor
from schema_cursors.kernel.errors import ExternalServiceError, TimeoutError, ValidationError

BASE = "http://api.test"

HYPER_SCHEMA = {
    "links": [
        {"rel": "list", "href": "/people"},
        {"rel": "search", "href": "/people/search", "method": "POST", "title": "Search"},
        {"rel": "list", "href": "/ignored"},
    ]
}


def _agent(**kwargs: Any) -> HttpxSchemaAgent:
    return HttpxSchemaAgent(StaticSchema.from_hyper_schema(HYPER_SCHEMA), base_url=BASE, **kwargs)


def _execute(agent: HttpxSchemaAgent, link: LinkDescriptor, body: Any = None, params: Any = None) -> Any:
    async def run() -> Any:
        async with agent:
            return await agent.execute(link, body, params)

    return asyncio.run(run())


# ---------------------------------------------------------------------------
# StaticSchema
# ---------------------------------------------------------------------------


class TestStaticSchema:
    def test_from_hyper_schema(self) -> None:
        schema = StaticSchema.from_hyper_schema(HYPER_SCHEMA)
        search = schema.get_link("search")
        assert search is not None
        assert search.method == "POST"
        assert search.title == "Search"

    def test_first_link_per_relation_wins(self) -> None:
        schema = StaticSchema.from_hyper_schema(HYPER_SCHEMA)
        assert schema.get_link("list").href == "/people"

    def test_get_first_link(self) -> None:
        schema = StaticSchema.from_hyper_schema(HYPER_SCHEMA)
        assert schema.get_first_link(["collection", "search", "list"]).rel == "search"
        assert schema.get_first_link(["collection"]) is None

    def test_contains(self) -> None:
        schema = StaticSchema([LinkDescriptor(rel="list", href="/")])
        assert "list" in schema
        assert "index" not in schema

    def test_invalid_entry(self) -> None:
        with pytest.raises(ValidationError):
            StaticSchema.from_hyper_schema({"links": [{"rel": "list"}]})


# ---------------------------------------------------------------------------
# expand_href
# ---------------------------------------------------------------------------


class TestExpandHref:
    def test_placeholders_consume_params(self) -> None:
        params: dict[str, Any] = {"id": 7, "page": 1}
        assert expand_href("/users/{id}/items", params) == "/users/7/items"
        assert params == {"page": 1}

    def test_href_without_placeholders(self) -> None:
        params = {"page": 1}
        assert expand_href("/items", params) == "/items"
        assert params == {"page": 1}

    def test_missing_value(self) -> None:
        with pytest.raises(ExternalServiceError, match="id"):
            expand_href("/users/{id}", {})


# ---------------------------------------------------------------------------
# HttpxSchemaAgent.execute
# ---------------------------------------------------------------------------


class TestExecute:
    @respx.mock
    def test_get_sends_query_and_decodes_json(self) -> None:
        route = respx.get(f"{BASE}/people").mock(
            return_value=httpx.Response(200, json={"items": [1, 2]}, headers={"X-Total": "2"})
        )
        agent = _agent()
        response = _execute(agent, agent.schema.get_link("list"), params={"page": 2, "limit": 10})
        assert response.body == {"items": [1, 2]}
        assert response.headers["x-total"] == "2"
        sent = route.calls.last.request
        assert sent.url.params["page"] == "2"
        assert sent.url.params["limit"] == "10"

    @respx.mock
    def test_post_sends_json_body(self) -> None:
        route = respx.post(f"{BASE}/people/search").mock(return_value=httpx.Response(200, json=[]))
        agent = _agent()
        _execute(agent, agent.schema.get_link("search"), body={"name": "Ada"}, params={"page": 1})
        sent = route.calls.last.request
        assert json.loads(sent.content) == {"name": "Ada"}
        assert sent.url.params["page"] == "1"

    @respx.mock
    def test_text_body(self) -> None:
        respx.get(f"{BASE}/people").mock(return_value=httpx.Response(200, text="hello"))
        agent = _agent()
        assert _execute(agent, agent.schema.get_link("list")).body == "hello"

    @respx.mock
    def test_empty_body(self) -> None:
        respx.get(f"{BASE}/people").mock(return_value=httpx.Response(204))
        agent = _agent()
        assert _execute(agent, agent.schema.get_link("list")).body is None

    @respx.mock
    def test_invalid_json(self) -> None:
        respx.get(f"{BASE}/people").mock(
            return_value=httpx.Response(200, content=b"{nope", headers={"content-type": "application/json"})
        )
        agent = _agent()
        with pytest.raises(ExternalServiceError, match="Invalid JSON"):
            _execute(agent, agent.schema.get_link("list"))

    @respx.mock
    def test_status_error(self) -> None:
        respx.get(f"{BASE}/people").mock(return_value=httpx.Response(503))
        agent = _agent()
        with pytest.raises(ExternalServiceError) as exc_info:
            _execute(agent, agent.schema.get_link("list"))
        assert exc_info.value.status_code == 503
        assert isinstance(exc_info.value.__cause__, httpx.HTTPStatusError)

    @respx.mock
    def test_timeout(self) -> None:
        respx.get(f"{BASE}/people").mock(side_effect=httpx.ReadTimeout("slow"))
        agent = _agent()
        with pytest.raises(TimeoutError):
            _execute(agent, agent.schema.get_link("list"))

    @respx.mock
    def test_transport_error(self) -> None:
        respx.get(f"{BASE}/people").mock(side_effect=httpx.ConnectError("refused"))
        agent = _agent()
        with pytest.raises(ExternalServiceError) as exc_info:
            _execute(agent, agent.schema.get_link("list"))
        assert exc_info.value.status_code is None

    @respx.mock
    def test_injected_client(self) -> None:
        respx.get("http://other.test/people").mock(return_value=httpx.Response(200, json={}))
        client = httpx.AsyncClient(base_url="http://other.test")
        agent = HttpxSchemaAgent(StaticSchema.from_hyper_schema(HYPER_SCHEMA), client=client)
        assert _execute(agent, agent.schema.get_link("list")).body == {}


# ---------------------------------------------------------------------------
# EndpointCursor over HTTP
# ---------------------------------------------------------------------------


PEOPLE = [{"id": i, "name": f"person-{i}"} for i in range(1, 24)]


def _people_page(request: httpx.Request) -> httpx.Response:
    page = int(request.url.params["page"])
    per_page = int(request.url.params["per_page"])
    chunk = PEOPLE[(page - 1) * per_page : page * per_page]
    pages = -(-len(PEOPLE) // per_page)
    return httpx.Response(
        200,
        json={"collection": chunk},
        headers={"Total-Count": str(len(PEOPLE)), "Num-Pages": str(pages)},
    )


class TestEndpointCursorOverHttp:
    @respx.mock
    def test_pages_and_counts_from_headers(self) -> None:
        respx.get(f"{BASE}/people").mock(side_effect=_people_page)

        async def run() -> tuple[EndpointCursor, list[Any]]:
            async with _agent() as agent:
                cursor = await EndpointCursor.open(agent, "list", limit=10)
                everything = await cursor.all()
                return cursor, everything

        cursor, everything = asyncio.run(run())
        assert cursor.count == 23
        assert cursor.total_pages == 3
        assert cursor.items == PEOPLE[:10]
        assert everything == PEOPLE

    @respx.mock
    def test_server_error_surfaces(self) -> None:
        respx.get(f"{BASE}/people").mock(return_value=httpx.Response(500))

        async def run() -> EndpointCursor:
            async with _agent() as agent:
                cursor = EndpointCursor(agent, limit=10)
                with pytest.raises(ExternalServiceError):
                    await cursor.select(1)
                return cursor

        cursor = asyncio.run(run())
        assert cursor.loading_state.name == "ERROR"
