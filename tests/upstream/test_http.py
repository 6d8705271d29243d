"""Tests for HttpApiClient."""

import json
from collections.abc import Callable

import httpx
import pytest
from pydantic import SecretStr

from recipesage_mcp.exceptions import UpstreamError
from recipesage_mcp.upstream.http import HttpApiClient, extract_error_message

API_URL = "https://api.recipesage.test"


def _client(
    handler: Callable[[httpx.Request], httpx.Response],
    on_unauthorized: Callable[[], None] | None = None,
) -> HttpApiClient:
    http = httpx.AsyncClient(base_url=API_URL, transport=httpx.MockTransport(handler))
    return HttpApiClient(
        http, SecretStr("tok1"), account_id="personal", on_unauthorized=on_unauthorized
    )


class TestRequests:
    @pytest.mark.asyncio
    async def test_get_attaches_token_and_query(self) -> None:
        """Test the session token rides along with the caller's query."""
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"data": []})

        client = _client(handler)
        result = await client.get("/recipes/search", query={"query": "soup"})

        assert result == {"data": []}
        assert seen[0].method == "GET"
        assert seen[0].url.path == "/recipes/search"
        assert seen[0].url.params["token"] == "tok1"
        assert seen[0].url.params["query"] == "soup"
        assert seen[0].content == b""

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json={"id": "r1"})

        client = _client(handler)
        result = await client.post("/recipes", {"title": "Soup"})

        assert result == {"id": "r1"}
        assert json.loads(seen[0].content) == {"title": "Soup"}
        assert seen[0].url.params["token"] == "tok1"

    @pytest.mark.asyncio
    async def test_put_and_delete(self) -> None:
        methods: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            methods.append(request.method)
            return httpx.Response(200, json={})

        client = _client(handler)
        await client.put("/recipes/r1", {"title": "Stew"})
        await client.delete("/recipes/r1")

        assert methods == ["PUT", "DELETE"]

    @pytest.mark.asyncio
    async def test_empty_body_returns_empty_dict(self) -> None:
        client = _client(lambda request: httpx.Response(200))

        assert await client.delete("/recipes/r1") == {}

    def test_token_property(self) -> None:
        client = _client(lambda request: httpx.Response(200))

        assert client.token == "tok1"


class TestErrors:
    @pytest.mark.asyncio
    async def test_not_found_raises_upstream_error(self) -> None:
        client = _client(
            lambda request: httpx.Response(404, json={"message": "Recipe not found"})
        )

        with pytest.raises(UpstreamError) as exc_info:
            await client.get("/recipes/missing")

        assert exc_info.value.status_code == 404
        assert exc_info.value.message == "Recipe not found"

    @pytest.mark.asyncio
    async def test_unauthorized_notifies_owner(self) -> None:
        """Test a 401 triggers the on_unauthorized callback before raising."""
        calls: list[str] = []
        client = _client(
            lambda request: httpx.Response(401, json={"error": "Session expired"}),
            on_unauthorized=lambda: calls.append("dropped"),
        )

        with pytest.raises(UpstreamError) as exc_info:
            await client.get("/shoppingLists")

        assert exc_info.value.status_code == 401
        assert calls == ["dropped"]

    @pytest.mark.asyncio
    async def test_server_error_does_not_notify_owner(self) -> None:
        calls: list[str] = []
        client = _client(
            lambda request: httpx.Response(500, json={"message": "boom"}),
            on_unauthorized=lambda: calls.append("dropped"),
        )

        with pytest.raises(UpstreamError):
            await client.get("/shoppingLists")

        assert calls == []

    @pytest.mark.asyncio
    async def test_malformed_body(self) -> None:
        client = _client(lambda request: httpx.Response(200, content=b"<html>oops</html>"))

        with pytest.raises(UpstreamError, match="Malformed response body from GET /recipes/r1"):
            await client.get("/recipes/r1")


class TestExtractErrorMessage:
    def test_nested_error_message(self) -> None:
        response = httpx.Response(400, json={"error": {"message": "Bad title"}})

        assert extract_error_message(response) == "Bad title"

    def test_top_level_message(self) -> None:
        response = httpx.Response(400, json={"message": "Bad title"})

        assert extract_error_message(response) == "Bad title"

    def test_error_string(self) -> None:
        response = httpx.Response(400, json={"error": "Bad title"})

        assert extract_error_message(response) == "Bad title"

    def test_falls_back_to_reason_phrase(self) -> None:
        response = httpx.Response(500, content=b"not json")

        assert extract_error_message(response) == "Internal Server Error"
