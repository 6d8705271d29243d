"""Shared fixtures: account records and an in-memory RecipeSage API."""

import asyncio
import json
from collections.abc import AsyncIterator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio

from recipesage_mcp.accounts.registry import AccountRegistry
from recipesage_mcp.defaults import DEFAULT_LOGIN_PATH
from recipesage_mcp.sessions import SessionCache

API_URL = "https://api.recipesage.test"

Responder = Callable[[httpx.Request], httpx.Response]


class FakeRecipeSage:
    """Stand-in for the RecipeSage API, served through httpx.MockTransport.

    Logins succeed for known email/password pairs and return a tRPC-shaped
    token. Other requests are answered from routes registered with ``route``;
    anything unregistered gets a 404.
    """

    def __init__(self) -> None:
        self.credentials = {
            "me@example.com": ("pw1", "tok1"),
            "family@example.com": ("pw2", "tok2"),
        }
        self.logins: list[str] = []
        self.requests: list[httpx.Request] = []
        self.login_delay = 0.0
        self._routes: dict[tuple[str, str], Responder] = {}

    def route(
        self,
        method: str,
        path: str,
        status_code: int = 200,
        json_body: Any = None,
    ) -> None:
        def respond(request: httpx.Request) -> httpx.Response:
            if json_body is None:
                return httpx.Response(status_code)
            return httpx.Response(status_code, json=json_body)

        self._routes[(method, path)] = respond

    def requests_to(self, method: str, path: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.method == method and r.url.path == path]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.url.path == DEFAULT_LOGIN_PATH:
            body = json.loads(request.content)
            self.logins.append(body["email"])
            if self.login_delay:
                await asyncio.sleep(self.login_delay)
            password, token = self.credentials.get(body["email"], (None, None))
            if password is None or body["password"] != password:
                return httpx.Response(401, json={"error": {"message": "Invalid credentials"}})
            return httpx.Response(200, json={"result": {"data": {"token": token}}})

        respond = self._routes.get((request.method, request.url.path))
        if respond is None:
            return httpx.Response(404, json={"message": "Not found"})
        return respond(request)


@pytest.fixture
def account_records() -> list[dict[str, Any]]:
    return [
        {"id": "personal", "email": "me@example.com", "password": "pw1", "default": True},
        {"id": "family", "email": "family@example.com", "password": "pw2"},
    ]


@pytest.fixture
def registry(account_records: list[dict[str, Any]]) -> AccountRegistry:
    return AccountRegistry(account_records)


@pytest.fixture
def fake_api() -> FakeRecipeSage:
    return FakeRecipeSage()


@pytest_asyncio.fixture
async def sessions(fake_api: FakeRecipeSage) -> AsyncIterator[SessionCache]:
    http = httpx.AsyncClient(base_url=API_URL, transport=httpx.MockTransport(fake_api.handler))
    async with SessionCache(http=http) as cache:
        yield cache
