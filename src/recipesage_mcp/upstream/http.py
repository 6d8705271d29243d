"""HTTP client bound to one authenticated RecipeSage session."""

from collections.abc import Callable
from typing import Any

import httpx
import structlog
from pydantic import SecretStr

from recipesage_mcp.exceptions import UpstreamError
from recipesage_mcp.upstream.base import ApiClient, Query

logger = structlog.get_logger()

TOKEN_PARAM = "token"


def extract_error_message(response: httpx.Response) -> str:
    """Pull a human-readable error message out of a failed response.

    Understands ``{"error": {"message": ...}}``, ``{"message": ...}`` and
    ``{"error": "..."}`` bodies. Falls back to the HTTP reason phrase.
    """
    fallback = response.reason_phrase or f"HTTP {response.status_code}"
    try:
        payload = response.json()
    except ValueError:
        return fallback

    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and isinstance(error.get("message"), str):
            return error["message"]
        if isinstance(payload.get("message"), str):
            return payload["message"]
        if isinstance(error, str):
            return error
    return fallback


class HttpApiClient(ApiClient):
    """ApiClient that sends requests through a shared httpx.AsyncClient.

    The session token is attached as the ``token`` query parameter on every
    request. The httpx client is owned by the SessionCache; this object only
    borrows it, so dropping a bound client never closes connections.
    """

    def __init__(
        self,
        http: httpx.AsyncClient,
        token: SecretStr,
        *,
        account_id: str,
        on_unauthorized: Callable[[], None] | None = None,
    ) -> None:
        """Initialize the bound client.

        Args:
            http: Shared async HTTP client with the API base URL configured.
            token: Session token from the login exchange.
            account_id: Account the token belongs to (used for logging only).
            on_unauthorized: Called when the service answers 401, so the owner
                can drop the stale session.
        """
        self._http = http
        self._token = token
        self.account_id = account_id
        self._on_unauthorized = on_unauthorized

    @property
    def token(self) -> str:
        return self._token.get_secret_value()

    async def get(self, path: str, *, query: Query | None = None) -> Any:
        return await self._request("GET", path, query=query)

    async def post(self, path: str, body: Any = None, *, query: Query | None = None) -> Any:
        return await self._request("POST", path, body, query=query)

    async def put(self, path: str, body: Any = None, *, query: Query | None = None) -> Any:
        return await self._request("PUT", path, body, query=query)

    async def delete(self, path: str, body: Any = None, *, query: Query | None = None) -> Any:
        return await self._request("DELETE", path, body, query=query)

    async def _request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        query: Query | None = None,
    ) -> Any:
        params = dict(query or {})
        params[TOKEN_PARAM] = self.token

        response = await self._http.request(
            method,
            path,
            params=params,
            json=body if body is not None and method != "GET" else None,
        )
        logger.debug(
            "Upstream request",
            account=self.account_id,
            method=method,
            path=path,
            status=response.status_code,
        )

        if not response.is_success:
            message = extract_error_message(response)
            if response.status_code == httpx.codes.UNAUTHORIZED and self._on_unauthorized:
                logger.info("Session rejected by upstream", account=self.account_id)
                self._on_unauthorized()
            raise UpstreamError(response.status_code, message)

        if not response.content:
            return {}
        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(
                response.status_code, f"Malformed response body from {method} {path}"
            ) from e
