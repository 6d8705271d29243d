"""Per-account cache of authenticated RecipeSage sessions."""

import asyncio
from types import TracebackType

import httpx
import structlog
from pydantic import BaseModel, ConfigDict, SecretStr

from recipesage_mcp.accounts.config import AccountConfig
from recipesage_mcp.defaults import DEFAULT_API_URL, DEFAULT_LOGIN_PATH, DEFAULT_REQUEST_TIMEOUT
from recipesage_mcp.upstream.auth import authenticate
from recipesage_mcp.upstream.base import ApiClient
from recipesage_mcp.upstream.http import HttpApiClient

logger = structlog.get_logger()


class Session(BaseModel):
    """Authenticated session for one account: its token and the client bound to it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    account_id: str
    token: SecretStr
    client: ApiClient


class SessionCache:
    """Hands out authenticated clients, logging in at most once per account.

    Sessions are created lazily on first use and kept until ``invalidate`` is
    called or the cache is closed. Concurrent first uses of the same account
    share one login attempt. All bound clients share a single httpx
    connection pool owned by the cache.
    """

    def __init__(
        self,
        api_url: str = DEFAULT_API_URL,
        login_path: str = DEFAULT_LOGIN_PATH,
        *,
        timeout: float | None = DEFAULT_REQUEST_TIMEOUT,
        http: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            api_url: Base URL of the RecipeSage API.
            login_path: Path of the login endpoint.
            timeout: Default request timeout in seconds for the shared HTTP client.
            http: Pre-built HTTP client to use instead of creating one. The
                cache closes it on ``aclose`` either way.
        """
        self._http = http or httpx.AsyncClient(
            base_url=api_url,
            timeout=timeout,
            headers={"Content-Type": "application/json"},
        )
        self._login_path = login_path
        self._sessions: dict[str, Session] = {}
        self._pending: dict[str, asyncio.Task[Session]] = {}

    async def get_session(self, account: AccountConfig) -> Session:
        """Return the cached session for an account, logging in if there is none.

        Args:
            account: A resolved account from the AccountRegistry.

        Raises:
            AuthenticationError: If the login exchange fails. Nothing is cached.
        """
        session = self._sessions.get(account.id)
        if session is not None:
            return session

        pending = self._pending.get(account.id)
        if pending is None:
            pending = asyncio.ensure_future(self._login(account))
            self._pending[account.id] = pending
        else:
            logger.debug("Waiting for in-flight login", account=account.id)

        # Shield so one cancelled caller does not abort the login for the others
        return await asyncio.shield(pending)

    async def get_client(self, account: AccountConfig) -> ApiClient:
        """Return the bound client for an account, logging in if needed."""
        session = await self.get_session(account)
        return session.client

    def invalidate(self, account_id: str | None = None) -> None:
        """Drop the cached session for one account, or for all accounts.

        Does not contact the service. A login still in flight for a dropped
        account completes for its waiters but is not cached.
        """
        if account_id is None:
            self._sessions.clear()
            self._pending.clear()
            logger.info("Invalidated all sessions")
            return

        self._sessions.pop(account_id, None)
        self._pending.pop(account_id, None)
        logger.info("Invalidated session", account=account_id)

    def is_cached(self, account_id: str) -> bool:
        return account_id in self._sessions

    async def aclose(self) -> None:
        """Drop every session and close the shared HTTP client."""
        self.invalidate()
        await self._http.aclose()

    async def __aenter__(self) -> "SessionCache":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def _login(self, account: AccountConfig) -> Session:
        task = asyncio.current_task()
        try:
            token = await authenticate(self._http, account, self._login_path)
            client = HttpApiClient(
                self._http,
                token,
                account_id=account.id,
                on_unauthorized=lambda: self._drop(account.id, client),
            )
            session = Session(account_id=account.id, token=token, client=client)

            if self._pending.get(account.id) is task:
                self._sessions[account.id] = session
            return session
        finally:
            if self._pending.get(account.id) is task:
                del self._pending[account.id]

    def _drop(self, account_id: str, client: ApiClient) -> None:
        # Only drop the session that saw the 401, not a newer one
        session = self._sessions.get(account_id)
        if session is not None and session.client is client:
            del self._sessions[account_id]
            logger.info("Dropped rejected session", account=account_id)
