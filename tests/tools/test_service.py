"""Tests for the shared client lookup helper."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from recipesage_mcp.accounts.registry import AccountRegistry
from recipesage_mcp.exceptions import AccountNotFoundError, NoDefaultAccountError
from recipesage_mcp.tools._service import get_client


def _mock_sessions() -> MagicMock:
    sessions = MagicMock()
    sessions.get_client = AsyncMock(return_value=MagicMock(name="client"))
    return sessions


class TestGetClient:
    @pytest.mark.asyncio
    async def test_resolves_named_account(self, registry: AccountRegistry) -> None:
        sessions = _mock_sessions()

        client = await get_client("family", registry, sessions)

        assert client is sessions.get_client.return_value
        sessions.get_client.assert_awaited_once_with(registry.resolve("family"))

    @pytest.mark.asyncio
    async def test_falls_back_to_default(self, registry: AccountRegistry) -> None:
        sessions = _mock_sessions()

        await get_client(None, registry, sessions)

        sessions.get_client.assert_awaited_once_with(registry.resolve("personal"))

    @pytest.mark.asyncio
    async def test_unknown_account_never_logs_in(self, registry: AccountRegistry) -> None:
        sessions = _mock_sessions()

        with pytest.raises(AccountNotFoundError):
            await get_client("ghost", registry, sessions)

        sessions.get_client.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_default(self) -> None:
        sessions = _mock_sessions()

        with pytest.raises(NoDefaultAccountError):
            await get_client(None, AccountRegistry(), sessions)
