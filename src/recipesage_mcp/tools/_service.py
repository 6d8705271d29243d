"""Shared client lookup helper for tools."""

from recipesage_mcp.accounts.registry import AccountRegistry
from recipesage_mcp.sessions import SessionCache
from recipesage_mcp.upstream.base import ApiClient


async def get_client(
    account_id: str | None,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ApiClient:
    """Resolve an account and return its authenticated client.

    Args:
        account_id: Account ID from the tool call, or None for the default.
        accounts: Registry to resolve the account against.
        sessions: Session cache that supplies the client.

    Raises:
        AccountNotFoundError: If the account ID is not found.
        NoDefaultAccountError: If no ID was given and no default exists.
        AuthenticationError: If logging in to the account fails.
    """
    account = accounts.resolve(account_id)
    return await sessions.get_client(account)
