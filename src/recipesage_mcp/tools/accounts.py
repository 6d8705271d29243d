"""Account MCP tools."""

from pydantic import Field

from recipesage_mcp.accounts.registry import AccountRegistry
from recipesage_mcp.sessions import SessionCache
from recipesage_mcp.tools.models import ToolInput, ToolResult, success
from recipesage_mcp.tools.registry import register_tool


class ListAccountsParams(ToolInput):
    pass


class SetDefaultAccountParams(ToolInput):
    account_id: str = Field(
        ..., alias="accountId", min_length=1, description="Account ID to set as default"
    )


@register_tool(ListAccountsParams)
async def list_accounts(
    params: ListAccountsParams,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """List all configured Recipe Sage accounts.

    Use this to discover which account IDs can be passed to the other tools.
    Passwords are never included.
    """
    return success(accounts=[info.model_dump() for info in accounts.list_accounts()])


@register_tool(SetDefaultAccountParams)
async def set_default_account(
    params: SetDefaultAccountParams,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """Change the default Recipe Sage account.

    The change lasts until the server restarts; the config file is not modified.
    """
    accounts.set_default(params.account_id)
    return success(default=params.account_id)
