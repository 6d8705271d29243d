"""Shopping list MCP tools."""

from urllib.parse import quote

from pydantic import Field, field_validator

from recipesage_mcp.accounts.registry import AccountRegistry
from recipesage_mcp.sessions import SessionCache
from recipesage_mcp.tools._service import get_client
from recipesage_mcp.tools.models import ToolParams, ToolResult, success
from recipesage_mcp.tools.registry import register_tool


def list_path(list_id: str) -> str:
    return f"/shoppingLists/{quote(list_id, safe='')}"


class ListShoppingListsParams(ToolParams):
    pass


class ShoppingListIdParams(ToolParams):
    list_id: str = Field(..., alias="listId", min_length=1, description="Shopping list ID")


class CreateShoppingListParams(ToolParams):
    title: str = Field(..., min_length=1, description="Shopping list title")


class AddToShoppingListParams(ShoppingListIdParams):
    items: list[str] = Field(..., min_length=1, description="Items to add")

    @field_validator("items")
    @classmethod
    def _reject_blank_items(cls, v: list[str]) -> list[str]:
        if any(not item.strip() for item in v):
            raise ValueError("items must not contain empty entries")
        return v


class RemoveFromShoppingListParams(ShoppingListIdParams):
    item_id: str = Field(..., alias="itemId", min_length=1, description="Item ID to remove")


@register_tool(ListShoppingListsParams)
async def list_shopping_lists(
    params: ListShoppingListsParams,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """Get all shopping lists."""
    client = await get_client(params.account, accounts, sessions)
    lists = await client.get("/shoppingLists")
    return success(lists=lists)


@register_tool(ShoppingListIdParams)
async def get_shopping_list(
    params: ShoppingListIdParams,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """Get a shopping list with its items."""
    client = await get_client(params.account, accounts, sessions)
    shopping_list = await client.get(list_path(params.list_id))
    return success(list=shopping_list)


@register_tool(CreateShoppingListParams)
async def create_shopping_list(
    params: CreateShoppingListParams,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """Create a new shopping list."""
    client = await get_client(params.account, accounts, sessions)
    shopping_list = await client.post(
        "/shoppingLists", {"title": params.title, "collaborators": []}
    )
    return success(list=shopping_list)


@register_tool(AddToShoppingListParams)
async def add_to_shopping_list(
    params: AddToShoppingListParams,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """Add items to a shopping list."""
    client = await get_client(params.account, accounts, sessions)
    await client.post(
        list_path(params.list_id),
        {"items": [{"title": item} for item in params.items]},
    )
    return success(listId=params.list_id, added=params.items)


@register_tool(RemoveFromShoppingListParams)
async def remove_from_shopping_list(
    params: RemoveFromShoppingListParams,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """Remove an item from a shopping list."""
    client = await get_client(params.account, accounts, sessions)
    await client.delete(f"{list_path(params.list_id)}/items", query={"itemIds": params.item_id})
    return success(listId=params.list_id, itemId=params.item_id)


@register_tool(ShoppingListIdParams)
async def delete_shopping_list(
    params: ShoppingListIdParams,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """Delete a shopping list."""
    client = await get_client(params.account, accounts, sessions)
    await client.delete(list_path(params.list_id))
    return success(listId=params.list_id)
