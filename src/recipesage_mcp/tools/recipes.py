"""Recipe MCP tools."""

from typing import Any
from urllib.parse import quote

from pydantic import Field, field_validator

from recipesage_mcp.accounts.registry import AccountRegistry
from recipesage_mcp.exceptions import InvalidParameterError
from recipesage_mcp.sessions import SessionCache
from recipesage_mcp.tools._service import get_client
from recipesage_mcp.tools.models import ToolParams, ToolResult, success
from recipesage_mcp.tools.registry import register_tool


def recipe_path(recipe_id: str) -> str:
    return f"/recipes/{quote(recipe_id, safe='')}"


class SearchRecipesParams(ToolParams):
    query: str = Field(..., min_length=1, description="Search query (recipe name, ingredients, etc.)")


class RecipeIdParams(ToolParams):
    recipe_id: str = Field(..., alias="recipeId", min_length=1, description="Recipe ID")


class CreateRecipeParams(ToolParams):
    title: str = Field(..., min_length=1, description="Recipe title")
    ingredients: str = Field(..., min_length=1, description="Ingredients (one per line)")
    instructions: str = Field(..., min_length=1, description="Cooking instructions")
    description: str | None = Field(default=None, description="Recipe description")
    source: str | None = Field(default=None, description="Recipe source")
    url: str | None = Field(default=None, description="Source URL")
    yield_: str | None = Field(default=None, alias="yield", description="Serving size")
    active_time: str | None = Field(default=None, alias="activeTime", description="Active cooking time")
    total_time: str | None = Field(default=None, alias="totalTime", description="Total time")
    notes: str | None = Field(default=None, description="Additional notes")

    @field_validator("ingredients", mode="before")
    @classmethod
    def _join_ingredient_list(cls, v: Any) -> Any:
        if isinstance(v, list):
            return "\n".join(str(item) for item in v)
        return v


class UpdateRecipeParams(RecipeIdParams):
    updates: dict[str, Any] = Field(
        ...,
        description="Fields to update (title, description, ingredients, instructions, etc.)",
    )


@register_tool(SearchRecipesParams)
async def search_recipes(
    params: SearchRecipesParams,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """Search for recipes by text query."""
    client = await get_client(params.account, accounts, sessions)
    response = await client.get("/recipes/search", query={"query": params.query})
    recipes = response.get("data", []) if isinstance(response, dict) else response
    return success(recipes=recipes)


@register_tool(RecipeIdParams)
async def get_recipe(
    params: RecipeIdParams,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """Get detailed information about a specific recipe."""
    client = await get_client(params.account, accounts, sessions)
    recipe = await client.get(recipe_path(params.recipe_id))
    return success(recipe=recipe)


@register_tool(CreateRecipeParams)
async def create_recipe(
    params: CreateRecipeParams,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """Create a new recipe."""
    body = params.model_dump(by_alias=True, exclude={"account"}, exclude_none=True)
    body["folder"] = "main"

    client = await get_client(params.account, accounts, sessions)
    recipe = await client.post("/recipes", body)
    return success(recipe=recipe)


@register_tool(UpdateRecipeParams)
async def update_recipe(
    params: UpdateRecipeParams,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """Update an existing recipe.

    Only the fields present in ``updates`` are sent.
    """
    if not params.updates:
        raise InvalidParameterError("updates must contain at least one field")
    if "id" in params.updates:
        raise InvalidParameterError("the recipe id cannot be updated")

    client = await get_client(params.account, accounts, sessions)
    recipe = await client.put(recipe_path(params.recipe_id), params.updates)
    return success(recipe=recipe)


@register_tool(RecipeIdParams)
async def delete_recipe(
    params: RecipeIdParams,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """Delete a recipe."""
    client = await get_client(params.account, accounts, sessions)
    await client.delete(recipe_path(params.recipe_id))
    return success(recipeId=params.recipe_id)
