"""Meal planning MCP tools.

RecipeSage stores meals as items of a meal plan. When a call does not name a
plan, the account's first meal plan is used.
"""

import logging
from datetime import date
from typing import Any, Literal
from urllib.parse import quote

from pydantic import Field, model_validator

from recipesage_mcp.accounts.registry import AccountRegistry
from recipesage_mcp.exceptions import ResourceNotFoundError
from recipesage_mcp.sessions import SessionCache
from recipesage_mcp.tools._service import get_client
from recipesage_mcp.tools.models import ToolParams, ToolResult, success
from recipesage_mcp.tools.recipes import recipe_path
from recipesage_mcp.tools.registry import register_tool
from recipesage_mcp.upstream.base import ApiClient

logger = logging.getLogger(__name__)

MealType = Literal["breakfast", "lunch", "dinner", "snack"]


def plan_path(meal_plan_id: str) -> str:
    return f"/mealPlans/{quote(meal_plan_id, safe='')}"


class MealPlanParams(ToolParams):
    meal_plan_id: str | None = Field(
        default=None,
        alias="mealPlanId",
        description="Meal plan ID (optional, uses the account's first meal plan if not specified)",
    )


class GetMealPlanParams(MealPlanParams):
    start_date: date = Field(..., alias="startDate", description="Start date (YYYY-MM-DD)")
    end_date: date = Field(..., alias="endDate", description="End date (YYYY-MM-DD)")

    @model_validator(mode="after")
    def _check_range(self) -> "GetMealPlanParams":
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self


class AddMealToPlanParams(MealPlanParams):
    meal_date: date = Field(..., alias="date", description="Date (YYYY-MM-DD)")
    recipe_id: str = Field(..., alias="recipeId", min_length=1, description="Recipe ID")
    meal_type: MealType = Field(..., alias="mealType", description="Meal type")
    title: str | None = Field(
        default=None,
        description="Title shown in the plan (optional, defaults to the recipe title)",
    )


class RemoveMealFromPlanParams(MealPlanParams):
    meal_id: str = Field(..., alias="mealId", min_length=1, description="Meal plan item ID")


async def _resolve_meal_plan_id(client: ApiClient, meal_plan_id: str | None) -> str:
    if meal_plan_id:
        return meal_plan_id

    plans = await client.get("/mealPlans")
    if isinstance(plans, dict):
        plans = plans.get("data", [])
    if not plans:
        raise ResourceNotFoundError("No meal plan found for this account")
    return str(plans[0]["id"])


def _scheduled_date(item: dict[str, Any]) -> date | None:
    raw = item.get("scheduledDate") or item.get("scheduled")
    if not isinstance(raw, str):
        return None
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        return None


def _to_meal(item: dict[str, Any], scheduled: date) -> dict[str, Any]:
    recipe = item.get("recipe") or {}
    return {
        "id": item.get("id"),
        "date": scheduled.isoformat(),
        "mealType": item.get("meal"),
        "recipeId": item.get("recipeId") or recipe.get("id"),
        "recipeName": item.get("title") or recipe.get("title"),
    }


@register_tool(GetMealPlanParams)
async def get_meal_plan(
    params: GetMealPlanParams,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """Get meal plan for a date range."""
    client = await get_client(params.account, accounts, sessions)
    meal_plan_id = await _resolve_meal_plan_id(client, params.meal_plan_id)
    plan = await client.get(plan_path(meal_plan_id))

    meals = []
    for item in plan.get("items", []) if isinstance(plan, dict) else []:
        scheduled = _scheduled_date(item)
        if scheduled is None:
            logger.debug("Skipping meal plan item without a date (id=%s)", item.get("id"))
            continue
        if params.start_date <= scheduled <= params.end_date:
            meals.append(_to_meal(item, scheduled))

    meals.sort(key=lambda meal: meal["date"])
    return success(mealPlanId=meal_plan_id, meals=meals)


@register_tool(AddMealToPlanParams)
async def add_meal_to_plan(
    params: AddMealToPlanParams,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """Add a meal to the meal plan."""
    client = await get_client(params.account, accounts, sessions)
    meal_plan_id = await _resolve_meal_plan_id(client, params.meal_plan_id)

    title = params.title
    if not title:
        recipe = await client.get(recipe_path(params.recipe_id))
        title = recipe.get("title") if isinstance(recipe, dict) else None
        title = title or "Untitled recipe"

    meal = await client.post(
        plan_path(meal_plan_id),
        {
            "title": title,
            "recipeId": params.recipe_id,
            "meal": params.meal_type,
            "scheduled": params.meal_date.isoformat(),
        },
    )
    return success(mealPlanId=meal_plan_id, meal=meal)


@register_tool(RemoveMealFromPlanParams)
async def remove_meal_from_plan(
    params: RemoveMealFromPlanParams,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """Remove a meal from the plan."""
    client = await get_client(params.account, accounts, sessions)
    meal_plan_id = await _resolve_meal_plan_id(client, params.meal_plan_id)
    await client.delete(f"{plan_path(meal_plan_id)}/items", query={"itemIds": params.meal_id})
    return success(mealPlanId=meal_plan_id, mealId=params.meal_id)
