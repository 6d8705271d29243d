"""Tool registry for decorator-based registration."""

import inspect
from collections.abc import Awaitable, Callable, Mapping
from functools import wraps
from typing import Any

from mcp.types import Tool
from pydantic import BaseModel, ConfigDict

from recipesage_mcp.accounts.registry import AccountRegistry
from recipesage_mcp.sessions import SessionCache
from recipesage_mcp.tools._error_handler import handle_tool_errors
from recipesage_mcp.tools.models import ErrorKind, ToolInput, ToolResult, failure

ToolFunction = Callable[..., Awaitable[ToolResult]]


class ToolDefinition(BaseModel):
    """A registered tool: its name, description, parameter model and implementation."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    description: str
    params_model: type[ToolInput]
    func: Any

    def to_mcp_tool(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.params_model.model_json_schema(by_alias=True),
        )


# Global registry of tool definitions
_tool_registry: dict[str, ToolDefinition] = {}


def _description_from_doc(func: Callable[..., Any]) -> str:
    doc = inspect.getdoc(func) or ""
    return doc.split("\n\n", 1)[0].replace("\n", " ").strip()


def register_tool(
    params_model: type[ToolInput],
    *,
    name: str | None = None,
) -> Callable[[ToolFunction], ToolFunction]:
    """Decorator to register a tool function in the global registry.

    The decorated function receives validated parameters and always returns an
    envelope: raw argument mappings are validated against ``params_model`` and
    every failure is converted by ``handle_tool_errors``.

    The tool description is the first paragraph of the function's docstring.

    Usage:
        @register_tool(RecipeIdParams)
        async def get_recipe(params, accounts, sessions) -> ToolResult:
            ...
    """

    def decorator(func: ToolFunction) -> ToolFunction:
        @handle_tool_errors
        @wraps(func)
        async def wrapper(
            params: ToolInput | Mapping[str, Any] | None,
            accounts: AccountRegistry,
            sessions: SessionCache,
        ) -> ToolResult:
            if not isinstance(params, params_model):
                params = params_model.model_validate(dict(params or {}))
            return await func(params, accounts, sessions)

        tool_name = name or func.__name__
        _tool_registry[tool_name] = ToolDefinition(
            name=tool_name,
            description=_description_from_doc(func),
            params_model=params_model,
            func=wrapper,
        )
        return wrapper

    return decorator


def get_all_tools() -> list[Tool]:
    """Get MCP Tool definitions for all registered tools."""
    return [definition.to_mcp_tool() for definition in _tool_registry.values()]


async def execute_tool(
    name: str,
    arguments: Mapping[str, Any] | None,
    accounts: AccountRegistry,
    sessions: SessionCache,
) -> ToolResult:
    """Execute a registered tool by name.

    Args:
        name: The tool name to execute
        arguments: The raw tool arguments
        accounts: Account registry passed to the tool
        sessions: Session cache passed to the tool

    Returns:
        The tool's result envelope. Unknown tool names produce a Validation failure.
    """
    definition = _tool_registry.get(name)
    if definition is None:
        return failure(ErrorKind.VALIDATION, f"Unknown tool: {name}")
    result: ToolResult = await definition.func(arguments, accounts, sessions)
    return result


def get_tool_names() -> list[str]:
    """Get list of all registered tool names."""
    return list(_tool_registry.keys())
