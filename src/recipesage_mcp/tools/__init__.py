"""Tools registry with decorator-based registration."""

# isort: skip_file

from recipesage_mcp.tools.registry import (
    ToolDefinition,
    execute_tool,
    get_all_tools,
    get_tool_names,
    register_tool,
)

# Import tool modules to trigger registration via decorators
# These must be imported after registry to avoid circular imports
from recipesage_mcp.tools import recipes as _recipes  # noqa: F401
from recipesage_mcp.tools import shopping as _shopping  # noqa: F401
from recipesage_mcp.tools import meals as _meals  # noqa: F401
from recipesage_mcp.tools import accounts as _accounts  # noqa: F401

__all__ = [
    "ToolDefinition",
    "execute_tool",
    "get_all_tools",
    "get_tool_names",
    "register_tool",
]
