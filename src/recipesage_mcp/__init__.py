"""An MCP server exposing RecipeSage recipes, shopping lists and meal plans for multiple accounts."""

from recipesage_mcp.accounts import AccountConfig, AccountInfo, AccountRegistry
from recipesage_mcp.config import Settings
from recipesage_mcp.exceptions import (
    AccountNotFoundError,
    AuthenticationError,
    ConfigError,
    NoDefaultAccountError,
    UpstreamError,
)
from recipesage_mcp.sessions import Session, SessionCache
from recipesage_mcp.upstream import ApiClient, HttpApiClient

__version__ = "0.1.0"

__all__ = [
    "AccountConfig",
    "AccountInfo",
    "AccountNotFoundError",
    "AccountRegistry",
    "ApiClient",
    "AuthenticationError",
    "ConfigError",
    "HttpApiClient",
    "NoDefaultAccountError",
    "Session",
    "SessionCache",
    "Settings",
    "UpstreamError",
]
