"""Clients for the upstream RecipeSage API."""

from recipesage_mcp.upstream.auth import authenticate, extract_token
from recipesage_mcp.upstream.base import ApiClient
from recipesage_mcp.upstream.http import HttpApiClient

__all__ = ["ApiClient", "HttpApiClient", "authenticate", "extract_token"]
