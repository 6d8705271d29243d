"""Account management module for multi-account support."""

from recipesage_mcp.accounts.config import AccountConfig, AccountInfo, validate_account_records
from recipesage_mcp.accounts.registry import AccountRegistry

__all__ = [
    "AccountConfig",
    "AccountInfo",
    "AccountRegistry",
    "validate_account_records",
]
