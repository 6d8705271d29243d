"""Shared models for MCP tools: parameter base class and result envelope."""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = ["ErrorKind", "ToolInput", "ToolParams", "ToolResult", "failure", "success"]

ToolResult = dict[str, Any]


class ErrorKind(str, Enum):
    """Closed set of error kinds reported in failure envelopes."""

    CONFIG_INVALID = "ConfigInvalid"
    NO_DEFAULT_ACCOUNT = "NoDefaultAccount"
    ACCOUNT_NOT_FOUND = "AccountNotFound"
    AUTHENTICATION = "Authentication"
    VALIDATION = "Validation"
    NOT_FOUND = "NotFound"
    NETWORK = "Network"
    UNKNOWN = "Unknown"


class ToolInput(BaseModel):
    """Base class for tool arguments.

    Arguments use camelCase names on the wire (``recipeId``) and snake_case in
    Python.
    """

    model_config = ConfigDict(populate_by_name=True, extra="forbid", str_strip_whitespace=True)


class ToolParams(ToolInput):
    """Arguments of a tool that runs against one account."""

    account: str | None = Field(
        default=None,
        description="Account ID to use (optional, uses default if not specified)",
    )

    @field_validator("account")
    @classmethod
    def _blank_account_is_default(cls, v: str | None) -> str | None:
        return v or None


def success(**payload: Any) -> ToolResult:
    """Build a success envelope."""
    return {"success": True, **payload}


def failure(kind: ErrorKind, message: str, details: Any = None) -> ToolResult:
    """Build a failure envelope."""
    error: dict[str, Any] = {"kind": kind.value, "message": message}
    if details is not None:
        error["details"] = details
    return {"success": False, "error": error}
