"""Common error handling for MCP tools."""

import logging
from collections.abc import Awaitable, Callable
from functools import wraps
from typing import Any

import httpx
from pydantic import ValidationError

from recipesage_mcp.exceptions import (
    AccountNotFoundError,
    AuthenticationError,
    ConfigError,
    InvalidParameterError,
    NoDefaultAccountError,
    ResourceNotFoundError,
    UpstreamError,
)
from recipesage_mcp.tools.models import ErrorKind, ToolResult, failure

logger = logging.getLogger(__name__)


def _describe_validation_error(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        loc = ".".join(str(part) for part in err.get("loc", ()))
        msg = err.get("msg", "invalid value")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "Invalid parameters: " + "; ".join(parts)


def _is_not_found(error: UpstreamError) -> bool:
    return error.status_code == httpx.codes.NOT_FOUND or "not found" in error.message.lower()


def classify_error(exc: Exception) -> ToolResult:
    """Map any exception raised by a tool into a failure envelope."""
    if isinstance(exc, AccountNotFoundError):
        return failure(ErrorKind.ACCOUNT_NOT_FOUND, str(exc), {"accountId": exc.account_id})
    if isinstance(exc, NoDefaultAccountError):
        return failure(ErrorKind.NO_DEFAULT_ACCOUNT, str(exc))
    if isinstance(exc, AuthenticationError):
        return failure(ErrorKind.AUTHENTICATION, str(exc), {"accountId": exc.account_id})
    if isinstance(exc, ConfigError):
        return failure(ErrorKind.CONFIG_INVALID, f"Configuration error: {exc}")
    if isinstance(exc, ValidationError):
        return failure(ErrorKind.VALIDATION, _describe_validation_error(exc))
    if isinstance(exc, InvalidParameterError):
        return failure(ErrorKind.VALIDATION, f"Invalid parameters: {exc}")
    if isinstance(exc, ResourceNotFoundError):
        return failure(ErrorKind.NOT_FOUND, str(exc))
    if isinstance(exc, UpstreamError):
        kind = ErrorKind.NOT_FOUND if _is_not_found(exc) else ErrorKind.NETWORK
        return failure(kind, exc.message, {"statusCode": exc.status_code})
    if isinstance(exc, httpx.TimeoutException):
        return failure(ErrorKind.NETWORK, "Request timed out. The recipe service did not respond.")
    if isinstance(exc, httpx.HTTPError):
        return failure(ErrorKind.NETWORK, f"Could not reach the recipe service: {exc}")
    if isinstance(exc, OSError):
        return failure(ErrorKind.NETWORK, f"Network error: {exc}")
    return failure(
        ErrorKind.UNKNOWN,
        "An unexpected error occurred. Check the server logs for details.",
    )


def handle_tool_errors(
    func: Callable[..., Awaitable[ToolResult]],
) -> Callable[..., Awaitable[ToolResult]]:
    """Wrap an async tool so every failure comes back as a failure envelope."""

    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> ToolResult:
        try:
            return await func(*args, **kwargs)
        except Exception as e:
            result = classify_error(e)
            if result["error"]["kind"] == ErrorKind.UNKNOWN.value:
                logger.exception("Unexpected error in tool %s", func.__name__)
            else:
                logger.info(
                    "Tool %s failed (kind=%s): %s",
                    func.__name__,
                    result["error"]["kind"],
                    result["error"]["message"],
                )
            return result

    return wrapper
