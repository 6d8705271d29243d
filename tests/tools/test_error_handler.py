"""Tests for tool error classification."""

import httpx
import pytest
from pydantic import BaseModel, ValidationError

from recipesage_mcp.exceptions import (
    AccountNotFoundError,
    AuthenticationError,
    ConfigError,
    InvalidParameterError,
    NoDefaultAccountError,
    ResourceNotFoundError,
    UpstreamError,
)
from recipesage_mcp.tools._error_handler import classify_error, handle_tool_errors
from recipesage_mcp.tools.models import ToolResult, success


class _Params(BaseModel):
    count: int


def _validation_error() -> ValidationError:
    try:
        _Params.model_validate({"count": "many"})
    except ValidationError as e:
        return e
    raise AssertionError("expected a ValidationError")


class TestClassifyError:
    @pytest.mark.parametrize(
        ("exc", "kind"),
        [
            (AccountNotFoundError("ghost"), "AccountNotFound"),
            (NoDefaultAccountError(), "NoDefaultAccount"),
            (AuthenticationError("personal", "Invalid credentials"), "Authentication"),
            (ConfigError("No accounts configured"), "ConfigInvalid"),
            (InvalidParameterError("bad"), "Validation"),
            (ResourceNotFoundError("No meal plan found"), "NotFound"),
            (UpstreamError(404, "Recipe not found"), "NotFound"),
            (UpstreamError(400, "Shopping list not found"), "NotFound"),
            (UpstreamError(500, "Internal error"), "Network"),
            (httpx.ConnectError("refused"), "Network"),
            (httpx.ReadTimeout("slow"), "Network"),
            (ConnectionResetError("reset"), "Network"),
            (RuntimeError("boom"), "Unknown"),
        ],
    )
    def test_kinds(self, exc: Exception, kind: str) -> None:
        result = classify_error(exc)

        assert result["success"] is False
        assert result["error"]["kind"] == kind

    def test_account_not_found_details(self) -> None:
        result = classify_error(AccountNotFoundError("ghost"))

        assert result["error"] == {
            "kind": "AccountNotFound",
            "message": "Account not found: ghost",
            "details": {"accountId": "ghost"},
        }

    def test_validation_message_names_field(self) -> None:
        result = classify_error(_validation_error())

        assert result["error"]["kind"] == "Validation"
        assert result["error"]["message"].startswith("Invalid parameters: count:")

    def test_upstream_details(self) -> None:
        result = classify_error(UpstreamError(503, "Service unavailable"))

        assert result["error"]["message"] == "Service unavailable"
        assert result["error"]["details"] == {"statusCode": 503}

    def test_timeout_message(self) -> None:
        result = classify_error(httpx.ReadTimeout("slow"))

        assert "timed out" in result["error"]["message"]

    def test_unknown_error_hides_details(self) -> None:
        """Test unexpected errors do not leak their message to the client."""
        result = classify_error(RuntimeError("secret internal state"))

        assert "secret" not in result["error"]["message"]
        assert "details" not in result["error"]


class TestHandleToolErrors:
    @pytest.mark.asyncio
    async def test_passes_through_success(self) -> None:
        @handle_tool_errors
        async def tool() -> ToolResult:
            return success(value=1)

        assert await tool() == {"success": True, "value": 1}

    @pytest.mark.asyncio
    async def test_converts_exception(self) -> None:
        @handle_tool_errors
        async def tool() -> ToolResult:
            raise NoDefaultAccountError()

        result = await tool()

        assert result == {
            "success": False,
            "error": {"kind": "NoDefaultAccount", "message": "No default account configured"},
        }

    @pytest.mark.asyncio
    async def test_unexpected_error_logged(self, caplog: pytest.LogCaptureFixture) -> None:
        @handle_tool_errors
        async def tool() -> ToolResult:
            raise RuntimeError("boom")

        with caplog.at_level("ERROR"):
            result = await tool()

        assert result["error"]["kind"] == "Unknown"
        assert "Unexpected error in tool tool" in caplog.text
