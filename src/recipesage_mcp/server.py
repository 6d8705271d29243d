"""MCP server implementation for recipesage-mcp."""

import asyncio
import json
import logging
import os
import sys
from typing import Any

import structlog
from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import TextContent, Tool

from recipesage_mcp.accounts.registry import AccountRegistry
from recipesage_mcp.config import Settings, get_settings_eager
from recipesage_mcp.defaults import DEFAULT_LOG_LEVEL
from recipesage_mcp.exceptions import ConfigError, RecipeSageMCPError
from recipesage_mcp.sessions import SessionCache
from recipesage_mcp.tools import execute_tool, get_all_tools

logger = logging.getLogger(__name__)

SERVER_NAME = "recipesage-mcp"


class ToolCallFailed(RecipeSageMCPError):
    """Carries a failure envelope out of the call_tool handler.

    The MCP SDK turns exceptions raised by the handler into error results, so
    raising this is how a failure envelope reaches the client with isError set.
    """


def configure_logging(level: str = DEFAULT_LOG_LEVEL) -> None:
    """Send stdlib and structlog output to stderr; stdout carries the MCP transport."""
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    logging.basicConfig(
        level=numeric_level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        force=True,
    )
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(colors=False),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


def create_server(accounts: AccountRegistry, sessions: SessionCache) -> Server:
    """Create an MCP server whose tools run against the given registry and cache."""
    server = Server(SERVER_NAME)

    @server.list_tools()  # type: ignore[no-untyped-call,untyped-decorator]
    async def list_tools() -> list[Tool]:
        """Return the list of available tools."""
        return get_all_tools()

    @server.call_tool()  # type: ignore[untyped-decorator]
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[TextContent]:
        """Handle tool calls."""
        result = await execute_tool(name, arguments, accounts, sessions)
        text = json.dumps(result, indent=2, default=str)
        if not result["success"]:
            raise ToolCallFailed(text)
        return [TextContent(type="text", text=text)]

    return server


async def run_server(accounts: AccountRegistry, settings: Settings) -> None:
    """Run the MCP server using stdio transport."""
    async with SessionCache(
        settings.api_url,
        settings.login_path,
        timeout=settings.request_timeout,
    ) as sessions:
        server = create_server(accounts, sessions)
        async with stdio_server() as (read_stream, write_stream):
            logger.info("%s running on stdio", SERVER_NAME)
            await server.run(
                read_stream,
                write_stream,
                server.create_initialization_options(),
            )


def main() -> None:
    """Entry point for the MCP server.

    Exits with status 1 if the accounts cannot be loaded.
    """
    configure_logging(os.environ.get("RSMCP_LOG_LEVEL", DEFAULT_LOG_LEVEL))

    try:
        settings = get_settings_eager()
        accounts = AccountRegistry(settings.accounts)
    except ConfigError as e:
        logger.error("Failed to load accounts: %s", e)
        sys.exit(1)

    configure_logging(settings.log_level)
    asyncio.run(run_server(accounts, settings))


if __name__ == "__main__":
    main()
