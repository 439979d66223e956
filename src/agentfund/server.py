"""
MCP stdio server for AgentFund.

Wraps ToolDispatcher as MCP tools.  stdout is the protocol channel; all
logging goes to stderr.
"""

from __future__ import annotations

import asyncio
from typing import Any, List, Optional

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import CallToolResult, TextContent, Tool

from .chain import ChainClient
from .config import Settings
from .log import configure_logging, get_logger
from .tools import ToolDispatcher, ToolResult

SERVER_NAME = "agentfund-mcp"
SERVER_VERSION = "1.0.0"

logger = get_logger("server")


def tool_definitions(dispatcher: ToolDispatcher) -> List[Tool]:
    return [
        Tool(name=spec.name, description=spec.description, inputSchema=spec.input_schema)
        for spec in dispatcher.list_tools()
    ]


def to_call_tool_result(result: ToolResult) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=result.text)],
        isError=result.is_error,
    )


def create_server(dispatcher: ToolDispatcher) -> Server:
    app = Server(SERVER_NAME, version=SERVER_VERSION)

    @app.list_tools()
    async def list_tools() -> List[Tool]:
        return tool_definitions(dispatcher)

    # Arguments are checked by the dispatcher so bad input gets the same
    # error payload as every other failure.
    @app.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: Any) -> CallToolResult:
        result = await asyncio.to_thread(dispatcher.dispatch, name, arguments)
        return to_call_tool_result(result)

    return app


async def run(settings: Settings) -> None:
    dispatcher = ToolDispatcher(ChainClient(settings), settings)
    app = create_server(dispatcher)
    logger.info("AgentFund MCP server running on stdio (rpc=%s)", settings.rpc_url)
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())


def serve(settings: Optional[Settings] = None) -> None:
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)
    asyncio.run(run(settings))


def main() -> None:
    """agentfund-mcp entry point."""
    serve()


if __name__ == "__main__":
    main()
