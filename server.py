#!/usr/bin/env python3
"""
Trello MCP Server
A Model Context Protocol server exposing Trello boards, lists and cards as tools.
"""

import asyncio

from mcp.server import Server
from mcp.server.stdio import stdio_server
from mcp.types import Tool, TextContent, Resource

import resources
import tools
from config import config_file, get_board_id, get_credentials
from resources.info import SERVER_NAME, SERVER_VERSION
from tools.trello.client import close_clients
from utils import get_logger, setup_logging

logger = get_logger("server")

# Initialize the MCP server
app = Server(SERVER_NAME, version=SERVER_VERSION)


@app.list_tools()
async def list_tools() -> list[Tool]:
    """List available Trello tools."""
    return tools.TOOLS


@app.call_tool()
async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Handle tool calls."""
    return await tools.call_tool(name, arguments)


@app.list_resources()
async def list_resources() -> list[Resource]:
    """List available resources."""
    return resources.RESOURCES


@app.read_resource()
async def read_resource(uri) -> str:
    """Read a resource by URI."""
    return resources.read_resource(uri)


async def main():
    """Run the MCP server."""
    setup_logging()

    if get_credentials() is None:
        logger.warning(
            "Trello credentials missing. Set trelloApiKey and trelloToken, "
            "or call configureTrello (saved to %s)", config_file(),
        )
    elif not get_board_id():
        logger.warning("No Trello board selected; board tools will fail until one is configured")

    try:
        async with stdio_server() as (read_stream, write_stream):
            logger.info("%s v%s running on stdio transport", SERVER_NAME, SERVER_VERSION)
            await app.run(
                read_stream,
                write_stream,
                app.create_initialization_options()
            )
    finally:
        await close_clients()
        logger.info("Server stopped")


def run():
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
