"""
Trello MCP Tools - Tool definitions and dispatcher.
"""

from mcp.types import Tool, TextContent

from tools import trello
from utils import get_logger

logger = get_logger(__name__)


# Collect all tools
TOOLS: list[Tool] = [
    *trello.TOOLS,
]

# Map tool names to handlers
_HANDLERS = {
    **trello.HANDLERS,
}


async def call_tool(name: str, arguments: dict) -> list[TextContent]:
    """Dispatch a tool call to the appropriate handler."""
    handler = _HANDLERS.get(name)
    if handler is None:
        raise ValueError(f"Unknown tool: {name}")
    logger.debug("Calling tool %s", name)
    return await handler(arguments or {})
