"""
Trello boards — list the boards visible to the configured token.
"""

from mcp.types import Tool, TextContent

from tools.trello.client import error_result, get_client
from tools.trello.dispatcher import TrelloAPIError
from utils import json_result

TOOL = Tool(
    name="getBoards",
    description="List the Trello boards available to the configured credentials.",
    inputSchema={
        "type": "object",
        "properties": {}
    }
)


async def handle(arguments: dict) -> list[TextContent]:
    """Handle getBoards tool call."""
    try:
        boards = await get_client().get("/members/me/boards", params={"fields": "name,id,url"})
    except TrelloAPIError as e:
        return error_result("fetching boards", e)
    return json_result(boards)
