"""
Trello board activity — most recent actions on the configured board.
"""

from mcp.types import Tool, TextContent

from config import get_board_id
from tools.trello.client import NO_BOARD, error_result, get_client
from tools.trello.dispatcher import TrelloAPIError
from utils import json_result, text_result

DEFAULT_LIMIT = 10

TOOL = Tool(
    name="getRecentActivity",
    description="Get recent activity from the configured board",
    inputSchema={
        "type": "object",
        "properties": {
            "limit": {
                "type": "number",
                "description": "Number of actions to return (default: 10)",
                "default": DEFAULT_LIMIT
            }
        },
        "required": []
    }
)


async def handle(arguments: dict) -> list[TextContent]:
    """Handle getRecentActivity tool call."""
    board_id = get_board_id()
    if not board_id:
        return text_result(NO_BOARD)

    limit = arguments.get("limit", DEFAULT_LIMIT)
    try:
        limit = int(limit)
    except (TypeError, ValueError):
        return text_result(f"Error: limit must be a number, got {limit!r}.")

    try:
        actions = await get_client().get(f"/boards/{board_id}/actions", params={"limit": limit})
    except TrelloAPIError as e:
        return error_result("fetching activity", e)
    return json_result(actions)
