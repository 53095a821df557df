"""
Trello card listing — cards in a list, and cards assigned to the token's member.
"""

from mcp.types import Tool, TextContent

from tools.trello.client import error_result, get_client
from tools.trello.dispatcher import TrelloAPIError
from utils import json_result, text_result

CARDS_BY_LIST_TOOL = Tool(
    name="getCardsByList",
    description="Get cards by list ID",
    inputSchema={
        "type": "object",
        "properties": {
            "listId": {
                "type": "string",
                "description": "The Trello list ID"
            }
        },
        "required": ["listId"]
    }
)

MY_CARDS_TOOL = Tool(
    name="getMyCards",
    description="Get cards assigned to the authenticated user",
    inputSchema={
        "type": "object",
        "properties": {}
    }
)

TOOLS = [CARDS_BY_LIST_TOOL, MY_CARDS_TOOL]


async def handle_cards_by_list(arguments: dict) -> list[TextContent]:
    """Handle getCardsByList tool call."""
    list_id = arguments.get("listId")
    if not list_id:
        return text_result("Error: listId is required.")

    try:
        cards = await get_client().get(f"/lists/{list_id}/cards")
    except TrelloAPIError as e:
        return error_result("fetching cards", e)
    return json_result(cards)


async def handle_my_cards(arguments: dict) -> list[TextContent]:
    """Handle getMyCards tool call."""
    try:
        cards = await get_client().get("/members/me/cards")
    except TrelloAPIError as e:
        return error_result("fetching cards", e)
    return json_result(cards)
