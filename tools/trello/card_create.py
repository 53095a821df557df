"""
Trello card creation — add a card to a list with optional description, due date and labels.
"""

from mcp.types import Tool, TextContent

from tools.trello.client import compact, error_result, get_client
from tools.trello.dispatcher import TrelloAPIError
from utils import json_result, text_result

TOOL = Tool(
    name="addCard",
    description="Add a new card to a list",
    inputSchema={
        "type": "object",
        "properties": {
            "listId": {
                "type": "string",
                "description": "ID of the list to add the card to"
            },
            "name": {
                "type": "string",
                "description": "Card title"
            },
            "description": {
                "type": "string",
                "description": "Card description (Markdown supported)"
            },
            "dueDate": {
                "type": "string",
                "description": "Due date in ISO 8601 format (e.g. '2025-03-01')"
            },
            "labels": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Label IDs to apply"
            }
        },
        "required": ["listId", "name"]
    }
)


async def handle(arguments: dict) -> list[TextContent]:
    """Handle addCard tool call."""
    list_id = arguments.get("listId")
    name = arguments.get("name")

    if not list_id:
        return text_result("Error: listId is required.")
    if not name:
        return text_result("Error: name is required.")

    body = compact(
        idList=list_id,
        name=name,
        desc=arguments.get("description"),
        due=arguments.get("dueDate"),
        idLabels=arguments.get("labels"),
    )

    try:
        card = await get_client().post("/cards", json=body)
    except TrelloAPIError as e:
        return error_result("creating card", e)
    return json_result(card)
