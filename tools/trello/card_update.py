"""
Trello card update — edit fields, move between lists, change members, archive.

All four tools are a PUT to /cards/{id} with a different body.
"""

from mcp.types import Tool, TextContent

from tools.trello.client import compact, error_result, get_client
from tools.trello.dispatcher import TrelloAPIError
from utils import json_result, text_result

CARD_ID = {
    "type": "string",
    "description": "The Trello card ID"
}

UPDATE_TOOL = Tool(
    name="updateCard",
    description="Update an existing card",
    inputSchema={
        "type": "object",
        "properties": {
            "cardId": CARD_ID,
            "name": {
                "type": "string",
                "description": "New card name"
            },
            "description": {
                "type": "string",
                "description": "New card description"
            },
            "labels": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Label IDs; replaces the card's current labels"
            },
            "position": {
                "type": "string",
                "description": "top, bottom, or a number"
            },
            "dueDate": {
                "type": "string",
                "description": "New due date (ISO 8601)"
            },
            "startDate": {
                "type": "string",
                "description": "New start date (ISO 8601)"
            }
        },
        "required": ["cardId"]
    }
)

MOVE_TOOL = Tool(
    name="moveCard",
    description="Move a card to a different list",
    inputSchema={
        "type": "object",
        "properties": {
            "cardId": CARD_ID,
            "listId": {
                "type": "string",
                "description": "Destination list ID"
            },
            "boardId": {
                "type": "string",
                "description": "Destination board ID, when moving to another board"
            }
        },
        "required": ["cardId", "listId"]
    }
)

MEMBERS_TOOL = Tool(
    name="changeCardMembers",
    description="Change the members of a card",
    inputSchema={
        "type": "object",
        "properties": {
            "cardId": CARD_ID,
            "members": {
                "type": "array",
                "items": {"type": "string"},
                "description": "Member IDs; replaces the card's current members"
            }
        },
        "required": ["cardId", "members"]
    }
)

ARCHIVE_TOOL = Tool(
    name="archiveCard",
    description="Archive a card",
    inputSchema={
        "type": "object",
        "properties": {
            "cardId": CARD_ID
        },
        "required": ["cardId"]
    }
)

TOOLS = [UPDATE_TOOL, MOVE_TOOL, MEMBERS_TOOL, ARCHIVE_TOOL]


async def _put_card(card_id: str, body: dict, action: str) -> list[TextContent]:
    try:
        card = await get_client().put(f"/cards/{card_id}", json=body)
    except TrelloAPIError as e:
        return error_result(action, e)
    return json_result(card)


async def handle_update(arguments: dict) -> list[TextContent]:
    """Handle updateCard tool call."""
    card_id = arguments.get("cardId")
    if not card_id:
        return text_result("Error: cardId is required.")

    body = compact(
        name=arguments.get("name"),
        desc=arguments.get("description"),
        idLabels=arguments.get("labels"),
        pos=arguments.get("position"),
        due=arguments.get("dueDate"),
        start=arguments.get("startDate"),
    )
    if not body:
        return text_result("No changes specified. Provide at least one field to update.")

    return await _put_card(card_id, body, "updating card")


async def handle_move(arguments: dict) -> list[TextContent]:
    """Handle moveCard tool call."""
    card_id = arguments.get("cardId")
    list_id = arguments.get("listId")
    if not card_id:
        return text_result("Error: cardId is required.")
    if not list_id:
        return text_result("Error: listId is required.")

    body = compact(idList=list_id, idBoard=arguments.get("boardId"))
    return await _put_card(card_id, body, "moving card")


async def handle_members(arguments: dict) -> list[TextContent]:
    """Handle changeCardMembers tool call."""
    card_id = arguments.get("cardId")
    members = arguments.get("members")
    if not card_id:
        return text_result("Error: cardId is required.")
    if members is None:
        return text_result("Error: members is required.")
    if not isinstance(members, list) or not all(isinstance(m, str) for m in members):
        return text_result("Error: members must be a list.")

    # Trello takes member IDs as one comma-separated string
    return await _put_card(card_id, {"idMembers": ",".join(members)}, "changing members")


async def handle_archive(arguments: dict) -> list[TextContent]:
    """Handle archiveCard tool call."""
    card_id = arguments.get("cardId")
    if not card_id:
        return text_result("Error: cardId is required.")

    return await _put_card(card_id, {"closed": True}, "archiving card")
