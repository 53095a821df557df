"""
Trello lists — read, add and archive lists on the configured board.
"""

from mcp.types import Tool, TextContent

from config import get_board_id
from tools.trello.client import NO_BOARD, error_result, get_client
from tools.trello.dispatcher import TrelloAPIError
from utils import json_result, text_result

GET_LISTS_TOOL = Tool(
    name="getLists",
    description="Get all lists from the configured board",
    inputSchema={
        "type": "object",
        "properties": {}
    }
)

ADD_LIST_TOOL = Tool(
    name="addList",
    description="Add a new list to the configured board",
    inputSchema={
        "type": "object",
        "properties": {
            "name": {
                "type": "string",
                "description": "Name of the new list"
            }
        },
        "required": ["name"]
    }
)

ARCHIVE_LIST_TOOL = Tool(
    name="archiveList",
    description="Archive a list",
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

TOOLS = [GET_LISTS_TOOL, ADD_LIST_TOOL, ARCHIVE_LIST_TOOL]


async def handle_get_lists(arguments: dict) -> list[TextContent]:
    """Handle getLists tool call."""
    board_id = get_board_id()
    if not board_id:
        return text_result(NO_BOARD)

    try:
        lists = await get_client().get(f"/boards/{board_id}/lists")
    except TrelloAPIError as e:
        return error_result("fetching lists", e)
    return json_result(lists)


async def handle_add_list(arguments: dict) -> list[TextContent]:
    """Handle addList tool call."""
    name = arguments.get("name")
    if not name:
        return text_result("Error: name is required.")

    board_id = get_board_id()
    if not board_id:
        return text_result(NO_BOARD)

    try:
        trello_list = await get_client().post("/lists", json={"name": name, "idBoard": board_id})
    except TrelloAPIError as e:
        return error_result("adding list", e)
    return json_result(trello_list)


async def handle_archive_list(arguments: dict) -> list[TextContent]:
    """Handle archiveList tool call."""
    list_id = arguments.get("listId")
    if not list_id:
        return text_result("Error: listId is required.")

    try:
        trello_list = await get_client().put(f"/lists/{list_id}/closed", json={"value": True})
    except TrelloAPIError as e:
        return error_result("archiving list", e)
    return json_result(trello_list)
