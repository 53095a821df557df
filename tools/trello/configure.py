"""
Trello configuration — save API key, token, and select board.
"""

from mcp.types import Tool, TextContent

from config import _load_config, get_trello_config, save_trello_config
from tools.trello.client import close_stale_clients, error_result, get_client
from tools.trello.dispatcher import TrelloAPIError
from utils import get_logger, text_result

logger = get_logger(__name__)

TOOL = Tool(
    name="configureTrello",
    description="Configure Trello integration. Save your API key and token, then select a board. Get your API key from https://trello.com/app-key and generate a token from the key page.",
    inputSchema={
        "type": "object",
        "properties": {
            "apiKey": {
                "type": "string",
                "description": "Your Trello API key from https://trello.com/app-key"
            },
            "token": {
                "type": "string",
                "description": "Your Trello token (generate from key page)"
            },
            "boardId": {
                "type": "string",
                "description": "Trello board ID to use. If omitted, lists your boards so you can pick one."
            }
        },
        "required": []
    }
)


async def handle(arguments: dict) -> list[TextContent]:
    """Handle configureTrello tool call."""
    api_key = arguments.get("apiKey")
    api_token = arguments.get("token")
    board_id = arguments.get("boardId")

    # Only the file section is rewritten; environment values are never persisted
    saved = dict(_load_config().get("trello", {}))

    if api_key:
        saved["api_key"] = api_key
    if api_token:
        saved["api_token"] = api_token
    if api_key or api_token:
        save_trello_config(saved)
        logger.info("Saved Trello credentials for API key %s...", (api_key or saved.get("api_key", ""))[:8])
        await close_stale_clients()

    tc = get_trello_config()
    if not tc.get("api_key") or not tc.get("api_token"):
        return text_result(
            "Trello not configured.\n\n"
            "1. Get your API key from https://trello.com/app-key\n"
            "2. Generate a token from the key page\n"
            "3. Call configureTrello with apiKey and token"
        )

    # If board_id provided, verify it and save it
    if board_id:
        try:
            board = await get_client().get(f"/boards/{board_id}", params={"fields": "name,id,url"})
        except TrelloAPIError as e:
            return error_result("fetching board", e)

        saved["board_id"] = board_id
        save_trello_config(saved)
        logger.info("Selected Trello board %s", board_id)
        return text_result(f"Board selected: {board.get('name', board_id)} ({board_id})")

    # Verify credentials by fetching boards
    try:
        boards = await get_client().get("/members/me/boards", params={"fields": "name,id,url"})
    except TrelloAPIError as e:
        return error_result("verifying credentials", e)

    if not boards:
        return text_result("Credentials saved but no boards found. Create a board on Trello first.")

    masked_key = tc["api_key"][:8] + "..."
    lines = [
        f"Trello API key: {masked_key}",
        "Token: set",
        "",
        "Your boards:",
    ]
    for b in boards:
        current = " (selected)" if b["id"] == tc.get("board_id") else ""
        lines.append(f"  - {b['name']}: {b['id']}{current}")

    lines.append("")
    lines.append("Call configureTrello with boardId to select a board.")

    return text_result("\n".join(lines))
