"""
Trello card comment — add a comment to a card.
"""

from mcp.types import Tool, TextContent

from tools.trello.client import error_result, get_client
from tools.trello.dispatcher import TrelloAPIError
from utils import text_result

TOOL = Tool(
    name="addComment",
    description="Add a comment to a Trello card. Useful for logging progress, results, or notes.",
    inputSchema={
        "type": "object",
        "properties": {
            "cardId": {
                "type": "string",
                "description": "The Trello card ID"
            },
            "text": {
                "type": "string",
                "description": "Comment text (Markdown supported)"
            }
        },
        "required": ["cardId", "text"]
    }
)


async def handle(arguments: dict) -> list[TextContent]:
    """Handle addComment tool call."""
    card_id = arguments.get("cardId")
    text = arguments.get("text")

    if not card_id:
        return text_result("Error: cardId is required.")
    if not text:
        return text_result("Error: text is required.")

    try:
        await get_client().post(f"/cards/{card_id}/actions/comments", params={"text": text})
    except TrelloAPIError as e:
        return error_result("adding comment", e)

    return text_result(
        f"Comment added to card {card_id}.\n\n"
        f"Preview: {text[:100]}{'...' if len(text) > 100 else ''}"
    )
