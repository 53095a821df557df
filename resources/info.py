"""
trello://info resource - Server information and live rate limit headroom.
"""

from mcp.types import Resource

from config import get_board_id, get_credentials
from tools.trello.client import peek_client

URI = "trello://info"

SERVER_NAME = "mcp-trello"
SERVER_VERSION = "0.2.0"

RESOURCE = Resource(
    uri=URI,
    name="Trello Server Info",
    mimeType="text/plain",
    description="Information about this Trello MCP server and its current rate limit headroom"
)


def read() -> str:
    """Read the info resource."""
    lines = [
        f"Trello MCP Server v{SERVER_VERSION}",
        "",
        "Exposes Trello boards, lists and cards as MCP tools.",
        "Requests are limited to 300 per 10s per API key and 100 per 10s per token.",
        "",
    ]

    credentials = get_credentials()
    if credentials is None:
        lines.append("Credentials: not configured")
    else:
        lines.append(f"Credentials: API key {credentials[0][:8]}...")
    lines.append(f"Board: {get_board_id() or 'not selected'}")

    client = peek_client()
    if client is None:
        lines.append("Rate limits: no requests sent yet")
    else:
        snapshot = client.limiter.snapshot()
        lines.append("Rate limits (tokens left in current window):")
        for scope, state in snapshot.items():
            lines.append(f"  - {scope}: {state['tokens']}/{state['capacity']}")

    return "\n".join(lines)
