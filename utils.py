"""
Shared utilities for Trello MCP Server.
"""

import json
import logging
import os
import sys

from mcp.types import TextContent

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_configured = False


def setup_logging(level: str | None = None) -> None:
    """Send log records to stderr. stdout belongs to the JSON-RPC stream."""
    global _configured
    level = (level or os.environ.get("TRELLO_MCP_LOG_LEVEL", "INFO")).upper()

    root = logging.getLogger()
    if not _configured:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        _configured = True
    root.setLevel(level)

    # httpx logs every request at INFO, which floods the MCP client log
    logging.getLogger("httpx").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a module logger."""
    return logging.getLogger(name)


def text_result(text: str) -> list[TextContent]:
    """Wrap plain text as a tool result."""
    return [TextContent(type="text", text=text)]


def json_result(data) -> list[TextContent]:
    """Render a Trello response as JSON text."""
    return [TextContent(type="text", text=json.dumps(data))]
