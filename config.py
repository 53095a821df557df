"""
Configuration management for Trello MCP Server.
Persists credentials and the selected board; environment variables win over the file.
"""

import json
import os
from pathlib import Path

from utils import get_logger

logger = get_logger(__name__)

# Environment variables understood for Trello settings (same names the Smithery launcher sets)
ENV_VARS = {
    "api_key": "trelloApiKey",
    "api_token": "trelloToken",
    "board_id": "trelloBoardId",
}


def config_dir() -> Path:
    """Directory holding config.json. TRELLO_MCP_CONFIG_DIR overrides the default."""
    override = os.environ.get("TRELLO_MCP_CONFIG_DIR")
    if override:
        return Path(override)
    return Path.home() / ".config" / "trello-mcp"


def config_file() -> Path:
    return config_dir() / "config.json"


def _load_config() -> dict:
    """Load config from file, or return empty dict if not found."""
    path = config_file()
    if path.exists():
        try:
            with open(path, 'r') as f:
                return json.load(f)
        except (json.JSONDecodeError, IOError) as e:
            logger.warning("Ignoring unreadable config file %s: %s", path, e)
            return {}
    return {}


def _save_config(config: dict) -> None:
    """Save config to file."""
    path = config_file()
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f:
        json.dump(config, f, indent=2)


def get_trello_config() -> dict:
    """
    Get the effective trello settings.

    Returns:
        Dict with any of api_key, api_token, board_id. Values from the
        environment take precedence over the saved config file.
    """
    trello = dict(_load_config().get("trello", {}))
    for field, env_name in ENV_VARS.items():
        value = os.environ.get(env_name)
        if value:
            trello[field] = value
    return trello


def save_trello_config(trello: dict) -> None:
    """Save the trello section back to the config file."""
    config = _load_config()
    config["trello"] = trello
    _save_config(config)


def get_credentials() -> tuple[str, str] | None:
    """Get (api_key, api_token), or None if either is missing."""
    tc = get_trello_config()
    api_key = tc.get("api_key")
    api_token = tc.get("api_token")
    if not api_key or not api_token:
        return None
    return api_key, api_token


def get_board_id() -> str | None:
    """Get the configured board ID."""
    return get_trello_config().get("board_id")
