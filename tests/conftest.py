"""Shared fixtures for the Trello MCP server tests."""

import httpx
import pytest

from config import ENV_VARS
from tools.trello import client as client_module

API_KEY = "0123456789abcdef"
API_TOKEN = "secret-token"
BOARD_ID = "board1"


class FakeClock:
    """Manually advanced stand-in for time.monotonic."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point config at a temp dir and hide any real Trello credentials."""
    monkeypatch.setenv("TRELLO_MCP_CONFIG_DIR", str(tmp_path / "config"))
    for env_name in ENV_VARS.values():
        monkeypatch.delenv(env_name, raising=False)
    yield tmp_path / "config"
    client_module._clients.clear()


@pytest.fixture
def configured(monkeypatch):
    """Credentials and board supplied through the environment."""
    monkeypatch.setenv("trelloApiKey", API_KEY)
    monkeypatch.setenv("trelloToken", API_TOKEN)
    monkeypatch.setenv("trelloBoardId", BOARD_ID)


def status_error(status: int, json=None, text=None, headers=None) -> httpx.HTTPStatusError:
    """Build the error raise_for_status() would raise for a response."""
    request = httpx.Request("GET", "https://api.trello.com/1/boards/board1")
    response = httpx.Response(status, json=json, text=text, headers=headers, request=request)
    return httpx.HTTPStatusError(f"HTTP {status}", request=request, response=response)
