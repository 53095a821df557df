"""
Trello API client — async httpx wrapper with auth, rate limiting and retry.

Shared by all Trello tool modules. Uses query-param auth (?key=...&token=...).
One client (and so one limiter) exists per API key/token pair.
"""

import httpx
from mcp.types import TextContent

from config import get_credentials
from tools.trello.dispatcher import RequestDispatcher, TrelloAPIError, TrelloNotConfiguredError
from tools.trello.rate_limiter import DualLimiter, create_trello_rate_limiters
from utils import get_logger, text_result

logger = get_logger(__name__)

# Trello API base URL
API_BASE = "https://api.trello.com/1"

NOT_CONFIGURED = "Trello not configured. Use configureTrello to set your API key and token."
NO_BOARD = "Error: No board configured. Use configureTrello with boardId first."


class TrelloClient:
    """Authenticated Trello client that sends every call through its own limiter."""

    def __init__(
        self,
        api_key: str,
        api_token: str,
        limiter: DualLimiter | None = None,
        dispatcher: RequestDispatcher | None = None,
        base_url: str = API_BASE,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.limiter = limiter or create_trello_rate_limiters()
        self.dispatcher = dispatcher or RequestDispatcher(self.limiter)
        self._http = httpx.AsyncClient(
            base_url=base_url,
            params={"key": api_key, "token": api_token},
            timeout=timeout,
            transport=transport,
        )

    async def request(self, method: str, path: str, **kwargs) -> dict | list:
        """
        Make a rate-limited Trello API request.

        Args:
            method: HTTP method (GET, POST, PUT, DELETE)
            path: API path (e.g. "/boards/{id}/lists")
            **kwargs: Extra args passed to httpx (json, params, etc.)

        Returns:
            Parsed JSON response ({} for empty bodies).

        Raises:
            TrelloAPIError: On HTTP or connection errors (with Trello's message).
        """
        async def call():
            resp = await self._http.request(method, path, **kwargs)
            resp.raise_for_status()
            if resp.status_code == 204 or not resp.content:
                return {}
            return resp.json()

        return await self.dispatcher.send(call)

    async def get(self, path: str, **kwargs) -> dict | list:
        return await self.request("GET", path, **kwargs)

    async def post(self, path: str, **kwargs) -> dict | list:
        return await self.request("POST", path, **kwargs)

    async def put(self, path: str, **kwargs) -> dict | list:
        return await self.request("PUT", path, **kwargs)

    async def aclose(self) -> None:
        await self._http.aclose()


# (api_key, api_token) -> client
_clients: dict[tuple[str, str], TrelloClient] = {}


def get_client() -> TrelloClient:
    """
    Get the client for the configured credentials, creating it on first use.

    Raises:
        TrelloNotConfiguredError: If the API key or token is missing.
    """
    credentials = get_credentials()
    if credentials is None:
        raise TrelloNotConfiguredError(NOT_CONFIGURED)

    client = _clients.get(credentials)
    if client is None:
        api_key, api_token = credentials
        logger.info("Creating Trello client for API key %s...", api_key[:8])
        client = TrelloClient(api_key, api_token)
        _clients[credentials] = client
    return client


def peek_client() -> TrelloClient | None:
    """The client for the configured credentials if one has been created."""
    credentials = get_credentials()
    return _clients.get(credentials) if credentials else None


async def close_clients() -> None:
    """Close every client's HTTP connection pool."""
    while _clients:
        _, client = _clients.popitem()
        await client.aclose()


async def close_stale_clients() -> None:
    """Close clients whose credentials are no longer the configured ones."""
    current = get_credentials()
    for credentials in [c for c in _clients if c != current]:
        client = _clients.pop(credentials)
        logger.info("Closing Trello client for replaced API key %s...", credentials[0][:8])
        await client.aclose()


def error_result(action: str, error: TrelloAPIError) -> list[TextContent]:
    """Tool result for a failed call. Missing credentials read the same for every tool."""
    if isinstance(error, TrelloNotConfiguredError):
        return text_result(f"Error: {error}")
    return text_result(f"Error {action}: {error}")


def compact(**fields) -> dict:
    """Drop fields that were not supplied so Trello leaves them unchanged."""
    return {k: v for k, v in fields.items() if v is not None}
