"""
Request dispatch — admission, the HTTP call, and recovery from Trello 429s.
"""

import asyncio
import math
from typing import Awaitable, Callable, TypeVar

import httpx

from tools.trello.rate_limiter import DualLimiter
from utils import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

RATE_LIMIT_STATUS = 429


class TrelloAPIError(Exception):
    """A Trello call failed for a reason other than a retryable rate limit."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TrelloRateLimitError(TrelloAPIError):
    """Trello kept answering 429 after every retry."""

    def __init__(self, message: str):
        super().__init__(message, status_code=RATE_LIMIT_STATUS)


class TrelloNotConfiguredError(TrelloAPIError):
    """No API key/token available."""


def is_rate_limited(error: Exception) -> bool:
    return isinstance(error, httpx.HTTPStatusError) and error.response.status_code == RATE_LIMIT_STATUS


def error_detail(error: httpx.HTTPStatusError) -> str:
    """Best description Trello gave us: JSON `message`, else body text, else the exception."""
    response = error.response
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    text = response.text.strip()
    return text or str(error)


class RequestDispatcher:
    """
    Sends one request function at a time through the admission gate.

    A 429 from Trello means the gate and Trello disagree about the window, so
    the request waits `retry_delay` and goes back through `admit()` before
    being retried. Any other failure is terminal.

    Args:
        gate: Limiter every attempt must pass.
        retry_delay: Seconds to wait after the first 429.
        backoff_factor: Multiplier applied to the delay on each further 429.
            1.0 keeps the delay fixed.
        max_delay: Upper bound for any single wait.
        max_retries: Retries before giving up with TrelloRateLimitError.
            None retries forever.
    """

    def __init__(
        self,
        gate: DualLimiter,
        retry_delay: float = 1.0,
        backoff_factor: float = 1.0,
        max_delay: float = 30.0,
        max_retries: int | None = 10,
    ):
        self.gate = gate
        self.retry_delay = retry_delay
        self.backoff_factor = backoff_factor
        self.max_delay = max_delay
        self.max_retries = max_retries

    def calculate_delay(self, attempt: int, response: httpx.Response | None = None) -> float:
        """Delay before retry number `attempt` (0-indexed). Retry-After wins when present."""
        delay = self.retry_delay * (self.backoff_factor ** attempt)
        if response is not None:
            retry_after = response.headers.get("Retry-After")
            if retry_after:
                try:
                    header_delay = float(retry_after)
                except ValueError:
                    header_delay = None  # HTTP-date form; keep the computed delay
                if header_delay is not None and math.isfinite(header_delay) and header_delay >= 0:
                    delay = header_delay
        return max(0.0, min(delay, self.max_delay))

    async def send(self, request_fn: Callable[[], Awaitable[T]]) -> T:
        attempt = 0
        while True:
            await self.gate.admit()
            try:
                return await request_fn()
            except httpx.HTTPStatusError as e:
                if not is_rate_limited(e):
                    detail = error_detail(e)
                    logger.warning("Trello returned %s: %s", e.response.status_code, detail)
                    raise TrelloAPIError(f"Trello API error: {detail}", e.response.status_code) from e

                if self.max_retries is not None and attempt >= self.max_retries:
                    logger.warning("Trello still rate limiting after %d retries, giving up", attempt)
                    raise TrelloRateLimitError(
                        f"Trello API error: rate limited, giving up after {attempt} retries"
                    ) from e

                delay = self.calculate_delay(attempt, e.response)
                attempt += 1
                logger.warning(
                    "Trello rate limit hit (%s %s), retry %d in %.2fs",
                    e.request.method, e.request.url.path, attempt, delay,
                )
                await asyncio.sleep(delay)
            except httpx.RequestError as e:
                logger.warning("Trello request failed: %s", e)
                raise TrelloAPIError(f"Trello API error: {e}") from e
