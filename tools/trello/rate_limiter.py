"""
Trello rate limiting — two fixed-window token buckets behind one admission gate.

Trello limits each API key to 300 requests per 10 seconds and each token to
100 requests per 10 seconds. A request is admitted only when both buckets have
a token, and then both are debited together.
"""

import asyncio
import threading
import time
from typing import Callable

from utils import get_logger

logger = get_logger(__name__)

# Trello's published limits: (capacity, window in seconds)
API_KEY_LIMIT = (300, 10.0)
TOKEN_LIMIT = (100, 10.0)

# How long a denied caller sleeps before checking both buckets again
DEFAULT_POLL_INTERVAL = 0.05

Clock = Callable[[], float]


class TokenBucket:
    """
    One rate ceiling: `capacity` requests per `refill_interval` seconds.

    The bucket refills all at once when a full window has elapsed since the
    window started; it does not trickle tokens back in proportionally.
    """

    def __init__(self, capacity: int, refill_interval: float, clock: Clock = time.monotonic):
        if capacity < 1:
            raise ValueError(f"capacity must be a positive integer, got {capacity}")
        if refill_interval <= 0:
            raise ValueError(f"refill_interval must be positive, got {refill_interval}")

        self.capacity = capacity
        self.refill_interval = refill_interval
        self._clock = clock

        # Buckets start full so the first burst goes out immediately
        self.tokens = capacity
        self.window_started_at = clock()

    def _now(self, now: float | None) -> float:
        return self._clock() if now is None else now

    def refill_if_window_elapsed(self, now: float | None = None) -> None:
        """Reset to full and start a new window if the current one has elapsed."""
        now = self._now(now)
        if now - self.window_started_at >= self.refill_interval:
            self.tokens = self.capacity
            self.window_started_at = now

    def has_capacity(self, now: float | None = None) -> bool:
        self.refill_if_window_elapsed(now)
        return self.tokens > 0

    def try_consume(self, now: float | None = None) -> bool:
        """Take one token if available. Returns False without side effects otherwise."""
        if not self.has_capacity(now):
            return False
        self.tokens -= 1
        return True

    def seconds_until_next_window(self, now: float | None = None) -> float:
        now = self._now(now)
        return max(0.0, self.refill_interval - (now - self.window_started_at))

    def __repr__(self) -> str:
        return f"TokenBucket({self.tokens}/{self.capacity} per {self.refill_interval}s)"


class DualLimiter:
    """
    Admission gate over an API-key bucket and a token bucket.

    `admit()` waits until both buckets have a token and then debits both in a
    single step. If only one bucket has capacity nothing is consumed, so a
    drained bucket never leaks tokens out of the other one.

    With `fair=False` waiters poll independently and may be admitted in any
    order. With `fair=True` waiters queue on an asyncio.Lock and are admitted
    in arrival order.
    """

    def __init__(
        self,
        api_key_bucket: TokenBucket,
        token_bucket: TokenBucket,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        fair: bool = False,
        clock: Clock = time.monotonic,
    ):
        self.api_key_bucket = api_key_bucket
        self.token_bucket = token_bucket
        self.poll_interval = poll_interval
        self.fair = fair
        self._clock = clock

        # Guards the pair check-and-debit when one limiter is shared across threads
        self._lock = threading.Lock()
        self._queue: asyncio.Lock | None = None

    def try_admit(self, now: float | None = None) -> bool:
        """Debit both buckets if both have capacity. Never suspends."""
        if now is None:
            now = self._clock()
        with self._lock:
            if not (self.api_key_bucket.has_capacity(now) and self.token_bucket.has_capacity(now)):
                return False
            self.api_key_bucket.try_consume(now)
            self.token_bucket.try_consume(now)
            return True

    def seconds_until_available(self, now: float | None = None) -> float:
        """How long until every empty bucket refills (0.0 if both have tokens)."""
        if now is None:
            now = self._clock()
        with self._lock:
            waits = [
                bucket.seconds_until_next_window(now)
                for bucket in (self.api_key_bucket, self.token_bucket)
                if not bucket.has_capacity(now)
            ]
        return max(waits, default=0.0)

    async def admit(self) -> None:
        """Wait until a request may be sent. Never raises on exhaustion."""
        if not self.fair:
            await self._poll()
            return

        if self._queue is None:
            self._queue = asyncio.Lock()
        async with self._queue:
            await self._poll()

    async def _poll(self) -> None:
        if self.try_admit():
            return

        logger.debug(
            "Trello rate limit reached, waiting up to %.2fs (%s)",
            self.seconds_until_available(), self.snapshot(),
        )
        while not self.try_admit():
            await asyncio.sleep(self.poll_interval)

    def snapshot(self) -> dict:
        """Current token counts, for status output."""
        return {
            "api_key": {"tokens": self.api_key_bucket.tokens, "capacity": self.api_key_bucket.capacity},
            "token": {"tokens": self.token_bucket.tokens, "capacity": self.token_bucket.capacity},
        }


def create_trello_rate_limiters(
    api_key_limit: tuple[int, float] = API_KEY_LIMIT,
    token_limit: tuple[int, float] = TOKEN_LIMIT,
    poll_interval: float = DEFAULT_POLL_INTERVAL,
    fair: bool = False,
    clock: Clock = time.monotonic,
) -> DualLimiter:
    """Build the limiter for one Trello credential pair."""
    return DualLimiter(
        TokenBucket(*api_key_limit, clock=clock),
        TokenBucket(*token_limit, clock=clock),
        poll_interval=poll_interval,
        fair=fair,
        clock=clock,
    )
