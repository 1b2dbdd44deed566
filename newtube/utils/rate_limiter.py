"""Per-actor admission control backed by Redis.

Sliding window approximation: the count of the previous fixed window is
weighted by how much of it still overlaps the sliding window, then added to
the count of the current window.
"""

import math
import time
from dataclasses import dataclass
from typing import Protocol

from newtube.config import get_settings
from newtube.utils.cache import cache
from newtube.utils.logging import get_logger

logger = get_logger(__name__)


class RedisStore(Protocol):
    @property
    def connected(self) -> bool: ...

    async def get_client(self): ...


@dataclass(frozen=True)
class RateLimitResult:
    """Outcome of one admission check."""

    success: bool
    limit: int
    remaining: int
    reset_ms: int  # epoch milliseconds when the current window ends


def weighted_count(previous: int, current: int, now_ms: int, window_ms: int) -> int:
    """Requests counted against the sliding window ending at ``now_ms``."""
    overlap = 1 - (now_ms % window_ms) / window_ms
    return math.floor(previous * overlap) + current


class SlidingWindowRateLimiter:
    """Sliding window limiter keyed by actor id."""

    def __init__(
        self,
        limit: int,
        window_seconds: int,
        store: RedisStore = cache,
        prefix: str = "ratelimit",
    ) -> None:
        self.limit_count = limit
        self.window_ms = window_seconds * 1000
        self._store = store
        self._prefix = prefix

    def _key(self, identifier: str, window: int) -> str:
        return f"{self._prefix}:{identifier}:{window}"

    async def limit(self, identifier: str, now_ms: int | None = None) -> RateLimitResult:
        """Count one request for ``identifier`` if it is admitted.

        A rejected request leaves the counters untouched. If Redis is not
        reachable the request is admitted.
        """
        now_ms = now_ms if now_ms is not None else int(time.time() * 1000)
        window = now_ms // self.window_ms
        reset_ms = (window + 1) * self.window_ms

        if not self._store.connected:
            logger.debug("Rate limit store not connected, admitting request")
            return RateLimitResult(True, self.limit_count, self.limit_count, reset_ms)

        current_key = self._key(identifier, window)
        previous_key = self._key(identifier, window - 1)

        try:
            client = await self._store.get_client()
            previous, current = await client.mget(previous_key, current_key)
            used = weighted_count(int(previous or 0), int(current or 0), now_ms, self.window_ms)
            if used >= self.limit_count:
                return RateLimitResult(False, self.limit_count, 0, reset_ms)

            pipe = client.pipeline()
            pipe.incr(current_key)
            pipe.pexpire(current_key, self.window_ms * 2 + 1000)
            await pipe.execute()
        except Exception as e:
            logger.warning(f"Rate limit check failed for {identifier}, admitting request: {e}")
            return RateLimitResult(True, self.limit_count, self.limit_count, reset_ms)

        return RateLimitResult(True, self.limit_count, self.limit_count - used - 1, reset_ms)


def _build_rate_limiter() -> SlidingWindowRateLimiter:
    settings = get_settings()
    return SlidingWindowRateLimiter(
        limit=settings.rate_limit_requests,
        window_seconds=settings.rate_limit_window_seconds,
    )


# Global rate limiter for actor-scoped procedures
rate_limiter = _build_rate_limiter()
