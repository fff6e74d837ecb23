"""Per-user throttling consulted before a roast runs.

The pipeline itself knows nothing about throttling: callers construct one
limiter at start-up (build_rate_limiter) and check ``review:{user}`` before
each run. With no ``rate_limit`` in config the OpenRateLimiter is used and
every request is allowed.
"""

from __future__ import annotations

import logging
import time
from collections import defaultdict, deque
from collections.abc import Callable, Mapping
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RateLimitResult:
    allowed: bool
    limit: int  # -1 when no limiter is configured
    remaining: int
    reset_timestamp: float  # epoch seconds at which a slot frees up


class OpenRateLimiter:
    """Always allows. Used when no rate limit is configured."""

    def __init__(self, clock: Callable[[], float] = time.time):
        self._clock = clock

    def check_limit(self, key: str) -> RateLimitResult:
        return RateLimitResult(allowed=True, limit=-1, remaining=-1, reset_timestamp=self._clock())


class SlidingWindowRateLimiter:
    """Allow at most ``limit`` hits per key in any ``window_seconds`` span.

    Keeps the timestamps of accepted hits per key; denied hits are not
    recorded, so a caller that keeps retrying does not extend its own ban.
    """

    def __init__(self, limit: int, window_seconds: float, clock: Callable[[], float] = time.time):
        if limit < 1 or window_seconds <= 0:
            raise ValueError("rate limit requires limit >= 1 and window_seconds > 0")
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: dict[str, deque[float]] = defaultdict(deque)

    def check_limit(self, key: str) -> RateLimitResult:
        now = self._clock()
        self._evict_idle(now)
        hits = self._hits[key]
        while hits and hits[0] <= now - self.window_seconds:
            hits.popleft()

        if len(hits) >= self.limit:
            logger.debug("Rate limit hit for %s (%d in %.0fs)", key, len(hits), self.window_seconds)
            return RateLimitResult(
                allowed=False,
                limit=self.limit,
                remaining=0,
                reset_timestamp=hits[0] + self.window_seconds,
            )

        hits.append(now)
        return RateLimitResult(
            allowed=True,
            limit=self.limit,
            remaining=self.limit - len(hits),
            reset_timestamp=hits[0] + self.window_seconds,
        )

    def _evict_idle(self, now: float) -> None:
        """Drop keys whose newest hit has left the window."""
        cutoff = now - self.window_seconds
        idle = [key for key, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for key in idle:
            del self._hits[key]


def build_rate_limiter(config: dict, clock: Callable[[], float] = time.time):
    """Return a SlidingWindowRateLimiter from ``config["rate_limit"]``, or an OpenRateLimiter."""
    settings = config.get("rate_limit")
    if not settings:
        return OpenRateLimiter(clock=clock)
    if not isinstance(settings, Mapping):
        raise ValueError(
            f"rate_limit must be a mapping with requests and window_seconds, got {settings!r}"
        )
    return SlidingWindowRateLimiter(
        limit=int(settings.get("requests", 10)),
        window_seconds=float(settings.get("window_seconds", 60)),
        clock=clock,
    )
