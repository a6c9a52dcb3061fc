"""
Fixed-window rate limiting keyed by caller identity.

The limiter keeps its counters in process memory. The clock is injected so
window roll-over can be driven deterministically in tests.
"""
import logging
import math
import threading
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Dict

from upi_extractor.core.config import settings
from upi_extractor.utils.exceptions import RateLimitError

logger = logging.getLogger(__name__)

Clock = Callable[[], float]


@dataclass
class RateLimitWindow:
    started_at: float
    count: int = 0


@dataclass
class RateLimitStatus:
    limit: int
    remaining: int
    reset_at: float


class RateLimiter:
    """Allows ``max_requests`` per key in each ``window_seconds`` window."""

    MAX_TRACKED_KEYS = 10000

    def __init__(self, max_requests: int, window_seconds: float, clock: Clock = time.time):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.clock = clock
        self._windows: Dict[str, RateLimitWindow] = {}
        # Guards _windows; hit() is called from threadpool workers
        self._lock = threading.Lock()

    def hit(self, key: str) -> RateLimitStatus:
        """
        Count one request for ``key``.

        Raises:
            RateLimitError: when the current window is already full
        """
        with self._lock:
            now = self.clock()
            window = self._windows.get(key)

            if window is None or now - window.started_at >= self.window_seconds:
                if len(self._windows) >= self.MAX_TRACKED_KEYS:
                    self._purge_expired(now)
                window = RateLimitWindow(started_at=now)
                self._windows[key] = window

            reset_at = window.started_at + self.window_seconds

            if window.count >= self.max_requests:
                logger.warning(f"Rate limit exceeded for {key}")
                raise self._limit_error(now, reset_at)

            window.count += 1
            return RateLimitStatus(
                limit=self.max_requests,
                remaining=self.max_requests - window.count,
                reset_at=reset_at
            )

    def purge_expired(self, now: float = None) -> int:
        with self._lock:
            return self._purge_expired(self.clock() if now is None else now)

    def _purge_expired(self, now: float) -> int:
        expired = [
            key for key, window in self._windows.items()
            if now - window.started_at >= self.window_seconds
        ]
        for key in expired:
            del self._windows[key]
        return len(expired)

    def _limit_error(self, now: float, reset_at: float) -> RateLimitError:
        reset_iso = datetime.fromtimestamp(reset_at, tz=timezone.utc).isoformat()
        retry_after = max(1, math.ceil(reset_at - now))
        return RateLimitError(
            message="Too many requests, please try again later.",
            details={
                "limit": self.max_requests,
                "window_seconds": self.window_seconds,
                "reset_at": reset_iso,
            },
            headers={
                "Retry-After": str(retry_after),
                "X-RateLimit-Limit": str(self.max_requests),
                "X-RateLimit-Remaining": "0",
                "X-RateLimit-Reset": str(math.ceil(reset_at)),
            }
        )


rate_limiter = RateLimiter(
    max_requests=settings.RATE_LIMIT_REQUESTS,
    window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
)


def get_rate_limiter() -> RateLimiter:
    return rate_limiter
