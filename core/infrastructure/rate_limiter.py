"""
Fixed window rate limiter.

Counts requests per key inside a fixed-size window. When a window
elapses the counter is reset wholesale; there is no sliding or
smoothing across window boundaries.
"""
import threading
import time
from dataclasses import dataclass
from typing import Callable, Dict, Optional

from django.conf import settings


@dataclass
class WindowData:
    """Request count for a key within its current window."""

    count: int
    window_start: float


class FixedWindowRateLimiter:
    """
    Per-key fixed window limiter.

    A single lock guards the whole key map, so the window expiry check and
    the count increment happen atomically for every key.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
        prune_threshold: int = 10000,
    ):
        """
        Initialize limiter.

        Args:
            max_requests: Requests admitted per key per window. Zero denies everything.
            window_seconds: Window length in seconds
            clock: Monotonic time source
            prune_threshold: Key count at which elapsed windows are dropped
                during allow()
        """
        if max_requests < 0:
            raise ValueError("max_requests cannot be negative")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be positive")
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._prune_threshold = prune_threshold
        self._requests: Dict[str, WindowData] = {}
        self._lock = threading.Lock()

    def allow(self, key: str) -> bool:
        with self._lock:
            now = self._clock()
            if len(self._requests) >= self._prune_threshold:
                self._prune_expired(now)
            window = self._requests.get(key)

            if window is None or now - window.window_start > self.window_seconds:
                if self.max_requests == 0:
                    return False
                self._requests[key] = WindowData(count=1, window_start=now)
                return True

            if window.count >= self.max_requests:
                return False
            window.count += 1
            return True

    def remaining(self, key: str) -> int:
        """Return how many requests key may still make in its current window."""
        with self._lock:
            window = self._requests.get(key)
            if window is None or self._clock() - window.window_start > self.window_seconds:
                return self.max_requests
            return max(0, self.max_requests - window.count)

    def prune(self) -> int:
        """
        Drop keys whose window has elapsed.

        Returns:
            Number of keys removed
        """
        with self._lock:
            return self._prune_expired(self._clock())

    def _prune_expired(self, now: float) -> int:
        expired = [
            key
            for key, window in self._requests.items()
            if now - window.window_start > self.window_seconds
        ]
        for key in expired:
            del self._requests[key]
        return len(expired)

    def reset(self, key: Optional[str] = None) -> None:
        """Forget one key, or every key when key is None."""
        with self._lock:
            if key is None:
                self._requests.clear()
            else:
                self._requests.pop(key, None)


_limiter: Optional[FixedWindowRateLimiter] = None
_limiter_lock = threading.Lock()


def get_rate_limiter() -> FixedWindowRateLimiter:
    """Return the process-wide limiter configured from settings."""
    global _limiter
    with _limiter_lock:
        if _limiter is None:
            _limiter = FixedWindowRateLimiter(
                max_requests=settings.RATE_LIMIT_REQUESTS,
                window_seconds=settings.RATE_LIMIT_WINDOW_SECONDS,
            )
        return _limiter


def reset_rate_limiter() -> None:
    """Discard the process-wide limiter so the next call rebuilds it."""
    global _limiter
    with _limiter_lock:
        _limiter = None
