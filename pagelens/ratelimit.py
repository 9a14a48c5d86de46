"""
Fixed-window rate limiting per client identity.

Each identity gets a window that opens on its first request and admits
``max_requests`` requests until ``window_seconds`` have passed; the next
request after that opens a fresh window.
"""

import logging
import threading
import time
from typing import Callable, Dict, Optional, Tuple

from .exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


class _Window:
    __slots__ = ("started", "count")

    def __init__(self, started: float):
        self.started = started
        self.count = 0


class FixedWindowRateLimiter:
    """
    Thread-safe fixed-window limiter.

    Args:
        max_requests: Requests admitted per window.
        window_seconds: Window length.
        clock: Monotonic time source, injectable for tests.
    """

    def __init__(
        self,
        max_requests: int = 30,
        window_seconds: float = 60.0,
        clock: Optional[Callable[[], float]] = None,
    ):
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock or time.monotonic
        self._windows: Dict[str, _Window] = {}
        self._lock = threading.Lock()

    def _admit(self, identity: str) -> Tuple[bool, float]:
        """Count one request against ``identity``; returns (admitted, seconds until the window reopens)."""
        with self._lock:
            now = self._clock()
            window = self._windows.get(identity)
            if window is None or now - window.started > self.window_seconds:
                window = _Window(now)
                self._windows[identity] = window
            if window.count >= self.max_requests:
                return False, max(0.0, window.started + self.window_seconds - now)
            window.count += 1
            return True, 0.0

    def allow(self, identity: str) -> bool:
        return self._admit(identity)[0]

    def check(self, identity: str) -> None:
        """Admit the request or raise RateLimitExceededError."""
        admitted, retry_after = self._admit(identity)
        if not admitted:
            logger.info(f"Rate limit hit for {identity}, retry in {retry_after:.0f}s")
            raise RateLimitExceededError(identity, retry_after)

    def evict_expired(self) -> int:
        """Drop windows that have closed; returns how many were removed."""
        with self._lock:
            now = self._clock()
            expired = [k for k, w in self._windows.items() if now - w.started > self.window_seconds]
            for key in expired:
                del self._windows[key]
        return len(expired)

    def __len__(self) -> int:
        with self._lock:
            return len(self._windows)
