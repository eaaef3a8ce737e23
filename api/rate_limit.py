"""Per-client request quota for the analyze endpoint.

Fixed window: each client gets `limit` analyses per `window_seconds`,
counted from its first request in the window. Process-local, so each API
worker keeps its own counts.
"""

import threading
import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

import structlog

from api.exceptions import RateLimitError

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class RateLimitState:
    """Usage for one client in its current window."""

    count: int
    limit: int
    reset_at: float  # Clock time when the window ends

    @property
    def remaining(self) -> int:
        return max(0, self.limit - self.count)


class RateLimiter(Protocol):
    """Quota store consulted by the analyze route."""

    def get(self, key: str) -> RateLimitState: ...

    def increment(self, key: str) -> RateLimitState: ...

    def reset(self, key: str) -> None: ...

    def check(self, key: str) -> RateLimitState: ...


class InMemoryRateLimiter:
    """Fixed-window counter held in process memory."""

    def __init__(
        self,
        limit: int = 10,
        window_seconds: int = 3600,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[int, float]] = {}
        self._lock = threading.Lock()

    def tracked_clients(self) -> int:
        """Number of clients with a stored window."""
        with self._lock:
            return len(self._windows)

    def _prune(self, now: float) -> None:
        expired = [key for key, (_, reset_at) in self._windows.items() if now >= reset_at]
        for key in expired:
            del self._windows[key]

    def _current(self, key: str, now: float) -> tuple[int, float]:
        count, reset_at = self._windows.get(key, (0, now + self.window_seconds))
        if now >= reset_at:
            # Window expired: start a new one
            return 0, now + self.window_seconds
        return count, reset_at

    def get(self, key: str) -> RateLimitState:
        with self._lock:
            count, reset_at = self._current(key, self._clock())
        return RateLimitState(count=count, limit=self.limit, reset_at=reset_at)

    def increment(self, key: str) -> RateLimitState:
        with self._lock:
            count, reset_at = self._current(key, self._clock())
            count += 1
            self._windows[key] = (count, reset_at)
        return RateLimitState(count=count, limit=self.limit, reset_at=reset_at)

    def reset(self, key: str) -> None:
        with self._lock:
            self._windows.pop(key, None)

    def check(self, key: str) -> RateLimitState:
        """
        Count one request against the client's quota.

        Raises:
            RateLimitError: If the client has used up its window
        """
        with self._lock:
            now = self._clock()
            self._prune(now)
            count, reset_at = self._current(key, now)
            if count >= self.limit:
                retry_after = max(1, int(reset_at - now + 0.5))
                logger.warning("rate_limit_exceeded", client=key, retry_after=retry_after)
                raise RateLimitError(retry_after=retry_after)
            count += 1
            self._windows[key] = (count, reset_at)
        return RateLimitState(count=count, limit=self.limit, reset_at=reset_at)
