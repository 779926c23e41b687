from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass

"""Fixed-window request limiter for the header-mapping suggestion endpoint.

State lives on a ``RateLimiter`` instance that the handler receives
explicitly; the clock is injectable so tests control time.
"""

__all__ = [
    "DEFAULT_LIMIT",
    "DEFAULT_WINDOW_SECONDS",
    "RateLimiter",
]

DEFAULT_LIMIT = 10  # requests per window
DEFAULT_WINDOW_SECONDS = 60.0


@dataclass
class _Window:
    count: int
    reset_at: float


class RateLimiter:
    """Per-client counters over fixed windows.

    The first request of a client opens a window of ``window_seconds``; up to
    ``limit`` requests inside that window are allowed. A request after
    ``reset_at`` opens a fresh window.
    """

    def __init__(
        self,
        limit: int = DEFAULT_LIMIT,
        window_seconds: float = DEFAULT_WINDOW_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        if window_seconds <= 0:
            raise ValueError("window_seconds must be > 0")
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    def check(self, client_id: str) -> bool:
        """Record one request for ``client_id``; False once the window is exhausted."""
        now = self._clock()
        window = self._windows.get(client_id)
        if window is None or now > window.reset_at:
            self._windows[client_id] = _Window(count=1, reset_at=now + self.window_seconds)
            return True
        window.count += 1
        return window.count <= self.limit

    def reset(self, client_id: str | None = None) -> None:
        """Forget one client, or every client when ``client_id`` is None."""
        if client_id is None:
            self._windows.clear()
        else:
            self._windows.pop(client_id, None)

    def evict_expired(self) -> int:
        """Drop windows that have already ended; returns how many were dropped."""
        now = self._clock()
        expired = [cid for cid, w in self._windows.items() if now > w.reset_at]
        for cid in expired:
            del self._windows[cid]
        return len(expired)

    def __len__(self) -> int:
        return len(self._windows)
