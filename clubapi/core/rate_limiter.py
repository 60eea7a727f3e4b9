"""
Fixed-window request throttling for the login endpoint.

One ``RequestThrottle`` lives on ``app.state``; counts are kept in memory per
(scope, client address) and reset when the window expires.
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Optional, Tuple

from fastapi import Request


class RequestThrottle:
    def __init__(self, limit: int, window_seconds: int = 60, clock: Callable[[], float] = time.monotonic) -> None:
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()

    def hit(self, key: str) -> Optional[int]:
        """Count one attempt; returns seconds to wait when the key is over its limit."""
        now = self._clock()
        with self._lock:
            count, window_end = self._hits.get(key, (0, now + self.window_seconds))
            if now >= window_end:
                count, window_end = 0, now + self.window_seconds
            count += 1
            self._hits[key] = (count, window_end)
        if self.limit > 0 and count > self.limit:
            return max(1, int(window_end - now))
        return None

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


def client_address(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def throttle_request(throttle: RequestThrottle, request: Request, scope: str) -> Optional[int]:
    return throttle.hit(f"{scope}:{client_address(request)}")
