from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Callable, Dict

from fastapi import Request
from fastapi.responses import PlainTextResponse

THROTTLED_MESSAGE = "Too many requests from this IP, please try again later."

# expired windows are only swept once this many keys are tracked
PURGE_THRESHOLD = 1024


@dataclass
class _Window:
    started: float
    hits: int


class FixedWindowRateLimiter:
    """Caps each key to `limit` requests per `window_seconds`, counted from the first hit."""

    def __init__(self, limit: int, window_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, _Window] = {}
        self._lock = asyncio.Lock()

    async def hit(self, key: str) -> bool:
        """Count one request for `key`. Returns False when the key is over its limit."""
        now = self._clock()
        async with self._lock:
            window = self._windows.get(key)
            if window is None or now - window.started >= self.window_seconds:
                if len(self._windows) >= PURGE_THRESHOLD:
                    self._purge(now)
                window = _Window(started=now, hits=0)
                self._windows[key] = window
            window.hits += 1
            return window.hits <= self.limit

    def _purge(self, now: float) -> None:
        expired = [k for k, w in self._windows.items() if now - w.started >= self.window_seconds]
        for k in expired:
            del self._windows[k]


def client_key(request: Request) -> str:
    host = request.client.host if request.client else "unknown"
    return f"ip:{host}"


def install_rate_limit(app, limiter: FixedWindowRateLimiter, prefix: str) -> None:
    @app.middleware("http")
    async def _enforce_rate_limit(request: Request, call_next):
        if request.url.path.startswith(prefix):
            if not await limiter.hit(client_key(request)):
                return PlainTextResponse(THROTTLED_MESSAGE, status_code=429)
        return await call_next(request)
