"""
Rate Limiting Middleware

Limits API requests per client IP within a fixed window.
Counters live in process memory and reset on restart.
"""

import logging
import time
from typing import Callable, Optional

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

logger = logging.getLogger(__name__)


class FixedWindowCounter:
    """
    Request counts per key for the current window.

    Windows that have ended are swept at most once per window length, so
    keys for clients that went away do not accumulate.
    """

    def __init__(self, limit: int, window_seconds: int, clock: Callable[[], float] = time.monotonic):
        self.limit = limit
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: dict[str, tuple[float, int]] = {}
        self._last_sweep = clock()

    def hit(self, key: str) -> tuple[bool, int, float]:
        """
        Count one request for key.

        Returns:
            Tuple of (allowed, remaining, seconds until reset)
        """
        now = self._clock()
        if now - self._last_sweep >= self.window_seconds:
            self.evict_expired(now)

        started, count = self._windows.get(key, (now, 0))
        if now - started >= self.window_seconds:
            started, count = now, 0

        count += 1
        self._windows[key] = (started, count)
        reset_in = max(0.0, self.window_seconds - (now - started))
        return count <= self.limit, max(0, self.limit - count), reset_in

    def evict_expired(self, now: Optional[float] = None) -> int:
        """Drop windows that have ended, returning how many were removed"""
        now = self._clock() if now is None else now
        expired = [k for k, (started, _) in self._windows.items() if now - started >= self.window_seconds]
        for key in expired:
            del self._windows[key]
        self._last_sweep = now
        return len(expired)

    def __len__(self) -> int:
        return len(self._windows)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Middleware that rejects clients exceeding the request limit.

    Only paths under ``path_prefix`` are counted; health checks are not.
    """

    def __init__(self, app, limit: int = 100, window_seconds: int = 15 * 60, path_prefix: str = "/api"):
        super().__init__(app)
        self.counter = FixedWindowCounter(limit, window_seconds)
        self.path_prefix = path_prefix

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not request.url.path.startswith(self.path_prefix):
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        allowed, remaining, reset_in = self.counter.hit(client_ip)
        headers = {
            "RateLimit-Limit": str(self.counter.limit),
            "RateLimit-Remaining": str(remaining),
            "RateLimit-Reset": str(int(reset_in)),
        }

        if not allowed:
            logger.warning(f"Rate limit exceeded for {client_ip} on {request.method} {request.url.path}")
            return JSONResponse(
                status_code=429,
                content={"error": "Too many requests, try again later"},
                headers=headers,
            )

        response = await call_next(request)
        response.headers.update(headers)
        return response
