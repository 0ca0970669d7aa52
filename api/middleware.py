"""
Global middleware: rate limiting, security headers, request timing.
"""

from __future__ import annotations

import logging
import math
import time
from collections import deque
from typing import Callable, Deque, Dict, Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from config.settings import Settings

logger = logging.getLogger(__name__)

RATE_LIMIT_MESSAGE = "Too many requests, please try again later."

SECURITY_HEADERS = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "no-referrer",
    "Cross-Origin-Resource-Policy": "same-origin",
    "X-DNS-Prefetch-Control": "off",
}


class SlidingWindowRateLimiter:
    """
    Per-key request counter over a sliding time window.

    Keeps the timestamps of accepted requests per key; a request is
    accepted while fewer than ``max_requests`` fall inside the window.
    Keys whose hits have all left the window are dropped, at the latest
    one window after their last hit.
    """

    def __init__(
        self,
        max_requests: int,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._hits: Dict[str, Deque[float]] = {}
        self._next_sweep = clock() + window_seconds

    def __len__(self) -> int:
        return len(self._hits)

    def _sweep(self, now: float, cutoff: float) -> None:
        stale = [key for key, hits in self._hits.items() if not hits or hits[-1] <= cutoff]
        for key in stale:
            del self._hits[key]
        self._next_sweep = now + self.window_seconds

    def hit(self, key: str) -> Optional[float]:
        """
        Record a request for ``key``.

        Returns ``None`` if it is allowed, else the number of seconds until
        the oldest hit leaves the window.
        """
        now = self._clock()
        cutoff = now - self.window_seconds
        if now >= self._next_sweep:
            self._sweep(now, cutoff)

        hits = self._hits.get(key)
        if hits is None:
            hits = self._hits[key] = deque()
        while hits and hits[0] <= cutoff:
            hits.popleft()

        if len(hits) >= self.max_requests:
            return max(hits[0] - cutoff, 0.0)

        hits.append(now)
        return None


def _client_key(request: Request) -> str:
    return request.client.host if request.client else "unknown"


def register_middleware(app: FastAPI, settings: Settings) -> None:
    """Attach app-level middleware.  Later registrations wrap earlier ones."""

    limiter = SlidingWindowRateLimiter(
        settings.rate_limit_max_requests,
        settings.rate_limit_window_seconds,
    )
    limited_prefix = settings.api_prefix.rstrip("/") + "/"

    @app.middleware("http")
    async def rate_limit(request: Request, call_next):
        if request.url.path.startswith(limited_prefix):
            retry_after = limiter.hit(_client_key(request))
            if retry_after is not None:
                logger.warning("Rate limit hit for %s on %s", _client_key(request), request.url.path)
                return JSONResponse(
                    status_code=429,
                    content={"error": RATE_LIMIT_MESSAGE},
                    headers={"Retry-After": str(max(1, math.ceil(retry_after)))},
                )
        return await call_next(request)

    @app.middleware("http")
    async def security_headers(request: Request, call_next):
        response = await call_next(request)
        for name, value in SECURITY_HEADERS.items():
            response.headers.setdefault(name, value)
        return response

    @app.middleware("http")
    async def request_timer(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed = time.perf_counter() - start
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        logger.debug("%s %s — %.3fs", request.method, request.url.path, elapsed)
        return response
