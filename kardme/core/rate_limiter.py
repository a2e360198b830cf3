from __future__ import annotations

import logging
import threading
import time
from typing import Dict, Tuple

from fastapi import HTTPException, Request

from .config import get_settings

logger = logging.getLogger(__name__)


class _RateLimiter:
    def __init__(self) -> None:
        self._hits: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()

    def check(self, key: str, limit: int, window_seconds: int) -> None:
        now = time.time()
        with self._lock:
            self._prune(now)
            count, reset = self._hits.get(key, (0, now + window_seconds))
            if now > reset:
                count = 0
                reset = now + window_seconds
            count += 1
            self._hits[key] = (count, reset)
            if count > limit:
                logger.warning("rate limit exceeded for %s", key)
                raise HTTPException(429, "Demasiados pedidos. Tente novamente dentro de instantes.")

    def _prune(self, now: float) -> None:
        expired = [key for key, (_, reset) in self._hits.items() if now > reset]
        for key in expired:
            del self._hits[key]

    def __len__(self) -> int:
        return len(self._hits)

    def reset(self) -> None:
        with self._lock:
            self._hits.clear()


_limiter = _RateLimiter()


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def rate_limit_ip(request: Request, scope: str, *, limit: int, window_seconds: int) -> None:
    key = f"{scope}:{_client_ip(request)}"
    _limiter.check(key, limit, window_seconds)


def rate_limit_writes(request: Request, scope: str) -> None:
    """Apply the configured write quota for ``scope``."""
    settings = get_settings()
    rate_limit_ip(
        request,
        scope,
        limit=settings.rate_limit_writes,
        window_seconds=settings.rate_limit_window_seconds,
    )


def reset_limits() -> None:
    _limiter.reset()
