"""
Per-host fixed window rate limiter for outbound extraction requests.
"""

from __future__ import annotations

import asyncio
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict
from urllib.parse import urlparse

import structlog

logger = structlog.get_logger(__name__)


@dataclass
class RateWindow:
    """Request count for one host within the current window."""

    request_count: int
    reset_time: float


class DomainRateLimiter:
    """
    Bounds outbound requests per hostname.

    A window opens on the first request to a host and counts that request.
    Once the clock passes the window's reset time the next request opens a
    fresh window. The read-check-increment for a host runs under that host's
    lock so concurrent callers cannot both take the last slot.
    """

    def __init__(
        self,
        max_requests: int = 6,
        window_seconds: float = 60.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self._clock = clock
        self._windows: Dict[str, RateWindow] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

        logger.info(
            "Rate limiter initialized",
            max_requests=max_requests,
            window_seconds=window_seconds,
        )

    def _get_host_lock(self, host: str) -> asyncio.Lock:
        """Get or create lock for host."""
        if host not in self._locks:
            self._locks[host] = asyncio.Lock()
        return self._locks[host]

    async def check_rate_limit(self, url: str) -> bool:
        """Consume one request slot for the URL's host.

        Returns False when the host's window is full or the URL has no
        parseable hostname.
        """
        try:
            host = urlparse(url).hostname
        except (ValueError, TypeError, AttributeError):
            return False
        if not host:
            return False

        async with self._get_host_lock(host):
            now = self._clock()
            window = self._windows.get(host)

            if window is None or now > window.reset_time:
                self._windows[host] = RateWindow(request_count=1, reset_time=now + self.window_seconds)
                return True

            if window.request_count >= self.max_requests:
                logger.info("Rate limit exceeded", host=host, reset_in=round(window.reset_time - now, 2))
                return False

            window.request_count += 1
            return True

    def cleanup(self) -> int:
        """Drop windows whose reset time has passed, along with their idle locks."""
        now = self._clock()
        expired = [host for host, window in self._windows.items() if now > window.reset_time]
        for host in expired:
            del self._windows[host]

        # a held lock belongs to a caller that is about to open a new window
        for host in [h for h, lock in self._locks.items() if h not in self._windows and not lock.locked()]:
            del self._locks[host]

        if expired:
            logger.debug("Cleaned up expired rate windows", expired_count=len(expired))
        return len(expired)

    def get_stats(self) -> Dict[str, Any]:
        now = self._clock()
        return {
            "tracked_hosts": len(self._windows),
            "windows": {
                host: {"requests": window.request_count, "reset_in": max(0.0, window.reset_time - now)}
                for host, window in self._windows.items()
            },
        }
