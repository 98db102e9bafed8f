"""
HTTP page fetcher used by the extraction strategies.
"""

from __future__ import annotations

import asyncio
import time
from typing import Optional

import aiohttp
import async_timeout
import structlog

from sechub.config.config import ExtractionConfig
from sechub.exceptions import FetchError
from sechub.observability import histogram

logger = structlog.get_logger(__name__)


class PageFetcher:
    """Single-shot GET client with a hard timeout and a fixed header policy.

    No retries: a failed fetch is reported to the calling strategy, which
    demotes it to a strategy failure.
    """

    def __init__(self, config: ExtractionConfig, session: Optional[aiohttp.ClientSession] = None) -> None:
        self.config = config
        self.timeout = config.request_timeout
        self._session = session
        self._owns_session = session is None

    def _get_session(self) -> aiohttp.ClientSession:
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(headers={"User-Agent": self.config.user_agent})
            self._owns_session = True
        return self._session

    async def fetch(self, url: str, *, accept: str) -> str:
        """Fetch ``url`` and return the decoded body.

        Raises:
            FetchError: on connection errors, timeouts and non-2xx responses.
        """
        session = self._get_session()
        headers = {"User-Agent": self.config.user_agent, "Accept": accept}
        start = time.monotonic()

        try:
            async with async_timeout.timeout(self.timeout):
                async with session.get(url, headers=headers) as response:
                    if not 200 <= response.status < 300:
                        raise FetchError(
                            f"HTTP {response.status}: {response.reason or ''}".rstrip(),
                            url=url,
                            status=response.status,
                        )
                    return await response.text(errors="replace")
        except asyncio.TimeoutError as e:
            raise FetchError(f"Request timed out after {self.timeout}s", url=url) from e
        except aiohttp.ClientError as e:
            raise FetchError(f"Request failed: {e}", url=url) from e
        finally:
            elapsed = time.monotonic() - start
            histogram("fetch_latency_seconds", elapsed)
            logger.debug("Fetch finished", url=url, elapsed=round(elapsed, 3))

    async def close(self) -> None:
        if self._session is not None and self._owns_session and not self._session.closed:
            await self._session.close()
        self._session = None
