"""
In-memory cache of extraction outcomes with separate success/failure TTLs.
"""

from __future__ import annotations

import time
from typing import Callable, Dict, Optional

import structlog

from sechub.extractor.models import CacheEntry, ExtractionResult
from sechub.observability import gauge, increment

logger = structlog.get_logger(__name__)


class ResultCache:
    """
    URL-keyed store of ``ExtractionResult`` values.

    Successful results live for ``success_ttl`` seconds, failures for
    ``failure_ttl``. Expired entries are dropped when read and by
    ``cleanup()``, which the host process calls on a schedule.
    """

    def __init__(
        self,
        success_ttl: float = 24 * 60 * 60,
        failure_ttl: float = 30 * 60,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.success_ttl = success_ttl
        self.failure_ttl = failure_ttl
        self._clock = clock
        self._entries: Dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def get(self, url: str) -> Optional[ExtractionResult]:
        entry = self._entries.get(url)
        if entry is None:
            return None

        if entry.is_expired(self._clock()):
            del self._entries[url]
            increment("cache_evictions", labels={"reason": "read"})
            gauge("cache_entries", len(self._entries))
            return None

        return entry.result

    def set(self, url: str, result: ExtractionResult) -> CacheEntry:
        ttl = self.success_ttl if result.success else self.failure_ttl
        entry = CacheEntry(result=result, expires_at=self._clock() + ttl)
        self._entries[url] = entry
        gauge("cache_entries", len(self._entries))
        return entry

    def cleanup(self) -> int:
        """Remove every entry whose expiry is at or before now. Returns the count removed."""
        now = self._clock()
        expired = [url for url, entry in self._entries.items() if entry.is_expired(now)]
        for url in expired:
            del self._entries[url]

        if expired:
            increment("cache_evictions", value=len(expired), labels={"reason": "sweep"})
            logger.debug("Swept expired cache entries", expired_count=len(expired), remaining=len(self._entries))
        gauge("cache_entries", len(self._entries))
        return len(expired)

    def clear(self) -> None:
        self._entries.clear()
        gauge("cache_entries", 0)
