"""
Full-article content extraction service.

Composes the result cache, the domain gatekeeper, the per-host rate limiter
and the extraction pipeline behind a single entry point that never raises.
"""

from __future__ import annotations

import time
from typing import Any, Callable, Dict, Optional

import structlog

from sechub.cache.result_cache import ResultCache
from sechub.config.config import Config
from sechub.crawler.rate_limiter import DomainRateLimiter
from sechub.extractor.fetcher import PageFetcher
from sechub.extractor.models import ExtractionResult
from sechub.extractor.pipeline import ExtractionPipeline
from sechub.observability import increment
from sechub.security.gatekeeper import DomainGatekeeper

logger = structlog.get_logger(__name__)

DOMAIN_NOT_ALLOWED = "Domain not allowed for content extraction"
RATE_LIMIT_EXCEEDED = "Rate limit exceeded for this domain"


class ContentExtractorService:
    """
    Fetches full article text for news items.

    Flow per call: cache lookup, domain check, rate limit check, pipeline,
    cache write. Rate limit rejections are returned but never cached so they
    cannot hide a later successful fetch.

    Concurrent calls for the same uncached URL are not coalesced; each one
    runs its own checks and fetch.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        *,
        pipeline: Optional[ExtractionPipeline] = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config or Config()
        self.logger = logger.bind(component="ContentExtractorService")

        extraction = self.config.extraction
        self.gatekeeper = DomainGatekeeper(extraction.allowed_domains)
        self.rate_limiter = DomainRateLimiter(
            max_requests=self.config.rate_limit.max_requests,
            window_seconds=self.config.rate_limit.window_seconds,
            clock=clock,
        )
        self.cache = ResultCache(
            success_ttl=self.config.cache.success_ttl_seconds,
            failure_ttl=self.config.cache.failure_ttl_seconds,
            clock=clock,
        )

        self.fetcher: Optional[PageFetcher] = None
        if pipeline is None:
            self.fetcher = PageFetcher(extraction)
            pipeline = ExtractionPipeline.from_config(extraction, self.fetcher)
        self.pipeline = pipeline

    async def extract_full_content(self, url: str, article_id: str) -> ExtractionResult:
        """Return extracted article text for ``url``.

        ``article_id`` is only used for log correlation; the cache is keyed by
        URL alone. Failures come back as ``success=False`` results.
        """
        log = self.logger.bind(url=url, article_id=article_id)

        cached = self.cache.get(url)
        if cached is not None:
            increment("cache_hits")
            log.debug("Content cache hit")
            return cached
        increment("cache_misses")

        if not self.gatekeeper.is_allowed_domain(url):
            log.warning("Domain not allowed for content extraction")
            result = ExtractionResult.failure(DOMAIN_NOT_ALLOWED)
            self.cache.set(url, result)
            increment("extractions", labels={"outcome": "domain_rejected"})
            return result

        if not await self.rate_limiter.check_rate_limit(url):
            log.warning("Rate limit exceeded")
            increment("extractions", labels={"outcome": "rate_limited"})
            return ExtractionResult.failure(RATE_LIMIT_EXCEEDED)

        try:
            log.info("Extracting content")
            result = await self.pipeline.extract_with_strategies(url)
        except Exception as e:
            log.error(
                "Content extraction failed",
                error=str(e),
                error_type=type(e).__name__,
                exc_info=True,
            )
            result = ExtractionResult.failure(f"Extraction failed: {e}")

        self.cache.set(url, result)
        increment("extractions", labels={"outcome": "success" if result.success else "failure"})
        return result

    def cleanup(self) -> int:
        """Sweep expired cache entries and stale rate windows.

        Meant to be called periodically by the host process.
        """
        removed = self.cache.cleanup()
        self.rate_limiter.cleanup()
        self.logger.info("Content cache cleanup", removed=removed, remaining=len(self.cache))
        return removed

    def get_stats(self) -> Dict[str, Any]:
        return {
            "cache_entries": len(self.cache),
            "rate_limiter": self.rate_limiter.get_stats(),
            "strategies": self.pipeline.get_metrics(),
        }

    async def close(self) -> None:
        if self.fetcher is not None:
            await self.fetcher.close()

    async def __aenter__(self) -> "ContentExtractorService":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
