"""
FastAPI application exposing full-article extraction to the news UI.
"""

from __future__ import annotations

import asyncio
from contextlib import asynccontextmanager, suppress
from datetime import datetime, timezone
from typing import Any, AsyncGenerator, Awaitable, Callable, Dict, Optional
from uuid import uuid4

import structlog
from fastapi import FastAPI, Request, Response
from fastapi.responses import JSONResponse

from sechub.config.config import Config
from sechub.observability.metrics import export_prometheus
from sechub.service import ContentExtractorService

logger = structlog.get_logger(__name__)

SUMMARY_FALLBACK = "RSS summary available"


async def run_periodic_cleanup(service: ContentExtractorService, interval: float) -> None:
    """Sweep the extraction cache every ``interval`` seconds until cancelled."""
    while True:
        await asyncio.sleep(interval)
        try:
            service.cleanup()
        except Exception as e:
            logger.error("Periodic cache cleanup failed", error=str(e), exc_info=True)


def create_app(config: Optional[Config] = None, service: Optional[ContentExtractorService] = None) -> FastAPI:
    config = config or Config()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
        extractor = service or ContentExtractorService(config)
        app.state.extractor = extractor
        cleanup_task = asyncio.create_task(
            run_periodic_cleanup(extractor, config.cache.cleanup_interval_seconds),
            name="sechub-cache-cleanup",
        )
        logger.info("Content extraction API started", cleanup_interval=config.cache.cleanup_interval_seconds)

        yield

        cleanup_task.cancel()
        with suppress(asyncio.CancelledError):
            await cleanup_task
        await extractor.close()
        logger.info("Content extraction API stopped")

    app = FastAPI(title="SecHub Content Extraction", version=config.version, lifespan=lifespan)

    @app.middleware("http")
    async def bind_request_id(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:
        request_id = request.headers.get("X-Request-ID") or uuid4().hex
        structlog.contextvars.bind_contextvars(request_id=request_id)
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")
        response.headers["X-Request-ID"] = request_id
        return response

    @app.get("/api/news/full")
    async def get_full_content(request: Request, url: str = "", article_id: str = "") -> Any:
        """Full article text for a news item, with a summary fallback marker on failure."""
        if not url:
            return JSONResponse(status_code=400, content={"error": "No source URL available for this article"})

        extractor: ContentExtractorService = request.app.state.extractor
        result = await extractor.extract_full_content(url, article_id)

        if not result.success:
            return {
                "success": False,
                "error": result.error,
                "fallback": SUMMARY_FALLBACK,
                "articleId": article_id,
                "sourceUrl": url,
                "content": "",
                "title": "",
                "extractedAt": datetime.now(timezone.utc).isoformat(),
            }

        return {
            "success": True,
            "articleId": article_id,
            "sourceUrl": url,
            "title": result.title,
            "content": result.content,
            "extractedAt": result.extracted_at.isoformat(),
        }

    @app.get("/health")
    async def health(request: Request) -> Dict[str, Any]:
        extractor: ContentExtractorService = request.app.state.extractor
        return {"status": "ok", "cache_entries": len(extractor.cache)}

    @app.get("/metrics")
    async def metrics() -> Response:
        """Endpoint for Prometheus to scrape."""
        return Response(content=export_prometheus(), media_type="text/plain")

    return app
