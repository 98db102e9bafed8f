"""
Readability-based article extractor.
"""

from __future__ import annotations

import asyncio
from typing import Tuple

import structlog
from lxml import html as lxml_html
from readability import Document

from sechub.exceptions import ExtractionError

from .fetcher import PageFetcher
from .models import ExtractionResult
from .text import clean_text

logger = structlog.get_logger(__name__)


class ReadabilityStrategy:
    """Fetch a page and run readability-lxml over it to isolate the article body."""

    name = "readability"

    def __init__(self, fetcher: PageFetcher, accept: str) -> None:
        self.fetcher = fetcher
        self.accept = accept

    async def extract(self, url: str) -> ExtractionResult:
        html = await self.fetcher.fetch(url, accept=self.accept)

        # readability scoring is CPU-bound, keep it off the event loop
        loop = asyncio.get_running_loop()
        title, text = await loop.run_in_executor(None, self._parse, html, url)

        return ExtractionResult(content=clean_text(text), title=clean_text(title), success=True)

    def _parse(self, html: str, url: str) -> Tuple[str, str]:
        if not html.strip():
            raise ExtractionError("Readability failed to parse article")

        doc = Document(html, url=url)
        summary = doc.summary(html_partial=True)
        if not summary or not summary.strip():
            raise ExtractionError("Readability failed to parse article")

        title = doc.short_title() or doc.title() or ""
        return title, self._html_to_text(summary)

    @staticmethod
    def _html_to_text(fragment: str) -> str:
        """Convert an HTML fragment to plain text."""
        node = lxml_html.fromstring(fragment)
        return node.text_content()
