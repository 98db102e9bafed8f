"""
lxml CSS selector extractor used as a fallback.
"""

from __future__ import annotations

import asyncio
from typing import Sequence, Tuple

import structlog
from lxml import etree
from lxml import html as lxml_html

from sechub.exceptions import ExtractionError

from .fetcher import PageFetcher
from .models import ExtractionResult
from .text import clean_text

logger = structlog.get_logger(__name__)

INSUFFICIENT_CONTENT = "Insufficient content found with basic parsing"


class SelectorStrategy:
    """Pick article text with an ordered list of CSS selectors.

    Lengths are measured on the raw text content of the matched elements,
    whitespace included, before any normalization.
    """

    name = "selector"

    def __init__(
        self,
        fetcher: PageFetcher,
        accept: str,
        selectors: Sequence[str],
        min_length: int = 200,
    ) -> None:
        self.fetcher = fetcher
        self.accept = accept
        self.selectors = tuple(selectors)
        self.min_length = min_length

    async def extract(self, url: str) -> ExtractionResult:
        html = await self.fetcher.fetch(url, accept=self.accept)

        loop = asyncio.get_running_loop()
        title, content = await loop.run_in_executor(None, self._select, html)

        return ExtractionResult(content=clean_text(content), title=clean_text(title), success=True)

    def _select(self, html: str) -> Tuple[str, str]:
        if not html.strip():
            raise ExtractionError(INSUFFICIENT_CONTENT)
        try:
            doc = lxml_html.document_fromstring(html)
        except (etree.ParserError, ValueError) as e:
            raise ExtractionError(INSUFFICIENT_CONTENT) from e

        # inline <svg><title> is not the document title
        titles = doc.xpath("//title[not(ancestor::svg)]")
        title = titles[0].text_content() if titles else ""

        content = ""
        for selector in self.selectors:
            elements = doc.cssselect(selector)
            if not elements:
                continue

            # Later selectors replace the candidate until one is long enough.
            content = "\n\n".join(element.text_content() for element in elements)
            logger.debug("Selector matched", selector=selector, elements=len(elements), length=len(content))
            if len(content) > self.min_length:
                break

        if len(content) < self.min_length:
            raise ExtractionError(INSUFFICIENT_CONTENT)

        return title, content
