"""
SecHub content extraction.

Two strategies are tried in order for every source page:
1. ReadabilityStrategy: readability-lxml main-content scoring
2. SelectorStrategy: lxml CSS selector fallback

The first result that clears its length gate is returned.
"""

from .fetcher import PageFetcher
from .models import CacheEntry, ExtractionResult
from .pipeline import ALL_STRATEGIES_FAILED, ExtractionPipeline
from .protocols import ExtractionStrategy
from .readability_extractor import ReadabilityStrategy
from .selector_extractor import SelectorStrategy
from .text import clean_text

__all__ = [
    "ALL_STRATEGIES_FAILED",
    "CacheEntry",
    "ExtractionPipeline",
    "ExtractionResult",
    "ExtractionStrategy",
    "PageFetcher",
    "ReadabilityStrategy",
    "SelectorStrategy",
    "clean_text",
]
