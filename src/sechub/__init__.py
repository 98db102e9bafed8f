"""
SecHub - full-text extraction for cybersecurity news.
"""

from __future__ import annotations

__version__ = "0.1.0"

from .config import Config
from .extractor.models import ExtractionResult
from .service import ContentExtractorService

__all__ = ["__version__", "Config", "ContentExtractorService", "ExtractionResult"]
