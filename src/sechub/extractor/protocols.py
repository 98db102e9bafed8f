"""
Protocols for pluggable extraction strategies.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from .models import ExtractionResult


@runtime_checkable
class ExtractionStrategy(Protocol):
    """Fetch-and-extract strategy tried by the pipeline."""

    name: str

    async def extract(self, url: str) -> ExtractionResult:
        """Fetch ``url`` and extract its article text.

        Implementations raise ``FetchError`` or ``ExtractionError`` on failure;
        the pipeline converts those into a fallback to the next strategy.
        """
        ...
