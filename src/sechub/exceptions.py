"""
Exception types raised inside the extraction pipeline.

None of these cross the public ``ContentExtractorService`` boundary; they are
caught per strategy and turned into failed ``ExtractionResult`` values.
"""

from __future__ import annotations


class SecHubError(Exception):
    """Base class for SecHub errors."""

    pass


class FetchError(SecHubError):
    """Raised when a page cannot be fetched (network, timeout, non-2xx)."""

    def __init__(self, message: str, *, url: str | None = None, status: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status = status


class ExtractionError(SecHubError):
    """Raised when a fetched page yields no usable article text."""

    pass
