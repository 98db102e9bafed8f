"""
Data models for extraction results.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(slots=True, frozen=True)
class ExtractionResult:
    """Outcome of one extraction attempt."""

    content: str
    title: str
    success: bool
    error: str | None = None
    extracted_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self) -> None:
        """Validate the result."""
        if not self.success and not self.error:
            raise ValueError("A failed extraction must carry an error message")
        if self.success and self.error is not None:
            raise ValueError("A successful extraction cannot carry an error message")

    @classmethod
    def failure(cls, error: str) -> ExtractionResult:
        return cls(content="", title="", success=False, error=error)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "success": self.success,
            "title": self.title,
            "content": self.content,
            "extractedAt": self.extracted_at.isoformat(),
        }
        if self.error is not None:
            data["error"] = self.error
        return data


@dataclass(slots=True, frozen=True)
class CacheEntry:
    """A cached result and the wall-clock time (epoch seconds) it expires at."""

    result: ExtractionResult
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at
