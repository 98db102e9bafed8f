"""Outbound request throttling."""

from .rate_limiter import DomainRateLimiter, RateWindow

__all__ = ["DomainRateLimiter", "RateWindow"]
