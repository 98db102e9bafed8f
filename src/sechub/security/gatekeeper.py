"""
Domain allow-listing for outbound fetches.

Only hosts on the allow-list (or their subdomains) may be fetched, which keeps
the extractor from being used to reach arbitrary or internal addresses.
"""

from __future__ import annotations

from typing import Iterable, Tuple
from urllib.parse import urlparse

import structlog

logger = structlog.get_logger(__name__)


class DomainGatekeeper:
    """Static allow-list check on the hostname of a URL."""

    def __init__(self, allowed_domains: Iterable[str]) -> None:
        self._allowed: Tuple[str, ...] = tuple(d.lower() for d in allowed_domains)

    @property
    def allowed_domains(self) -> Tuple[str, ...]:
        return self._allowed

    def is_allowed_domain(self, url: str) -> bool:
        """Return True iff the URL's host is an allowed domain or a subdomain of one.

        Any parse problem fails closed.
        """
        try:
            hostname = urlparse(url).hostname
        except (ValueError, TypeError, AttributeError):
            logger.debug("Rejecting unparseable URL", url=url)
            return False

        if not hostname:
            return False

        return any(hostname == domain or hostname.endswith(f".{domain}") for domain in self._allowed)
