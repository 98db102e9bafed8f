"""Outbound request guards."""

from .gatekeeper import DomainGatekeeper

__all__ = ["DomainGatekeeper"]
