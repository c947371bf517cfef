"""Ports implemented by adapters and consumed by the reconciliation engine."""

from __future__ import annotations

from .fetching import ClaimFetcher, SupportCaseFetcher
from .remediation import CurrentRemediator, GenerationProbe, LegacyRemediator

__all__ = [
    "ClaimFetcher",
    "CurrentRemediator",
    "GenerationProbe",
    "LegacyRemediator",
    "SupportCaseFetcher",
]
