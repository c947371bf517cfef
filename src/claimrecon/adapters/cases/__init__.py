"""Public interface for the case-search adapter."""

from __future__ import annotations

from .client import CaseSearchClient
from .schema import CaseResult, CaseSearchResponse

__all__ = ["CaseResult", "CaseSearchClient", "CaseSearchResponse"]
