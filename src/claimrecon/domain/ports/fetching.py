"""Ports for reading claim and support-case state from external systems."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from claimrecon.domain.model import Claim, SupportCase


@runtime_checkable
class ClaimFetcher(Protocol):
    """Retrieve claim detail (players and their available actions)."""

    async def fetch_claim(self, claim_id: int) -> Claim: ...


@runtime_checkable
class SupportCaseFetcher(Protocol):
    """Retrieve every support case whose claim reference matches ``claim_id``."""

    async def search_cases(self, claim_id: int) -> list[SupportCase]: ...


__all__ = ["ClaimFetcher", "SupportCaseFetcher"]
