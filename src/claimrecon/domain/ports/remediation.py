"""Ports for generation detection and deadline reprocessing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Sequence

    from claimrecon.domain.model import RemediationResult


@runtime_checkable
class GenerationProbe(Protocol):
    """Presence probe against the current-generation claim API.

    Returns ``True`` when the claim is known to the current generation,
    ``False`` when it is not found there, and raises ``TransportError`` for
    any other answer.
    """

    async def exists_in_current_generation(self, claim_id: int) -> bool: ...


@runtime_checkable
class LegacyRemediator(Protocol):
    """Batched reprocessing endpoint of the legacy generation."""

    async def reprocess_batch(self, claim_ids: Sequence[int]) -> list[RemediationResult]: ...


@runtime_checkable
class CurrentRemediator(Protocol):
    """Per-claim reprocessing endpoint of the current generation."""

    async def reprocess_claim(self, claim_id: int) -> list[RemediationResult]: ...


__all__ = ["CurrentRemediator", "GenerationProbe", "LegacyRemediator"]
