"""Generation detection and deadline remediation."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING

from claimrecon.domain.model import ClaimGeneration

from .errors import DecodeError, TransportError

if TYPE_CHECKING:
    from claimrecon.domain.model import RemediationResult
    from claimrecon.domain.ports import CurrentRemediator, GenerationProbe, LegacyRemediator

log = getLogger(__name__)


class ProbeErrorPolicy(StrEnum):
    """What to do when the generation probe cannot give a found/not-found answer."""

    ABORT = "abort"
    ASSUME_CURRENT = "assume-current"


class RemediationOutcome(StrEnum):
    NO_OP = "no_op"
    APPLIED = "applied"


async def detect_generation(
    probe: GenerationProbe,
    claim_id: int,
    *,
    on_probe_error: ProbeErrorPolicy = ProbeErrorPolicy.ABORT,
) -> ClaimGeneration:
    try:
        found = await probe.exists_in_current_generation(claim_id)
    except TransportError as exc:
        if on_probe_error is ProbeErrorPolicy.ABORT:
            raise
        log.warning(
            "claim %s: generation probe failed (%s), assuming current generation",
            claim_id,
            exc,
        )
        return ClaimGeneration.CURRENT
    return ClaimGeneration.CURRENT if found else ClaimGeneration.LEGACY


@dataclass(slots=True)
class RemediationInvoker:
    """Calls the reprocessing endpoint matching a claim's generation."""

    probe: GenerationProbe
    legacy: LegacyRemediator
    current: CurrentRemediator
    on_probe_error: ProbeErrorPolicy = ProbeErrorPolicy.ABORT

    async def detect(self, claim_id: int) -> ClaimGeneration:
        return await detect_generation(self.probe, claim_id, on_probe_error=self.on_probe_error)

    async def invoke(self, claim_id: int, generation: ClaimGeneration) -> RemediationOutcome:
        if generation is ClaimGeneration.LEGACY:
            results = await self.legacy.reprocess_batch([claim_id])
        else:
            results = await self.current.reprocess_claim(claim_id)
        return classify_remediation(results)


def classify_remediation(results: list[RemediationResult]) -> RemediationOutcome:
    """Only the first result is consulted; an empty list breaks the endpoint contract."""

    if not results:
        raise DecodeError("remediation endpoint returned no results")
    if results[0].rule_fired:
        return RemediationOutcome.APPLIED
    return RemediationOutcome.NO_OP
