"""HTTP client for the claims API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from claimrecon.adapters.http_errors import (
    decode_list,
    decode_model,
    ensure_success,
    transport_errors,
)
from claimrecon.domain.reconciliation.errors import TransportError

from .schema import ClaimPayload, RemediationPayload, ReprocessRequest
from .translator import translate_claim, translate_remediation_results

if TYPE_CHECKING:
    from collections.abc import Sequence

    import httpx

    from claimrecon.adapters.http_resilience import ResilientClient
    from claimrecon.domain.model import Claim, RemediationResult

log = getLogger(__name__)

CLAIM_PATH = "/v1/claims/{claim_id}"
CLAIM_STATE_PATH = "/v1/claims/{claim_id}/state"
LEGACY_REPROCESS_PATH = "/claims/actions/deadline/reprocess"
CURRENT_REPROCESS_PATH = "/post-purchase/state/deadline/process-claim/{claim_id}"

_STATUS_FOUND = 200
_STATUS_NOT_FOUND = 404


class ClaimsApiClient:
    """Claim lookup, generation probe and both deadline reprocessing endpoints.

    The wrapped ``ResilientClient`` is owned by the caller and may be shared by
    concurrent reconciliations.
    """

    def __init__(self, client: ResilientClient) -> None:
        self._client = client

    async def fetch_claim(self, claim_id: int) -> Claim:
        operation = f"fetch claim {claim_id}"
        async with transport_errors(operation):
            response = await self._client.get(CLAIM_PATH.format(claim_id=claim_id))
        ensure_success(response, operation)
        payload = decode_model(response, ClaimPayload, operation)
        return translate_claim(claim_id, payload)

    async def exists_in_current_generation(self, claim_id: int) -> bool:
        operation = f"probe generation of claim {claim_id}"
        async with transport_errors(operation):
            response = await self._client.get(CLAIM_STATE_PATH.format(claim_id=claim_id))
        if response.status_code == _STATUS_FOUND:
            return True
        if response.status_code == _STATUS_NOT_FOUND:
            return False
        raise TransportError(
            f"{operation}: HTTP {response.status_code}",
            status_code=response.status_code,
        )

    async def reprocess_batch(self, claim_ids: Sequence[int]) -> list[RemediationResult]:
        operation = f"reprocess legacy claims {list(claim_ids)}"
        body = ReprocessRequest(claim_ids=list(claim_ids))
        async with transport_errors(operation):
            response = await self._client.post(
                LEGACY_REPROCESS_PATH,
                json=body.model_dump(mode="json"),
            )
        return _remediation_results(response, operation)

    async def reprocess_claim(self, claim_id: int) -> list[RemediationResult]:
        operation = f"reprocess claim {claim_id}"
        async with transport_errors(operation):
            response = await self._client.post(CURRENT_REPROCESS_PATH.format(claim_id=claim_id))
        return _remediation_results(response, operation)


def _remediation_results(response: httpx.Response, operation: str) -> list[RemediationResult]:
    ensure_success(response, operation)
    payloads = decode_list(response, RemediationPayload, operation)
    log.debug("%s: applied rules %s", operation, [p.applied_rule for p in payloads])
    return translate_remediation_results(payloads)
