"""HTTP client for the support case-search API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from claimrecon.adapters.http_errors import decode_model, ensure_success, transport_errors
from claimrecon.domain.model import SupportCase

from .schema import CaseSearchResponse

if TYPE_CHECKING:
    from claimrecon.adapters.http_resilience import ResilientClient

log = getLogger(__name__)

CASE_SEARCH_PATH = "/cx/cases/search/v2"


class CaseSearchClient:
    """Looks up support cases correlated to a claim."""

    def __init__(self, client: ResilientClient) -> None:
        self._client = client

    async def search_cases(self, claim_id: int) -> list[SupportCase]:
        operation = f"search support cases of claim {claim_id}"
        async with transport_errors(operation):
            response = await self._client.get(CASE_SEARCH_PATH, params={"claim_id": claim_id})
        ensure_success(response, operation)
        payload = decode_model(response, CaseSearchResponse, operation)
        log.debug("%s: %d result(s)", operation, len(payload.results))
        return [SupportCase(status=result.status) for result in payload.results]
