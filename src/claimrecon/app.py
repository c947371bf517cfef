"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from logging import getLogger
from typing import TYPE_CHECKING

from claimrecon.adapters.cases import CaseSearchClient
from claimrecon.adapters.claims import ClaimsApiClient
from claimrecon.adapters.http_resilience import ResilientClient, build_limiter
from claimrecon.config import (
    ClaimsApiConfig,
    ReconciliationConfig,
    get_claims_api_config,
    get_reconciliation_config,
)
from claimrecon.domain.reconciliation import (
    ReconciliationEngine,
    RemediationInvoker,
    Verdict,
    summarize,
    utcnow,
)

if TYPE_CHECKING:
    from collections.abc import Sequence
    from datetime import datetime

ClientFactory = Callable[..., ResilientClient]
VerdictCallback = Callable[[Verdict], None]


log = getLogger(__name__)


def reconcile_claims(
    claim_ids: Sequence[int],
    *,
    api_config: ClaimsApiConfig | None = None,
    settings: ReconciliationConfig | None = None,
    on_verdict: VerdictCallback | None = None,
    client_factory: ClientFactory | None = None,
    clock: Callable[[], datetime] | None = None,
) -> list[Verdict]:
    """Reconcile ``claim_ids`` against the configured claims and case systems.

    Configuration is read from the environment unless passed in. One verdict is
    returned per input identifier, in input order.
    """

    effective_api = api_config or get_claims_api_config()
    effective_settings = settings or get_reconciliation_config()
    return asyncio.run(
        _reconcile_claims_async(
            list(claim_ids),
            api_config=effective_api,
            settings=effective_settings,
            on_verdict=on_verdict,
            client_factory=client_factory or ResilientClient,
            clock=clock or utcnow,
        )
    )


async def _reconcile_claims_async(
    claim_ids: list[int],
    *,
    api_config: ClaimsApiConfig,
    settings: ReconciliationConfig,
    on_verdict: VerdictCallback | None,
    client_factory: ClientFactory,
    clock: Callable[[], datetime],
) -> list[Verdict]:
    log.info(
        "Starting reconciliation: claims=%s, concurrency=%s, on_probe_error=%s, dry_run=%s",
        len(claim_ids),
        settings.concurrency,
        settings.on_probe_error,
        settings.dry_run,
    )

    # Both clients draw from one request budget.
    limiter = build_limiter(api_config.claims.ratelimit or api_config.cases.ratelimit)
    async with (
        client_factory(api_config.claims, limiter=limiter) as claims_http,
        client_factory(api_config.cases, limiter=limiter) as cases_http,
    ):
        claims_api = ClaimsApiClient(claims_http)
        engine = ReconciliationEngine(
            claims=claims_api,
            cases=CaseSearchClient(cases_http),
            remediation=RemediationInvoker(
                probe=claims_api,
                legacy=claims_api,
                current=claims_api,
                on_probe_error=settings.on_probe_error,
            ),
            dry_run=settings.dry_run,
            clock=clock,
        )
        verdicts = await engine.reconcile_all(
            claim_ids,
            concurrency=settings.concurrency,
            on_verdict=on_verdict,
        )

    counts = summarize(verdicts)
    log.info(
        "Finished reconciliation: %s",
        ", ".join(f"{kind}={count}" for kind, count in sorted(counts.items())) or "no claims",
    )
    attention = sum(1 for verdict in verdicts if verdict.needs_attention)
    if attention:
        log.warning("%s claim(s) need manual follow-up", attention)
    return verdicts
