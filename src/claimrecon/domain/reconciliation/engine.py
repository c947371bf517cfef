"""Reconciliation orchestrator.

Sequences the per-claim stages, from claim lookup to remediation, and turns
every claim into exactly one verdict. Claims are independent: a failure in one
never affects another.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from .classify import CaseClassification, classify_cases
from .errors import CardinalityError, DecodeError, DomainGapError, TransportError
from .expiry import has_overdue_mandatory_action
from .remediation import RemediationOutcome
from .state import ClaimRun, ReconciliationState
from .verdicts import Verdict, VerdictKind

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from claimrecon.domain.ports import ClaimFetcher, SupportCaseFetcher

    from .remediation import RemediationInvoker

log = getLogger(__name__)

type VerdictCallback = Callable[[Verdict], None]


def utcnow() -> datetime:
    return datetime.now(UTC)


@dataclass(slots=True)
class ReconciliationEngine:
    """Run the deadline reconciliation decision tree for claim identifiers."""

    claims: ClaimFetcher
    cases: SupportCaseFetcher
    remediation: RemediationInvoker
    dry_run: bool = False
    clock: Callable[[], datetime] = field(default=utcnow)

    async def reconcile(self, claim_id: int) -> Verdict:
        """Reconcile one claim. Never raises for collaborator failures."""

        run = ClaimRun(claim_id)
        try:
            verdict = await self._reconcile(run)
        except (TransportError, DecodeError) as exc:
            log.warning("claim %s: aborted in %s: %s", claim_id, run.state, exc)
            verdict = run.finish(VerdictKind.ERROR_ABORTED, detail=str(exc))
        except CardinalityError as exc:
            verdict = run.finish(VerdictKind.AMBIGUOUS_CASE, detail=str(exc.count))
        except DomainGapError as exc:
            verdict = run.finish(VerdictKind.UNKNOWN_STATUS, detail=exc.status)
        log.info("claim %s: %s", claim_id, verdict.kind)
        return verdict

    async def _reconcile(self, run: ClaimRun) -> Verdict:
        claim_id = run.claim_id
        now = self.clock()

        claim = await self.claims.fetch_claim(claim_id)
        run.advance(ReconciliationState.FETCHED)

        overdue = has_overdue_mandatory_action(claim, now)
        run.advance(ReconciliationState.EXPIRY_CHECKED)
        if not overdue:
            return run.finish(VerdictKind.CONSISTENT)

        cases = await self.cases.search_cases(claim_id)
        run.advance(ReconciliationState.CASE_CHECKED)
        classification = classify_cases(cases)
        if classification is CaseClassification.NO_CASE:
            return run.finish(VerdictKind.NO_CASE)
        if classification is CaseClassification.OPEN_AND_TRACKED:
            return run.finish(VerdictKind.CONSISTENT)

        generation = await self.remediation.detect(claim_id)
        run.advance(ReconciliationState.VERSION_CHECKED)
        if self.dry_run:
            return run.finish(VerdictKind.REMEDIATION_SKIPPED, detail=generation)

        outcome = await self.remediation.invoke(claim_id, generation)
        run.advance(ReconciliationState.REMEDIATION_INVOKED)
        if outcome is RemediationOutcome.NO_OP:
            return run.finish(VerdictKind.REMEDIATION_NOOP, detail=generation)
        return run.finish(VerdictKind.REMEDIATION_APPLIED, detail=generation)

    async def reconcile_all(
        self,
        claim_ids: Sequence[int],
        *,
        concurrency: int = 1,
        on_verdict: VerdictCallback | None = None,
    ) -> list[Verdict]:
        """Reconcile ``claim_ids`` with at most ``concurrency`` claims in flight.

        The returned list follows the input order. ``on_verdict`` is called as
        soon as each verdict is known, which with ``concurrency > 1`` may be out
        of input order.
        """

        if concurrency < 1:
            raise ValueError("concurrency must be at least 1")

        if concurrency == 1:
            verdicts: list[Verdict] = []
            for claim_id in claim_ids:
                verdict = await self.reconcile(claim_id)
                if on_verdict is not None:
                    on_verdict(verdict)
                verdicts.append(verdict)
            return verdicts

        semaphore = asyncio.Semaphore(concurrency)

        async def worker(claim_id: int) -> Verdict:
            async with semaphore:
                verdict = await self.reconcile(claim_id)
            if on_verdict is not None:
                on_verdict(verdict)
            return verdict

        # A failing callback cancels the remaining workers.
        async with asyncio.TaskGroup() as group:
            tasks = [group.create_task(worker(claim_id)) for claim_id in claim_ids]
        return [task.result() for task in tasks]
