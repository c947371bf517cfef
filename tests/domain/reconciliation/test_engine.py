from __future__ import annotations

import asyncio
from typing import TYPE_CHECKING

import pytest

from claimrecon.domain.model import ClaimGeneration, RemediationResult
from claimrecon.domain.reconciliation import (
    DecodeError,
    ProbeErrorPolicy,
    ReconciliationEngine,
    ReconciliationState,
    RemediationInvoker,
    TransportError,
    Verdict,
    VerdictKind,
    utcnow,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from datetime import datetime

    from claimrecon.domain.model import Claim
    from tests.conftest import FakeBackend

    EngineFactory = Callable[..., ReconciliationEngine]


def _reconcile(engine: ReconciliationEngine, claim_id: int) -> Verdict:
    return asyncio.run(engine.reconcile(claim_id))


def test_no_overdue_action_short_circuits(
    backend: FakeBackend, make_engine: EngineFactory
) -> None:
    backend.add_claim(1, overdue=False)

    verdict = _reconcile(make_engine(), 1)

    assert verdict.kind is VerdictKind.CONSISTENT
    assert backend.called("search_cases") == []
    assert backend.called("probe") == []
    assert backend.called("reprocess_batch") == []
    assert backend.called("reprocess_claim") == []


def test_open_case_is_consistent_without_remediation(
    backend: FakeBackend, make_engine: EngineFactory
) -> None:
    backend.add_claim(2, cases=["OPENED"])

    verdict = _reconcile(make_engine(), 2)

    assert verdict.kind is VerdictKind.CONSISTENT
    assert verdict.trail[-2] is ReconciliationState.CASE_CHECKED
    assert backend.called("probe") == []
    assert backend.called("reprocess_batch") == []
    assert backend.called("reprocess_claim") == []


def test_missing_case_is_reported(backend: FakeBackend, make_engine: EngineFactory) -> None:
    backend.add_claim(3, cases=[])

    verdict = _reconcile(make_engine(), 3)

    assert verdict.kind is VerdictKind.NO_CASE
    assert backend.called("probe") == []


def test_several_cases_are_ambiguous(backend: FakeBackend, make_engine: EngineFactory) -> None:
    backend.add_claim(4, cases=["CLOSED", "OPENED"])

    verdict = _reconcile(make_engine(), 4)

    assert verdict.kind is VerdictKind.AMBIGUOUS_CASE
    assert verdict.trail[-1] is ReconciliationState.AMBIGUOUS_CASE
    assert backend.called("probe") == []


def test_unknown_case_status_is_passed_through(
    backend: FakeBackend, make_engine: EngineFactory
) -> None:
    backend.add_claim(5, cases=["ESCALATED"])

    verdict = _reconcile(make_engine(), 5)

    assert verdict.kind is VerdictKind.UNKNOWN_STATUS
    assert verdict.detail == "ESCALATED"
    assert backend.called("probe") == []


def test_legacy_claim_uses_batched_remediation(
    backend: FakeBackend, make_engine: EngineFactory
) -> None:
    backend.add_claim(42, cases=["CLOSED"], current_generation=False, applied_rule="none")

    verdict = _reconcile(make_engine(), 42)

    assert verdict.kind is VerdictKind.REMEDIATION_NOOP
    assert verdict.detail == ClaimGeneration.LEGACY
    assert backend.called("reprocess_batch") == [[42]]
    assert backend.called("reprocess_claim") == []
    assert verdict.trail == (
        ReconciliationState.START,
        ReconciliationState.FETCHED,
        ReconciliationState.EXPIRY_CHECKED,
        ReconciliationState.CASE_CHECKED,
        ReconciliationState.VERSION_CHECKED,
        ReconciliationState.REMEDIATION_INVOKED,
        ReconciliationState.REMEDIATION_NOOP,
    )


def test_current_claim_uses_per_claim_remediation(
    backend: FakeBackend, make_engine: EngineFactory
) -> None:
    backend.add_claim(43, cases=["CLOSED"], current_generation=True, applied_rule="expire_action")

    verdict = _reconcile(make_engine(), 43)

    assert verdict.kind is VerdictKind.REMEDIATION_APPLIED
    assert verdict.detail == ClaimGeneration.CURRENT
    assert backend.called("reprocess_claim") == [43]
    assert backend.called("reprocess_batch") == []


@pytest.mark.parametrize(
    ("stage", "error"),
    [
        ("claims", TransportError("fetch claim 7: timed out")),
        ("claims", DecodeError("fetch claim 7: unexpected response payload")),
        ("cases", TransportError("search support cases of claim 7: HTTP 503")),
        ("generations", TransportError("probe generation of claim 7: HTTP 500")),
        ("remediations", DecodeError("reprocess claim 7: unexpected response payload")),
    ],
)
def test_io_failures_abort_the_claim(
    backend: FakeBackend,
    make_engine: EngineFactory,
    stage: str,
    error: Exception,
) -> None:
    backend.add_claim(7, cases=["CLOSED"])
    getattr(backend, stage)[7] = error

    verdict = _reconcile(make_engine(), 7)

    assert verdict.kind is VerdictKind.ERROR_ABORTED
    assert verdict.detail == str(error)
    assert verdict.trail[-1] is ReconciliationState.ERROR_ABORTED


def test_empty_remediation_result_aborts(
    backend: FakeBackend, make_engine: EngineFactory
) -> None:
    backend.add_claim(8, cases=["CLOSED"])
    backend.remediations[8] = []

    verdict = _reconcile(make_engine(), 8)

    assert verdict.kind is VerdictKind.ERROR_ABORTED
    assert verdict.trail[-2] is ReconciliationState.VERSION_CHECKED


def test_probe_failure_never_reaches_remediation_when_aborting(
    backend: FakeBackend, make_engine: EngineFactory
) -> None:
    backend.add_claim(9, cases=["CLOSED"])
    backend.generations[9] = TransportError("HTTP 502", status_code=502)

    verdict = _reconcile(make_engine(), 9)

    assert verdict.kind is VerdictKind.ERROR_ABORTED
    assert backend.called("reprocess_batch") == []
    assert backend.called("reprocess_claim") == []


def test_probe_failure_can_fall_back_to_current_generation(
    backend: FakeBackend, make_engine: EngineFactory
) -> None:
    backend.add_claim(9, cases=["CLOSED"], applied_rule="expire_action")
    backend.generations[9] = TransportError("HTTP 502", status_code=502)

    verdict = _reconcile(make_engine(on_probe_error=ProbeErrorPolicy.ASSUME_CURRENT), 9)

    assert verdict.kind is VerdictKind.REMEDIATION_APPLIED
    assert backend.called("reprocess_claim") == [9]


def test_dry_run_skips_remediation(backend: FakeBackend, make_engine: EngineFactory) -> None:
    backend.add_claim(10, cases=["CLOSED"], current_generation=True)

    verdict = _reconcile(make_engine(dry_run=True), 10)

    assert verdict.kind is VerdictKind.REMEDIATION_SKIPPED
    assert verdict.detail == ClaimGeneration.CURRENT
    assert backend.called("probe") == [10]
    assert backend.called("reprocess_claim") == []


def test_now_is_captured_once_per_claim(backend: FakeBackend, make_engine: EngineFactory) -> None:
    backend.add_claim(11, overdue=False)
    engine = make_engine()
    ticks: list[int] = []
    original_clock = engine.clock

    def counting_clock() -> datetime:
        ticks.append(1)
        return original_clock()

    engine.clock = counting_clock

    _reconcile(engine, 11)

    assert len(ticks) == 1


def test_batch_yields_one_verdict_per_claim_despite_failures(
    backend: FakeBackend, make_engine: EngineFactory
) -> None:
    backend.add_claim(1, overdue=False)
    backend.add_claim(2, cases=["CLOSED"])
    backend.claims[2] = TransportError("fetch claim 2: ConnectError")
    backend.add_claim(3, cases=[])
    emitted: list[Verdict] = []

    verdicts = asyncio.run(make_engine().reconcile_all([1, 2, 3], on_verdict=emitted.append))

    assert [v.claim_id for v in verdicts] == [1, 2, 3]
    assert [v.kind for v in verdicts] == [
        VerdictKind.CONSISTENT,
        VerdictKind.ERROR_ABORTED,
        VerdictKind.NO_CASE,
    ]
    assert emitted == verdicts


def test_parallel_batch_keeps_attribution(
    backend: FakeBackend, make_engine: EngineFactory
) -> None:
    claim_ids = list(range(100, 120))
    for claim_id in claim_ids:
        backend.add_claim(
            claim_id,
            cases=["CLOSED"],
            current_generation=claim_id % 2 == 0,
            applied_rule="none" if claim_id % 3 else "expire_action",
        )
    emitted: list[Verdict] = []

    verdicts = asyncio.run(
        make_engine().reconcile_all(claim_ids, concurrency=4, on_verdict=emitted.append)
    )

    assert [v.claim_id for v in verdicts] == claim_ids
    assert sorted(v.claim_id for v in emitted) == claim_ids
    for verdict in verdicts:
        expected = (
            VerdictKind.REMEDIATION_NOOP if verdict.claim_id % 3 else VerdictKind.REMEDIATION_APPLIED
        )
        assert verdict.kind is expected


def test_failing_callback_cancels_remaining_workers(
    backend: FakeBackend, make_engine: EngineFactory, monkeypatch: pytest.MonkeyPatch
) -> None:
    claim_ids = list(range(200, 220))
    for claim_id in claim_ids:
        backend.add_claim(claim_id, overdue=False)
    fetch_claim = backend.fetch_claim

    async def yielding_fetch(claim_id: int) -> Claim:
        await asyncio.sleep(0)
        return await fetch_claim(claim_id)

    monkeypatch.setattr(backend, "fetch_claim", yielding_fetch)

    def broken_output(verdict: Verdict) -> None:
        raise BrokenPipeError(verdict.claim_id)

    async def scenario() -> None:
        with pytest.raises(ExceptionGroup) as exc:
            await make_engine().reconcile_all(claim_ids, concurrency=2, on_verdict=broken_output)
        assert all(isinstance(error, BrokenPipeError) for error in exc.value.exceptions)
        await asyncio.sleep(0.05)

    asyncio.run(scenario())

    assert len(backend.called("fetch_claim")) < len(claim_ids)


def test_unchanged_backend_yields_identical_verdicts(
    backend: FakeBackend, make_engine: EngineFactory
) -> None:
    backend.add_claim(1, overdue=False)
    backend.add_claim(2, cases=["OPENED"])
    backend.add_claim(3, cases=["CLOSED"], applied_rule="none")
    backend.add_claim(4, cases=["CLOSED", "CLOSED"])
    engine = make_engine()

    first = asyncio.run(engine.reconcile_all([1, 2, 3, 4]))
    second = asyncio.run(engine.reconcile_all([1, 2, 3, 4]))

    assert first == second


def test_concurrency_must_be_positive(backend: FakeBackend, make_engine: EngineFactory) -> None:
    del backend
    with pytest.raises(ValueError, match="concurrency"):
        asyncio.run(make_engine().reconcile_all([1], concurrency=0))


def test_remediation_result_list_only_first_entry_matters(
    backend: FakeBackend, make_engine: EngineFactory
) -> None:
    backend.add_claim(12, cases=["CLOSED"])
    backend.remediations[12] = [
        RemediationResult("expire_action"),
        RemediationResult("none"),
    ]

    verdict = _reconcile(make_engine(), 12)

    assert verdict.kind is VerdictKind.REMEDIATION_APPLIED


def test_engine_reads_the_wall_clock_unless_given_one(backend: FakeBackend) -> None:
    engine = ReconciliationEngine(
        claims=backend,
        cases=backend,
        remediation=RemediationInvoker(probe=backend, legacy=backend, current=backend),
    )

    assert engine.clock is utcnow
    assert engine.clock().tzinfo is not None
