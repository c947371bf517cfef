from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

import httpx
import pytest

from claimrecon.adapters.http_resilience import ResilientClient
from claimrecon.config import ClaimsApiConfig, ResilienceConfig
from claimrecon.domain.model import (
    Action,
    Claim,
    Player,
    PlayerRole,
    RemediationResult,
    SupportCase,
)
from claimrecon.domain.reconciliation import (
    ProbeErrorPolicy,
    ReconciliationEngine,
    ReconciliationError,
    RemediationInvoker,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence

    from aiolimiter import AsyncLimiter

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=UTC)

type Handler = Callable[[httpx.Request], httpx.Response]


@dataclass
class FakeBackend:
    """In-memory stand-in for the claims and case systems, recording every call."""

    claims: dict[int, Claim | ReconciliationError] = field(default_factory=dict)
    cases: dict[int, list[SupportCase] | ReconciliationError] = field(default_factory=dict)
    generations: dict[int, bool | ReconciliationError] = field(default_factory=dict)
    remediations: dict[int, list[RemediationResult] | ReconciliationError] = field(
        default_factory=dict
    )
    calls: list[tuple[str, object]] = field(default_factory=list)

    def add_claim(
        self,
        claim_id: int,
        *,
        overdue: bool = True,
        cases: Sequence[str] = (),
        current_generation: bool = False,
        applied_rule: str = "none",
    ) -> None:
        due_at = NOW - timedelta(hours=1) if overdue else NOW + timedelta(hours=1)
        self.claims[claim_id] = Claim(
            id=claim_id,
            players=(
                Player(role="complainant"),
                Player(role=PlayerRole.MEDIATOR, actions=(Action(due_at=due_at, mandatory=True),)),
            ),
        )
        self.cases[claim_id] = [SupportCase(status=status) for status in cases]
        self.generations[claim_id] = current_generation
        self.remediations[claim_id] = [RemediationResult(applied_rule=applied_rule)]

    def called(self, name: str) -> list[object]:
        return [argument for call, argument in self.calls if call == name]

    async def fetch_claim(self, claim_id: int) -> Claim:
        self.calls.append(("fetch_claim", claim_id))
        return _answer(self.claims[claim_id])

    async def search_cases(self, claim_id: int) -> list[SupportCase]:
        self.calls.append(("search_cases", claim_id))
        return list(_answer(self.cases[claim_id]))

    async def exists_in_current_generation(self, claim_id: int) -> bool:
        self.calls.append(("probe", claim_id))
        return _answer(self.generations[claim_id])

    async def reprocess_batch(self, claim_ids: Sequence[int]) -> list[RemediationResult]:
        self.calls.append(("reprocess_batch", list(claim_ids)))
        (claim_id,) = claim_ids
        return list(_answer(self.remediations[claim_id]))

    async def reprocess_claim(self, claim_id: int) -> list[RemediationResult]:
        self.calls.append(("reprocess_claim", claim_id))
        return list(_answer(self.remediations[claim_id]))


def _answer[T](value: T | ReconciliationError) -> T:
    if isinstance(value, ReconciliationError):
        raise value
    return value


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def make_engine(
    backend: FakeBackend,
) -> Callable[..., ReconciliationEngine]:
    def factory(
        *,
        on_probe_error: ProbeErrorPolicy = ProbeErrorPolicy.ABORT,
        dry_run: bool = False,
    ) -> ReconciliationEngine:
        return ReconciliationEngine(
            claims=backend,
            cases=backend,
            remediation=RemediationInvoker(
                probe=backend,
                legacy=backend,
                current=backend,
                on_probe_error=on_probe_error,
            ),
            dry_run=dry_run,
            clock=lambda: NOW,
        )

    return factory


@pytest.fixture
def api_config() -> ClaimsApiConfig:
    return ClaimsApiConfig(
        claims=ResilienceConfig(
            name="claims",
            base_url="https://claims.test",
            default_headers={"X-Caller-Scopes": "admin"},
        ),
        cases=ResilienceConfig(
            name="cases",
            base_url="https://cases.test",
            default_headers={"X-Admin-Id": "admin"},
        ),
    )


@pytest.fixture
def mock_client_factory() -> Callable[[Handler], Callable[..., ResilientClient]]:
    def build(handler: Handler) -> Callable[..., ResilientClient]:
        def factory(
            resilience: ResilienceConfig, *, limiter: AsyncLimiter | None = None
        ) -> ResilientClient:
            return ResilientClient(
                resilience, transport=httpx.MockTransport(handler), limiter=limiter
            )

        return factory

    return build


@pytest.fixture
def now() -> datetime:
    return NOW
