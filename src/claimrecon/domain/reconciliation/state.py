"""Per-claim reconciliation state machine.

A run is linear: each stage either advances to the next intermediate state or
finishes in exactly one terminal state. ``ERROR_ABORTED`` is reachable from
every intermediate state.
"""

from __future__ import annotations

from enum import StrEnum
from logging import getLogger
from typing import TYPE_CHECKING, Final

from .verdicts import Verdict, VerdictKind

if TYPE_CHECKING:
    from collections.abc import Mapping

log = getLogger(__name__)


class ReconciliationState(StrEnum):
    START = "start"
    FETCHED = "fetched"
    EXPIRY_CHECKED = "expiry_checked"
    CASE_CHECKED = "case_checked"
    VERSION_CHECKED = "version_checked"
    REMEDIATION_INVOKED = "remediation_invoked"

    CONSISTENT = "consistent"
    NO_CASE = "no_case"
    AMBIGUOUS_CASE = "ambiguous_case"
    UNKNOWN_STATUS = "unknown_status"
    REMEDIATION_NOOP = "remediation_noop"
    REMEDIATION_APPLIED = "remediation_applied"
    REMEDIATION_SKIPPED = "remediation_skipped"
    ERROR_ABORTED = "error_aborted"


TERMINAL_STATES: Final[Mapping[VerdictKind, ReconciliationState]] = {
    VerdictKind.CONSISTENT: ReconciliationState.CONSISTENT,
    VerdictKind.NO_CASE: ReconciliationState.NO_CASE,
    VerdictKind.AMBIGUOUS_CASE: ReconciliationState.AMBIGUOUS_CASE,
    VerdictKind.UNKNOWN_STATUS: ReconciliationState.UNKNOWN_STATUS,
    VerdictKind.REMEDIATION_NOOP: ReconciliationState.REMEDIATION_NOOP,
    VerdictKind.REMEDIATION_APPLIED: ReconciliationState.REMEDIATION_APPLIED,
    VerdictKind.REMEDIATION_SKIPPED: ReconciliationState.REMEDIATION_SKIPPED,
    VerdictKind.ERROR_ABORTED: ReconciliationState.ERROR_ABORTED,
}

_S = ReconciliationState

TRANSITIONS: Final[Mapping[ReconciliationState, frozenset[ReconciliationState]]] = {
    _S.START: frozenset({_S.FETCHED}),
    _S.FETCHED: frozenset({_S.EXPIRY_CHECKED}),
    _S.EXPIRY_CHECKED: frozenset({_S.CONSISTENT, _S.CASE_CHECKED}),
    _S.CASE_CHECKED: frozenset(
        {
            _S.CONSISTENT,
            _S.NO_CASE,
            _S.AMBIGUOUS_CASE,
            _S.UNKNOWN_STATUS,
            _S.VERSION_CHECKED,
        }
    ),
    _S.VERSION_CHECKED: frozenset({_S.REMEDIATION_INVOKED, _S.REMEDIATION_SKIPPED}),
    _S.REMEDIATION_INVOKED: frozenset({_S.REMEDIATION_NOOP, _S.REMEDIATION_APPLIED}),
}


class IllegalTransitionError(RuntimeError):
    """Raised when the engine attempts a transition the state machine forbids."""


class ClaimRun:
    """Tracks the states visited while reconciling one claim."""

    __slots__ = ("_trail", "claim_id")

    def __init__(self, claim_id: int) -> None:
        self.claim_id = claim_id
        self._trail: list[ReconciliationState] = [ReconciliationState.START]

    @property
    def state(self) -> ReconciliationState:
        return self._trail[-1]

    @property
    def trail(self) -> tuple[ReconciliationState, ...]:
        return tuple(self._trail)

    @property
    def finished(self) -> bool:
        return self.state in TERMINAL_STATES.values()

    def advance(self, target: ReconciliationState) -> None:
        current = self.state
        if self.finished:
            raise IllegalTransitionError(f"claim {self.claim_id}: already finished as {current}")
        allowed = TRANSITIONS.get(current, frozenset())
        if target is not ReconciliationState.ERROR_ABORTED and target not in allowed:
            raise IllegalTransitionError(
                f"claim {self.claim_id}: {current} -> {target} is not allowed"
            )
        log.debug("claim %s: %s -> %s", self.claim_id, current, target)
        self._trail.append(target)

    def finish(self, kind: VerdictKind, detail: str | None = None) -> Verdict:
        self.advance(TERMINAL_STATES[kind])
        return Verdict(claim_id=self.claim_id, kind=kind, detail=detail, trail=self.trail)
