"""Terminal verdicts and their line-oriented rendering."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from .state import ReconciliationState


class VerdictKind(StrEnum):
    CONSISTENT = "consistent"
    NO_CASE = "no_case"
    AMBIGUOUS_CASE = "ambiguous_case"
    UNKNOWN_STATUS = "unknown_status"
    REMEDIATION_NOOP = "remediation_noop"
    REMEDIATION_APPLIED = "remediation_applied"
    REMEDIATION_SKIPPED = "remediation_skipped"
    ERROR_ABORTED = "error_aborted"


# Verdicts an operator has to follow up on by hand.
NEEDS_ATTENTION: Final[frozenset[VerdictKind]] = frozenset(
    {
        VerdictKind.NO_CASE,
        VerdictKind.AMBIGUOUS_CASE,
        VerdictKind.UNKNOWN_STATUS,
        VerdictKind.REMEDIATION_NOOP,
        VerdictKind.ERROR_ABORTED,
    }
)


@dataclass(slots=True, frozen=True, kw_only=True)
class Verdict:
    """Outcome of reconciling one claim. Produced once, never mutated."""

    claim_id: int
    kind: VerdictKind
    detail: str | None = None
    trail: tuple[ReconciliationState, ...] = ()

    @property
    def needs_attention(self) -> bool:
        return self.kind in NEEDS_ATTENTION


type VerdictLabels = Mapping[VerdictKind, str]

ENGLISH_LABELS: Final[VerdictLabels] = MappingProxyType(
    {
        VerdictKind.CONSISTENT: "CONSISTENT",
        VerdictKind.NO_CASE: "NO SUPPORT CASE",
        VerdictKind.AMBIGUOUS_CASE: "MULTIPLE SUPPORT CASES",
        VerdictKind.UNKNOWN_STATUS: "SUPPORT CASE STATUS: {detail}",
        VerdictKind.REMEDIATION_NOOP: "REOPEN REQUESTED IN SUPPORT",
        VerdictKind.REMEDIATION_APPLIED: "CONSISTENT (REMEDIATED)",
        VerdictKind.REMEDIATION_SKIPPED: "WOULD REMEDIATE ({detail})",
        VerdictKind.ERROR_ABORTED: "ERROR: {detail}",
    }
)

SPANISH_LABELS: Final[VerdictLabels] = MappingProxyType(
    {
        VerdictKind.CONSISTENT: "CONSISTENTE",
        VerdictKind.NO_CASE: "SIN CASO EN CX",
        VerdictKind.AMBIGUOUS_CASE: "MAS DE UN CASO EN CX",
        VerdictKind.UNKNOWN_STATUS: "CX STATUS: {detail}",
        VerdictKind.REMEDIATION_NOOP: "SE SOLICITA REAPERTURA EN CX",
        VerdictKind.REMEDIATION_APPLIED: "CONSISTENTE",
        VerdictKind.REMEDIATION_SKIPPED: "SE REPROCESARIA ({detail})",
        VerdictKind.ERROR_ABORTED: "ERROR: {detail}",
    }
)

LABEL_TABLES: Final[Mapping[str, VerdictLabels]] = MappingProxyType(
    {"en": ENGLISH_LABELS, "es": SPANISH_LABELS}
)


def render_verdict(verdict: Verdict, labels: VerdictLabels = ENGLISH_LABELS) -> str:
    """Render ``verdict`` as ``<id> -> <LABEL>``."""

    try:
        template = labels[verdict.kind]
    except KeyError:
        raise ValueError(f"No label configured for verdict kind {verdict.kind}") from None
    label = template.format(claim_id=verdict.claim_id, detail=verdict.detail or "")
    return f"{verdict.claim_id} -> {label}"


def summarize(verdicts: Iterable[Verdict]) -> Counter[VerdictKind]:
    return Counter(verdict.kind for verdict in verdicts)
