"""Claim deadline reconciliation core."""

from __future__ import annotations

from .classify import CaseClassification, classify_cases
from .engine import ReconciliationEngine, utcnow
from .errors import (
    CardinalityError,
    DecodeError,
    DomainGapError,
    ReconciliationError,
    TransportError,
)
from .expiry import has_overdue_mandatory_action
from .remediation import (
    ProbeErrorPolicy,
    RemediationInvoker,
    RemediationOutcome,
    classify_remediation,
    detect_generation,
)
from .state import ClaimRun, IllegalTransitionError, ReconciliationState
from .verdicts import (
    ENGLISH_LABELS,
    LABEL_TABLES,
    SPANISH_LABELS,
    Verdict,
    VerdictKind,
    VerdictLabels,
    render_verdict,
    summarize,
)

__all__ = [
    "ENGLISH_LABELS",
    "LABEL_TABLES",
    "SPANISH_LABELS",
    "CardinalityError",
    "CaseClassification",
    "ClaimRun",
    "DecodeError",
    "DomainGapError",
    "IllegalTransitionError",
    "ProbeErrorPolicy",
    "ReconciliationEngine",
    "ReconciliationError",
    "ReconciliationState",
    "RemediationInvoker",
    "RemediationOutcome",
    "TransportError",
    "Verdict",
    "VerdictKind",
    "VerdictLabels",
    "classify_cases",
    "classify_remediation",
    "detect_generation",
    "has_overdue_mandatory_action",
    "render_verdict",
    "summarize",
    "utcnow",
]
