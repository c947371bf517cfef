"""Support-case classification."""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING

from claimrecon.domain.model import CaseStatus

from .errors import CardinalityError, DomainGapError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from claimrecon.domain.model import SupportCase


class CaseClassification(StrEnum):
    NO_CASE = "no_case"
    OPEN_AND_TRACKED = "open_and_tracked"
    CLOSED_NEEDS_REMEDIATION = "closed_needs_remediation"


def classify_cases(cases: Sequence[SupportCase]) -> CaseClassification:
    """Decide whether the discrepancy is already handled by a support case.

    Raises ``CardinalityError`` when several cases match and ``DomainGapError``
    when the single case carries a status other than OPENED or CLOSED.
    """

    if not cases:
        return CaseClassification.NO_CASE
    if len(cases) > 1:
        raise CardinalityError(len(cases))

    status = cases[0].status
    if status == CaseStatus.OPENED:
        return CaseClassification.OPEN_AND_TRACKED
    if status == CaseStatus.CLOSED:
        return CaseClassification.CLOSED_NEEDS_REMEDIATION
    raise DomainGapError(status)
