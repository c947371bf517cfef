"""Support-case and remediation snapshots."""

from __future__ import annotations

from dataclasses import dataclass

from .enums import NO_RULE_APPLIED


@dataclass(slots=True, frozen=True)
class SupportCase:
    # Kept as a raw string: the case-management status domain may grow.
    status: str


@dataclass(slots=True, frozen=True)
class RemediationResult:
    applied_rule: str

    @property
    def rule_fired(self) -> bool:
        return self.applied_rule != NO_RULE_APPLIED
