"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import StrEnum


class PlayerRole(StrEnum):
    """Claim roles the reconciliation logic cares about.

    Other roles exist on claims; they are kept as plain strings on ``Player``.
    """

    MEDIATOR = "mediator"


class CaseStatus(StrEnum):
    """Known support-case statuses. Other values pass through as strings."""

    OPENED = "OPENED"
    CLOSED = "CLOSED"


class ClaimGeneration(StrEnum):
    LEGACY = "legacy"
    CURRENT = "current"


NO_RULE_APPLIED = "none"
