"""Domain model for claim reconciliation."""

from __future__ import annotations

from .cases import RemediationResult, SupportCase
from .claims import Action, Claim, Player
from .enums import NO_RULE_APPLIED, CaseStatus, ClaimGeneration, PlayerRole

__all__ = [
    "NO_RULE_APPLIED",
    "Action",
    "CaseStatus",
    "Claim",
    "ClaimGeneration",
    "Player",
    "PlayerRole",
    "RemediationResult",
    "SupportCase",
]
