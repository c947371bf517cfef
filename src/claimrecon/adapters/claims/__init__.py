"""Public interface for the claims API adapter."""

from __future__ import annotations

from .client import ClaimsApiClient
from .schema import ActionPayload, ClaimPayload, PlayerPayload, RemediationPayload
from .translator import translate_claim, translate_remediation_results

__all__ = [
    "ActionPayload",
    "ClaimPayload",
    "ClaimsApiClient",
    "PlayerPayload",
    "RemediationPayload",
    "translate_claim",
    "translate_remediation_results",
]
