"""Translate claims API payloads into domain snapshots."""

from __future__ import annotations

from typing import TYPE_CHECKING

from claimrecon.domain.model import Action, Claim, Player, RemediationResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .schema import ActionPayload, ClaimPayload, PlayerPayload, RemediationPayload


def translate_claim(claim_id: int, payload: ClaimPayload) -> Claim:
    return Claim(id=claim_id, players=tuple(_translate_player(p) for p in payload.players))


def _translate_player(payload: PlayerPayload) -> Player:
    return Player(
        role=payload.role,
        actions=tuple(_translate_action(action) for action in payload.available_actions),
    )


def _translate_action(payload: ActionPayload) -> Action:
    return Action(due_at=payload.due_date, mandatory=payload.mandatory)


def translate_remediation_results(
    payloads: Iterable[RemediationPayload],
) -> list[RemediationResult]:
    return [RemediationResult(applied_rule=payload.applied_rule) for payload in payloads]
