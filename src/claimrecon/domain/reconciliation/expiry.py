"""Mandatory-action expiry evaluation."""

from __future__ import annotations

from typing import TYPE_CHECKING

from claimrecon.domain.model import PlayerRole

if TYPE_CHECKING:
    from datetime import datetime

    from claimrecon.domain.model import Claim


def has_overdue_mandatory_action(claim: Claim, now: datetime) -> bool:
    """Return whether any mediator on ``claim`` has a mandatory action due before ``now``.

    All mediator players are considered, not only the first one. A claim
    without mediators has nothing overdue.
    """

    return any(
        action.is_overdue(now)
        for player in claim.players_with_role(PlayerRole.MEDIATOR)
        for action in player.actions
    )
