"""Read-only claim snapshots fetched per reconciliation run."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(slots=True, frozen=True, kw_only=True)
class Action:
    due_at: datetime
    mandatory: bool

    def is_overdue(self, now: datetime) -> bool:
        """Mandatory and due strictly before ``now``."""

        return self.mandatory and self.due_at < now


@dataclass(slots=True, frozen=True, kw_only=True)
class Player:
    role: str
    actions: tuple[Action, ...] = ()


@dataclass(slots=True, frozen=True, kw_only=True)
class Claim:
    id: int
    players: tuple[Player, ...] = field(default_factory=tuple)

    def players_with_role(self, role: str) -> tuple[Player, ...]:
        return tuple(player for player in self.players if player.role == role)
