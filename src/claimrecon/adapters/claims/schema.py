"""Pydantic models describing the claims API payloads."""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


def _null_to_empty(value: object) -> object:
    return [] if value is None else value


class ClaimsBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class ActionPayload(ClaimsBaseModel):
    due_date: datetime
    mandatory: bool = False

    @field_validator("due_date", mode="after")
    @classmethod
    def _assume_utc(cls, value: datetime) -> datetime:
        if value.tzinfo is None:
            return value.replace(tzinfo=UTC)
        return value


class PlayerPayload(ClaimsBaseModel):
    role: str
    available_actions: list[ActionPayload] = Field(default_factory=list["ActionPayload"])

    _normalize_actions = field_validator("available_actions", mode="before")(_null_to_empty)


class ClaimPayload(ClaimsBaseModel):
    players: list[PlayerPayload] = Field(default_factory=list["PlayerPayload"])

    _normalize_players = field_validator("players", mode="before")(_null_to_empty)


class ReprocessRequest(ClaimsBaseModel):
    claim_ids: list[int]


class RemediationPayload(ClaimsBaseModel):
    applied_rule: str
