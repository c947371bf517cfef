"""Pydantic models describing the case-search API payloads."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class CasesBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore")


class CaseResult(CasesBaseModel):
    # Free-form on purpose: statuses outside OPENED/CLOSED must reach the classifier.
    status: str


class CaseSearchResponse(CasesBaseModel):
    results: list[CaseResult] = Field(default_factory=list["CaseResult"])
