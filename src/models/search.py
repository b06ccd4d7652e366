"""Pydantic v2 models for the search service's input and output."""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.models.matching import MatchResult
from src.models.pick import Pick, Slot


class SearchQuery(BaseModel):
    """One search as submitted: tagged pick text plus raw trip bounds.

    ``days`` and ``radius_miles`` are taken as given here and clamped by
    the service according to the public/non-public presets.
    """

    model_config = ConfigDict(frozen=True)

    p1: str | None = None
    p2: str | None = None
    p3: str | None = None
    days: float | None = Field(default=None, description="Requested trip length.")
    radius_miles: float | None = Field(default=None)
    start_date: date | None = None
    end_date: date | None = None

    @model_validator(mode="after")
    def _check_dates(self) -> SearchQuery:
        if self.start_date and self.end_date and self.start_date > self.end_date:
            raise ValueError("start_date is after end_date")
        return self


class SlotFailure(BaseModel):
    """Why a pick contributed no events."""

    model_config = ConfigDict(frozen=True)

    slot: Slot
    reason: str
    detail: str = ""


class SearchOutcome(BaseModel):
    """Engine result plus what the service actually did to get it."""

    model_config = ConfigDict(frozen=True)

    result: MatchResult
    picks: tuple[Pick, ...] = Field(default=(), description="Parsed and resolved picks.")
    failures: tuple[SlotFailure, ...] = Field(default=())
    days: int = Field(description="Effective trip length after clamping.")
    radius_miles: int = Field(description="Effective radius after clamping.")
    public_mode: bool
    event_counts: dict[Slot, int] = Field(
        default_factory=dict, description="Raw events fetched per slot."
    )
