"""Pydantic v2 models for the matching engine's request, options and result."""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from src.models.occurrence import FallbackSummary, MatchMode, Occurrence
from src.models.pick import Pick, Slot


class MembershipPolicy(str, Enum):  # noqa: UP042 (StrEnum requires Python 3.11+)
    """How overlap clusters admit members.

    ANCHOR:   each member is checked against the anchor only, so two
              non-anchor members may be up to twice the radius apart.
    PAIRWISE: every member must also be within radius and the day window
              of every other member.
    """

    ANCHOR = "anchor"
    PAIRWISE = "pairwise"


class MatchOptions(BaseModel):
    """Engine policy knobs, normally built from settings."""

    model_config = ConfigDict(frozen=True)

    membership: MembershipPolicy = Field(default=MembershipPolicy.ANCHOR)
    single_pick_min_run: int = Field(
        default=1, ge=1, description="Shortest same-location run kept in single-pick mode."
    )
    slot_sensitive: bool | None = Field(
        default=None,
        description=(
            "Force slot-suffixed identity keys and pick keys in overlap mode. "
            "None means only when two active picks share a pick key."
        ),
    )


class DateRange(BaseModel):
    """Inclusive local-date bounds; either side may be open."""

    model_config = ConfigDict(frozen=True)

    start: date | None = None
    end: date | None = None

    @model_validator(mode="after")
    def _check_order(self) -> DateRange:
        if self.start and self.end and self.start > self.end:
            raise ValueError("date range start is after end")
        return self

    def contains(self, day: date) -> bool:
        if self.start is not None and day < self.start:
            return False
        if self.end is not None and day > self.end:
            return False
        return True


class MatchRequest(BaseModel):
    """Everything the engine needs: picks, their raw pools, and the trip bounds."""

    model_config = ConfigDict(frozen=True)

    picks: tuple[Pick, ...] = Field(default=(), max_length=3)
    raw_events_by_slot: dict[Slot, list[dict[str, Any]]] = Field(default_factory=dict)
    max_days: int = Field(default=3, ge=1, description="Inclusive trip length in days.")
    radius_miles: float = Field(default=100.0, gt=0)
    date_range: DateRange | None = Field(default=None)

    def pick_for(self, slot: Slot) -> Pick | None:
        for pick in self.picks:
            if pick.slot == slot:
                return pick
        return None


class MatchResult(BaseModel):
    """Engine output envelope."""

    model_config = ConfigDict(frozen=True)

    mode: MatchMode | None = Field(default=None, description="None when no picks were given.")
    occurrences: tuple[Occurrence, ...] = Field(default=())
    fallback: FallbackSummary | None = Field(default=None)
