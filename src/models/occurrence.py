"""Pydantic v2 models for matching output: occurrences, schedules, fallback.

All models use frozen config (immutable).  Occurrences are built through
:meth:`Occurrence.build` so members are always chronologically sorted and
the date bounds always agree with the members.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Sequence

from pydantic import BaseModel, ConfigDict, Field

from src.models.event import Event, sort_chronologically
from src.models.pick import Pick, Slot


class MatchMode(str, Enum):  # noqa: UP042 (StrEnum requires Python 3.11+)
    """Which matching strategy produced a result.

    ENTITY_ONLY:  both picks are the same team/artist; one occurrence with
                  the entity's whole schedule, day/radius ignored.
    SINGLE_PICK:  one effective pick; occurrences are consecutive
                  same-location runs.
    OVERLAP:      distinct picks; occurrences need events from at least two
                  picks within the day window and radius.
    """

    ENTITY_ONLY = "ENTITY_ONLY"
    SINGLE_PICK = "SINGLE_PICK"
    OVERLAP = "OVERLAP"


class Occurrence(BaseModel):
    """A cluster of events judged reachable on one trip."""

    model_config = ConfigDict(frozen=True)

    mode: MatchMode
    members: tuple[Event, ...] = Field(description="Unique by identity key, chronological.")
    anchor: Event | None = Field(
        default=None, description="Seed event the constraints were checked against."
    )
    coverage: int = Field(ge=0, description="Distinct picks represented among members.")
    start_date: date | None = Field(default=None)
    end_date: date | None = Field(default=None)

    @classmethod
    def build(
        cls,
        mode: MatchMode,
        members: Sequence[Event],
        anchor: Event | None,
        coverage: int,
    ) -> Occurrence:
        ordered = sort_chronologically(list(members))
        return cls(
            mode=mode,
            members=tuple(ordered),
            anchor=anchor,
            coverage=coverage,
            start_date=ordered[0].local_date if ordered else None,
            end_date=max(e.local_date for e in ordered) if ordered else None,
        )

    @property
    def dates(self) -> list[date]:
        """Distinct member dates, ascending."""
        return sorted({e.local_date for e in self.members})

    @property
    def member_keys(self) -> tuple[str, ...]:
        """Sorted member identity keys; equal tuples mean the same occurrence."""
        return tuple(sorted(e.identity_key for e in self.members))


class Schedule(BaseModel):
    """One pick's full ticket-linked schedule, for fallback display."""

    model_config = ConfigDict(frozen=True)

    slot: Slot
    pick: Pick
    label: str
    events: tuple[Event, ...] = Field(default=())


class ClosestPair(BaseModel):
    """The nearest cross-pick pair of events within the day window."""

    model_config = ConfigDict(frozen=True)

    first: Event = Field(description="Event from the first schedule.")
    second: Event = Field(description="Event from the second schedule.")
    distance_miles: float = Field(ge=0.0)
    days_apart: int = Field(ge=0)


class FallbackSummary(BaseModel):
    """What to show when overlap matching finds nothing."""

    model_config = ConfigDict(frozen=True)

    schedules: tuple[Schedule, ...] = Field(default=())
    closest: ClosestPair | None = Field(default=None)
