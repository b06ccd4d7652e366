"""Pydantic request/response schemas for the rendezvous API.

Defines the public contract for the REST endpoints: search, options,
and health.

# ─── HOW SCHEMAS WORK ─────────────────────────────────────────────────
#
# These models define the *shape* of every HTTP response body.  FastAPI
# uses them for serialization (response_model=...) and for the generated
# OpenAPI docs at /docs.
#
# Response schemas are flatter than the domain models: an event is one
# object with its venue fields inlined, the way the results page renders
# it.  The ``from_*`` constructors do the flattening.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from datetime import date
from typing import Any

from pydantic import BaseModel, Field

from src.models.catalog import CatalogOption
from src.models.event import Event
from src.models.occurrence import ClosestPair, FallbackSummary, Occurrence, Schedule
from src.models.search import SearchOutcome


class EventResponse(BaseModel):
    """One event as shown in a result card."""

    id: str = Field(description="Identity key; stable across identical searches.")
    provider_id: str | None = None
    name: str
    local_date: date
    local_time: str | None = None
    venue: str = ""
    city: str = ""
    state: str = ""
    country: str = ""
    lat: float | None = None
    lon: float | None = None
    url: str | None = None
    image: str | None = None
    slots: list[str] = Field(default_factory=list, description="Slots whose picks produced this event.")

    @classmethod
    def from_event(cls, event: Event) -> EventResponse:
        return cls(
            id=event.identity_key,
            provider_id=event.provider_id,
            name=event.name,
            local_date=event.local_date,
            local_time=event.local_time.strftime("%H:%M") if event.local_time else None,
            venue=event.venue.name,
            city=event.venue.city,
            state=event.venue.region_code,
            country=event.venue.country_code,
            lat=event.venue.lat,
            lon=event.venue.lon,
            url=event.ticket_url,
            image=event.image_url,
            slots=sorted({p.slot.value for p in event.origin_picks}),
        )


class OccurrenceResponse(BaseModel):
    """A cluster of events that fit one trip."""

    mode: str
    coverage: int
    dates: list[date]
    start_date: date | None = None
    end_date: date | None = None
    anchor_id: str | None = None
    events: list[EventResponse] = Field(default_factory=list)

    @classmethod
    def from_occurrence(cls, occurrence: Occurrence) -> OccurrenceResponse:
        return cls(
            mode=occurrence.mode.value,
            coverage=occurrence.coverage,
            dates=occurrence.dates,
            start_date=occurrence.start_date,
            end_date=occurrence.end_date,
            anchor_id=occurrence.anchor.identity_key if occurrence.anchor else None,
            events=[EventResponse.from_event(e) for e in occurrence.members],
        )


class ScheduleResponse(BaseModel):
    slot: str
    label: str
    events: list[EventResponse] = Field(default_factory=list)

    @classmethod
    def from_schedule(cls, schedule: Schedule) -> ScheduleResponse:
        return cls(
            slot=schedule.slot.value,
            label=schedule.label,
            events=[EventResponse.from_event(e) for e in schedule.events],
        )


class ClosestPairResponse(BaseModel):
    first: EventResponse
    second: EventResponse
    distance_miles: float
    days_apart: int

    @classmethod
    def from_pair(cls, pair: ClosestPair) -> ClosestPairResponse:
        return cls(
            first=EventResponse.from_event(pair.first),
            second=EventResponse.from_event(pair.second),
            distance_miles=round(pair.distance_miles, 1),
            days_apart=pair.days_apart,
        )


class FallbackResponse(BaseModel):
    """Shown when two teams/artists never overlap in the window."""

    schedules: list[ScheduleResponse] = Field(default_factory=list)
    closest: ClosestPairResponse | None = None

    @classmethod
    def from_summary(cls, summary: FallbackSummary) -> FallbackResponse:
        return cls(
            schedules=[ScheduleResponse.from_schedule(s) for s in summary.schedules],
            closest=ClosestPairResponse.from_pair(summary.closest) if summary.closest else None,
        )


class SearchResponse(BaseModel):
    """Response body for ``GET /api/v1/search``."""

    mode: str | None = None
    count: int = 0
    occurrences: list[OccurrenceResponse] = Field(default_factory=list)
    fallback: FallbackResponse | None = None
    days: int
    radius_miles: int
    public_mode: bool
    picks: list[dict[str, Any]] = Field(default_factory=list)
    failures: list[dict[str, Any]] = Field(default_factory=list)
    event_counts: dict[str, int] = Field(default_factory=dict)

    @classmethod
    def from_outcome(cls, outcome: SearchOutcome) -> SearchResponse:
        result = outcome.result
        return cls(
            mode=result.mode.value if result.mode else None,
            count=len(result.occurrences),
            occurrences=[OccurrenceResponse.from_occurrence(o) for o in result.occurrences],
            fallback=FallbackResponse.from_summary(result.fallback) if result.fallback else None,
            days=outcome.days,
            radius_miles=outcome.radius_miles,
            public_mode=outcome.public_mode,
            picks=[p.model_dump(mode="json") for p in outcome.picks],
            failures=[f.model_dump(mode="json") for f in outcome.failures],
            event_counts={slot.value: n for slot, n in outcome.event_counts.items()},
        )


class OptionsResponse(BaseModel):
    """Response body for ``GET /api/v1/options``."""

    combined: list[CatalogOption] = Field(default_factory=list)
    counts: dict[str, int] = Field(default_factory=dict)


class HealthResponse(BaseModel):
    """Application health check response."""

    status: str
    version: str
    providers: dict[str, Any]


class ErrorResponse(BaseModel):
    """Standard error response body."""

    error: str
    detail: str | None = None
