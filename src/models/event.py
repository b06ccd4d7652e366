"""Pydantic v2 models for normalized events.

All models use frozen config (immutable).  An :class:`Event` is built once
by the normalizer from a raw provider record and never changes; dedup
merges produce new instances.
"""

from __future__ import annotations

from datetime import date, time

from pydantic import BaseModel, ConfigDict, Field

from src.models.pick import Pick


class Attraction(BaseModel):
    """An entity (team, artist) embedded in an event listing."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="", description="Provider attraction id.")
    name: str = Field(default="", description="Attraction name as listed.")


class Venue(BaseModel):
    """Where an event happens.  Coordinates are trusted as given."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(default="", description="Provider venue id.")
    name: str = Field(default="")
    city: str = Field(default="")
    region_code: str = Field(default="", description="State/province code.")
    country_code: str = Field(default="")
    lat: float | None = Field(default=None, description="None when absent, never NaN.")
    lon: float | None = Field(default=None, description="None when absent, never NaN.")

    @property
    def has_coordinates(self) -> bool:
        return self.lat is not None and self.lon is not None

    @property
    def location_signature(self) -> str:
        """Venue id when known, else lowercased ``city|region|country``."""
        if self.id:
            return f"venue:{self.id}"
        return f"{self.city}|{self.region_code}|{self.country_code}".lower()

    @property
    def city_region(self) -> str:
        """Display form such as ``"Toronto, ON"``."""
        return ", ".join(part for part in (self.city, self.region_code) if part)


class Event(BaseModel):
    """A single scheduled happening produced for one or more picks."""

    model_config = ConfigDict(frozen=True)

    identity_key: str = Field(description="Stable dedup identity (see services.matching.identity).")
    provider_id: str | None = Field(default=None)
    name: str = Field(default="")
    local_date: date = Field(description="Provider-local calendar date.")
    local_time: time | None = Field(default=None)
    venue: Venue = Field(default_factory=Venue)
    ticket_url: str | None = Field(default=None)
    image_url: str | None = Field(default=None)
    genres: tuple[str, ...] = Field(
        default=(), description="Classification genre and subgenre names."
    )
    attractions: tuple[Attraction, ...] = Field(default=())
    origin_picks: tuple[Pick, ...] = Field(
        min_length=1,
        description="Picks whose fetch produced this event; several after a cross-pick merge.",
    )

    @property
    def origin_pick(self) -> Pick:
        return self.origin_picks[0]

    @property
    def has_coordinates(self) -> bool:
        return self.venue.has_coordinates

    @property
    def has_ticket_link(self) -> bool:
        return bool(self.ticket_url)

    @property
    def sort_key(self) -> tuple[date, int, time, str]:
        """Chronological order; events without a time sort after timed ones."""
        return (
            self.local_date,
            0 if self.local_time is not None else 1,
            self.local_time or time.min,
            self.identity_key,
        )

    def with_origin(self, pick: Pick) -> Event:
        """Return a copy that also credits *pick*; unchanged if already credited."""
        if pick in self.origin_picks:
            return self
        return self.model_copy(update={"origin_picks": (*self.origin_picks, pick)})


def sort_chronologically(events: list[Event]) -> list[Event]:
    """Sort by date, then time of day, untimed last, identity key as tiebreak."""
    return sorted(events, key=lambda e: e.sort_key)
