"""Shared pytest fixtures for the rendezvous test suite."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from src.models.pick import Pick, PickKind, Slot

# ---------------------------------------------------------------------------
# Cities used across the suite (lat, lon, city, state code, country code)
# ---------------------------------------------------------------------------

TORONTO = (43.6532, -79.3832, "Toronto", "ON", "CA")
HAMILTON = (43.2557, -79.8711, "Hamilton", "ON", "CA")
BUFFALO = (42.8864, -78.8784, "Buffalo", "NY", "US")
BOSTON = (42.3601, -71.0589, "Boston", "MA", "US")
CHICAGO = (41.8781, -87.6298, "Chicago", "IL", "US")
VANCOUVER = (49.2827, -123.1207, "Vancouver", "BC", "CA")
SEATTLE = (47.6062, -122.3321, "Seattle", "WA", "US")
MIAMI = (25.7617, -80.1918, "Miami", "FL", "US")
EDMONTON = (53.5461, -113.4938, "Edmonton", "AB", "CA")

RawEventFactory = Callable[..., dict[str, Any]]


def make_raw_event(
    event_id: str | None,
    local_date: str,
    place: tuple[float, float, str, str, str] | None = TORONTO,
    *,
    name: str | None = None,
    local_time: str | None = "19:00:00",
    venue_id: str | None = None,
    venue_name: str | None = None,
    url: str | None = "auto",
    genre: str | None = None,
    sub_genre: str | None = None,
    attractions: list[tuple[str, str]] | None = None,
) -> dict[str, Any]:
    """Build one record in the Ticketmaster Discovery ``events`` shape.

    ``place`` of None produces a venue with no location block.  ``url``
    defaults to a ticket link derived from the id; pass None for a
    ticket-less listing.
    """
    venue: dict[str, Any] = {}
    if place is not None:
        lat, lon, city, state, country = place
        venue = {
            "id": venue_id or f"V-{city}",
            "name": venue_name or f"{city} Arena",
            "city": {"name": city},
            "state": {"stateCode": state},
            "country": {"countryCode": country},
            "location": {"latitude": str(lat), "longitude": str(lon)},
        }
    elif venue_id:
        venue = {"id": venue_id, "name": venue_name or "Unknown Venue"}

    start: dict[str, Any] = {"localDate": local_date}
    if local_time is not None:
        start["localTime"] = local_time

    raw: dict[str, Any] = {
        "name": name or f"Event {event_id or local_date}",
        "dates": {"start": start},
        "_embedded": {"venues": [venue] if venue else []},
    }
    if event_id is not None:
        raw["id"] = event_id
    if url == "auto":
        raw["url"] = f"https://tickets.example.com/{event_id or local_date}"
    elif url is not None:
        raw["url"] = url
    if genre or sub_genre:
        classification: dict[str, Any] = {}
        if genre:
            classification["genre"] = {"name": genre}
        if sub_genre:
            classification["subGenre"] = {"name": sub_genre}
        raw["classifications"] = [classification]
    if attractions:
        raw["_embedded"]["attractions"] = [{"id": aid, "name": aname} for aid, aname in attractions]
    return raw


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def raw_event() -> RawEventFactory:
    """Factory for Ticketmaster-shaped raw event records."""
    return make_raw_event


@pytest.fixture
def oilers() -> Pick:
    return Pick(
        kind=PickKind.TEAM,
        slot=Slot.P1,
        display_name="Edmonton Oilers",
        league="NHL",
        canonical_id="K8vZ9171o57",
    )


@pytest.fixture
def combs() -> Pick:
    return Pick(
        kind=PickKind.ARTIST,
        slot=Slot.P2,
        display_name="Luke Combs",
        canonical_id="K8vZ917Gku7",
    )


@pytest.fixture
def country_genre() -> Pick:
    return Pick(kind=PickKind.GENRE, slot=Slot.P2, genre_bucket="Country")


@pytest.fixture
def mock_config() -> dict[str, Any]:
    """Return a minimal configuration dictionary for testing."""
    return {
        "app": {"name": "rendezvous", "host": "127.0.0.1", "port": 8000},
        "matching": {
            "membership": "anchor",
            "single_pick_min_run": 1,
            "slot_sensitive": None,
        },
        "catalog": {"pinned_artists": ["Luke Combs"]},
    }
