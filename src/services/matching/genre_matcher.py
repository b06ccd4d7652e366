"""Keyword-bucket matching for genre picks.

A genre pick ("Country", "Electronic") is broader than any provider
classification, so each bucket expands to a set of lowercase keywords and
an event matches when any of its genre/subgenre names contains one of
them.  "contemporary country" and "Country Rock" both land in Country.
"""

from __future__ import annotations

from typing import Iterable

from src.models.event import Event

GENRE_EXPANSION: dict[str, tuple[str, ...]] = {
    "Country": ("country", "contemporary country", "country rock", "americana", "bluegrass"),
    "Rock": ("rock", "alternative", "indie", "punk", "grunge", "hard rock"),
    "Pop": ("pop", "k-pop", "kpop", "j-pop", "jpop"),
    "Rap": ("rap", "hip hop", "hip-hop", "trap"),
    "Electronic": ("electronic", "edm", "dance", "house", "techno", "trance", "dubstep"),
    "R&B": ("r&b", "rnb", "rhythm and blues", "neo soul", "neo-soul", "soul"),
    "Jazz": ("jazz", "swing", "big band", "bebop", "fusion", "smooth jazz"),
}

_BUCKETS_BY_LOWER = {name.lower(): name for name in GENRE_EXPANSION}


def canonical_bucket(bucket: str) -> str:
    """Return the catalog spelling of *bucket* ("rock" -> "Rock"), or it unchanged."""
    return _BUCKETS_BY_LOWER.get(bucket.strip().lower(), bucket.strip())


def keywords_for(bucket: str) -> tuple[str, ...]:
    """Keywords for *bucket*; an unknown bucket matches on its own name."""
    known = GENRE_EXPANSION.get(canonical_bucket(bucket))
    if known:
        return known
    own = bucket.strip().lower()
    return (own,) if own else ()


def matches_genre(event: Event, bucket: str) -> bool:
    """True if any of the event's genre names contains a bucket keyword."""
    keywords = keywords_for(bucket)
    for genre in event.genres:
        lowered = genre.lower()
        if any(keyword in lowered for keyword in keywords):
            return True
    return False


def filter_genre(events: Iterable[Event], bucket: str) -> list[Event]:
    return [e for e in events if matches_genre(e, bucket)]
