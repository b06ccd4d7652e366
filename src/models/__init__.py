"""rendezvous domain models - re-exports all public model classes.

Other parts of the codebase import from ``src.models`` rather than the
individual submodules:
    - pick.py       - Pick, PickKind, Slot and the pick_key identity
    - event.py      - normalized Event, Venue, Attraction
    - occurrence.py - Occurrence, Schedule, ClosestPair, FallbackSummary
    - matching.py   - MatchRequest, MatchOptions, MatchResult, DateRange
    - catalog.py    - CatalogOption for the pick pickers
    - search.py     - SearchQuery, SearchOutcome, SlotFailure
"""

from __future__ import annotations

from src.models.catalog import CatalogOption
from src.models.event import Attraction, Event, Venue, sort_chronologically
from src.models.matching import (
    DateRange,
    MatchOptions,
    MatchRequest,
    MatchResult,
    MembershipPolicy,
)
from src.models.occurrence import (
    ClosestPair,
    FallbackSummary,
    MatchMode,
    Occurrence,
    Schedule,
)
from src.models.pick import Pick, PickKind, Slot, pick_key, same_entity
from src.models.search import SearchOutcome, SearchQuery, SlotFailure

__all__ = [
    # pick
    "Pick",
    "PickKind",
    "Slot",
    "pick_key",
    "same_entity",
    # event
    "Attraction",
    "Event",
    "Venue",
    "sort_chronologically",
    # occurrence
    "ClosestPair",
    "FallbackSummary",
    "MatchMode",
    "Occurrence",
    "Schedule",
    # matching
    "DateRange",
    "MatchOptions",
    "MatchRequest",
    "MatchResult",
    "MembershipPolicy",
    # catalog
    "CatalogOption",
    # search
    "SearchOutcome",
    "SearchQuery",
    "SlotFailure",
]
