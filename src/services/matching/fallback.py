"""Fallback schedules and the closest cross-pick pair.

When two different teams/artists never overlap inside the user's window
and radius, the results page still shows both schedules side by side and
calls out the single nearest pair of events that fall within the day
window, so the user can see how far apart "almost" is.
"""

from __future__ import annotations

from typing import Iterable

from src.models.event import Event, sort_chronologically
from src.models.occurrence import ClosestPair, FallbackSummary, Schedule
from src.models.pick import Pick, Slot
from src.services.matching.clustering import distance_miles, ticket_linked
from src.services.matching.identity import dedupe
from src.utils.geo import days_between, max_diff_days

# Distances closer than this are treated as equal and fall through to the
# day-gap and date tie-breaks.
DISTANCE_EPSILON = 1e-9


def schedule_label(pick: Pick, events: list[Event]) -> str:
    """Best-effort display label for a schedule.

    Prefers the pick's display name, then the embedded attraction whose id
    matches the pick's canonical id, then the first listed attraction on
    the first event, then the canonical id itself.
    """
    if pick.display_name.strip():
        return pick.display_name.strip()
    if pick.canonical_id:
        for event in events:
            for attraction in event.attractions:
                if attraction.id == pick.canonical_id and attraction.name:
                    return attraction.name
    for event in events:
        for attraction in event.attractions:
            if attraction.name:
                return attraction.name
        break
    return pick.label or pick.slot.value


def build_schedule(pick: Pick, events: Iterable[Event]) -> Schedule:
    """Deduplicated, ticket-linked, chronological schedule for one pick."""
    ordered = sort_chronologically(dedupe(ticket_linked(events)))
    return Schedule(
        slot=pick.slot,
        pick=pick,
        label=schedule_label(pick, ordered),
        events=tuple(ordered),
    )


def _beats(
    distance: float,
    gap: int,
    earliest: str,
    best: tuple[float, int, str],
) -> bool:
    best_distance, best_gap, best_earliest = best
    if distance < best_distance - DISTANCE_EPSILON:
        return True
    if distance > best_distance + DISTANCE_EPSILON:
        return False
    if gap != best_gap:
        return gap < best_gap
    return earliest < best_earliest


def find_closest_pair(first: Schedule, second: Schedule, max_days: int) -> ClosestPair | None:
    """Nearest pair (e1 from *first*, e2 from *second*) within the day window.

    *max_days* is the trip length the user asked for, before any
    public-mode clamping.  Returns None when no pair with coordinates is
    close enough in time.
    """
    max_diff = max_diff_days(max_days)
    best: ClosestPair | None = None
    best_rank: tuple[float, int, str] | None = None

    for a in first.events:
        if not a.has_coordinates:
            continue
        for b in second.events:
            if not b.has_coordinates:
                continue
            gap = abs(days_between(a.local_date, b.local_date))
            if gap > max_diff:
                continue
            distance = distance_miles(a, b)
            earliest = min(a.local_date, b.local_date).isoformat()
            if best_rank is None or _beats(distance, gap, earliest, best_rank):
                best = ClosestPair(first=a, second=b, distance_miles=distance, days_apart=gap)
                best_rank = (distance, gap, earliest)

    return best


def build_fallback(
    picks: list[Pick],
    events_by_slot: dict[Slot, list[Event]],
    max_days: int,
) -> FallbackSummary:
    """Schedules for every entity pick plus the closest pair of the first two."""
    schedules = tuple(
        build_schedule(pick, events_by_slot.get(pick.slot, []))
        for pick in picks
        if pick.is_entity
    )
    closest = find_closest_pair(schedules[0], schedules[1], max_days) if len(schedules) >= 2 else None
    return FallbackSummary(schedules=schedules, closest=closest)
