"""Occurrence clustering for the three matching modes.

# ─── OVERLAP CLUSTERING IN ONE PARAGRAPH ───────────────────────────────
#
# Every ticket-linked event with coordinates takes a turn as the anchor.
# Its cluster holds the anchor plus every other event dated 0..max_diff
# days *after* it and within radius of it.  With the default ANCHOR policy
# that is the whole test; PAIRWISE additionally rejects a candidate that
# is out of range of any member already admitted (greedy, chronological).
# A cluster survives only if it spans at least two picks, has no more
# distinct dates than the trip length, and its first-to-last gap fits the
# window.  Clusters with the same member set are the same occurrence.
#
# Cost is O(n²) in the pooled event count, bounded by the provider page
# size per pick.
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from typing import Iterable, Sequence

from src.models.event import Event, sort_chronologically
from src.models.matching import MembershipPolicy
from src.models.occurrence import MatchMode, Occurrence
from src.models.pick import pick_key
from src.services.matching.identity import dedupe
from src.utils.geo import days_between, haversine_miles, max_diff_days
from src.utils.logging import get_logger

_logger = get_logger(__name__)


def ticket_linked(events: Iterable[Event]) -> list[Event]:
    """Events that can be shown with a ticket link."""
    return [e for e in events if e.has_ticket_link]


def coverage(events: Iterable[Event], slot_sensitive: bool = False) -> int:
    """Distinct pick keys credited across *events*' origin picks."""
    return len({pick_key(p, slot_sensitive) for e in events for p in e.origin_picks})


def distance_miles(a: Event, b: Event) -> float:
    """Great-circle miles between two events that both have coordinates."""
    return haversine_miles(a.venue.lat, a.venue.lon, b.venue.lat, b.venue.lon)  # type: ignore[arg-type]


def _first_with_coordinates(events: Sequence[Event]) -> Event | None:
    return next((e for e in events if e.has_coordinates), None)


def rank_occurrences(occurrences: Iterable[Occurrence]) -> list[Occurrence]:
    """Coverage desc, then member count desc, then earliest date asc (stable)."""
    return sorted(
        occurrences,
        key=lambda o: (-o.coverage, -len(o.members), o.start_date.isoformat() if o.start_date else "9999-12-31"),
    )


# ---------------------------------------------------------------------------
# ENTITY_ONLY
# ---------------------------------------------------------------------------


def build_entity_only(events: Iterable[Event]) -> Occurrence:
    """One occurrence holding the entity's whole ticket-linked schedule.

    Day window and radius do not apply.  The result is emitted even when
    the schedule is empty so callers always get exactly one occurrence.
    """
    pool = sort_chronologically(dedupe(ticket_linked(events)))
    return Occurrence.build(
        MatchMode.ENTITY_ONLY,
        pool,
        anchor=_first_with_coordinates(pool),
        coverage=1,
    )


# ---------------------------------------------------------------------------
# SINGLE_PICK
# ---------------------------------------------------------------------------


def build_single_pick_runs(events: Iterable[Event], min_run: int = 1) -> list[Occurrence]:
    """Split one pick's schedule into consecutive same-location runs.

    A run ends whenever the venue signature changes from the previous
    event.  Runs shorter than *min_run* are dropped.  Output stays in
    chronological order.
    """
    pool = sort_chronologically(dedupe(ticket_linked(events)))

    runs: list[list[Event]] = []
    current: list[Event] = []
    for event in pool:
        if current and current[-1].venue.location_signature != event.venue.location_signature:
            runs.append(current)
            current = []
        current.append(event)
    if current:
        runs.append(current)

    return [
        Occurrence.build(
            MatchMode.SINGLE_PICK,
            run,
            anchor=_first_with_coordinates(run),
            coverage=1,
        )
        for run in runs
        if len(run) >= min_run
    ]


# ---------------------------------------------------------------------------
# OVERLAP
# ---------------------------------------------------------------------------


def _within_anchor_window(anchor: Event, other: Event, max_diff: int, radius_miles: float) -> bool:
    gap = days_between(anchor.local_date, other.local_date)
    if gap < 0 or gap > max_diff:
        return False
    return distance_miles(anchor, other) <= radius_miles


def _mutually_reachable(a: Event, b: Event, max_diff: int, radius_miles: float) -> bool:
    if abs(days_between(a.local_date, b.local_date)) > max_diff:
        return False
    return distance_miles(a, b) <= radius_miles


def build_overlap(
    events: Iterable[Event],
    max_days: int,
    radius_miles: float,
    membership: MembershipPolicy = MembershipPolicy.ANCHOR,
    slot_sensitive: bool = False,
) -> list[Occurrence]:
    """Cluster pooled events from several picks into ranked occurrences.

    Parameters
    ----------
    events:
        Normalized events from every active pick (already genre/date
        filtered).  Ticket-less and coordinate-less events are ignored.
    max_days:
        Inclusive trip length.
    radius_miles:
        Maximum distance from the anchor (and, under PAIRWISE, between
        any two members).
    membership:
        Anchor-only or full pairwise membership checks.
    slot_sensitive:
        Count coverage with slot-suffixed pick keys.
    """
    max_diff = max_diff_days(max_days)
    pool = [e for e in sort_chronologically(dedupe(ticket_linked(events))) if e.has_coordinates]

    seen: set[tuple[str, ...]] = set()
    clusters: list[Occurrence] = []
    rejected_coverage = 0

    for anchor in pool:
        members = [anchor]
        for other in pool:
            if other.identity_key == anchor.identity_key:
                continue
            if not _within_anchor_window(anchor, other, max_diff, radius_miles):
                continue
            if membership == MembershipPolicy.PAIRWISE and not all(
                _mutually_reachable(m, other, max_diff, radius_miles) for m in members
            ):
                continue
            members.append(other)

        covered = coverage(members, slot_sensitive)
        if covered < 2:
            rejected_coverage += 1
            continue

        dates = {m.local_date for m in members}
        if len(dates) > max_days:
            continue
        if days_between(min(dates), max(dates)) > max_diff:
            continue

        occurrence = Occurrence.build(MatchMode.OVERLAP, members, anchor=anchor, coverage=covered)
        if occurrence.member_keys in seen:
            continue
        seen.add(occurrence.member_keys)
        clusters.append(occurrence)

    _logger.debug(
        "overlap_clusters_built",
        anchors=len(pool),
        kept=len(clusters),
        rejected_coverage=rejected_coverage,
        max_diff_days=max_diff,
        radius_miles=radius_miles,
        membership=membership.value,
    )
    return rank_occurrences(clusters)
