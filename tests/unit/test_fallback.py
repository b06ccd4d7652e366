"""Unit tests for fallback schedules and the closest cross-pick pair."""

from __future__ import annotations

import pytest

from conftest import MIAMI, TORONTO, VANCOUVER, make_raw_event
from src.models.pick import Pick, PickKind, Slot
from src.services.matching.fallback import (
    build_fallback,
    build_schedule,
    find_closest_pair,
    schedule_label,
)
from src.services.matching.normalizer import normalize_events

P1 = Pick(kind=PickKind.TEAM, slot=Slot.P1, display_name="Vancouver Canucks", canonical_id="K-van")
P2 = Pick(kind=PickKind.ARTIST, slot=Slot.P2, display_name="Pitbull", canonical_id="K-pit")


class TestScheduleLabel:
    def test_display_name_wins(self) -> None:
        assert schedule_label(P1, []) == "Vancouver Canucks"

    def test_matching_attraction_name(self) -> None:
        pick = Pick(kind=PickKind.ARTIST, slot=Slot.P2, canonical_id="K-pit")
        events = normalize_events(
            [make_raw_event("E1", "2024-06-01", attractions=[("K-opener", "Opener"), ("K-pit", "Pitbull")])],
            pick,
        )
        assert schedule_label(pick, events) == "Pitbull"

    def test_first_attraction_then_id(self) -> None:
        pick = Pick(kind=PickKind.ARTIST, slot=Slot.P2, canonical_id="K-x")
        events = normalize_events(
            [make_raw_event("E1", "2024-06-01", attractions=[("K-a", "Headliner")])], pick
        )
        assert schedule_label(pick, events) == "Headliner"
        assert schedule_label(pick, []) == "K-x"


class TestBuildSchedule:
    def test_chronological_ticketed_unique(self) -> None:
        events = normalize_events(
            [
                make_raw_event("E2", "2024-06-05"),
                make_raw_event("E1", "2024-06-01"),
                make_raw_event("E1", "2024-06-01"),
                make_raw_event("E3", "2024-06-02", url=None),
            ],
            P1,
        )
        schedule = build_schedule(P1, events)
        assert [e.provider_id for e in schedule.events] == ["E1", "E2"]
        assert schedule.slot == Slot.P1


class TestClosestPair:
    def test_far_apart_same_day(self) -> None:
        first = build_schedule(P1, normalize_events([make_raw_event("V", "2024-06-01", VANCOUVER)], P1))
        second = build_schedule(P2, normalize_events([make_raw_event("M", "2024-06-01", MIAMI)], P2))

        pair = find_closest_pair(first, second, max_days=3)

        assert pair is not None
        assert pair.first.provider_id == "V"
        assert pair.second.provider_id == "M"
        assert pair.days_apart == 0
        assert pair.distance_miles == pytest.approx(2804, rel=0.01)

    def test_fewer_days_apart_breaks_distance_tie(self) -> None:
        first = build_schedule(P1, normalize_events([make_raw_event("A1", "2024-05-01", TORONTO)], P1))
        second = build_schedule(
            P2,
            normalize_events(
                [make_raw_event("B1", "2024-05-03", TORONTO), make_raw_event("B2", "2024-05-02", TORONTO)],
                P2,
            ),
        )
        pair = find_closest_pair(first, second, max_days=3)
        assert pair is not None
        assert pair.second.provider_id == "B2"
        assert pair.days_apart == 1

    def test_earlier_date_breaks_remaining_tie(self) -> None:
        first = build_schedule(P1, normalize_events([make_raw_event("A1", "2024-05-02", TORONTO)], P1))
        second = build_schedule(
            P2,
            normalize_events(
                [make_raw_event("B3", "2024-05-03", TORONTO), make_raw_event("B1", "2024-05-01", TORONTO)],
                P2,
            ),
        )
        pair = find_closest_pair(first, second, max_days=3)
        assert pair is not None
        assert pair.second.provider_id == "B1"

    def test_none_outside_day_window(self) -> None:
        first = build_schedule(P1, normalize_events([make_raw_event("A1", "2024-05-01", TORONTO)], P1))
        second = build_schedule(P2, normalize_events([make_raw_event("B1", "2024-05-09", TORONTO)], P2))
        assert find_closest_pair(first, second, max_days=3) is None

    def test_unlocated_events_skipped(self) -> None:
        first = build_schedule(P1, normalize_events([make_raw_event("A1", "2024-05-01", None, venue_id="X")], P1))
        second = build_schedule(P2, normalize_events([make_raw_event("B1", "2024-05-01", TORONTO)], P2))
        assert find_closest_pair(first, second, max_days=3) is None


class TestBuildFallback:
    def test_schedules_for_entities_only(self) -> None:
        genre = Pick(kind=PickKind.GENRE, slot=Slot.P3, genre_bucket="Rock")
        events_by_slot = {
            Slot.P1: normalize_events([make_raw_event("V", "2024-06-01", VANCOUVER)], P1),
            Slot.P2: normalize_events([make_raw_event("M", "2024-06-01", MIAMI)], P2),
            Slot.P3: normalize_events([make_raw_event("R", "2024-06-01", TORONTO)], genre),
        }
        summary = build_fallback([P1, P2, genre], events_by_slot, max_days=3)
        assert [s.slot for s in summary.schedules] == [Slot.P1, Slot.P2]
        assert summary.closest is not None

    def test_missing_pool_gives_empty_schedule(self) -> None:
        summary = build_fallback([P1, P2], {}, max_days=3)
        assert [len(s.events) for s in summary.schedules] == [0, 0]
        assert summary.closest is None
