"""Unit tests for raw event normalization, identity keys and dedupe."""

from __future__ import annotations

from datetime import date, time

import pytest

from conftest import TORONTO, make_raw_event
from src.models.event import Venue
from src.models.pick import Pick, PickKind, Slot
from src.services.matching.identity import dedupe, identity_key
from src.services.matching.normalizer import (
    normalize_event,
    normalize_events,
    parse_local_date,
    parse_local_time,
    safe_coordinate,
)


@pytest.fixture()
def pick() -> Pick:
    return Pick(kind=PickKind.RAW, slot=Slot.P1, display_name="hockey")


class TestFieldParsers:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("2024-05-01", date(2024, 5, 1)),
            ("2024-5-1", None),
            ("2024-02-30", None),
            ("", None),
            (None, None),
        ],
    )
    def test_parse_local_date(self, value: object, expected: date | None) -> None:
        assert parse_local_date(value) == expected

    def test_parse_local_time(self) -> None:
        assert parse_local_time("19:30:00") == time(19, 30)
        assert parse_local_time("19:30") == time(19, 30)
        assert parse_local_time("25:00") is None
        assert parse_local_time("TBA") is None

    @pytest.mark.parametrize("value", [None, "", "abc", "nan", "inf", True])
    def test_safe_coordinate_rejects(self, value: object) -> None:
        assert safe_coordinate(value) is None

    def test_safe_coordinate_accepts_strings(self) -> None:
        assert safe_coordinate("-79.38") == pytest.approx(-79.38)


class TestNormalizeEvent:
    def test_full_record(self, pick: Pick) -> None:
        raw = make_raw_event(
            "G5v",
            "2024-05-01",
            TORONTO,
            name="Oilers vs Leafs",
            genre="Hockey",
            sub_genre="NHL",
            attractions=[("K1", "Edmonton Oilers")],
        )
        event = normalize_event(raw, pick)
        assert event is not None
        assert event.identity_key == "id:G5v"
        assert event.local_time == time(19, 0)
        assert event.venue.city == "Toronto"
        assert event.venue.region_code == "ON"
        assert event.venue.lat == pytest.approx(43.6532)
        assert event.genres == ("Hockey", "NHL")
        assert event.attractions[0].name == "Edmonton Oilers"
        assert event.ticket_url == "https://tickets.example.com/G5v"
        assert event.origin_picks == (pick,)

    def test_missing_date_dropped(self, pick: Pick) -> None:
        raw = make_raw_event("G1", "2024-05-01")
        del raw["dates"]
        assert normalize_event(raw, pick) is None

    def test_non_dict_dropped(self, pick: Pick) -> None:
        assert normalize_event("nope", pick) is None  # type: ignore[arg-type]

    def test_missing_venue_degrades(self, pick: Pick) -> None:
        event = normalize_event(make_raw_event("G1", "2024-05-01", None), pick)
        assert event is not None
        assert event.venue == Venue()
        assert not event.has_coordinates

    def test_malformed_nested_fields_degrade(self, pick: Pick) -> None:
        raw = make_raw_event("G1", "2024-05-01", TORONTO)
        raw["_embedded"]["venues"] = ["Scotiabank Arena"]
        raw["_embedded"]["attractions"] = 5
        raw["classifications"] = 7
        raw["images"] = "poster.jpg"

        event = normalize_event(raw, pick)

        assert event is not None
        assert event.venue == Venue()
        assert event.genres == ()
        assert event.attractions == ()
        assert event.image_url is None

    def test_out_of_range_coordinates_dropped(self, pick: Pick) -> None:
        raw = make_raw_event("G1", "2024-05-01", (123.0, -79.0, "Nowhere", "", ""))
        event = normalize_event(raw, pick)
        assert event is not None
        assert event.venue.lat is None and event.venue.lon is None

    def test_undefined_genre_skipped(self, pick: Pick) -> None:
        raw = make_raw_event("G1", "2024-05-01", genre="Rock", sub_genre="Undefined")
        event = normalize_event(raw, pick)
        assert event is not None
        assert event.genres == ("Rock",)

    def test_prefers_16_9_image(self, pick: Pick) -> None:
        raw = make_raw_event("G1", "2024-05-01")
        raw["images"] = [
            {"url": "https://img/4_3.jpg", "ratio": "4_3"},
            {"url": "https://img/16_9.jpg", "ratio": "16_9"},
        ]
        event = normalize_event(raw, pick)
        assert event is not None
        assert event.image_url == "https://img/16_9.jpg"

    def test_slot_sensitive_key(self, pick: Pick) -> None:
        event = normalize_event(make_raw_event("G1", "2024-05-01"), pick, slot_sensitive=True)
        assert event is not None
        assert event.identity_key == "id:G1#p1"

    def test_normalize_events_drops_undated(self, pick: Pick) -> None:
        good = make_raw_event("G1", "2024-05-01")
        bad = make_raw_event("G2", "May 1st")
        assert [e.provider_id for e in normalize_events([good, bad], pick)] == ["G1"]


class TestIdentityKey:
    def test_composite_key_without_id(self) -> None:
        venue = Venue(name="Scotiabank Arena", city="Toronto")
        key = identity_key(None, "Leafs vs. Habs!", date(2024, 5, 1), time(19, 0), venue)
        assert key == "evt:leafs vs habs|2024-05-01|19:00:00|scotiabank arena|toronto"

    def test_composite_key_uses_venue_id(self) -> None:
        key = identity_key(None, "Show", date(2024, 5, 1), None, Venue(id="KovZ1"))
        assert key == "evt:show|2024-05-01||v:KovZ1"

    def test_title_variants_collide(self) -> None:
        venue = Venue(id="KovZ1")
        a = identity_key(None, "Oilers' Night - LIVE!", date(2024, 5, 1), None, venue)
        b = identity_key(None, "oilers night live", date(2024, 5, 1), None, venue)
        assert a == b

    def test_slot_suffix(self) -> None:
        assert identity_key("G1", "", date(2024, 5, 1), None, Venue(), Slot.P2) == "id:G1#p2"


class TestDedupe:
    def test_first_wins_and_merges_origins(self) -> None:
        p1 = Pick(kind=PickKind.ARTIST, slot=Slot.P1, canonical_id="K1")
        p2 = Pick(kind=PickKind.ARTIST, slot=Slot.P2, canonical_id="K2")
        a = normalize_event(make_raw_event("G1", "2024-05-01", name="First"), p1)
        b = normalize_event(make_raw_event("G1", "2024-05-01", name="Second"), p2)
        c = normalize_event(make_raw_event("G2", "2024-05-02"), p1)
        assert a and b and c
        result = dedupe([a, b, c])
        assert [e.identity_key for e in result] == ["id:G1", "id:G2"]
        assert result[0].name == "First"
        assert result[0].origin_picks == (p1, p2)

    def test_idempotent(self) -> None:
        p1 = Pick(kind=PickKind.ARTIST, slot=Slot.P1, canonical_id="K1")
        raws = [make_raw_event("G1", "2024-05-01"), make_raw_event("G1", "2024-05-01")]
        once = dedupe(normalize_events(raws, p1))
        assert len(once) == 1
        assert dedupe(once) == once
