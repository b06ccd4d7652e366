"""Unit tests for TicketmasterEventProvider using httpx.MockTransport."""

from __future__ import annotations

import asyncio
import json
import time
from datetime import date
from typing import Callable

import httpx
import pytest

from conftest import make_raw_event
from src.interfaces.event_provider import FetchErr, FetchOk
from src.models.matching import DateRange
from src.models.pick import Pick, PickKind, Slot
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.event.ticketmaster_provider import TicketmasterEventProvider

BASE_URL = "https://tm.test/discovery/v2"

Handler = Callable[[httpx.Request], httpx.Response]


def _provider(handler: Handler, api_key: str = "test-key", **kwargs) -> TicketmasterEventProvider:
    client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
    return TicketmasterEventProvider(
        http_client=client,
        api_key=api_key,
        base_url=BASE_URL,
        retry_backoff=0.0,
        **kwargs,
    )


def _events_body(*events: dict) -> dict:
    return {"_embedded": {"events": list(events)}, "page": {"totalElements": len(events)}}


RAW_PICK = Pick(kind=PickKind.RAW, slot=Slot.P1, display_name="monster trucks")


class TestBuildParams:
    @pytest.fixture()
    def provider(self) -> TicketmasterEventProvider:
        return _provider(lambda request: httpx.Response(200, json=_events_body()))

    def test_resolved_entity_uses_attraction_id(self, provider: TicketmasterEventProvider) -> None:
        pick = Pick(kind=PickKind.TEAM, slot=Slot.P1, display_name="Oilers", canonical_id="K8vZ9171o57")
        params = provider.build_params(pick)
        assert params["attractionId"] == "K8vZ9171o57"
        assert "keyword" not in params
        assert params["sort"] == "date,asc"
        assert params["size"] == 200
        assert params["countryCode"] == "US,CA"

    def test_unresolved_entity_uses_keyword(self, provider: TicketmasterEventProvider) -> None:
        pick = Pick(kind=PickKind.ARTIST, slot=Slot.P1, display_name="Luke Combs")
        assert provider.build_params(pick)["keyword"] == "Luke Combs"

    def test_genre_uses_classification(self, provider: TicketmasterEventProvider) -> None:
        pick = Pick(kind=PickKind.GENRE, slot=Slot.P2, genre_bucket="Country")
        params = provider.build_params(pick)
        assert params["classificationName"] == "Country"
        assert "keyword" not in params

    def test_date_range_pushed_down(self, provider: TicketmasterEventProvider) -> None:
        params = provider.build_params(
            RAW_PICK, DateRange(start=date(2024, 5, 1), end=date(2024, 5, 31))
        )
        assert params["startDateTime"] == "2024-05-01T00:00:00Z"
        assert params["endDateTime"] == "2024-05-31T23:59:59Z"


class TestFetchEvents:
    @pytest.mark.asyncio
    async def test_missing_key_makes_no_request(self) -> None:
        calls: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(request)
            return httpx.Response(200, json=_events_body())

        result = await _provider(handler, api_key="").fetch_events(RAW_PICK)

        assert isinstance(result, FetchErr)
        assert result.reason == "missing_api_key"
        assert result.events == []
        assert calls == []

    @pytest.mark.asyncio
    async def test_success_returns_events(self) -> None:
        seen: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_events_body(make_raw_event("G1", "2024-05-01")))

        result = await _provider(handler).fetch_events(RAW_PICK)

        assert isinstance(result, FetchOk)
        assert [e["id"] for e in result.events] == ["G1"]
        assert seen[0].url.path.endswith("/events.json")
        assert seen[0].url.params["apikey"] == "test-key"
        assert seen[0].url.params["keyword"] == "monster trucks"

    @pytest.mark.asyncio
    async def test_empty_embedded_is_ok(self) -> None:
        result = await _provider(lambda r: httpx.Response(200, json={"page": {}})).fetch_events(RAW_PICK)
        assert isinstance(result, FetchOk)
        assert result.events == []

    @pytest.mark.asyncio
    async def test_retries_after_rate_limit(self) -> None:
        responses = iter(
            [
                httpx.Response(429),
                httpx.Response(200, json=_events_body(make_raw_event("G1", "2024-05-01"))),
            ]
        )
        result = await _provider(lambda r: next(responses)).fetch_events(RAW_PICK)
        assert isinstance(result, FetchOk)
        assert len(result.events) == 1

    @pytest.mark.asyncio
    async def test_server_errors_exhaust_retries(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(503, text="unavailable")

        result = await _provider(handler).fetch_events(RAW_PICK)

        assert isinstance(result, FetchErr)
        assert result.reason == "http_503"
        assert len(calls) == 3

    @pytest.mark.asyncio
    async def test_client_error_not_retried(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(401, text="bad key")

        result = await _provider(handler).fetch_events(RAW_PICK)

        assert isinstance(result, FetchErr)
        assert result.reason == "http_401"
        assert len(calls) == 1

    @pytest.mark.asyncio
    async def test_network_error_reported(self) -> None:
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        result = await _provider(handler).fetch_events(RAW_PICK)

        assert isinstance(result, FetchErr)
        assert result.reason == "network_error"

    @pytest.mark.asyncio
    async def test_invalid_json(self) -> None:
        result = await _provider(lambda r: httpx.Response(200, text="<html>")).fetch_events(RAW_PICK)
        assert isinstance(result, FetchErr)
        assert result.reason == "invalid_json"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            [],
            {"_embedded": ["not", "a", "dict"]},
            {"_embedded": {"events": {"id": "G1"}}},
        ],
    )
    async def test_unexpected_shape_is_invalid_json(self, body: object) -> None:
        result = await _provider(lambda r: httpx.Response(200, json=body)).fetch_events(RAW_PICK)
        assert isinstance(result, FetchErr)
        assert result.reason == "invalid_json"
        assert result.events == []

    @pytest.mark.asyncio
    async def test_concurrent_fetches_are_spaced(self) -> None:
        sent_at: list[float] = []

        def handler(request: httpx.Request) -> httpx.Response:
            sent_at.append(time.monotonic())
            return httpx.Response(200, json=_events_body())

        provider = _provider(handler)
        await asyncio.gather(*(provider.fetch_events(RAW_PICK) for _ in range(3)))

        gaps = [b - a for a, b in zip(sent_at, sent_at[1:])]
        assert len(gaps) == 2
        assert all(gap >= 0.18 for gap in gaps)

    @pytest.mark.asyncio
    async def test_cache_serves_repeat_fetch(self) -> None:
        calls: list[int] = []

        def handler(request: httpx.Request) -> httpx.Response:
            calls.append(1)
            return httpx.Response(200, content=json.dumps(_events_body(make_raw_event("G1", "2024-05-01"))))

        provider = _provider(handler, cache=MemoryCacheProvider(max_size=8, ttl=60))

        first = await provider.fetch_events(RAW_PICK)
        second = await provider.fetch_events(RAW_PICK)

        assert first.events == second.events
        assert len(calls) == 1

    def test_provider_name(self) -> None:
        assert _provider(lambda r: httpx.Response(200)).get_provider_name() == "ticketmaster"
