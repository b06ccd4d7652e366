"""Integration tests for FastAPI API endpoints using TestClient."""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from conftest import MIAMI, TORONTO, VANCOUVER, make_raw_event
from src.api.middleware import ErrorHandlingMiddleware, RequestLoggingMiddleware, status_for
from src.api.routes import router as api_router
from src.config.settings import Settings
from src.interfaces.event_provider import FetchErr, FetchOk, IEventProvider
from src.interfaces.pick_resolver import IAttractionDirectory, ResolvedEntity
from src.models.pick import Pick
from src.pipeline.orchestrator import OccurrenceMatcher
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.services.catalog_service import CatalogService
from src.services.search_service import SearchService
from src.utils.errors import (
    ConfigurationError,
    InvalidPickError,
    PickParseError,
    ProviderUnavailableError,
    RateLimitError,
)

pytestmark = pytest.mark.integration

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


POOLS_BY_NAME: dict[str, FetchOk | FetchErr] = {
    "Toronto Maple Leafs": FetchOk(events=[make_raw_event("A1", "2024-05-01", TORONTO)]),
    "Drake": FetchOk(events=[make_raw_event("B1", "2024-05-02", TORONTO)]),
    "Vancouver Canucks": FetchOk(events=[make_raw_event("V1", "2024-06-01", VANCOUVER)]),
    "Pitbull": FetchOk(events=[make_raw_event("M1", "2024-06-01", MIAMI)]),
    "broken": FetchErr(reason="http_503", detail="unavailable"),
}


def _create_test_app(public_mode: bool = False) -> FastAPI:
    """Create a FastAPI app with fake provider dependencies for testing."""
    app = FastAPI()
    app.add_middleware(ErrorHandlingMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(api_router)

    provider = MagicMock(spec=IEventProvider)

    async def fetch(pick: Pick, date_range=None) -> FetchOk | FetchErr:
        return POOLS_BY_NAME.get(pick.display_name, FetchOk(events=[]))

    provider.fetch_events = AsyncMock(side_effect=fetch)

    directory = MagicMock(spec=IAttractionDirectory)
    directory.list_attractions = AsyncMock(return_value=[ResolvedEntity(id="K1", name="Adele")])

    settings = Settings(_env_file=None, ticketmaster_api_key="test-key", public_mode=public_mode)
    app.state.search_service = SearchService(
        event_provider=provider,
        matcher=OccurrenceMatcher(),
        settings=settings,
    )
    app.state.catalog_service = CatalogService(directory, MemoryCacheProvider(), artist_pages=1)
    app.state.provider_registry = {"ticketmaster": True, "event_cache": False}
    return app


@pytest.fixture
def client() -> TestClient:
    return TestClient(_create_test_app())


# ---------------------------------------------------------------------------
# Tests
# ---------------------------------------------------------------------------


class TestSearchEndpoint:
    def test_overlap_found(self, client: TestClient) -> None:
        response = client.get(
            "/api/v1/search",
            params={
                "p1": "team:NHL:Toronto Maple Leafs",
                "p2": "artist:K8vZ917Gku7:Drake",
                "days": "3",
                "radius": "50",
            },
        )

        assert response.status_code == 200
        body = response.json()
        assert body["mode"] == "OVERLAP"
        assert body["count"] == 1
        occurrence = body["occurrences"][0]
        assert occurrence["coverage"] == 2
        assert [e["provider_id"] for e in occurrence["events"]] == ["A1", "B1"]
        assert occurrence["events"][0]["city"] == "Toronto"
        assert occurrence["events"][0]["local_time"] == "19:00"
        assert occurrence["events"][0]["slots"] == ["p1"]
        assert body["fallback"] is None
        assert body["event_counts"] == {"p1": 1, "p2": 1}

    def test_fallback_when_no_overlap(self, client: TestClient) -> None:
        response = client.get(
            "/api/v1/search",
            params={"p1": "team:NHL:Vancouver Canucks", "p2": "artist:Pitbull", "radius": "50"},
        )

        body = response.json()
        assert body["count"] == 0
        assert [s["label"] for s in body["fallback"]["schedules"]] == ["Vancouver Canucks", "Pitbull"]
        closest = body["fallback"]["closest"]
        assert closest["days_apart"] == 0
        assert closest["distance_miles"] > 2700

    def test_entity_only(self, client: TestClient) -> None:
        response = client.get(
            "/api/v1/search",
            params={"p1": "team:NHL:Toronto Maple Leafs", "p2": "team:Toronto Maple Leafs"},
        )
        body = response.json()
        assert body["mode"] == "ENTITY_ONLY"
        assert body["count"] == 1

    def test_unparseable_numbers_use_defaults(self, client: TestClient) -> None:
        response = client.get("/api/v1/search", params={"p1": "jazz", "days": "abc", "radius": ""})
        body = response.json()
        assert response.status_code == 200
        assert body["days"] == 3
        assert body["radius_miles"] == 100

    def test_fetch_failure_reported(self, client: TestClient) -> None:
        response = client.get("/api/v1/search", params={"p1": "broken"})
        body = response.json()
        assert body["failures"] == [{"slot": "p1", "reason": "http_503", "detail": "unavailable"}]

    def test_malformed_pick_is_400(self, client: TestClient) -> None:
        response = client.get("/api/v1/search", params={"p1": "team:"})
        assert response.status_code == 400
        assert response.json()["error"] == "PickParseError"

    def test_reversed_dates_are_422(self, client: TestClient) -> None:
        response = client.get(
            "/api/v1/search",
            params={"p1": "jazz", "startDate": "2024-06-02", "endDate": "2024-06-01"},
        )
        assert response.status_code == 422

    def test_public_mode_clamps(self) -> None:
        client = TestClient(_create_test_app(public_mode=True))
        response = client.get("/api/v1/search", params={"p1": "jazz", "days": "30", "radius": "900"})
        body = response.json()
        assert body["public_mode"] is True
        assert body["days"] == 7
        assert body["radius_miles"] == 300


class TestOptionsEndpoint:
    def test_lists_grouped_options(self, client: TestClient) -> None:
        response = client.get("/api/v1/options")
        assert response.status_code == 200
        body = response.json()
        assert body["counts"]["artist"] == 1
        assert body["counts"]["genre"] == 7
        assert body["counts"]["team"] > 100
        ids = [o["id"] for o in body["combined"]]
        assert "artist:K1" in ids
        assert "team:NHL:Edmonton Oilers" in ids


class TestHealthEndpoint:
    def test_healthy_with_key(self, client: TestClient) -> None:
        body = client.get("/api/v1/health").json()
        assert body["status"] == "healthy"
        assert body["version"] == "0.1.0"

    def test_request_id_header(self, client: TestClient) -> None:
        generated = client.get("/api/v1/health")
        assert len(generated.headers["X-Request-ID"]) == 12

        echoed = client.get("/api/v1/health", headers={"X-Request-ID": "abc-123"})
        assert echoed.headers["X-Request-ID"] == "abc-123"

    def test_degraded_without_key(self) -> None:
        app = _create_test_app()
        app.state.provider_registry = {"ticketmaster": False}
        body = TestClient(app).get("/api/v1/health").json()
        assert body["status"] == "degraded"


class TestErrorStatus:
    @pytest.mark.parametrize(
        "exc, status",
        [
            (PickParseError(), 400),
            (InvalidPickError(), 400),
            (RateLimitError(), 429),
            (ProviderUnavailableError(), 502),
            (ConfigurationError(), 500),
        ],
    )
    def test_status_for(self, exc: Exception, status: int) -> None:
        assert status_for(exc) == status  # type: ignore[arg-type]


class TestAppFactory:
    def test_build_all_without_key(self) -> None:
        from src.main import _build_all

        components = _build_all(Settings(_env_file=None, ticketmaster_api_key=""), {})
        assert components["provider_registry"]["ticketmaster"] is False
        assert isinstance(components["search_service"], SearchService)
        assert isinstance(components["catalog_service"], CatalogService)

    def test_build_all_reads_matching_section(self) -> None:
        from src.main import _build_all

        components = _build_all(
            Settings(_env_file=None, ticketmaster_api_key="k"),
            {"matching": {"membership": "pairwise"}},
        )
        assert components["provider_registry"]["membership_policy"] == "pairwise"
        assert components["provider_registry"]["ticketmaster"] is True

    def test_routes_registered(self) -> None:
        from src.main import app

        paths = {route.path for route in app.routes}
        assert {"/api/v1/search", "/api/v1/options", "/api/v1/health"} <= paths
