"""FastAPI API routes for rendezvous.

Provides REST endpoints for searching occurrences, listing selectable
options, and health checks.  Service dependencies are resolved from
``app.state`` via FastAPI's ``Depends`` using the ``Annotated`` pattern.

# ─── API ROUTE MAP ────────────────────────────────────────────────────
#
# Endpoint              Method  Description
# ─────────────────────────────────────────────────────────────────────
# /api/v1/search        GET     Picks + trip bounds → ranked occurrences
# /api/v1/options       GET     Teams, artists and genres for the pickers
# /api/v1/health        GET     Health check + provider status
#
# Query parameters keep the names the results page already sends:
# p1, p2, p3, days, radius, startDate, endDate.  Unparseable numbers and
# dates are treated as absent (the service then applies its defaults).
# ──────────────────────────────────────────────────────────────────────
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Any

import structlog
from fastapi import APIRouter, Depends, HTTPException, Query, Request
from pydantic import ValidationError

from src.api.schemas import HealthResponse, OptionsResponse, SearchResponse
from src.models.search import SearchQuery
from src.services.catalog_service import CatalogService
from src.services.search_service import SearchService
from src.utils.logging import get_logger

_logger: structlog.BoundLogger = get_logger(__name__)

router = APIRouter(prefix="/api/v1")

_VERSION = "0.1.0"


# ---------------------------------------------------------------------------
# Dependencies
# ---------------------------------------------------------------------------


def _get_search_service(request: Request) -> SearchService:
    return request.app.state.search_service


def _get_catalog_service(request: Request) -> CatalogService:
    return request.app.state.catalog_service


SearchServiceDep = Annotated[SearchService, Depends(_get_search_service)]
CatalogServiceDep = Annotated[CatalogService, Depends(_get_catalog_service)]


def _parse_number(value: str | None) -> float | None:
    if value is None or not value.strip():
        return None
    try:
        return float(value)
    except ValueError:
        return None


def _parse_ymd(value: str | None) -> date | None:
    if value is None or len(value.strip()) != 10:
        return None
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return None


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------


@router.get(
    "/search",
    response_model=SearchResponse,
    summary="Find trips where the picks' events line up",
)
async def search(
    service: SearchServiceDep,
    p1: Annotated[str | None, Query(description="First pick (tagged text).")] = None,
    p2: Annotated[str | None, Query(description="Second pick (tagged text).")] = None,
    p3: Annotated[str | None, Query(description="Third pick; ignored in public mode.")] = None,
    days: Annotated[str | None, Query(description="Trip length in days.")] = None,
    radius: Annotated[str | None, Query(description="Radius in miles.")] = None,
    start_date: Annotated[str | None, Query(alias="startDate")] = None,
    end_date: Annotated[str | None, Query(alias="endDate")] = None,
) -> SearchResponse:
    """Parse, resolve, fetch and match; see :class:`SearchService`."""
    try:
        query = SearchQuery(
            p1=p1,
            p2=p2,
            p3=p3,
            days=_parse_number(days),
            radius_miles=_parse_number(radius),
            start_date=_parse_ymd(start_date),
            end_date=_parse_ymd(end_date),
        )
    except ValidationError as exc:
        raise HTTPException(status_code=422, detail=exc.errors()[0]["msg"]) from exc

    outcome = await service.search(query)
    return SearchResponse.from_outcome(outcome)


# ---------------------------------------------------------------------------
# Options catalog
# ---------------------------------------------------------------------------


@router.get(
    "/options",
    response_model=OptionsResponse,
    summary="Selectable teams, artists and genres",
)
async def list_options(catalog: CatalogServiceDep) -> OptionsResponse:
    options = await catalog.get_options()
    counts: dict[str, int] = {}
    for option in options:
        counts[option.kind.value] = counts.get(option.kind.value, 0) + 1
    return OptionsResponse(combined=options, counts=counts)


# ---------------------------------------------------------------------------
# System endpoints
# ---------------------------------------------------------------------------


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Application health check",
)
async def health_check(request: Request) -> HealthResponse:
    """Return application health, version, and provider availability."""
    providers: dict[str, Any] = {}
    if hasattr(request.app.state, "provider_registry"):
        providers = dict(request.app.state.provider_registry)

    status = "healthy" if providers.get("ticketmaster", False) else "degraded"
    return HealthResponse(status=status, version=_VERSION, providers=providers)
