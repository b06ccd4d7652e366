"""rendezvous FastAPI application entry point.

Wires together providers, services, and routes via dependency injection.
Loads configuration from ``.env`` and ``config/config.yaml`` and
configures structured logging.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import Any

import httpx
import structlog
import uvicorn
from fastapi import FastAPI

from src.api.middleware import (
    ErrorHandlingMiddleware,
    RequestLoggingMiddleware,
    configure_cors,
)
from src.api.routes import router as api_router
from src.config.loader import load_config, match_options_from_config
from src.config.settings import Settings
from src.pipeline.orchestrator import OccurrenceMatcher
from src.providers.cache.memory_cache import MemoryCacheProvider
from src.providers.event.ticketmaster_provider import TicketmasterEventProvider
from src.providers.resolver.ticketmaster_resolver import TicketmasterPickResolver
from src.services.catalog_service import CatalogService
from src.services.search_service import SearchService
from src.utils.logging import configure_logging, get_logger

_VERSION = "0.1.0"

# ---------------------------------------------------------------------------
# Module-level settings & logging
# ---------------------------------------------------------------------------

settings = Settings()
config = load_config(settings=settings)

configure_logging(
    log_level=settings.log_level,
    json_output=(settings.app_env == "production"),
)
_logger: structlog.BoundLogger = get_logger(__name__)


def _build_all(app_settings: Settings, app_config: dict[str, Any]) -> dict[str, Any]:
    """Construct every provider and service instance for the application.

    Returns a flat dict of named components to be stored on ``app.state``.
    """
    # -- Shared resources --
    http_client = httpx.AsyncClient(timeout=app_settings.request_timeout)

    # -- Caches --
    catalog_cache = MemoryCacheProvider(max_size=4, ttl=app_settings.catalog_ttl_seconds)
    event_cache = (
        MemoryCacheProvider(max_size=512, ttl=app_settings.event_cache_ttl_seconds)
        if app_settings.cache_event_pools
        else None
    )

    # -- Ticketmaster adapters --
    event_provider = TicketmasterEventProvider(
        http_client=http_client,
        api_key=app_settings.ticketmaster_api_key,
        base_url=app_settings.ticketmaster_base_url,
        country_code=app_settings.country_code,
        page_size=app_settings.fetch_page_size,
        timeout=app_settings.request_timeout,
        cache=event_cache,
    )
    resolver = TicketmasterPickResolver(
        http_client=http_client,
        api_key=app_settings.ticketmaster_api_key,
        base_url=app_settings.ticketmaster_base_url,
        country_code=app_settings.country_code,
        timeout=app_settings.request_timeout,
    )
    has_key = app_settings.has_ticketmaster_key()

    # -- Engine + services --
    matcher = OccurrenceMatcher(match_options_from_config(app_config))
    search_service = SearchService(
        event_provider=event_provider,
        matcher=matcher,
        settings=app_settings,
        resolver=resolver if has_key else None,
    )
    pinned = tuple((app_config.get("catalog") or {}).get("pinned_artists") or ())
    catalog_service = CatalogService(
        directory=resolver if has_key else None,
        cache=catalog_cache,
        resolver=resolver if has_key else None,
        artist_pages=app_settings.catalog_artist_pages,
        artist_limit=app_settings.catalog_artist_limit,
        pinned_artists=pinned,
    )

    provider_registry = {
        "ticketmaster": has_key,
        "event_cache": event_cache is not None,
        "membership_policy": matcher.options.membership.value,
    }

    return {
        "http_client": http_client,
        "matcher": matcher,
        "search_service": search_service,
        "catalog_service": catalog_service,
        "provider_registry": provider_registry,
    }


# ---------------------------------------------------------------------------
# Application lifespan (startup / shutdown)
# ---------------------------------------------------------------------------


@asynccontextmanager
async def _lifespan(application: FastAPI):  # noqa: ANN201
    """Initialise all providers and services on startup, clean up on shutdown."""
    components = _build_all(settings, config)

    for key, value in components.items():
        setattr(application.state, key, value)

    if not settings.has_ticketmaster_key():
        _logger.warning("ticketmaster_key_missing", message="searches will return no events")

    _logger.info(
        "app_startup",
        version=_VERSION,
        environment=settings.app_env,
        public_mode=settings.public_mode,
        membership=components["matcher"].options.membership.value,
    )

    yield

    # -- Shutdown: close shared httpx client --
    http_client: httpx.AsyncClient = components["http_client"]
    await http_client.aclose()
    _logger.info("app_shutdown", message="HTTP client closed")


# ---------------------------------------------------------------------------
# FastAPI application factory
# ---------------------------------------------------------------------------


def create_app() -> FastAPI:
    """Build and configure the FastAPI application."""
    application = FastAPI(
        title="rendezvous API",
        version=_VERSION,
        description=(
            "Pick two or three teams, artists or genres and find the dates "
            "and places where their events line up closely enough for one trip."
        ),
        lifespan=_lifespan,
    )

    # -- Middleware (order matters: last added = first executed) --
    application.add_middleware(ErrorHandlingMiddleware)
    application.add_middleware(RequestLoggingMiddleware)
    configure_cors(application)

    # -- API routes --
    application.include_router(api_router)

    return application


app = create_app()

# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    uvicorn.run(
        "src.main:app",
        host=settings.app_host,
        port=settings.app_port,
        reload=(settings.app_env == "development"),
    )
