"""Ticketmaster Discovery API event provider.

Fetches one page (up to ``size`` events, date ascending) per pick from
``/discovery/v2/events.json``.  How a pick becomes query parameters:

    resolved team/artist  →  attractionId=<canonical id>
    unresolved team/artist →  keyword=<display name>
    genre                  →  classificationName=<bucket>
    raw                    →  keyword=<text>

Retries 429 and 5xx responses with linear backoff.  Never raises for
network or API trouble: every failure comes back as a
:class:`~src.interfaces.event_provider.FetchErr`.

Follows the same adapter pattern as the other HTTP providers: injected
``httpx.AsyncClient``, ``_throttle()``, graceful error handling.
"""

from __future__ import annotations

import asyncio
import time
from typing import Any

import httpx

from src.interfaces.cache_provider import ICacheProvider
from src.interfaces.event_provider import FetchErr, FetchOk, FetchResult, IEventProvider
from src.models.matching import DateRange
from src.models.pick import Pick, PickKind
from src.utils.logging import get_logger

_DEFAULT_BASE_URL = "https://app.ticketmaster.com/discovery/v2"
_DEFAULT_COUNTRY_CODE = "US,CA"
_DEFAULT_PAGE_SIZE = 200
_MIN_REQUEST_INTERVAL = 0.2  # Discovery API allows 5 req/s
_MAX_RETRIES = 3
_RETRY_BACKOFF = 1.0  # seconds, multiplied by attempt number


class TicketmasterEventProvider(IEventProvider):
    """Raw event pools from the Ticketmaster Discovery API.

    Parameters
    ----------
    http_client:
        Injected ``httpx.AsyncClient`` for testability and connection pooling.
    api_key:
        Discovery API consumer key.
    base_url:
        API root, without the ``/events.json`` suffix.
    country_code:
        Comma-separated country filter.
    page_size:
        Events requested per pick (the API caps this at 200).
    timeout:
        Per-request timeout in seconds.
    cache:
        Optional read-through cache for successful pools.
    retry_backoff:
        Base backoff in seconds between retries.
    """

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        api_key: str,
        base_url: str = _DEFAULT_BASE_URL,
        country_code: str = _DEFAULT_COUNTRY_CODE,
        page_size: int = _DEFAULT_PAGE_SIZE,
        timeout: float = 15.0,
        cache: ICacheProvider | None = None,
        retry_backoff: float = _RETRY_BACKOFF,
    ) -> None:
        self._http = http_client
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._country_code = country_code
        self._page_size = page_size
        self._timeout = timeout
        self._cache = cache
        self._retry_backoff = retry_backoff
        self._last_request_time: float = 0.0
        self._throttle_lock = asyncio.Lock()
        self._logger = get_logger(__name__)

    def get_provider_name(self) -> str:
        return "ticketmaster"

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def fetch_events(
        self,
        pick: Pick,
        date_range: DateRange | None = None,
    ) -> FetchResult:
        if not self._api_key:
            return FetchErr(reason="missing_api_key", detail="TICKETMASTER_API_KEY is not set")

        params = self.build_params(pick, date_range)
        cache_key = self._cache_key(params)

        if self._cache is not None:
            cached = await self._cache.get(cache_key)
            if cached is not None:
                return FetchOk(events=list(cached))

        result = await self._request_events(params)
        if isinstance(result, FetchOk):
            self._logger.debug(
                "ticketmaster_events_fetched",
                slot=pick.slot.value,
                kind=pick.kind.value,
                count=len(result.events),
            )
            if self._cache is not None:
                await self._cache.set(cache_key, list(result.events))
        else:
            self._logger.warning(
                "ticketmaster_fetch_failed",
                slot=pick.slot.value,
                reason=result.reason,
                detail=result.detail,
            )
        return result

    def build_params(self, pick: Pick, date_range: DateRange | None = None) -> dict[str, Any]:
        """Query parameters for *pick*, without the API key."""
        params: dict[str, Any] = {
            "countryCode": self._country_code,
            "size": self._page_size,
            "sort": "date,asc",
        }

        if pick.is_entity and pick.canonical_id:
            params["attractionId"] = pick.canonical_id
        elif pick.kind == PickKind.GENRE:
            params["classificationName"] = pick.genre_bucket
        else:
            params["keyword"] = pick.display_name

        if date_range is not None:
            if date_range.start is not None:
                params["startDateTime"] = f"{date_range.start.isoformat()}T00:00:00Z"
            if date_range.end is not None:
                params["endDateTime"] = f"{date_range.end.isoformat()}T23:59:59Z"
        return params

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _cache_key(params: dict[str, Any]) -> str:
        return "tm:events:" + "&".join(f"{k}={params[k]}" for k in sorted(params))

    async def _throttle(self) -> None:
        """Enforce minimum delay between requests, across concurrent fetches."""
        async with self._throttle_lock:
            elapsed = time.monotonic() - self._last_request_time
            if self._last_request_time > 0 and elapsed < _MIN_REQUEST_INTERVAL:
                await asyncio.sleep(_MIN_REQUEST_INTERVAL - elapsed)
            self._last_request_time = time.monotonic()

    async def _request_events(self, params: dict[str, Any]) -> FetchResult:
        url = f"{self._base_url}/events.json"
        query = {**params, "apikey": self._api_key}
        last_error = FetchErr(reason="unknown")

        for attempt in range(1, _MAX_RETRIES + 1):
            await self._throttle()
            try:
                response = await self._http.get(url, params=query, timeout=self._timeout)
            except httpx.HTTPError as exc:
                self._logger.warning(
                    "ticketmaster_request_failed",
                    error=str(exc),
                    attempt=attempt,
                )
                last_error = FetchErr(reason="network_error", detail=str(exc))
                if attempt < _MAX_RETRIES:
                    await asyncio.sleep(self._retry_backoff * attempt)
                continue

            if response.status_code == 200:
                try:
                    payload = response.json()
                except ValueError as exc:
                    return FetchErr(reason="invalid_json", detail=str(exc))
                embedded = (payload.get("_embedded") or {}) if isinstance(payload, dict) else None
                if not isinstance(embedded, dict):
                    return FetchErr(reason="invalid_json", detail="unexpected response shape")
                events = embedded.get("events") or []
                if not isinstance(events, list):
                    return FetchErr(reason="invalid_json", detail="events is not a list")
                return FetchOk(events=[e for e in events if isinstance(e, dict)])

            if response.status_code == 429:
                backoff = self._retry_backoff * attempt
                self._logger.warning(
                    "ticketmaster_rate_limited",
                    attempt=attempt,
                    backoff_s=backoff,
                )
                last_error = FetchErr(reason="rate_limited", detail="HTTP 429")
                if attempt < _MAX_RETRIES:
                    await asyncio.sleep(backoff)
                continue

            if response.status_code >= 500:
                self._logger.warning(
                    "ticketmaster_server_error",
                    status=response.status_code,
                    attempt=attempt,
                )
                last_error = FetchErr(
                    reason=f"http_{response.status_code}", detail=response.text[:200]
                )
                if attempt < _MAX_RETRIES:
                    await asyncio.sleep(self._retry_backoff * attempt)
                continue

            return FetchErr(reason=f"http_{response.status_code}", detail=response.text[:200])

        return last_error
