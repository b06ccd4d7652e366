"""Search service: from a submitted query to ranked occurrences.

Steps for one search:

1. Clamp ``days`` and ``radius`` to the active preset.  Public mode caps
   both (7 days / 300 miles by default) and drops the third pick.
2. Parse the tagged pick text, then resolve team/artist names to
   attraction ids concurrently.
3. Fetch every pick's raw event pool concurrently (semaphore-bounded).
   A failed fetch is recorded as a :class:`SlotFailure` and contributes
   an empty pool.
4. Run the synchronous :class:`OccurrenceMatcher` over the pools.

The service owns no HTTP client; providers are injected.
"""

from __future__ import annotations

import math

from src.config.settings import Settings
from src.interfaces.event_provider import FetchErr, FetchResult, IEventProvider
from src.interfaces.pick_resolver import IPickResolver
from src.models.matching import DateRange, MatchRequest
from src.models.pick import Pick, Slot
from src.models.search import SearchOutcome, SearchQuery, SlotFailure
from src.pipeline.orchestrator import OccurrenceMatcher
from src.services.picks import parse_picks, resolve_picks
from src.utils.concurrency import provider_semaphore, throttled_gather
from src.utils.logging import get_logger


def clamp_int(value: float | None, low: int, high: int, fallback: int) -> int:
    """Floor *value* into ``[low, high]``; missing or non-finite → *fallback*."""
    if value is None:
        return fallback
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number):
        return fallback
    return min(high, max(low, math.floor(number)))


class SearchService:
    """Coordinates pick resolution, event fetching and matching.

    Parameters
    ----------
    event_provider:
        Source of raw event pools.
    matcher:
        The matching engine facade.
    settings:
        Preset limits and the public-mode switch.
    resolver:
        Optional name → id resolver; without one, entity picks are fetched
        by keyword.
    """

    def __init__(
        self,
        event_provider: IEventProvider,
        matcher: OccurrenceMatcher,
        settings: Settings,
        resolver: IPickResolver | None = None,
    ) -> None:
        self._provider = event_provider
        self._matcher = matcher
        self._settings = settings
        self._resolver = resolver
        self._semaphore = provider_semaphore()
        self._logger = get_logger(__name__)

    # ------------------------------------------------------------------
    # Preset clamping
    # ------------------------------------------------------------------

    def effective_days(self, requested: float | None) -> int:
        s = self._settings
        if s.public_mode:
            return clamp_int(requested, 1, s.public_max_days, s.public_max_days)
        return clamp_int(requested, 1, s.max_days_limit, s.default_days)

    def effective_radius(self, requested: float | None) -> int:
        s = self._settings
        if s.public_mode:
            return clamp_int(
                requested, 1, s.public_max_radius_miles, s.public_max_radius_miles
            )
        return clamp_int(requested, 1, s.max_radius_limit, s.default_radius_miles)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def search(self, query: SearchQuery) -> SearchOutcome:
        """Run one search end to end.

        Raises
        ------
        PickParseError
            If a tagged pick (``team:``, ``artist:``, ``genre:``) is empty.
        """
        public = self._settings.public_mode
        days = self.effective_days(query.days)
        radius = self.effective_radius(query.radius_miles)

        picks = parse_picks(query.p1, query.p2, None if public else query.p3)
        if self._resolver is not None:
            picks = await resolve_picks(picks, self._resolver)

        date_range = None
        if query.start_date is not None or query.end_date is not None:
            date_range = DateRange(start=query.start_date, end=query.end_date)

        results = await throttled_gather(
            [self._provider.fetch_events(pick, date_range) for pick in picks],
            self._semaphore,
        )

        pools: dict[Slot, list[dict]] = {}
        failures: list[SlotFailure] = []
        for pick, fetched in zip(picks, results):
            pools[pick.slot] = list(fetched.events)
            failure = self._failure(pick, fetched)
            if failure is not None:
                failures.append(failure)

        request = MatchRequest(
            picks=tuple(picks),
            raw_events_by_slot=pools,
            max_days=days,
            radius_miles=float(radius),
            date_range=date_range,
        )
        result = self._matcher.match(request)

        self._logger.info(
            "search_completed",
            mode=result.mode.value if result.mode else None,
            picks=len(picks),
            occurrences=len(result.occurrences),
            failures=len(failures),
            days=days,
            radius_miles=radius,
        )
        return SearchOutcome(
            result=result,
            picks=tuple(picks),
            failures=tuple(failures),
            days=days,
            radius_miles=radius,
            public_mode=public,
            event_counts={slot: len(raws) for slot, raws in pools.items()},
        )

    @staticmethod
    def _failure(pick: Pick, fetched: FetchResult) -> SlotFailure | None:
        if isinstance(fetched, FetchErr):
            return SlotFailure(slot=pick.slot, reason=fetched.reason, detail=fetched.detail)
        return None
