"""Facade wiring the matching stages into one synchronous call.

:class:`OccurrenceMatcher` takes a :class:`MatchRequest` (picks plus the
raw pools already fetched for them) and returns a :class:`MatchResult`.

Order of work for one request:

    validate picks/pools
      → select mode from p1/p2
      → decide slot-sensitive identity
      → normalize each pool (genre filter for genre picks, date range)
      → dispatch to the mode's clustering
      → fallback schedules when two entities never overlap

Mode is chosen before normalization because ENTITY_ONLY must always use
slot-insensitive identity, while OVERLAP may need slot-suffixed keys.
The matcher holds no per-request state, so one instance can serve every
request.
"""

from __future__ import annotations

from typing import Any

import structlog

from src.models.event import Event
from src.models.matching import MatchOptions, MatchRequest, MatchResult
from src.models.occurrence import MatchMode, Occurrence
from src.models.pick import Pick, PickKind, Slot
from src.services.matching.clustering import (
    build_entity_only,
    build_overlap,
    build_single_pick_runs,
)
from src.services.matching.fallback import build_fallback
from src.services.matching.genre_matcher import filter_genre
from src.services.matching.mode_selector import (
    needs_slot_sensitivity,
    select_mode,
    single_pick_source,
)
from src.services.matching.normalizer import normalize_events
from src.utils.errors import InvalidPickError
from src.utils.logging import get_logger


class OccurrenceMatcher:
    """Run the matching engine for one request at a time.

    Parameters
    ----------
    options:
        Membership policy, single-pick minimum run and slot-sensitivity
        override.  Defaults reproduce the public site's behaviour.
    """

    def __init__(self, options: MatchOptions | None = None) -> None:
        self._options = options or MatchOptions()
        self._logger: structlog.BoundLogger = get_logger(__name__)

    @property
    def options(self) -> MatchOptions:
        return self._options

    def match(self, request: MatchRequest) -> MatchResult:
        """Produce ranked occurrences and, when applicable, a fallback.

        Raises
        ------
        InvalidPickError
            If two picks share a slot or a pool is keyed by a slot that
            holds no pick.
        """
        self._validate(request)

        p1 = request.pick_for(Slot.P1)
        p2 = request.pick_for(Slot.P2)
        mode = select_mode(p1, p2)
        if mode is None:
            self._logger.info("mode_selected", mode=None, picks=len(request.picks))
            return MatchResult(mode=None, occurrences=())

        active = self._active_picks(request, mode, p1, p2)
        slot_sensitive = mode == MatchMode.OVERLAP and needs_slot_sensitivity(
            active, self._options.slot_sensitive
        )
        self._logger.info(
            "mode_selected",
            mode=mode.value,
            picks=[p.slot.value for p in active],
            slot_sensitive=slot_sensitive,
        )

        pools = {
            pick.slot: self._prepare_pool(
                request.raw_events_by_slot.get(pick.slot, []), pick, request, slot_sensitive
            )
            for pick in active
        }
        occurrences = self._dispatch(mode, active, pools, request, slot_sensitive)

        fallback = None
        if (
            mode == MatchMode.OVERLAP
            and not occurrences
            and p1 is not None
            and p2 is not None
            and p1.is_entity
            and p2.is_entity
        ):
            fallback = build_fallback(active, pools, request.max_days)
            self._logger.info(
                "fallback_built",
                schedules=len(fallback.schedules),
                closest_miles=(
                    round(fallback.closest.distance_miles, 1) if fallback.closest else None
                ),
            )

        return MatchResult(mode=mode, occurrences=tuple(occurrences), fallback=fallback)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _validate(request: MatchRequest) -> None:
        slots = [p.slot for p in request.picks]
        if len(slots) != len(set(slots)):
            raise InvalidPickError("each slot may hold at most one pick")
        unknown = set(request.raw_events_by_slot) - set(slots)
        if unknown:
            names = ", ".join(sorted(s.value for s in unknown))
            raise InvalidPickError(f"event pools given for slots without a pick: {names}")

    @staticmethod
    def _active_picks(
        request: MatchRequest,
        mode: MatchMode,
        p1: Pick | None,
        p2: Pick | None,
    ) -> list[Pick]:
        if mode == MatchMode.ENTITY_ONLY:
            return [p for p in (p1, p2) if p is not None]
        if mode == MatchMode.SINGLE_PICK:
            source = single_pick_source(p1, p2)
            return [source] if source is not None else []
        return sorted(request.picks, key=lambda p: p.slot.value)

    @staticmethod
    def _prepare_pool(
        raws: list[dict[str, Any]],
        pick: Pick,
        request: MatchRequest,
        slot_sensitive: bool,
    ) -> list[Event]:
        events = normalize_events(raws, pick, slot_sensitive=slot_sensitive)
        if pick.kind == PickKind.GENRE:
            events = filter_genre(events, pick.genre_bucket)
        if request.date_range is not None:
            events = [e for e in events if request.date_range.contains(e.local_date)]
        return events

    def _dispatch(
        self,
        mode: MatchMode,
        active: list[Pick],
        pools: dict[Slot, list[Event]],
        request: MatchRequest,
        slot_sensitive: bool,
    ) -> list[Occurrence]:
        pooled = [event for pick in active for event in pools[pick.slot]]

        if mode == MatchMode.ENTITY_ONLY:
            return [build_entity_only(pooled)]
        if mode == MatchMode.SINGLE_PICK:
            return build_single_pick_runs(pooled, self._options.single_pick_min_run)
        return build_overlap(
            pooled,
            max_days=request.max_days,
            radius_miles=request.radius_miles,
            membership=self._options.membership,
            slot_sensitive=slot_sensitive,
        )
