"""The occurrence matching engine.

Stages, leaf to root:

1. **Normalize** (normalizer.py) -- raw provider records become frozen
   :class:`Event` objects; records without a valid local date are dropped.

2. **Identify** (identity.py) -- every event gets a stable identity key;
   :func:`dedupe` collapses repeats and merges origin picks.

3. **Filter** (genre_matcher.py) -- genre picks keep only events whose
   classifications contain one of the bucket's keywords.

4. **Select mode** (mode_selector.py) -- ENTITY_ONLY, SINGLE_PICK or
   OVERLAP from the first two picks.

5. **Cluster** (clustering.py) -- build and rank occurrences for the mode.

6. **Fall back** (fallback.py) -- schedules and the closest cross-pick
   pair when two entities never overlap.

The stages are pure functions.  :class:`src.pipeline.OccurrenceMatcher`
wires them together.
"""

from src.services.matching.clustering import (
    build_entity_only,
    build_overlap,
    build_single_pick_runs,
    coverage,
    rank_occurrences,
)
from src.services.matching.fallback import build_fallback, build_schedule, find_closest_pair
from src.services.matching.genre_matcher import GENRE_EXPANSION, filter_genre, matches_genre
from src.services.matching.identity import dedupe, identity_key
from src.services.matching.mode_selector import needs_slot_sensitivity, select_mode
from src.services.matching.normalizer import normalize_event, normalize_events

__all__ = [
    "GENRE_EXPANSION",
    "build_entity_only",
    "build_fallback",
    "build_overlap",
    "build_schedule",
    "build_single_pick_runs",
    "coverage",
    "dedupe",
    "filter_genre",
    "find_closest_pair",
    "identity_key",
    "matches_genre",
    "needs_slot_sensitivity",
    "normalize_event",
    "normalize_events",
    "rank_occurrences",
    "select_mode",
]
