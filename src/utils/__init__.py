"""Utility modules for rendezvous.

Available utility modules (all re-exported here for convenience):

- **errors** -- Domain-specific exception hierarchy rooted at
  RendezvousError; the engine raises only pick errors, adapters raise
  provider errors.
- **geo** -- Haversine distance in statute miles and calendar-day
  arithmetic for the trip window.
- **concurrency** -- asyncio semaphore throttling that keeps parallel
  provider calls under the API's per-second quota.
- **logging** -- structlog setup with a dual-renderer pattern: coloured
  console output in development, structured JSON in production.
- **text_normalizer** -- Title and label normalization for identity keys,
  plus word-overlap and fuzzy similarity for resolver scoring.
"""

# -- Async concurrency helpers ---------------------------------------------
from src.utils.concurrency import provider_semaphore, throttled_gather

# -- Domain exception hierarchy --------------------------------------------
from src.utils.errors import (
    ConfigurationError,
    InvalidPickError,
    PickParseError,
    ProviderUnavailableError,
    RateLimitError,
    RendezvousError,
)

# -- Distance and day arithmetic -------------------------------------------
from src.utils.geo import EARTH_RADIUS_MILES, days_between, haversine_miles, max_diff_days

# -- Structured logging setup ----------------------------------------------
from src.utils.logging import configure_logging, get_logger

# -- Text normalization ----------------------------------------------------
from src.utils.text_normalizer import normalize_label, normalize_title, similarity, word_overlap

__all__ = [
    "ConfigurationError",
    "EARTH_RADIUS_MILES",
    "InvalidPickError",
    "PickParseError",
    "ProviderUnavailableError",
    "RateLimitError",
    "RendezvousError",
    "configure_logging",
    "days_between",
    "get_logger",
    "haversine_miles",
    "max_diff_days",
    "normalize_label",
    "normalize_title",
    "provider_semaphore",
    "similarity",
    "throttled_gather",
    "word_overlap",
]
