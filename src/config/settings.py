"""Application settings loaded from environment variables via pydantic-settings.

# ─── HOW SETTINGS WORK ─────────────────────────────────────────────────
#
# pydantic-settings reads configuration from two sources (in priority
# order):
#
#   1. **Environment variables** - e.g., TICKETMASTER_API_KEY=abc123
#      (highest priority - always wins)
#   2. **.env file** - key=value lines in the project root .env file
#
# Field name `ticketmaster_api_key` maps to env var `TICKETMASTER_API_KEY`.
# Defaults are used when neither source sets a field.
#
# The .env file is never committed.
# ──────────────────────────────────────────────────────────────────────
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Rendezvous application settings.

    Environment variables override defaults. Loaded from .env file when present.
    """

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # === Ticketmaster Discovery API ===
    # Empty key = "not configured"; the event provider then reports every
    # fetch as FetchErr("missing_api_key") instead of calling the API.
    ticketmaster_api_key: str = ""
    ticketmaster_base_url: str = "https://app.ticketmaster.com/discovery/v2"
    country_code: str = "US,CA"
    fetch_page_size: int = 200  # API maximum per page
    request_timeout: float = 15.0
    cache_event_pools: bool = False
    event_cache_ttl_seconds: int = 300

    # === Search presets ===
    # Public mode pins the site to the shared preset: at most 7 days and
    # 300 miles, and the third pick slot is ignored.
    public_mode: bool = True
    public_max_days: int = 7
    public_max_radius_miles: int = 300
    default_days: int = 3
    max_days_limit: int = 30
    default_radius_miles: int = 100
    max_radius_limit: int = 2000

    # === Matching engine ===
    membership_policy: str = "anchor"  # "anchor" or "pairwise"
    single_pick_min_run: int = 1
    # Unset = decide per request; true/false forces slot-suffixed identity.
    slot_sensitive_identity: bool | None = None

    # === Options catalog ===
    catalog_ttl_seconds: int = 21600  # 6 hours
    catalog_artist_pages: int = 10
    catalog_artist_limit: int = 1200

    # === App Config ===
    app_host: str = "0.0.0.0"
    app_port: int = 8000
    app_env: str = "development"
    log_level: str = "INFO"

    def has_ticketmaster_key(self) -> bool:
        """True when a Discovery API key is configured."""
        return bool(self.ticketmaster_api_key.strip())
