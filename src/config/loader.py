"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. config/config.yaml  - Static defaults checked into the repo
#   2. .env file           - Local developer overrides (not committed)
#   3. Environment vars    - Set at deploy time
#
# load_config() reads the YAML file first, then deep-merges the
# Settings-derived values on top.
#
# The _deep_merge helper does recursive dict merging:
#   base = {"matching": {"single_pick_min_run": 2}}
#   overrides = {"matching": {"membership": "pairwise"}}
#   result = {"matching": {"single_pick_min_run": 2, "membership": "pairwise"}}
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from src.config.settings import Settings
from src.models.matching import MatchOptions, MembershipPolicy
from src.utils.errors import ConfigurationError


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Environment variables (via Settings) override YAML values where keys overlap.

    Args:
        path: Path to the YAML configuration file.
        settings: Settings instance to merge; a fresh one is read when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path) as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "ticketmaster": {
            "base_url": settings.ticketmaster_base_url,
            "country_code": settings.country_code,
            "page_size": settings.fetch_page_size,
            "timeout": settings.request_timeout,
            "configured": settings.has_ticketmaster_key(),
        },
        "search": {
            "public_mode": settings.public_mode,
            "public_max_days": settings.public_max_days,
            "public_max_radius_miles": settings.public_max_radius_miles,
            "default_days": settings.default_days,
            "max_days_limit": settings.max_days_limit,
            "default_radius_miles": settings.default_radius_miles,
            "max_radius_limit": settings.max_radius_limit,
        },
        "matching": {
            "membership": settings.membership_policy,
            "single_pick_min_run": settings.single_pick_min_run,
            "slot_sensitive": settings.slot_sensitive_identity,
        },
        "catalog": {
            "ttl_seconds": settings.catalog_ttl_seconds,
            "artist_pages": settings.catalog_artist_pages,
            "artist_limit": settings.catalog_artist_limit,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def match_options_from_config(config: dict) -> MatchOptions:
    """Build engine options from the ``matching`` section of *config*.

    Raises:
        ConfigurationError: If the membership policy name is unknown or the
            minimum run length is below 1.
    """
    section = config.get("matching") or {}
    membership = str(section.get("membership") or MembershipPolicy.ANCHOR.value).lower()
    try:
        policy = MembershipPolicy(membership)
    except ValueError as exc:
        raise ConfigurationError(
            f"Unknown membership policy {membership!r}; expected 'anchor' or 'pairwise'"
        ) from exc

    raw_min_run = section.get("single_pick_min_run")
    min_run = 1 if raw_min_run is None else int(raw_min_run)
    if min_run < 1:
        raise ConfigurationError("single_pick_min_run must be at least 1")

    return MatchOptions(
        membership=policy,
        single_pick_min_run=min_run,
        slot_sensitive=section.get("slot_sensitive"),
    )


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
