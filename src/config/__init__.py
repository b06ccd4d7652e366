"""Configuration module - exports Settings, load_config, and a module-level singleton."""

from src.config.loader import load_config, match_options_from_config
from src.config.settings import Settings

settings = Settings()

__all__ = ["Settings", "load_config", "match_options_from_config", "settings"]
