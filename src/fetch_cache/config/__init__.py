"""Settings loaded from the environment and .env files."""

from .settings import DEFAULT_EXPIRATION_SECONDS, CacheSettings, Settings, load_settings

__all__ = ["DEFAULT_EXPIRATION_SECONDS", "CacheSettings", "Settings", "load_settings"]
