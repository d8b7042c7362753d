"""Configuration settings for the fetch cache."""
import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

DEFAULT_EXPIRATION_SECONDS = 5 * 60


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return float(raw)


@dataclass
class CacheSettings:
    # Applied when fetch() is called without expires_in_seconds
    default_ttl_seconds: float = field(
        default_factory=lambda: _env_float(
            "FETCH_CACHE_DEFAULT_TTL", DEFAULT_EXPIRATION_SECONDS
        )
    )


@dataclass
class Settings:
    cache: CacheSettings = field(default_factory=CacheSettings)
    log_level: str = field(
        default_factory=lambda: os.getenv("FETCH_CACHE_LOG_LEVEL", "INFO").upper()
    )


def load_settings() -> Settings:
    """Read settings fresh from the current environment."""
    return Settings()
