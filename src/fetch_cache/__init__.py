"""Process-local fetch-or-compute cache with per-entry TTL."""

from fetch_cache.config.settings import DEFAULT_EXPIRATION_SECONDS
from fetch_cache.core import (
    CacheEntry,
    FetchCache,
    KeyDerivationError,
    build_cache,
    decode_key,
    derive_key,
)

__all__ = [
    "DEFAULT_EXPIRATION_SECONDS",
    "CacheEntry",
    "FetchCache",
    "KeyDerivationError",
    "build_cache",
    "decode_key",
    "derive_key",
]
