"""Fetch-or-compute cache, key derivation and request validation."""

from .cache import CacheEntry, FetchCache, build_cache
from .keys import KeyDerivationError, decode_key, derive_key

__all__ = [
    "CacheEntry",
    "FetchCache",
    "build_cache",
    "KeyDerivationError",
    "decode_key",
    "derive_key",
]
