"""
In-memory fetch-or-compute cache with per-entry TTL.
Why: memoize expensive callbacks per (key, params) inside one process.
"""

import asyncio
import inspect
import time
from dataclasses import dataclass
from typing import (
    Any,
    Awaitable,
    Callable,
    Dict,
    Generic,
    Optional,
    Tuple,
    TypeVar,
    Union,
)

from ..config.settings import DEFAULT_EXPIRATION_SECONDS, Settings, load_settings
from ..logging import get_logger
from .keys import derive_key
from .schemas import FetchRequest
from .stats import CacheStats

_LOG = get_logger(__name__)

T = TypeVar("T")

_MISSING = object()


@dataclass
class CacheEntry(Generic[T]):
    value: T
    expires_in_seconds: float
    written_at: float

    @property
    def expires_at(self) -> float:
        return self.written_at + self.expires_in_seconds

    def is_fresh(self, now: float) -> bool:
        return now < self.expires_at


def _discard_awaitable(value: Any) -> None:
    # stop work that will never be awaited
    if inspect.iscoroutine(value):
        value.close()
    elif asyncio.isfuture(value):
        value.cancel()


class FetchCache:
    """Serve a stored value while fresh, otherwise run the callback and store it.

    Entries are only written by a miss and are never swept; an expired entry
    stays in the map until the next miss for its key overwrites it, so
    ``size()`` counts live and expired entries alike.

    Args:
        default_ttl_seconds: TTL used when ``fetch`` gets no
            ``expires_in_seconds``.
        clock: Zero-argument callable returning seconds; injectable for tests.
    """

    def __init__(
        self,
        *,
        default_ttl_seconds: float = DEFAULT_EXPIRATION_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl_seconds = float(default_ttl_seconds)
        self._clock = clock
        self._store: Dict[str, CacheEntry[Any]] = {}
        # per-key lock plus the number of afetch calls holding or awaiting it
        self._locks: Dict[str, Tuple[asyncio.Lock, int]] = {}
        self._stats = CacheStats()

    def fetch(
        self,
        key: str,
        *,
        callback: Callable[[], T],
        params: Optional[Any] = None,
        expires_in_seconds: Optional[float] = None,
    ) -> T:
        request = FetchRequest(
            key=key,
            params=params,
            callback=callback,
            expires_in_seconds=expires_in_seconds,
        )
        cache_key = derive_key(request.key, request.params)
        cached = self._get(cache_key)
        if cached is not _MISSING:
            self._record_hit(request.key)
            return cached

        self._record_miss(request.key)
        try:
            value = request.callback()
            if inspect.isawaitable(value):
                _discard_awaitable(value)
                raise TypeError(
                    f"callback for {request.key!r} returned an awaitable; use afetch()"
                )
        except Exception:
            self._record_failure(request.key)
            raise
        return self._set(cache_key, value, self._ttl(request))

    async def afetch(
        self,
        key: str,
        *,
        callback: Callable[[], Union[T, Awaitable[T]]],
        params: Optional[Any] = None,
        expires_in_seconds: Optional[float] = None,
    ) -> T:
        """Async variant of ``fetch``; awaits the callback result if needed.

        Concurrent calls for the same composite key wait on one lock, so only
        the first one runs the callback and the rest read its entry. If that
        callback fails, the next waiter retries it.
        """
        request = FetchRequest(
            key=key,
            params=params,
            callback=callback,
            expires_in_seconds=expires_in_seconds,
        )
        cache_key = derive_key(request.key, request.params)
        lock = self._acquire_lock(cache_key)
        try:
            async with lock:
                cached = self._get(cache_key)
                if cached is not _MISSING:
                    self._record_hit(request.key)
                    return cached

                self._record_miss(request.key)
                try:
                    value = request.callback()
                    if inspect.isawaitable(value):
                        value = await value
                except Exception:
                    self._record_failure(request.key)
                    raise
                return self._set(cache_key, value, self._ttl(request))
        finally:
            self._release_lock(cache_key)

    def contains(self, key: str, params: Optional[Any] = None) -> bool:
        """True when a fresh entry exists for (key, params)."""
        return self._get(derive_key(key, params)) is not _MISSING

    def clear(self) -> None:
        # in-flight afetch calls keep their locks; their results land after
        # the clear like any other miss
        self._store = {}

    def size(self) -> int:
        return len(self._store)

    def __len__(self) -> int:
        return self.size()

    def stats(self) -> Dict[str, int]:
        snapshot = self._stats.snapshot()
        snapshot["size"] = self.size()
        return snapshot

    def reset_stats(self) -> None:
        self._stats.reset()

    def _ttl(self, request: FetchRequest) -> float:
        if request.expires_in_seconds is None:
            return self.default_ttl_seconds
        return request.expires_in_seconds

    def _get(self, cache_key: str) -> Any:
        entry = self._store.get(cache_key)
        if entry is None or not entry.is_fresh(self._clock()):
            return _MISSING
        return entry.value

    def _set(self, cache_key: str, value: T, expires_in_seconds: float) -> T:
        self._store[cache_key] = CacheEntry(
            value=value,
            expires_in_seconds=expires_in_seconds,
            written_at=self._clock(),
        )
        return value

    def _acquire_lock(self, cache_key: str) -> asyncio.Lock:
        lock, users = self._locks.get(cache_key, (None, 0))
        if lock is None:
            lock = asyncio.Lock()
        self._locks[cache_key] = (lock, users + 1)
        return lock

    def _release_lock(self, cache_key: str) -> None:
        lock, users = self._locks[cache_key]
        if users <= 1:
            del self._locks[cache_key]
        else:
            self._locks[cache_key] = (lock, users - 1)

    def _record_hit(self, key: str) -> None:
        self._stats.record_hit()
        _LOG.debug(f"cache hit key={key}")

    def _record_miss(self, key: str) -> None:
        self._stats.record_miss()
        _LOG.debug(f"cache miss key={key}")

    def _record_failure(self, key: str) -> None:
        self._stats.record_failure()
        _LOG.warning(f"callback failed key={key}; nothing cached", exc_info=True)


def build_cache(
    settings: Optional[Settings] = None,
    *,
    clock: Callable[[], float] = time.monotonic,
) -> FetchCache:
    """Construct a FetchCache from settings (environment when omitted)."""
    settings = settings or load_settings()
    return FetchCache(
        default_ttl_seconds=settings.cache.default_ttl_seconds, clock=clock
    )
