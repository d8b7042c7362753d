"""Shared fixtures for cache tests."""

import pytest

from fetch_cache.core.cache import FetchCache


class FakeClock:
    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    """Manually advanced clock."""
    return FakeClock()


@pytest.fixture
def cache(clock):
    """Fresh cache bound to the fake clock."""
    return FetchCache(clock=clock)


class Counter:
    """Callback that counts its invocations."""

    def __init__(self, value=1):
        self.value = value
        self.calls = 0

    def __call__(self):
        self.calls += 1
        return self.value


@pytest.fixture
def counter():
    return Counter()


@pytest.fixture
def make_counter():
    return Counter
