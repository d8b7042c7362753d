"""
In-memory hit/miss counters for a single cache instance.
Why: quick visibility into hit rate without a metrics backend.
"""

from typing import Dict


class CacheStats:
    def __init__(self) -> None:
        self.hits = 0
        self.misses = 0
        self.failures = 0

    def record_hit(self) -> None:
        self.hits += 1

    def record_miss(self) -> None:
        self.misses += 1

    def record_failure(self) -> None:
        self.failures += 1

    def reset(self) -> None:
        self.hits = 0
        self.misses = 0
        self.failures = 0

    def snapshot(self) -> Dict[str, int]:
        return {
            "hits": self.hits,
            "misses": self.misses,
            "failures": self.failures,
        }
