"""
Fixed-window rate limiting for contact form submissions.

The limiter keeps its counters in an injected store. InMemoryRateLimitStore
only sees requests handled by the current process, so with several instances
each one enforces its own limit. A shared external store is needed for a
global limit.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, Dict, Optional


DEFAULT_MAX_REQUESTS = 3
DEFAULT_WINDOW_MS = 60_000
UNKNOWN_IDENTIFIER = "unknown"


@dataclass
class RateLimitRecord:
    identifier: str
    count: int
    reset_at: float  # milliseconds, same clock as the limiter


class RateLimitStore(ABC):
    """Storage for per-identifier rate limit counters."""

    @abstractmethod
    def get(self, identifier: str) -> Optional[RateLimitRecord]:
        """Return the current record, or None if the identifier is new."""

    @abstractmethod
    def increment(self, identifier: str) -> RateLimitRecord:
        """Add one to the identifier's count and return the updated record."""

    @abstractmethod
    def reset(self, identifier: str, reset_at: float) -> RateLimitRecord:
        """Start a new window with count=1 that expires at reset_at."""


class InMemoryRateLimitStore(RateLimitStore):
    """
    Process-local store. Records are never evicted, so the key set grows
    with every distinct identifier for the lifetime of the process.
    """

    def __init__(self):
        self._records: Dict[str, RateLimitRecord] = {}

    def get(self, identifier: str) -> Optional[RateLimitRecord]:
        return self._records.get(identifier)

    def increment(self, identifier: str) -> RateLimitRecord:
        record = self._records[identifier]
        record.count += 1
        return record

    def reset(self, identifier: str, reset_at: float) -> RateLimitRecord:
        record = RateLimitRecord(identifier=identifier, count=1, reset_at=reset_at)
        self._records[identifier] = record
        return record

    def __len__(self) -> int:
        return len(self._records)


def _now_ms() -> float:
    return time.time() * 1000


class RateLimiter:
    """
    Fixed-window counter keyed by client identifier.

    No locking is done around the store, so concurrent requests from the
    same client near a window boundary may be slightly over- or under-counted.
    """

    def __init__(self, store: Optional[RateLimitStore] = None, clock: Callable[[], float] = _now_ms):
        self.store = store if store is not None else InMemoryRateLimitStore()
        self.clock = clock

    def allow(self, identifier: str, max_requests: int = DEFAULT_MAX_REQUESTS,
              window_ms: int = DEFAULT_WINDOW_MS) -> bool:
        """
        Record a request for identifier and report whether it is allowed.

        The first request, or the first one after the window expired, opens a
        new window with count=1. Within a window requests are allowed until
        the count reaches max_requests.
        """
        now = self.clock()
        record = self.store.get(identifier)

        if record is None or now >= record.reset_at:
            self.store.reset(identifier, now + window_ms)
            return True

        if record.count >= max_requests:
            return False

        self.store.increment(identifier)
        return True


def get_client_identifier(headers) -> str:
    """
    Rate limit key for a request: the first X-Forwarded-For address.

    Requests without the header all share the "unknown" bucket.
    """
    forwarded = headers.get("x-forwarded-for") or headers.get("X-Forwarded-For")
    if forwarded:
        first = forwarded.split(",")[0].strip()
        if first:
            return first
    return UNKNOWN_IDENTIFIER
