"""In-process quote cache with a global upstream throttle.

One QuoteCache is created per application and shared by every request. The
entry map and the last-upstream-call timestamp change only under one lock, and
the throttle check and the slot reservation happen in the same critical
section: two concurrent requests can never both be granted an upstream call
within one interval. The lock is never held while the upstream call runs.
"""
import threading
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

from bullion_gateway.schemas import QuotePayload


class CacheDecision(Enum):
    """What the caller should do for a symbol."""

    HIT = "hit"  # entry is fresh; serve it
    FETCH = "fetch"  # throttle slot reserved; call upstream now
    STALE = "stale"  # throttle closed; serve the expired entry
    THROTTLED = "throttled"  # throttle closed and nothing cached


@dataclass(frozen=True)
class CachedQuote:
    payload: QuotePayload
    fetched_at: float


class QuoteCache:
    """Per-symbol TTL cache plus a single process-wide throttle timestamp.

    Keys are normalized symbols; callers normalize before lookup and store.
    The cache holds at most ``max_entries`` symbols (0 = unbounded); the entry
    stored longest ago is evicted first.
    """

    def __init__(
        self,
        ttl_seconds: float = 60.0,
        min_interval_seconds: float = 10.0,
        *,
        max_entries: int = 1024,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._ttl = ttl_seconds
        self._min_interval = min_interval_seconds
        self._max_entries = max_entries
        self._clock = clock
        self._entries: OrderedDict[str, CachedQuote] = OrderedDict()
        self._last_upstream_call: float | None = None
        self._lock = threading.Lock()

    @property
    def last_upstream_call(self) -> float | None:
        with self._lock:
            return self._last_upstream_call

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def get(self, symbol: str) -> CachedQuote | None:
        with self._lock:
            return self._entries.get(symbol)

    def resolve(self, symbol: str) -> tuple[CacheDecision, CachedQuote | None]:
        """Decide how to answer for ``symbol`` and return the entry, if any.

        A FETCH decision has already advanced the throttle timestamp, whether
        or not the caller's upstream call later succeeds.
        """
        with self._lock:
            now = self._clock()
            entry = self._entries.get(symbol)
            if entry is not None and now - entry.fetched_at < self._ttl:
                return CacheDecision.HIT, entry
            if (
                self._last_upstream_call is not None
                and now - self._last_upstream_call < self._min_interval
            ):
                if entry is not None:
                    return CacheDecision.STALE, entry
                return CacheDecision.THROTTLED, None
            self._last_upstream_call = now
            return CacheDecision.FETCH, entry

    def store(self, symbol: str, payload: QuotePayload) -> CachedQuote:
        """Insert or overwrite the entry for ``symbol`` with a new fetch time."""
        with self._lock:
            entry = CachedQuote(payload=payload, fetched_at=self._clock())
            self._entries[symbol] = entry
            self._entries.move_to_end(symbol)
            if self._max_entries and len(self._entries) > self._max_entries:
                self._entries.popitem(last=False)
            return entry

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()
            self._last_upstream_call = None
