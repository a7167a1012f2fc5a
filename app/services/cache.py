import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Awaitable, Callable, Dict, Optional

from app.models import WeatherRecord

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    record: WeatherRecord
    fetched_at: float


@dataclass
class CacheResult:
    record: WeatherRecord
    hit: bool
    age_seconds: Optional[int]
    stale: bool


Fetch = Callable[[], Awaitable[WeatherRecord]]


class WeatherCache:
    """
    Process-local TTL cache of the latest successful record per location key.

    Keys are used verbatim. Expiry is checked on read; nothing is swept, so an
    expired entry is dropped only when its key is read again (and kept then
    too if serve_stale_on_error is set). Keys never read again stay stored.
    Concurrent misses on one key share a single in-flight fetch task:
      key -> asyncio.Task   (only while the fetch is running)
      key -> CacheEntry     (after a successful fetch)
    """

    def __init__(
        self,
        ttl_seconds: float = 1800,
        serve_stale_on_error: bool = False,
        time_func: Callable[[], float] = time.time,
    ):
        self.ttl_seconds = ttl_seconds
        self.serve_stale_on_error = serve_stale_on_error
        self._time_func = time_func
        self._entries: Dict[str, CacheEntry] = {}
        self._inflight: Dict[str, "asyncio.Task[CacheEntry]"] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def get(self, key: str) -> Optional[CacheResult]:
        """Return the entry for ``key`` if it is still fresh, without fetching."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        age = self._time_func() - entry.fetched_at
        if age < self.ttl_seconds:
            return CacheResult(record=entry.record, hit=True, age_seconds=max(0, int(age)), stale=False)
        if not self.serve_stale_on_error:
            # expired and never served again; stale mode keeps it as a fallback
            del self._entries[key]
        return None

    async def get_or_fetch(self, key: str, fetch: Fetch) -> CacheResult:
        cached = self.get(key)
        if cached is not None:
            logger.debug("Cache hit for %r (age: %ss)", key, cached.age_seconds)
            return cached

        task = self._inflight.get(key)
        if task is None:
            logger.debug("Cache miss for %r, starting fetch", key)
            task = asyncio.ensure_future(self._refresh(key, fetch))
            self._inflight[key] = task
        else:
            logger.debug("Cache miss for %r, joining in-flight fetch", key)

        try:
            # shield: one waiter being cancelled must not cancel the fetch for the others
            entry = await asyncio.shield(task)
        except Exception:
            stale = self._entries.get(key)
            if self.serve_stale_on_error and stale is not None:
                age = int(self._time_func() - stale.fetched_at)
                logger.warning("Refresh failed for %r, serving stale entry (age: %ss)", key, age)
                return CacheResult(record=stale.record, hit=False, age_seconds=age, stale=True)
            raise
        return CacheResult(record=entry.record, hit=False, age_seconds=0, stale=False)

    async def _refresh(self, key: str, fetch: Fetch) -> CacheEntry:
        try:
            record = await fetch()
            entry = CacheEntry(record=record, fetched_at=self._time_func())
            self._entries[key] = entry
            return entry
        finally:
            self._inflight.pop(key, None)

    def invalidate(self, key: str) -> None:
        self._entries.pop(key, None)

    def clear(self) -> None:
        self._entries.clear()
