"""In-memory, TTL-bound forecast cache keyed by spot id."""

import logging
import threading
from collections.abc import Callable
from datetime import datetime, timedelta

from windscrape.models.common import SpotId, utc_now
from windscrape.models.forecast import CacheEntry, ForecastResult

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(minutes=5)


def is_entry_fresh(entry: CacheEntry, ttl: timedelta, now: datetime) -> bool:
    """An entry is fresh while its age is strictly below the TTL."""
    return now - entry.stored_at < ttl


class ForecastCache:
    """Holds the latest successful result per spot.

    Freshness is decided at read time; expired entries are dropped on the
    next lookup for their key rather than by a background sweep. Nothing
    is persisted.
    """

    def __init__(
        self,
        ttl: timedelta = DEFAULT_TTL,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.ttl = ttl
        self._clock = clock
        self._entries: dict[SpotId, CacheEntry] = {}
        self._lock = threading.Lock()

    def get(self, spot_id: SpotId) -> ForecastResult | None:
        now = self._clock()
        with self._lock:
            entry = self._entries.get(spot_id)
            if entry is None:
                return None
            if not is_entry_fresh(entry, self.ttl, now):
                del self._entries[spot_id]
                logger.debug("Cache entry for spot %s expired", spot_id)
                return None
            return entry.result

    def put(self, spot_id: SpotId, result: ForecastResult) -> None:
        entry = CacheEntry(result=result, stored_at=self._clock())
        with self._lock:
            self._entries[spot_id] = entry

    def clear(self, spot_id: SpotId | None = None) -> None:
        with self._lock:
            if spot_id is None:
                self._entries.clear()
            else:
                self._entries.pop(spot_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def __contains__(self, spot_id: object) -> bool:
        with self._lock:
            return spot_id in self._entries
