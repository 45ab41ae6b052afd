"""Tests for the TTL forecast cache."""

import threading
from datetime import UTC, datetime, timedelta

from windscrape.ingest.cache import ForecastCache, is_entry_fresh
from windscrape.models.forecast import CacheEntry, ForecastResult
from windscrape.tests.conftest import FakeClock


def _result(spot_id: str, clock: FakeClock) -> ForecastResult:
    return ForecastResult(
        spot_id=spot_id,
        spot_name=f"Spot {spot_id}",
        source_url=f"https://www.windguru.cz/{spot_id}",
        forecasts=(),
        scraped_at=clock(),
    )


class TestForecastCache:
    def test_miss(self, clock: FakeClock):
        assert ForecastCache(clock=clock).get("1") is None

    def test_hit(self, clock: FakeClock):
        cache = ForecastCache(clock=clock)
        result = _result("1", clock)
        cache.put("1", result)
        assert cache.get("1") is result

    def test_fresh_just_before_ttl(self, clock: FakeClock):
        cache = ForecastCache(ttl=timedelta(minutes=5), clock=clock)
        cache.put("1", _result("1", clock))
        clock.advance(minutes=4, seconds=59)
        assert cache.get("1") is not None

    def test_expired_at_ttl(self, clock: FakeClock):
        cache = ForecastCache(ttl=timedelta(minutes=5), clock=clock)
        cache.put("1", _result("1", clock))
        clock.advance(minutes=5)
        assert cache.get("1") is None

    def test_expired_entry_kept_until_looked_up(self, clock: FakeClock):
        cache = ForecastCache(clock=clock)
        cache.put("1", _result("1", clock))
        cache.put("2", _result("2", clock))
        clock.advance(minutes=10)
        assert len(cache) == 2
        cache.get("1")
        assert "1" not in cache
        assert "2" in cache

    def test_put_replaces_wholesale(self, clock: FakeClock):
        cache = ForecastCache(clock=clock)
        old = _result("1", clock)
        cache.put("1", old)
        clock.advance(minutes=1)
        new = _result("1", clock)
        cache.put("1", new)
        assert cache.get("1") is new

    def test_ttl_measured_from_write(self, clock: FakeClock):
        cache = ForecastCache(clock=clock)
        cache.put("1", _result("1", clock))
        clock.advance(minutes=4)
        cache.put("1", _result("1", clock))
        clock.advance(minutes=4)
        assert cache.get("1") is not None

    def test_clear_one(self, clock: FakeClock):
        cache = ForecastCache(clock=clock)
        cache.put("1", _result("1", clock))
        cache.put("2", _result("2", clock))
        cache.clear("1")
        assert cache.get("1") is None
        assert cache.get("2") is not None

    def test_clear_unknown_key(self, clock: FakeClock):
        cache = ForecastCache(clock=clock)
        cache.clear("404")
        assert len(cache) == 0

    def test_clear_all(self, clock: FakeClock):
        cache = ForecastCache(clock=clock)
        cache.put("1", _result("1", clock))
        cache.put("2", _result("2", clock))
        cache.clear()
        assert len(cache) == 0

    def test_concurrent_writers_isolated_by_key(self, clock: FakeClock):
        cache = ForecastCache(clock=clock)

        def writer(spot_id: str):
            for _ in range(200):
                cache.put(spot_id, _result(spot_id, clock))
                assert cache.get(spot_id).spot_id == spot_id

        threads = [threading.Thread(target=writer, args=(str(i),)) for i in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()
        assert len(cache) == 8


class TestIsEntryFresh:
    def test_boundary(self):
        stored = datetime(2026, 2, 10, 12, 0, 0, tzinfo=UTC)
        entry = CacheEntry(result=None, stored_at=stored)  # type: ignore[arg-type]
        ttl = timedelta(minutes=5)
        assert is_entry_fresh(entry, ttl, stored + timedelta(minutes=4)) is True
        assert is_entry_fresh(entry, ttl, stored + ttl) is False
