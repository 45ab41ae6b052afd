"""Scrape orchestration: identify, cache, fetch with fallback, assemble."""

import logging
import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timedelta

from windscrape.config.schema import ScraperConfig
from windscrape.ingest.assembler import assemble
from windscrape.ingest.browser_fetcher import BrowserPageFetcher
from windscrape.ingest.cache import ForecastCache
from windscrape.ingest.deadline import Deadline
from windscrape.ingest.document import PageFetcher, RawDocument
from windscrape.ingest.http_fetcher import HttpPageFetcher
from windscrape.ingest.table_extractor import (
    RowSet,
    TableExtractor,
    default_matchers,
    extract_spot_name,
)
from windscrape.ingest.url_identifier import identify
from windscrape.models.common import SourceTag, SpotId, utc_now
from windscrape.models.errors import (
    FetchError,
    FetchTimeoutError,
    ScrapeError,
    TableNotFoundError,
)
from windscrape.models.forecast import ForecastResult

logger = logging.getLogger(__name__)


@dataclass
class _SpotSlot:
    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class ScrapeOrchestrator:
    """Single entry point for turning a spot URL into a ForecastResult.

    The lightweight fetcher is always tried first. A fetch failure or a page
    without a forecast table triggers exactly one attempt with the rendering
    fetcher; its failure is final. Failures are never cached.

    Scrapes of one spot are serialized on a per-spot lock, so overlapping
    requests for the same spot share a single network fetch; different
    spots proceed in parallel.
    A caller whose deadline runs out while waiting for that lock gets
    FetchTimeoutError.
    """

    def __init__(
        self,
        cache: ForecastCache,
        primary: PageFetcher,
        fallback: PageFetcher,
        extractor: TableExtractor | None = None,
        clock: Callable[[], datetime] = utc_now,
    ):
        self.cache = cache
        self.primary = primary
        self.fallback = fallback
        self.extractor = extractor or TableExtractor()
        self._clock = clock
        self._spot_locks: dict[SpotId, _SpotSlot] = {}
        self._spot_locks_guard = threading.Lock()

    @classmethod
    def from_config(
        cls, config: ScraperConfig, cache: ForecastCache | None = None
    ) -> "ScrapeOrchestrator":
        if cache is None:
            cache = ForecastCache(ttl=timedelta(minutes=config.cache.ttl_minutes))
        return cls(
            cache=cache,
            primary=HttpPageFetcher(config.http),
            fallback=BrowserPageFetcher(config.browser),
            extractor=TableExtractor(default_matchers(min_rows=config.table.min_rows)),
        )

    def scrape(self, url: str, deadline: Deadline | None = None) -> ForecastResult:
        """Scrape one spot, serving from cache while the entry is fresh."""
        spot_id = identify(url)
        url = url.strip()

        cached = self.cache.get(spot_id)
        if cached is not None:
            logger.info("Returning cached data for spot %s", spot_id)
            return cached

        with self._spot_slot(spot_id, url, deadline):
            # Another thread may have filled the cache while we waited
            cached = self.cache.get(spot_id)
            if cached is not None:
                logger.info("Returning cached data for spot %s", spot_id)
                return cached

            logger.info("Scraping wind data for spot %s", spot_id)
            document, row_set = self._fetch_rows(url, deadline)
            result = self._build_result(spot_id, url, document, row_set)
            self.cache.put(spot_id, result)
            logger.info(
                "Scraped %d forecast periods for spot %s via %s",
                len(result.forecasts), spot_id, document.strategy,
            )
            return result

    def test_url(self, url: str) -> bool:
        """Report whether a URL can be scraped, discarding the result."""
        try:
            self.scrape(url)
            return True
        except ScrapeError as e:
            logger.warning("URL test failed for %s: %s", url, e)
            return False
        except Exception:
            logger.exception("URL test failed unexpectedly for %s", url)
            return False

    def clear_cache(self, spot_id: SpotId | None = None) -> None:
        self.cache.clear(spot_id)

    @contextmanager
    def _spot_slot(
        self, spot_id: SpotId, url: str, deadline: Deadline | None
    ) -> Iterator[None]:
        """Hold the spot's lock, waiting no longer than the deadline allows.

        The lock entry is dropped once the last holder or waiter leaves.
        """
        with self._spot_locks_guard:
            slot = self._spot_locks.get(spot_id)
            if slot is None:
                slot = self._spot_locks[spot_id] = _SpotSlot()
            slot.users += 1
        try:
            timeout = -1 if deadline is None else deadline.remaining()
            if not slot.lock.acquire(timeout=timeout):
                raise FetchTimeoutError(
                    f"Timed out waiting for a concurrent scrape of spot {spot_id}",
                    url=url,
                )
            try:
                yield
            finally:
                slot.lock.release()
        finally:
            with self._spot_locks_guard:
                slot.users -= 1
                if slot.users == 0:
                    del self._spot_locks[spot_id]

    def _fetch_rows(
        self, url: str, deadline: Deadline | None
    ) -> tuple[RawDocument, RowSet]:
        try:
            return self._attempt(self.primary, url, deadline)
        except (FetchError, TableNotFoundError) as e:
            logger.warning(
                "%s fetch failed for %s (%s), retrying with %s",
                self.primary.strategy, url, e, self.fallback.strategy,
            )
        return self._attempt(self.fallback, url, deadline)

    def _attempt(
        self, fetcher: PageFetcher, url: str, deadline: Deadline | None
    ) -> tuple[RawDocument, RowSet]:
        document = fetcher.fetch(url, deadline)
        try:
            row_set = self.extractor.locate(document.soup)
        except TableNotFoundError as e:
            e.url = url
            raise
        return document, row_set

    def _build_result(
        self, spot_id: SpotId, url: str, document: RawDocument, row_set: RowSet
    ) -> ForecastResult:
        scraped_at = self._clock()
        try:
            points = assemble(row_set, captured_at=scraped_at)
        except ScrapeError as e:
            e.url = url
            raise
        return ForecastResult(
            spot_id=spot_id,
            spot_name=extract_spot_name(document.soup, spot_id),
            source_url=url,
            forecasts=tuple(points),
            scraped_at=scraped_at,
            source_tag=SourceTag.WINDGURU,
        )
