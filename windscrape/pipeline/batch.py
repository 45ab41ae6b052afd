"""Concurrent multi-spot scraping with per-spot failure isolation."""

import logging
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from windscrape.ingest.deadline import Deadline
from windscrape.models.batch import BatchSummary, OutcomeStatus, SpotOutcome
from windscrape.models.errors import ErrorReason, ScrapeError
from windscrape.pipeline.scrape_orchestrator import ScrapeOrchestrator

logger = logging.getLogger(__name__)

DEFAULT_MAX_WORKERS = 8


def scrape_batch(
    orchestrator: ScrapeOrchestrator,
    urls: Sequence[str],
    max_workers: int = DEFAULT_MAX_WORKERS,
    deadline: Deadline | None = None,
) -> list[SpotOutcome]:
    """Scrape every URL concurrently and wait for all of them to settle.

    Returns one outcome per URL, in input order. A failing spot is recorded
    as an error outcome and never stops the others.
    """
    if not urls:
        return []
    workers = max(1, min(max_workers, len(urls)))
    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="scrape") as pool:
        futures = [pool.submit(_scrape_one, orchestrator, url, deadline) for url in urls]
        return [f.result() for f in futures]


def _scrape_one(
    orchestrator: ScrapeOrchestrator, url: str, deadline: Deadline | None
) -> SpotOutcome:
    try:
        result = orchestrator.scrape(url, deadline)
    except ScrapeError as e:
        logger.warning("Error fetching forecast for %s: %s", url, e)
        return SpotOutcome(
            url=url,
            status=OutcomeStatus.ERROR,
            error_reason=e.reason,
            error_message=str(e),
        )
    except Exception as e:
        logger.exception("Unexpected error fetching forecast for %s", url)
        return SpotOutcome(
            url=url,
            status=OutcomeStatus.ERROR,
            error_reason=ErrorReason.UNEXPECTED,
            error_message=str(e),
        )
    return SpotOutcome(url=url, status=OutcomeStatus.SUCCESS, result=result)


def summarize(outcomes: Sequence[SpotOutcome], duration_seconds: float = 0.0) -> BatchSummary:
    successful = sum(1 for o in outcomes if o.ok)
    return BatchSummary(
        total=len(outcomes),
        successful=successful,
        failed=len(outcomes) - successful,
        duration_seconds=duration_seconds,
    )


def run_batch(
    orchestrator: ScrapeOrchestrator,
    urls: Sequence[str],
    max_workers: int = DEFAULT_MAX_WORKERS,
    deadline: Deadline | None = None,
) -> tuple[list[SpotOutcome], BatchSummary]:
    start = time.monotonic()
    outcomes = scrape_batch(orchestrator, urls, max_workers, deadline)
    summary = summarize(outcomes, time.monotonic() - start)
    logger.info(
        "Batch complete: %d/%d spots succeeded", summary.successful, summary.total
    )
    return outcomes, summary
