"""Rendering fetch strategy: a headless browser session per fetch."""

import logging
from collections.abc import Callable, Sequence
from typing import Any

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page, sync_playwright
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from windscrape.config.defaults import TABLE_WAIT_SELECTORS
from windscrape.config.schema import BrowserConfig
from windscrape.ingest.consent import (
    ConsentMatcher,
    default_consent_matchers,
    dismiss_consent,
)
from windscrape.ingest.deadline import Deadline, bounded_timeout
from windscrape.ingest.document import RawDocument
from windscrape.models.common import FetchStrategy
from windscrape.models.errors import FetchNetworkError, FetchTimeoutError

logger = logging.getLogger(__name__)


def _ms(seconds: float) -> float:
    return seconds * 1000


class BrowserPageFetcher:
    """Render the page in Chromium and return the resulting markup.

    Nothing is shared between calls: every fetch launches its own
    playwright driver and browser and tears both down before returning,
    on success and on error alike.
    """

    strategy = FetchStrategy.BROWSER

    def __init__(
        self,
        config: BrowserConfig | None = None,
        consent_matchers: Sequence[ConsentMatcher] | None = None,
        table_wait_selectors: Sequence[str] = TABLE_WAIT_SELECTORS,
        playwright_factory: Callable[[], Any] = sync_playwright,
    ):
        self.config = config or BrowserConfig()
        self.consent_matchers = (
            list(consent_matchers) if consent_matchers is not None
            else default_consent_matchers()
        )
        self.table_wait_selectors = list(table_wait_selectors)
        self._playwright_factory = playwright_factory

    def fetch(self, url: str, deadline: Deadline | None = None) -> RawDocument:
        bounded_timeout(self.config.navigation_timeout_seconds, deadline, url)
        try:
            with self._playwright_factory() as pw:
                browser = pw.chromium.launch(
                    headless=self.config.headless, args=self.config.launch_args
                )
                try:
                    context = browser.new_context(
                        user_agent=self.config.user_agent,
                        viewport={
                            "width": self.config.viewport_width,
                            "height": self.config.viewport_height,
                        },
                    )
                    page = context.new_page()
                    html = self._render(page, url, deadline)
                finally:
                    browser.close()
        except PlaywrightTimeoutError as e:
            raise FetchTimeoutError(f"Browser navigation timed out: {e}", url=url) from e
        except PlaywrightError as e:
            raise FetchNetworkError(f"Browser fetch failed: {e}", url=url) from e

        return RawDocument.parse(url, html, self.strategy)

    def _render(self, page: Page, url: str, deadline: Deadline | None) -> str:
        nav_timeout = bounded_timeout(self.config.navigation_timeout_seconds, deadline, url)
        page.goto(url, wait_until="networkidle", timeout=_ms(nav_timeout))

        dismiss_consent(
            page, self.consent_matchers, _ms(self._clip(self.config.consent_settle_seconds, deadline))
        )

        # Windguru fills the table in after load
        settle = self._clip(self.config.settle_seconds, deadline)
        if settle > 0:
            page.wait_for_timeout(_ms(settle))

        table_wait = self._clip(self.config.table_wait_seconds, deadline)
        if table_wait > 0 and self.table_wait_selectors:
            try:
                page.wait_for_selector(
                    ", ".join(self.table_wait_selectors), timeout=_ms(table_wait)
                )
            except PlaywrightTimeoutError:
                logger.info(
                    "No forecast table appeared within %.1fs, using available content",
                    table_wait,
                )

        return page.content()

    @staticmethod
    def _clip(seconds: float, deadline: Deadline | None) -> float:
        return seconds if deadline is None else deadline.clip(seconds)
