"""Tests for the rendering fetch strategy with a mocked playwright driver."""

import logging
from unittest.mock import MagicMock

import pytest
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError

from windscrape.config.defaults import TABLE_WAIT_SELECTORS
from windscrape.config.schema import BrowserConfig
from windscrape.ingest.browser_fetcher import BrowserPageFetcher
from windscrape.ingest.deadline import Deadline
from windscrape.models.common import FetchStrategy
from windscrape.models.errors import FetchNetworkError, FetchTimeoutError
from windscrape.tests.conftest import SPOT_URL


class FakePlaywright:
    """Wires a MagicMock playwright -> browser -> context -> page chain."""

    def __init__(self, html: str = "<html></html>"):
        self.factory = MagicMock()
        self.manager = self.factory.return_value
        self.manager.__exit__.return_value = False
        pw = self.manager.__enter__.return_value
        self.browser = pw.chromium.launch.return_value
        self.context = self.browser.new_context.return_value
        self.page = self.context.new_page.return_value
        self.page.content.return_value = html
        self.page.query_selector.return_value = None
        self.page.get_by_role.return_value.count.return_value = 0
        self.launch = pw.chromium.launch


@pytest.fixture
def fake() -> FakePlaywright:
    return FakePlaywright()


def _fetcher(fake: FakePlaywright, **config) -> BrowserPageFetcher:
    return BrowserPageFetcher(BrowserConfig(**config), playwright_factory=fake.factory)


class TestFetch:
    def test_success(self, spot_html: str):
        fake = FakePlaywright(spot_html)
        doc = _fetcher(fake).fetch(SPOT_URL)

        assert doc.strategy == FetchStrategy.BROWSER
        assert doc.soup.select_one("table.tabulka") is not None
        fake.page.goto.assert_called_once_with(
            SPOT_URL, wait_until="networkidle", timeout=30000
        )
        fake.browser.close.assert_called_once()
        fake.manager.__exit__.assert_called_once()

    def test_user_agent_and_viewport(self, fake: FakePlaywright):
        _fetcher(fake, viewport_width=1280, viewport_height=720).fetch(SPOT_URL)

        kwargs = fake.browser.new_context.call_args.kwargs
        assert kwargs["user_agent"].startswith("Mozilla/5.0")
        assert kwargs["viewport"] == {"width": 1280, "height": 720}
        assert fake.launch.call_args.kwargs["headless"] is True

    def test_waits_for_any_table_selector(self, fake: FakePlaywright):
        _fetcher(fake).fetch(SPOT_URL)

        fake.page.wait_for_selector.assert_called_once_with(
            ", ".join(TABLE_WAIT_SELECTORS), timeout=5000
        )

    def test_settle_wait(self, fake: FakePlaywright):
        _fetcher(fake, settle_seconds=3.0).fetch(SPOT_URL)
        fake.page.wait_for_timeout.assert_called_once_with(3000)

    def test_table_wait_timeout_returns_available_markup(self, fake: FakePlaywright):
        fake.page.wait_for_selector.side_effect = PlaywrightTimeoutError("no table")
        fake.page.content.return_value = "<p>partial</p>"

        doc = _fetcher(fake).fetch(SPOT_URL)
        assert doc.html == "<p>partial</p>"
        fake.browser.close.assert_called_once()

    def test_fresh_browser_per_fetch(self, fake: FakePlaywright):
        fetcher = _fetcher(fake)
        fetcher.fetch(SPOT_URL)
        fetcher.fetch(SPOT_URL)
        assert fake.launch.call_count == 2
        assert fake.browser.close.call_count == 2


class TestSessionRelease:
    def test_navigation_timeout(self, fake: FakePlaywright):
        fake.page.goto.side_effect = PlaywrightTimeoutError("Timeout 30000ms exceeded")

        with pytest.raises(FetchTimeoutError):
            _fetcher(fake).fetch(SPOT_URL)
        fake.browser.close.assert_called_once()
        fake.manager.__exit__.assert_called_once()

    def test_browser_error_mid_session(self, fake: FakePlaywright):
        fake.context.new_page.side_effect = PlaywrightError("Target closed")

        with pytest.raises(FetchNetworkError):
            _fetcher(fake).fetch(SPOT_URL)
        fake.browser.close.assert_called_once()

    def test_unexpected_error_still_releases(self, fake: FakePlaywright):
        fake.page.content.side_effect = RuntimeError("boom")

        with pytest.raises(RuntimeError):
            _fetcher(fake).fetch(SPOT_URL)
        fake.browser.close.assert_called_once()
        fake.manager.__exit__.assert_called_once()

    def test_launch_failure(self, fake: FakePlaywright):
        fake.launch.side_effect = PlaywrightError("Executable doesn't exist")

        with pytest.raises(FetchNetworkError):
            _fetcher(fake).fetch(SPOT_URL)
        fake.manager.__exit__.assert_called_once()


class TestConsentDuringFetch:
    def test_consent_clicked(self, fake: FakePlaywright):
        button = MagicMock()
        fake.page.query_selector.side_effect = (
            lambda sel: button if sel == "#didomi-notice-agree-button" else None
        )

        _fetcher(fake, consent_settle_seconds=2.0).fetch(SPOT_URL)
        button.click.assert_called_once()
        fake.page.wait_for_timeout.assert_any_call(2000)

    def test_consent_click_failure_does_not_abort(
        self, fake: FakePlaywright, spot_html: str, caplog
    ):
        button = MagicMock()
        button.click.side_effect = PlaywrightError("element detached")
        fake.page.query_selector.side_effect = (
            lambda sel: button if sel == ".cookie-consent-accept" else None
        )
        fake.page.content.return_value = spot_html

        with caplog.at_level(logging.WARNING, logger="windscrape.ingest.consent"):
            doc = _fetcher(fake).fetch(SPOT_URL)
        assert doc.soup.select_one("table.tabulka") is not None
        assert "click failed" in caplog.text

    def test_no_overlay(self, fake: FakePlaywright):
        _fetcher(fake, settle_seconds=3.0).fetch(SPOT_URL)
        # only the settle wait, no consent settle
        fake.page.wait_for_timeout.assert_called_once_with(3000)


class TestDeadline:
    def test_navigation_clipped_to_deadline(self, fake: FakePlaywright):
        clock = MagicMock(return_value=50.0)
        deadline = Deadline(12, clock=clock)

        _fetcher(fake).fetch(SPOT_URL, deadline)
        assert fake.page.goto.call_args.kwargs["timeout"] == 12000

    def test_expired_deadline_never_launches(self, fake: FakePlaywright):
        deadline = Deadline(60)
        deadline.cancel()

        with pytest.raises(FetchTimeoutError):
            _fetcher(fake).fetch(SPOT_URL, deadline)
        fake.factory.assert_not_called()
