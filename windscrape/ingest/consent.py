"""Best-effort dismissal of cookie/privacy overlays in the browser."""

import logging
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import Page

from windscrape.config.defaults import CONSENT_BUTTON_LABELS, CONSENT_SELECTORS

logger = logging.getLogger(__name__)

CLICK_TIMEOUT_MS = 2000


class ConsentOutcome(StrEnum):
    NOT_FOUND = "not_found"
    DISMISSED = "dismissed"
    FAILED = "failed"


@dataclass(frozen=True)
class ConsentResult:
    outcome: ConsentOutcome
    matcher: str | None = None
    error: str = ""


@dataclass(frozen=True)
class ConsentMatcher:
    description: str
    # Returns something clickable, or None when the page has no such element.
    locate: Callable[[Page], Any]


def css_matcher(selector: str) -> ConsentMatcher:
    return ConsentMatcher(selector, lambda page: page.query_selector(selector))


def button_label_matcher(pattern: str) -> ConsentMatcher:
    regex = re.compile(pattern, re.IGNORECASE)

    def locate(page: Page) -> Any:
        buttons = page.get_by_role("button", name=regex)
        return buttons.first if buttons.count() > 0 else None

    return ConsentMatcher(f"button /{pattern}/", locate)


def default_consent_matchers() -> list[ConsentMatcher]:
    return [css_matcher(s) for s in CONSENT_SELECTORS] + [
        button_label_matcher(p) for p in CONSENT_BUTTON_LABELS
    ]


def dismiss_consent(
    page: Page, matchers: Sequence[ConsentMatcher], settle_ms: float = 0
) -> ConsentResult:
    """Click the first consent button any matcher finds.

    A page without an overlay is the normal case and yields NOT_FOUND.
    A click that fails is logged and the next matcher is tried; the fetch
    itself carries on either way.
    """
    failure: ConsentResult | None = None
    for matcher in matchers:
        try:
            target = matcher.locate(page)
        except PlaywrightError as e:
            logger.debug("Consent lookup %s errored: %s", matcher.description, e)
            continue
        if target is None:
            continue
        try:
            target.click(timeout=CLICK_TIMEOUT_MS)
        except PlaywrightError as e:
            logger.warning(
                "Consent button %s found but click failed: %s", matcher.description, e
            )
            failure = ConsentResult(ConsentOutcome.FAILED, matcher.description, str(e))
            continue
        logger.info("Clicked consent button: %s", matcher.description)
        if settle_ms > 0:
            page.wait_for_timeout(settle_ms)
        return ConsentResult(ConsentOutcome.DISMISSED, matcher.description)
    return failure or ConsentResult(ConsentOutcome.NOT_FOUND)
