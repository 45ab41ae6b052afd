"""Typed scrape failures.

Every failure carries a reason class so callers can show a tailored
message (timeout vs. malformed URL vs. no data found).
"""

from enum import StrEnum


class ErrorReason(StrEnum):
    MALFORMED_URL = "malformed_url"
    TIMEOUT = "timeout"
    NETWORK = "network"
    NO_TABLE = "no_table"
    EMPTY_FORECAST = "empty_forecast"
    UNEXPECTED = "unexpected"


class ScrapeError(Exception):
    """Base class for all scrape failures."""

    reason: ErrorReason = ErrorReason.UNEXPECTED

    def __init__(self, message: str, url: str = ""):
        super().__init__(message)
        self.url = url


class MalformedUrlError(ScrapeError):
    """URL does not match the provider pattern. Never retried."""

    reason = ErrorReason.MALFORMED_URL


class FetchError(ScrapeError):
    """A fetch strategy could not retrieve a document."""

    reason = ErrorReason.NETWORK


class FetchTimeoutError(FetchError):
    reason = ErrorReason.TIMEOUT


class FetchNetworkError(FetchError):
    def __init__(self, message: str, url: str = "", status_code: int | None = None):
        super().__init__(message, url)
        self.status_code = status_code


class TableNotFoundError(ScrapeError):
    """A document was retrieved but no forecast table was found in it."""

    reason = ErrorReason.NO_TABLE


class EmptyForecastError(ScrapeError):
    """A table was found but no forecast points could be assembled."""

    reason = ErrorReason.EMPTY_FORECAST
