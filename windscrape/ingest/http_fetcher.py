"""Lightweight fetch strategy: a single HTTP GET, no JavaScript."""

import logging

import httpx

from windscrape.config.schema import HttpConfig
from windscrape.ingest.deadline import Deadline, bounded_timeout
from windscrape.ingest.document import RawDocument
from windscrape.models.common import FetchStrategy
from windscrape.models.errors import FetchNetworkError, FetchTimeoutError

logger = logging.getLogger(__name__)


class HttpPageFetcher:
    strategy = FetchStrategy.HTTP

    def __init__(self, config: HttpConfig | None = None):
        self.config = config or HttpConfig()

    def fetch(self, url: str, deadline: Deadline | None = None) -> RawDocument:
        """GET the page with a browser-like user agent.

        Fails on timeouts, transport errors and non-2xx responses.
        """
        timeout = bounded_timeout(self.config.timeout_seconds, deadline, url)
        headers = {
            "User-Agent": self.config.user_agent,
            "Accept": "text/html,application/xhtml+xml;q=0.9,*/*;q=0.8",
        }
        try:
            resp = httpx.get(url, headers=headers, timeout=timeout, follow_redirects=True)
            resp.raise_for_status()
        except httpx.TimeoutException as e:
            raise FetchTimeoutError(
                f"HTTP fetch timed out after {timeout:.1f}s", url=url
            ) from e
        except httpx.HTTPStatusError as e:
            raise FetchNetworkError(
                f"HTTP {e.response.status_code} from {url}",
                url=url,
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise FetchNetworkError(f"Request failed: {e}", url=url) from e
        except httpx.InvalidURL as e:
            raise FetchNetworkError(f"Invalid URL: {e}", url=url) from e

        logger.debug("HTTP fetch of %s returned %d bytes", url, len(resp.text))
        return RawDocument.parse(url, resp.text, self.strategy)
