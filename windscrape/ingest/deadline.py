"""Deadline propagated from the caller through every fetch stage."""

import time
from collections.abc import Callable

from windscrape.models.errors import FetchTimeoutError


class Deadline:
    """A point on the monotonic clock after which work must stop.

    Each stage takes the smaller of its own bound and the time remaining.
    `cancel()` expires the deadline at once; stages check it before they
    start, so a cancelled scrape stops at the next stage boundary.
    """

    def __init__(self, seconds: float, clock: Callable[[], float] = time.monotonic):
        self._clock = clock
        self._expires_at = clock() + seconds

    def remaining(self) -> float:
        return max(0.0, self._expires_at - self._clock())

    @property
    def expired(self) -> bool:
        return self.remaining() <= 0.0

    def clip(self, seconds: float) -> float:
        return min(seconds, self.remaining())

    def cancel(self) -> None:
        self._expires_at = float("-inf")


def bounded_timeout(limit: float, deadline: Deadline | None, url: str = "") -> float:
    """Timeout for a stage, in seconds.

    Raises FetchTimeoutError if the deadline has already passed.
    """
    if deadline is None:
        return limit
    # playwright treats a zero timeout as no timeout
    timeout = deadline.clip(limit)
    if timeout <= 0:
        raise FetchTimeoutError("Scrape deadline exceeded", url=url)
    return timeout
