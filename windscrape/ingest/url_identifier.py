"""Parse Windguru spot URLs into spot identifiers."""

import re

from windscrape.config.defaults import PROVIDER_BASE_URL
from windscrape.models.common import SpotId
from windscrape.models.errors import MalformedUrlError

# e.g. "https://www.windguru.cz/48561" or "http://windguru.cz/48561/"
_SPOT_URL_RE = re.compile(
    r"^https?://(?:www\.)?windguru\.cz/(\d+)/?$", re.IGNORECASE | re.ASCII
)
_SPOT_ID_RE = re.compile(r"[0-9]+")


def identify(url: str) -> SpotId:
    """Extract the numeric spot id from a Windguru URL.

    Raises MalformedUrlError if the URL doesn't match the provider pattern.
    """
    if not isinstance(url, str):
        raise MalformedUrlError("Invalid Windguru URL format", url=str(url))
    m = _SPOT_URL_RE.match(url.strip())
    if m is None:
        raise MalformedUrlError("Invalid Windguru URL format", url=url)
    return m.group(1)


def is_valid_url(url: str) -> bool:
    try:
        identify(url)
    except MalformedUrlError:
        return False
    return True


def canonical_url(spot_id: SpotId) -> str:
    """Build the canonical spot URL for a spot id."""
    if not _SPOT_ID_RE.fullmatch(spot_id):
        raise MalformedUrlError(f"Spot id must be numeric: {spot_id!r}")
    return f"{PROVIDER_BASE_URL}/{spot_id}"
