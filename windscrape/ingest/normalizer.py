"""Value conversions for raw Windguru cell contents."""

import math
import re

from windscrape.models.forecast import CloudCover

COMPASS_POINTS = [
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
]

_NUM = r"-?\d+(?:\.\d+)?"
# A single value or an "a-b" range; the range collapses to its midpoint.
_NUMERIC_RE = re.compile(rf"({_NUM})(?:\s*-\s*({_NUM}))?")
_COMPASS_RE = re.compile(r"^[NESW]{1,3}$", re.IGNORECASE)
_TEXT_DEGREES_RE = re.compile(r"(\d+(?:\.\d+)?)\s*°")
_TITLE_DEGREES_RE = re.compile(r"""title=["'][^"']*\((\d+)\s*°\)""")
_ROTATE_RE = re.compile(r"rotate\(\s*(-?\d+(?:\.\d+)?)", re.IGNORECASE)

# Arrows in the direction row are drawn rotated half a turn from the bearing.
ARROW_ROTATION_OFFSET = 180


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with ties going up, so 2.25 -> 2.3 and 12.5 -> 13."""
    factor = 10**ndigits
    return math.floor(value * factor + 0.5) / factor


def parse_numeric(text: str | None) -> float | None:
    """Parse a number or an "a-b" range from cell text.

    Returns the midpoint rounded to one decimal, or None when the text holds
    no number.
    """
    if not text or not isinstance(text, str):
        return None
    clean = text.strip()
    if not clean:
        return None
    m = _NUMERIC_RE.search(clean)
    if m is None:
        return None
    low = float(m.group(1))
    high = float(m.group(2)) if m.group(2) is not None else low
    return round_half_up((low + high) / 2, 1)


def degrees_to_compass(degrees: float) -> str | None:
    if degrees < 0 or degrees > 360:
        return None
    index = int(round_half_up(degrees / 22.5)) % 16
    return COMPASS_POINTS[index]


def direction_from_text(text: str | None) -> str | None:
    """Decode a direction written out in the cell text.

    Compass codes pass through uppercased; "<n>°" is bucketed to a compass
    point.
    """
    if not text:
        return None
    clean = text.strip()
    if not clean:
        return None
    if _COMPASS_RE.match(clean):
        return clean.upper()
    m = _TEXT_DEGREES_RE.search(clean)
    if m is not None:
        return degrees_to_compass(float(m.group(1)))
    return None


def direction_from_markup(html: str | None) -> str | None:
    """Decode a direction from the arrow markup of a cell.

    Returns a degree string like "135°". These are intentionally not
    converted to compass points.
    """
    if not html:
        return None
    m = _TITLE_DEGREES_RE.search(html)
    if m is not None:
        return f"{int(m.group(1))}°"
    m = _ROTATE_RE.search(html)
    if m is not None:
        rotation = float(m.group(1))
        bearing = (rotation - ARROW_ROTATION_OFFSET) % 360
        return f"{int(round_half_up(bearing))}°"
    return None


def decode_direction(text: str | None, html: str | None) -> str | None:
    return direction_from_text(text) or direction_from_markup(html)


def _cloud_level(text: str | None) -> float | None:
    value = parse_numeric(text)
    if value is None or value < 0 or value > 100:
        return None
    return value


def parse_cloud_cover(
    low_text: str | None, mid_text: str | None, high_text: str | None
) -> CloudCover | None:
    """Combine low/mid/high cloud percentages.

    Out-of-range levels are dropped. `total` is the max of the remaining
    levels, an approximation kept for compatibility with existing consumers.
    """
    low = _cloud_level(low_text)
    mid = _cloud_level(mid_text)
    high = _cloud_level(high_text)
    present = [v for v in (low, mid, high) if v is not None]
    if not present:
        return None
    return CloudCover(low=low, mid=mid, high=high, total=max(present))
