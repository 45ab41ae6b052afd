"""Windguru forecast data models."""

from dataclasses import dataclass
from datetime import datetime

from windscrape.models.common import SourceTag, SpotId


@dataclass(frozen=True)
class CloudCover:
    low: float | None
    mid: float | None
    high: float | None
    total: float  # max of the present levels, not a physical sum


@dataclass(frozen=True)
class ForecastPoint:
    period: str  # provider label, e.g. "Sa18.14h"
    wind_speed: float | None
    wind_gusts: float | None
    wind_direction: str | None  # compass code or "<deg>°"
    temperature: float | None
    cloud_cover: CloudCover | None
    precipitation: float | None
    captured_at: datetime


@dataclass(frozen=True)
class ForecastResult:
    spot_id: SpotId
    spot_name: str
    source_url: str
    forecasts: tuple[ForecastPoint, ...]
    scraped_at: datetime
    source_tag: SourceTag = SourceTag.WINDGURU


@dataclass(frozen=True)
class CacheEntry:
    result: ForecastResult
    stored_at: datetime
