"""Common types and helpers shared across models."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import TypeAlias

SpotId: TypeAlias = str


class SourceTag(StrEnum):
    WINDGURU = "windguru"


class FetchStrategy(StrEnum):
    HTTP = "http"
    BROWSER = "browser"


def utc_now() -> datetime:
    return datetime.now(UTC)
