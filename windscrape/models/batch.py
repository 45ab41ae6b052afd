"""Batch scrape outcome models."""

from dataclasses import dataclass
from enum import StrEnum

from windscrape.models.errors import ErrorReason
from windscrape.models.forecast import ForecastResult


class OutcomeStatus(StrEnum):
    SUCCESS = "success"
    ERROR = "error"


@dataclass(frozen=True)
class SpotOutcome:
    url: str
    status: OutcomeStatus
    result: ForecastResult | None = None
    error_reason: ErrorReason | None = None
    error_message: str = ""

    @property
    def ok(self) -> bool:
        return self.status == OutcomeStatus.SUCCESS


@dataclass
class BatchSummary:
    total: int = 0
    successful: int = 0
    failed: int = 0
    duration_seconds: float = 0.0
