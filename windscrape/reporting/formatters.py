"""Output formatters for scrape results and batch outcomes."""

import json
from collections.abc import Sequence
from typing import Any

from windscrape.models.batch import BatchSummary, SpotOutcome
from windscrape.models.errors import ErrorReason
from windscrape.models.forecast import ForecastPoint, ForecastResult

ERROR_MESSAGES: dict[ErrorReason, str] = {
    ErrorReason.MALFORMED_URL: "That doesn't look like a Windguru spot URL.",
    ErrorReason.TIMEOUT: "Windguru took too long to respond. Try again shortly.",
    ErrorReason.NETWORK: "Unable to reach Windguru. Try again later.",
    ErrorReason.NO_TABLE: "No forecast table was found on the Windguru page.",
    ErrorReason.EMPTY_FORECAST: "The Windguru page had no forecast data.",
    ErrorReason.UNEXPECTED: "Failed to retrieve forecast data.",
}


def describe_error(reason: ErrorReason | None) -> str:
    """User-facing message for a failure reason."""
    if reason is None:
        return ERROR_MESSAGES[ErrorReason.UNEXPECTED]
    return ERROR_MESSAGES.get(reason, ERROR_MESSAGES[ErrorReason.UNEXPECTED])


def point_to_dict(p: ForecastPoint) -> dict[str, Any]:
    cloud = None
    if p.cloud_cover is not None:
        cloud = {
            "low": p.cloud_cover.low,
            "mid": p.cloud_cover.mid,
            "high": p.cloud_cover.high,
            "total": p.cloud_cover.total,
        }
    return {
        "datetime": p.period,
        "windSpeed": p.wind_speed,
        "windGusts": p.wind_gusts,
        "windDirection": p.wind_direction,
        "temperature": p.temperature,
        "cloudCover": cloud,
        "precipitation": p.precipitation,
        "timestamp": p.captured_at.isoformat(),
    }


def result_to_dict(r: ForecastResult) -> dict[str, Any]:
    return {
        "spotId": r.spot_id,
        "spotName": r.spot_name,
        "url": r.source_url,
        "forecasts": [point_to_dict(p) for p in r.forecasts],
        "scrapedAt": r.scraped_at.isoformat(),
        "source": r.source_tag.value,
    }


def format_result_json(r: ForecastResult) -> str:
    return json.dumps(result_to_dict(r), indent=2, ensure_ascii=False)


def _fmt(value: float | None, suffix: str = "") -> str:
    return "-" if value is None else f"{value:g}{suffix}"


def format_result_text(r: ForecastResult) -> str:
    """Plain text table of a forecast."""
    lines = [
        f"=== {r.spot_name} (spot {r.spot_id}) ===",
        f"Source: {r.source_url} | Scraped: {r.scraped_at.isoformat()}",
        f"{'Period':<14}{'Wind':>6}{'Gust':>6}{'Dir':>6}{'Temp':>7}{'Cloud':>7}{'Rain':>6}",
    ]
    for p in r.forecasts:
        cloud = None if p.cloud_cover is None else p.cloud_cover.total
        lines.append(
            f"{p.period[:13]:<14}"
            f"{_fmt(p.wind_speed):>6}"
            f"{_fmt(p.wind_gusts):>6}"
            f"{p.wind_direction or '-':>6}"
            f"{_fmt(p.temperature):>7}"
            f"{_fmt(cloud, '%'):>7}"
            f"{_fmt(p.precipitation):>6}"
        )
    return "\n".join(lines)


def outcome_to_dict(o: SpotOutcome) -> dict[str, Any]:
    data: dict[str, Any] = {"url": o.url, "status": o.status.value}
    if o.result is not None:
        data["forecast"] = result_to_dict(o.result)
    else:
        data["forecast"] = None
        data["error"] = o.error_reason.value if o.error_reason else None
        data["message"] = describe_error(o.error_reason)
        data["detail"] = o.error_message
    return data


def format_batch_json(outcomes: Sequence[SpotOutcome], s: BatchSummary) -> str:
    data = {
        "spots": [outcome_to_dict(o) for o in outcomes],
        "count": s.total,
        "stats": {"successful": s.successful, "failed": s.failed, "total": s.total},
    }
    return json.dumps(data, indent=2, ensure_ascii=False)


def format_batch_text(outcomes: Sequence[SpotOutcome], s: BatchSummary) -> str:
    lines = [
        f"=== Batch Complete | {s.successful}/{s.total} succeeded "
        f"in {s.duration_seconds:.1f}s ==="
    ]
    for o in outcomes:
        if o.result is not None:
            lines.append(
                f"OK    {o.url}: {o.result.spot_name}, "
                f"{len(o.result.forecasts)} periods"
            )
        else:
            lines.append(f"FAIL  {o.url}: {describe_error(o.error_reason)}")
    return "\n".join(lines)
