"""Assemble positional table rows into forecast points."""

from datetime import datetime

from windscrape.ingest.normalizer import decode_direction, parse_cloud_cover, parse_numeric
from windscrape.ingest.table_extractor import Cell, RowSet
from windscrape.models.errors import EmptyForecastError
from windscrape.models.forecast import ForecastPoint


def _cell(row: list[Cell], i: int) -> Cell | None:
    return row[i] if i < len(row) else None


def _text(row: list[Cell], i: int) -> str | None:
    cell = _cell(row, i)
    return cell.text if cell is not None else None


def assemble(row_set: RowSet, captured_at: datetime) -> list[ForecastPoint]:
    """Zip the rows column by column into ForecastPoints.

    Column i of every row is the same forecast period. Short rows yield
    None fields for the missing columns.
    """
    column_count = row_set.column_count
    if column_count == 0:
        raise EmptyForecastError("No forecast data could be extracted from the table")

    points: list[ForecastPoint] = []
    for i in range(column_count):
        period = _text(row_set.headers, i) or f"col_{i}"
        direction_cell = _cell(row_set.wind_direction, i)
        direction = (
            decode_direction(direction_cell.text, direction_cell.html)
            if direction_cell is not None
            else None
        )
        points.append(
            ForecastPoint(
                period=period,
                wind_speed=parse_numeric(_text(row_set.wind_speed, i)),
                wind_gusts=parse_numeric(_text(row_set.wind_gusts, i)),
                wind_direction=direction,
                temperature=parse_numeric(_text(row_set.temperature, i)),
                cloud_cover=parse_cloud_cover(
                    _text(row_set.cloud_low, i),
                    _text(row_set.cloud_mid, i),
                    _text(row_set.cloud_high, i),
                ),
                precipitation=parse_numeric(_text(row_set.precipitation, i)),
                captured_at=captured_at,
            )
        )
    return points
