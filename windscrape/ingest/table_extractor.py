"""Locate the Windguru forecast table and slice it into rows by position."""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field

from bs4 import BeautifulSoup, Tag

from windscrape.config.defaults import (
    SPOT_NAME_BLOCKLIST,
    SPOT_NAME_SELECTORS,
    TABLE_SELECTORS,
)
from windscrape.models.common import SpotId
from windscrape.models.errors import TableNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_MIN_ROWS = 5

TableMatcher = Callable[[BeautifulSoup], Tag | None]


@dataclass(frozen=True)
class Cell:
    text: str
    html: str


# Windguru rows are identified by position, not by their labels:
# (row index, RowSet field, description). Rows past the last entry
# (rating etc.) are ignored.
ROW_LAYOUT: list[tuple[int, str, str]] = [
    (0, "headers", "Date/time headers"),
    (1, "wind_speed", "Wind speed (knots)"),
    (2, "wind_gusts", "Wind gusts (knots)"),
    (3, "wind_direction", "Wind direction (arrows)"),
    (4, "temperature", "Temperature (C)"),
    (5, "cloud_low", "Low cloud cover (%)"),
    (6, "cloud_mid", "Mid cloud cover (%)"),
    (7, "cloud_high", "High cloud cover (%)"),
    (8, "precipitation", "Precipitation (mm)"),
]


@dataclass(frozen=True)
class RowSet:
    headers: list[Cell] = field(default_factory=list)
    wind_speed: list[Cell] = field(default_factory=list)
    wind_gusts: list[Cell] = field(default_factory=list)
    wind_direction: list[Cell] = field(default_factory=list)
    temperature: list[Cell] = field(default_factory=list)
    cloud_low: list[Cell] = field(default_factory=list)
    cloud_mid: list[Cell] = field(default_factory=list)
    cloud_high: list[Cell] = field(default_factory=list)
    precipitation: list[Cell] = field(default_factory=list)

    def rows(self) -> list[list[Cell]]:
        return [getattr(self, name) for _, name, _ in ROW_LAYOUT]

    @property
    def column_count(self) -> int:
        return max((len(r) for r in self.rows()), default=0)


def selector_matcher(selector: str) -> TableMatcher:
    def match(soup: BeautifulSoup) -> Tag | None:
        found = soup.select_one(selector)
        if found is not None:
            logger.info("Found forecast table with selector: %s", selector)
        return found

    match.__name__ = f"select({selector})"
    return match


def largest_table_matcher(min_rows: int = DEFAULT_MIN_ROWS) -> TableMatcher:
    """Pick the table with the most rows, if it has more than min_rows."""

    def match(soup: BeautifulSoup) -> Tag | None:
        best: Tag | None = None
        max_rows = 0
        for table in soup.find_all("table"):
            row_count = len(table.find_all("tr"))
            if row_count > max_rows:
                max_rows = row_count
                best = table
        if best is not None and max_rows > min_rows:
            logger.info("Using table with %d rows as forecast table", max_rows)
            return best
        return None

    match.__name__ = "largest_table"
    return match


def default_matchers(
    selectors: Sequence[str] = TABLE_SELECTORS, min_rows: int = DEFAULT_MIN_ROWS
) -> list[TableMatcher]:
    return [selector_matcher(s) for s in selectors] + [largest_table_matcher(min_rows)]


class TableExtractor:
    def __init__(self, matchers: list[TableMatcher] | None = None):
        self.matchers = matchers if matchers is not None else default_matchers()

    def find_table(self, soup: BeautifulSoup) -> Tag:
        for matcher in self.matchers:
            table = matcher(soup)
            if table is not None:
                return table
        raise TableNotFoundError(
            "No forecast table found on page. The page might require "
            "JavaScript or have anti-bot protection."
        )

    def locate(self, soup: BeautifulSoup) -> RowSet:
        """Find the forecast table and map its rows by position.

        The first cell of every row is a label and is skipped.
        """
        table = self.find_table(soup)
        table_rows = table.find_all("tr")
        logger.debug("Found %d rows in forecast table", len(table_rows))

        rows: dict[str, list[Cell]] = {}
        for index, name, description in ROW_LAYOUT:
            if index >= len(table_rows):
                continue
            cells = [
                Cell(text=td.get_text().strip(), html=td.decode_contents())
                for td in table_rows[index].find_all(["td", "th"])[1:]
            ]
            rows[name] = cells
            logger.debug("Row %d (%s): %d cells", index, description, len(cells))
        return RowSet(**rows)


def extract_spot_name(soup: BeautifulSoup, spot_id: SpotId) -> str:
    for selector in SPOT_NAME_SELECTORS:
        el = soup.select_one(selector)
        if el is None:
            continue
        name = el.get_text().strip()
        if name and not any(word in name.lower() for word in SPOT_NAME_BLOCKLIST):
            return name
    return f"Windguru Spot {spot_id}"
