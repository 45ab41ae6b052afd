"""Shared test fixtures."""

from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
import yaml
from bs4 import BeautifulSoup

from windscrape.config.schema import ScraperConfig
from windscrape.ingest.document import RawDocument
from windscrape.models.common import FetchStrategy

FIXTURE_DIR = Path(__file__).parent / "fixtures"

SPOT_URL = "https://www.windguru.cz/48561"


class FakeClock:
    """Settable wall clock for cache and timestamp tests."""

    def __init__(self, start: datetime | None = None):
        self.now = start or datetime(2026, 2, 10, 12, 0, 0, tzinfo=UTC)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def load_fixture(name: str) -> str:
    return (FIXTURE_DIR / name).read_text(encoding="utf-8")


def make_document(
    html: str, url: str = SPOT_URL, strategy: FetchStrategy = FetchStrategy.HTTP
) -> RawDocument:
    return RawDocument.parse(url, html, strategy)


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return FIXTURE_DIR


@pytest.fixture
def spot_html() -> str:
    return load_fixture("windguru_spot.html")


@pytest.fixture
def spot_soup(spot_html: str) -> BeautifulSoup:
    return BeautifulSoup(spot_html, "html.parser")


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def default_config() -> ScraperConfig:
    return ScraperConfig()


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML and return its path."""
    data = {
        "http": {"timeout_seconds": 8.0},
        "cache": {"ttl_minutes": 10},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
