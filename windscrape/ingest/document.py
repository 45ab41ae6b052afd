"""Fetched page markup plus its parsed tree."""

from dataclasses import dataclass, field
from typing import Protocol

from bs4 import BeautifulSoup

from windscrape.ingest.deadline import Deadline
from windscrape.models.common import FetchStrategy


@dataclass(frozen=True)
class RawDocument:
    url: str
    html: str
    strategy: FetchStrategy
    soup: BeautifulSoup = field(compare=False, repr=False)

    @classmethod
    def parse(cls, url: str, html: str, strategy: FetchStrategy) -> "RawDocument":
        return cls(url=url, html=html, strategy=strategy, soup=BeautifulSoup(html, "html.parser"))


class PageFetcher(Protocol):
    strategy: FetchStrategy

    def fetch(self, url: str, deadline: Deadline | None = None) -> RawDocument: ...
