"""Shared fixtures."""

from typing import Dict, Iterable, List, Optional

import pytest

from marketbrief.config import CatalogModel, SourceCatalog
from marketbrief.errors import FetchError
from marketbrief.ingestion import PageFetcher, ScratchStore

GLEANER = "https://jamaica-gleaner.com/business"
OBSERVER = "https://www.jamaicaobserver.com/category/business/"
EXCHANGE = "https://www.jamstockex.com/"


class FakeFetcher(PageFetcher):
    """Serve canned pages; URLs in ``failing`` raise ``FetchError``."""

    def __init__(self, pages: Optional[Dict[str, str]] = None, failing: Iterable[str] = ()) -> None:
        self.pages = pages or {}
        self.failing = set(failing)
        self.calls: List[str] = []
        self.close_calls = 0

    def fetch(self, url: str) -> str:
        self.calls.append(url)
        if url in self.failing:
            raise FetchError(url, "navigation timeout")
        return self.pages.get(url, f"<html><body><p>{url}</p></body></html>")

    def close(self) -> None:
        self.close_calls += 1


class FakeSleep:
    """Record requested waits instead of sleeping."""

    def __init__(self) -> None:
        self.calls: List[float] = []

    def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def make_catalog_data() -> dict:
    return {
        "sources": {
            "daily": {
                "newspapers": [GLEANER, OBSERVER],
                "stock": [
                    "https://www.jamstockex.com/trading/instruments/?instrument=abc-jmd",
                    "https://www.jamstockex.com/trading/instruments/?instrument=xyz-jmd",
                ],
                "jamstockex": [EXCHANGE],
            }
        },
        "prompts": {
            "daily": {
                "newspapers": {"ingest": "Rank these headlines", "summarize": "Summarize this"},
                "jamstockex": {"ingest": "List announcements"},
                "stock": {"ingest": "Extract quote"},
            }
        },
    }


@pytest.fixture
def catalog_data() -> dict:
    return make_catalog_data()


@pytest.fixture
def catalog() -> SourceCatalog:
    return SourceCatalog(CatalogModel(**make_catalog_data()))


@pytest.fixture
def scratch(tmp_path) -> ScratchStore:
    store = ScratchStore(tmp_path / "page-content", tmp_path / "scraped-articles")
    store.reset()
    return store


@pytest.fixture
def fake_sleep() -> FakeSleep:
    return FakeSleep()
