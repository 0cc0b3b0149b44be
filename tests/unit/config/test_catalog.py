"""Tests for marketbrief.config.catalog."""

from datetime import date
from unittest.mock import patch

import pendulum
import pytest

from marketbrief.config import CatalogModel, SourceCatalog, SourceType, Stage, populate_date_url


class TestPopulateDateUrl:
    def test_replaces_placeholder_with_zero_padded_date(self) -> None:
        url = "https://jamaica-gleaner.com/YYYY/MM/DD/business"

        result = populate_date_url(url, date(2024, 3, 5))

        assert result == "https://jamaica-gleaner.com/2024/03/05/business"

    def test_url_without_placeholder_is_unchanged(self) -> None:
        url = "https://icinsider.com/"

        assert populate_date_url(url, date(2024, 3, 5)) == url

    def test_defaults_to_today(self) -> None:
        with patch("marketbrief.config.catalog.pendulum.today", return_value=pendulum.datetime(2025, 12, 31)):
            result = populate_date_url("https://example.com/YYYY/MM/DD")

        assert result == "https://example.com/2025/12/31"


class TestSourceCatalog:
    def test_sources_for_preserves_order(self, catalog: SourceCatalog) -> None:
        sources = catalog.sources_for(SourceType.NEWSPAPERS)

        assert sources == [
            "https://jamaica-gleaner.com/business",
            "https://www.jamaicaobserver.com/category/business/",
        ]

    def test_sources_for_accepts_strings(self, catalog: SourceCatalog) -> None:
        assert catalog.sources_for("jamstockex", "daily") == ["https://www.jamstockex.com/"]

    def test_sources_for_populates_dates(self, catalog_data: dict) -> None:
        catalog_data["sources"]["daily"]["newspapers"] = ["https://example.com/YYYY/MM/DD/news"]
        catalog = SourceCatalog(CatalogModel(**catalog_data))

        sources = catalog.sources_for(SourceType.NEWSPAPERS, run_date=date(2024, 1, 9))

        assert sources == ["https://example.com/2024/01/09/news"]

    def test_unknown_frequency_has_no_sources(self, catalog: SourceCatalog) -> None:
        assert catalog.sources_for(SourceType.STOCK, "weekly") == []

    def test_instruction_lookup(self, catalog: SourceCatalog) -> None:
        assert catalog.instruction(Stage.SUMMARIZE, SourceType.NEWSPAPERS) == "Summarize this"

    def test_missing_instruction_raises(self, catalog: SourceCatalog) -> None:
        with pytest.raises(ValueError, match="Prompt for stage summarize not found"):
            catalog.instruction(Stage.SUMMARIZE, SourceType.STOCK)
