"""HTML report assembly."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from jinja2 import Environment, PackageLoader

from ..ingestion import ScratchStore
from ..models import ArticleSource, ProcessedArticles, StockSummary

logger = logging.getLogger(__name__)

NEWS_REPORT_FILENAME = "daily-report.html"
MARKET_REPORT_FILENAME = "daily-report-market.html"


def _thousands(value: int) -> str:
    return f"{value:,}"


def create_environment() -> Environment:
    """Jinja environment over the packaged templates."""
    env = Environment(
        loader=PackageLoader("marketbrief.reporting", "templates"),
        autoescape=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["thousands"] = _thousands
    return env


class ReportAssembler:
    """
    Render report sections and combine them into one HTML body.

    Headlines and links are escaped. LLM summaries are already HTML and are
    inserted as is.
    """

    def __init__(self, scratch: Optional[ScratchStore] = None, env: Optional[Environment] = None) -> None:
        self.scratch = scratch
        self.env = env or create_environment()

    def render_section(self, template_name: str, items: Sequence[Any]) -> str:
        return self.env.get_template(template_name).render(sections=items)

    def combine(self, sections: List[Dict[str, str]]) -> str:
        """Wrap rendered sections, each a dict of ``heading``, ``css_class`` and ``html``."""
        return self.env.get_template("report.html").render(sections=sections)

    def assemble_news_report(self, processed: ProcessedArticles) -> str:
        """High priority summaries followed by the low priority headlines."""
        high_html = self.render_section("hp-section.html", processed.high_priority)
        logger.info("Generated newspaper high priority html")
        low_html = self.render_section("lp-section.html", processed.low_priority)
        logger.info("Generated newspaper low priority html")

        html = self.combine(
            [
                {"heading": "Newspaper - High Priority", "css_class": "newspaper-section", "html": high_html},
                {"heading": "Newspaper - Low Priority", "css_class": "newspaper-section", "html": low_html},
            ]
        )
        self._save_audit_copy(NEWS_REPORT_FILENAME, html)
        return html

    def assemble_market_report(self, links: List[ArticleSource], stocks: List[StockSummary]) -> str:
        """Exchange announcements followed by the stock quote table."""
        links_html = self.render_section("lp-section.html", links)
        logger.info("Generated jamstockex html")
        stocks_html = self.render_section("stock-summary.html", stocks)
        logger.info("Generated stock summary html")

        html = self.combine(
            [
                {"heading": "Stock Exchange Daily", "css_class": "jamstockex-section", "html": links_html},
                {"heading": "Stock Summary", "css_class": "stock-summary-section", "html": stocks_html},
            ]
        )
        self._save_audit_copy(MARKET_REPORT_FILENAME, html)
        return html

    def _save_audit_copy(self, filename: str, html: str) -> None:
        if self.scratch is not None:
            self.scratch.save(filename, html)
