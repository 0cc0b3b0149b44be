"""DOM queries returning structured data."""

import re
from typing import List

from bs4 import BeautifulSoup

from ..models import ArticleSource, StockSummary
from .sites import PARSER

TICKER_PATTERN = re.compile(r"\(([^)]+)\)")


def parse_stock_summary(html: str) -> StockSummary:
    """
    Read ticker, trading range and volume from a stock quote page.

    The ticker is the parenthesised part of the bold heading, e.g.
    ``Company ABC (ABC)``. Range and volume come from the flex rows labelled
    ``Today's Range`` and ``Volume Traded``.
    """
    soup = BeautifulSoup(html, PARSER)

    ticker = ""
    heading = soup.select_one("h2.tw-font-bold")
    if heading is not None:
        match = TICKER_PATTERN.search(heading.get_text())
        if match:
            ticker = match.group(1).strip()

    trading_range = ""
    volume = 0
    for row in soup.select(".tw-flex"):
        label = row.find("span")
        value = row.select_one(".tw-font-bold")
        label_text = label.get_text() if label is not None else ""
        value_text = value.get_text(strip=True) if value is not None else ""

        if "Today's Range" in label_text:
            trading_range = value_text
        if "Volume Traded" in label_text:
            digits = value_text.replace(",", "")
            volume = int(digits) if digits.isdigit() else 0

    return StockSummary(ticker=ticker, range=trading_range, volume=volume)


def parse_source_links(html: str) -> List[ArticleSource]:
    """Text-only post titles (no thumbnail) on the exchange news listing."""
    soup = BeautifulSoup(html, PARSER)
    results = []

    for link in soup.select("article:not(.has-post-thumbnail) .elementor-post__title a"):
        headline = link.get_text(strip=True)
        href = link.get("href")
        if headline and href:
            results.append(ArticleSource(headline=headline, link=href))

    return results
