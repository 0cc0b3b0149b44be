"""Stock exchange links and per-stock summaries fetched through a proxy."""

import json
import logging
import time
from datetime import date
from typing import Callable, List, Optional

from ..config.catalog import SourceCatalog
from ..config.models import Frequency, SourceType
from ..extraction import CleanerRegistry, parse_source_links, parse_stock_summary
from ..ingestion import PageFetcher, ProxiedHttpFetcher, ScratchStore
from ..models import ArticleSource, HttpProxy, StockSummary

logger = logging.getLogger(__name__)

DEFAULT_STOCK_FETCH_DELAY_SECONDS = 60.0


class MarketPipeline:
    """Collect the exchange's daily posts and the tracked stock quotes."""

    def __init__(
        self,
        catalog: SourceCatalog,
        cleaners: CleanerRegistry,
        scratch: ScratchStore,
        fetcher_factory: Callable[[HttpProxy], PageFetcher] = ProxiedHttpFetcher,
        stock_fetch_delay_seconds: float = DEFAULT_STOCK_FETCH_DELAY_SECONDS,
        sleep: Callable[[float], None] = time.sleep,
        frequency: Frequency = Frequency.DAILY,
        run_date: Optional[date] = None,
    ) -> None:
        self.catalog = catalog
        self.cleaners = cleaners
        self.scratch = scratch
        self.fetcher_factory = fetcher_factory
        self.stock_fetch_delay_seconds = stock_fetch_delay_seconds
        self.sleep = sleep
        self.frequency = frequency
        self.run_date = run_date

    def fetch_exchange_links(self, proxy: HttpProxy) -> List[ArticleSource]:
        """Text-only posts from the first configured exchange listing."""
        sources = self.catalog.sources_for(SourceType.JAMSTOCKEX, self.frequency, self.run_date)
        if not sources:
            raise ValueError("No jamstockex source configured")
        url = sources[0]

        fetcher = self.fetcher_factory(proxy)
        try:
            html = fetcher.fetch(url)
        finally:
            fetcher.close()

        links = parse_source_links(self.cleaners.clean_homepage(url, html))
        self.scratch.save(
            "jamstockex-daily.json",
            json.dumps([link.model_dump() for link in links], indent=2),
        )
        logger.info("Saved %d jamstockex daily links", len(links))
        return links

    def fetch_stock_summaries(self, proxy: HttpProxy) -> List[StockSummary]:
        """
        Fetch and parse each stock quote page in catalog order.

        Successive requests are spaced by ``stock_fetch_delay_seconds`` to
        stay under the exchange's rate limit. No wait follows the last one.
        """
        urls = self.catalog.sources_for(SourceType.STOCK, self.frequency, self.run_date)
        summaries = []

        fetcher = self.fetcher_factory(proxy)
        try:
            for index, url in enumerate(urls):
                if index > 0:
                    logger.info(
                        "Waiting %.0f seconds before the next stock page",
                        self.stock_fetch_delay_seconds,
                    )
                    self.sleep(self.stock_fetch_delay_seconds)

                html = fetcher.fetch(url)
                self.scratch.save(f"stock-{index}.html", html)

                summary = parse_stock_summary(html)
                self.scratch.save(f"stock-{index}-parsed.json", summary.model_dump_json())
                logger.info("Parsed stock %s (%s)", summary.ticker or "?", url)
                summaries.append(summary)
        finally:
            fetcher.close()

        return summaries
