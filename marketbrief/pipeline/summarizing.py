"""Scraping and summarizing of high priority articles."""

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from ..classification import ClassificationService
from ..config.models import Frequency, SourceType, Stage
from ..errors import FetchError
from ..extraction import CleanerRegistry
from ..extraction.cleaners import Cleaner
from ..ingestion import PageFetcher, ScratchStore, safe_filename
from ..models import Article

logger = logging.getLogger(__name__)


class ArticleScraper:
    """Fetch and clean articles concurrently."""

    def __init__(
        self,
        fetcher: PageFetcher,
        cleaners: CleanerRegistry,
        scratch: ScratchStore,
    ) -> None:
        self.fetcher = fetcher
        self.cleaners = cleaners
        self.scratch = scratch

    async def scrape_article(self, index: int, article: Article, cleaner: Cleaner) -> Optional[Article]:
        """
        Fetch one article and store its cleaned content.

        Returns:
            The article with ``local_path`` set, or None if it could not be
            fetched or stored
        """
        try:
            html = await asyncio.to_thread(self.fetcher.fetch, article.link)
        except FetchError as e:
            logger.error("Failed to scrape %s: %s", article.headline, e)
            return None

        self.scratch.save(f"article-{index}-{safe_filename(article.headline)}.html", html)
        try:
            path = self.scratch.write_article(index, article.headline, cleaner(html))
        except OSError as e:
            logger.error("Failed to store %s: %s", article.headline, e)
            return None

        logger.info("Successfully scraped: %s", article.headline)
        return article.model_copy(update={"local_path": str(path)})

    async def scrape_top_stories(self, articles: List[Article]) -> List[Article]:
        """
        Scrape every article concurrently, keeping input order.

        Articles that cannot be fetched or stored are dropped. A source
        without an article cleaner fails the whole batch before anything is
        fetched. Concurrency is left to the fetcher.
        """
        cleaners = [self.cleaners.article_cleaner(article.source) for article in articles]

        tasks = [
            self.scrape_article(index, article, cleaner)
            for index, (article, cleaner) in enumerate(zip(articles, cleaners))
        ]
        results = await asyncio.gather(*tasks)

        scraped = [article for article in results if article is not None]
        logger.info("Scraped %d of %d top stories", len(scraped), len(articles))
        return scraped

    def scrape_top_stories_sync(self, articles: List[Article]) -> List[Article]:
        """Synchronous wrapper for scrape_top_stories."""
        return asyncio.run(self.scrape_top_stories(articles))


def summarize_articles(
    articles: List[Article],
    classifier: ClassificationService,
    frequency: Frequency = Frequency.DAILY,
) -> List[Article]:
    """Summarize scraped articles one at a time. Any failure aborts the batch."""
    summarized = []

    for article in articles:
        if article.local_path is None:
            raise ValueError(f"Article has not been scraped: {article.headline}")

        content = Path(article.local_path).read_text(encoding="utf-8")
        summary = classifier.classify(Stage.SUMMARIZE, content, SourceType.NEWSPAPERS, frequency)
        summarized.append(article.model_copy(update={"summary": summary}))

    return summarized
