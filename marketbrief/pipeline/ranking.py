"""Headline gathering and LLM ranking for the news report."""

import logging
from datetime import date
from typing import Any, List, Optional

from pydantic import ValidationError

from ..classification import ClassificationService
from ..config.catalog import SourceCatalog
from ..config.models import Frequency, SourceType, Stage
from ..errors import MalformedLLMResponse
from ..extraction import CleanerRegistry, parse_json_string
from ..ingestion import PageFetcher, ScratchStore
from ..models import Article, ProcessedArticles, partition_by_priority
from ..models.article import DEFAULT_HIGH_PRIORITY_THRESHOLD
from .summarizing import ArticleScraper, summarize_articles

logger = logging.getLogger(__name__)


def parse_ranked_articles(response: str, source: str) -> List[Article]:
    """
    Build articles from an ``ingest`` response.

    The response must hold a fenced JSON array of objects with ``headline``,
    ``link`` and ``priority``. Each article is tagged with ``source``.

    Raises:
        MalformedLLMResponse: no JSON block, not a list, or an invalid entry
    """
    data: Any = parse_json_string(response)
    if not isinstance(data, list):
        raise MalformedLLMResponse(
            f"Expected a JSON array of ranked articles, got {type(data).__name__}"
        )

    articles = []
    for entry in data:
        if not isinstance(entry, dict):
            raise MalformedLLMResponse(f"Ranked article is not an object: {entry!r}")
        try:
            articles.append(Article(**{**entry, "source": source}))
        except ValidationError as e:
            raise MalformedLLMResponse(f"Invalid ranked article from {source}: {e}") from e

    return articles


class NewsPipeline:
    """Rank newspaper headlines, scrape the important ones and summarize them."""

    def __init__(
        self,
        catalog: SourceCatalog,
        classifier: ClassificationService,
        fetcher: PageFetcher,
        cleaners: CleanerRegistry,
        scratch: ScratchStore,
        high_priority_threshold: int = DEFAULT_HIGH_PRIORITY_THRESHOLD,
        frequency: Frequency = Frequency.DAILY,
        run_date: Optional[date] = None,
    ) -> None:
        """
        Initialize the news pipeline.

        Args:
            catalog: Source and prompt catalog
            classifier: LLM classification service
            fetcher: Fetcher for homepages and articles
            cleaners: Homepage and article cleaners by source
            scratch: Scratch store for captures and scraped articles
            high_priority_threshold: Highest priority still treated as important
            frequency: Catalog frequency to read sources and prompts from
            run_date: Date substituted into dated source URLs
        """
        self.catalog = catalog
        self.classifier = classifier
        self.fetcher = fetcher
        self.cleaners = cleaners
        self.scratch = scratch
        self.high_priority_threshold = high_priority_threshold
        self.frequency = frequency
        self.run_date = run_date
        self.scraper = ArticleScraper(fetcher, cleaners, scratch)

    def gather_articles(self) -> ProcessedArticles:
        """Rank the headlines of every newspaper homepage, in catalog order."""
        sources = self.catalog.sources_for(SourceType.NEWSPAPERS, self.frequency, self.run_date)
        processed = ProcessedArticles()

        for index, source in enumerate(sources):
            logger.info("Ingesting index %d of %d: %s", index, len(sources) - 1, source)
            html = self.fetcher.fetch(source)
            logger.info("Home page content length: %d", len(html))

            html = self.cleaners.clean_homepage(source, html)
            self.scratch.save(f"{index}-homepage.html", html)

            response = self.classifier.classify(
                Stage.INGEST, html, SourceType.NEWSPAPERS, self.frequency
            )
            ranked = parse_ranked_articles(response, source)
            batch = partition_by_priority(ranked, self.high_priority_threshold)
            logger.info(
                "%s: %d high priority, %d low priority",
                source,
                len(batch.high_priority),
                len(batch.low_priority),
            )
            processed.extend(batch)

        return processed

    def scrape_top_stories(self, articles: List[Article]) -> List[Article]:
        return self.scraper.scrape_top_stories_sync(articles)

    def summarize(self, articles: List[Article]) -> List[Article]:
        return summarize_articles(articles, self.classifier, self.frequency)

    def run(self) -> ProcessedArticles:
        """Gather, scrape and summarize. Low priority articles pass through untouched."""
        gathered = self.gather_articles()
        scraped = self.scrape_top_stories(gathered.high_priority)
        summarized = self.summarize(scraped)
        return ProcessedArticles(high_priority=summarized, low_priority=gathered.low_priority)
