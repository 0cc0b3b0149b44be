"""Registry mapping source identifiers to HTML cleaners."""

import logging
from typing import Callable, Dict, Optional

from ..errors import NoCleanerRegistered
from . import sites

logger = logging.getLogger(__name__)

Cleaner = Callable[[str], str]

GLEANER_BUSINESS = "https://jamaica-gleaner.com/business"
OBSERVER_BUSINESS = "https://www.jamaicaobserver.com/category/business/"
ICINSIDER = "https://icinsider.com/"
JAMSTOCKEX = "https://www.jamstockex.com/"


class CleanerRegistry:
    """
    Homepage and article cleaners keyed by source.

    Homepage cleaning is optional: an unknown source passes through
    unchanged. Article cleaning is mandatory: an unknown source raises
    ``NoCleanerRegistered``.
    """

    def __init__(self) -> None:
        self._homepage: Dict[str, Cleaner] = {}
        self._article: Dict[str, Cleaner] = {}

    def register_homepage(self, source: str, cleaner: Cleaner) -> None:
        self._homepage[source] = cleaner

    def register_article(self, source: str, cleaner: Cleaner) -> None:
        self._article[source] = cleaner

    def homepage_cleaner(self, source: str) -> Optional[Cleaner]:
        return self._homepage.get(source)

    def article_cleaner(self, source: str) -> Cleaner:
        try:
            return self._article[source]
        except KeyError:
            raise NoCleanerRegistered(source) from None

    def clean_homepage(self, source: str, html: str) -> str:
        """Strip chrome from a homepage when a cleaner exists, else return it as is."""
        cleaner = self.homepage_cleaner(source)
        if cleaner is None:
            logger.debug("No homepage cleaner for %s, sending it uncleaned", source)
            return html

        logger.info("Cleaning home page content for %s", source)
        cleaned = cleaner(html)
        logger.info("Home page content length: %d -> %d", len(html), len(cleaned))
        return cleaned

    def clean_article(self, source: str, html: str) -> str:
        return self.article_cleaner(source)(html)


def default_registry() -> CleanerRegistry:
    """Registry with the built-in newspaper and exchange cleaners."""
    registry = CleanerRegistry()

    registry.register_article(GLEANER_BUSINESS, sites.clean_newspaper_article)
    registry.register_article(OBSERVER_BUSINESS, sites.clean_newspaper_article)
    registry.register_article(ICINSIDER, sites.clean_icinsider_article)

    registry.register_homepage(OBSERVER_BUSINESS, sites.clean_observer_homepage)
    registry.register_homepage(JAMSTOCKEX, sites.clean_jamstockex_page)

    return registry
