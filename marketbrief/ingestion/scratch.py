"""Scratch directories holding the diagnostic trail of a run."""

import logging
import re
import shutil
from pathlib import Path
from typing import Optional

logger = logging.getLogger(__name__)

MAX_SLUG_LENGTH = 100


def safe_filename(text: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Lowercase slug made of letters, digits and single underscores, at most ``max_length`` long."""
    slug = re.sub(r"[^a-z0-9]", "_", text, flags=re.IGNORECASE).lower()
    slug = re.sub(r"_+", "_", slug).strip("_")[:max_length].rstrip("_")
    return slug or "untitled"


def infer_extension(content: str) -> str:
    return ".html" if content.strip().startswith("<") else ".txt"


class ScratchStore:
    """
    Per-run debug/audit files.

    ``page_content_dir`` holds homepage captures, parsed JSON snapshots and
    the final report; ``articles_dir`` holds the scraped high priority
    articles. Both are recreated at the start of a run and deleted at the end.
    """

    def __init__(self, page_content_dir: Path, articles_dir: Path) -> None:
        self.page_content_dir = page_content_dir
        self.articles_dir = articles_dir

    def reset(self) -> None:
        """Start the run with empty directories."""
        self.purge()
        self.page_content_dir.mkdir(parents=True, exist_ok=True)
        self.articles_dir.mkdir(parents=True, exist_ok=True)

    def save(self, name: str, content: str) -> Optional[Path]:
        """
        Write a capture, best effort.

        The extension is inferred from the content when ``name`` has none.
        Failures are logged and ``None`` is returned.
        """
        filename = name if "." in name else f"{name}{infer_extension(content)}"
        path = self.page_content_dir / filename
        try:
            self.page_content_dir.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error("Error saving content to %s: %s", path, e)
            return None
        logger.debug("Saved content to %s", path)
        return path

    def article_path(self, index: int, headline: str) -> Path:
        """File for the ``index``-th article of a batch. The index keeps equal headlines apart."""
        return self.articles_dir / f"{index}-{safe_filename(headline)}.txt"

    def write_article(self, index: int, headline: str, content: str) -> Path:
        """Store scraped article content. Unlike ``save`` this raises on failure."""
        self.articles_dir.mkdir(parents=True, exist_ok=True)
        path = self.article_path(index, headline)
        path.write_text(content, encoding="utf-8")
        return path

    def purge(self) -> None:
        """Delete both scratch directories."""
        for directory in (self.articles_dir, self.page_content_dir):
            if not directory.exists():
                continue
            try:
                shutil.rmtree(directory)
                logger.info("Cleared %s", directory)
            except OSError as e:
                logger.error("Error clearing %s: %s", directory, e)
