"""Article models for ranked headlines."""

from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

DEFAULT_HIGH_PRIORITY_THRESHOLD = 3


class ArticleSource(BaseModel):
    """Headline and link pair for sources without a ranking step."""

    headline: str = Field(..., description="Display text")
    link: str = Field(..., description="Absolute URL")


class Article(BaseModel):
    """Candidate headline ranked by the LLM."""

    source: str = Field(..., description="Source registry key the headline came from")
    headline: str = Field(..., description="Display text")
    link: str = Field(..., description="Absolute URL of the full article")
    priority: int = Field(..., description="LLM rank, lower is more important")
    local_path: Optional[str] = Field(None, description="Path of the scraped article content")
    summary: Optional[str] = Field(None, description="LLM summary of the article")

    @model_validator(mode="after")
    def check_summary_has_content(self) -> "Article":
        """A summary can only exist once the article has been scraped."""
        if self.summary is not None and self.local_path is None:
            raise ValueError("summary requires local_path to be set")
        return self


class ProcessedArticles(BaseModel):
    """Articles split by priority."""

    high_priority: List[Article] = Field(default_factory=list)
    low_priority: List[Article] = Field(default_factory=list)

    def extend(self, other: "ProcessedArticles") -> None:
        """Append another batch, keeping each side in order."""
        self.high_priority.extend(other.high_priority)
        self.low_priority.extend(other.low_priority)

    @property
    def total(self) -> int:
        return len(self.high_priority) + len(self.low_priority)


def partition_by_priority(
    articles: List[Article],
    threshold: int = DEFAULT_HIGH_PRIORITY_THRESHOLD,
) -> ProcessedArticles:
    """Split articles in one pass: ``priority <= threshold`` is high priority."""
    result = ProcessedArticles()
    for article in articles:
        if article.priority <= threshold:
            result.high_priority.append(article)
        else:
            result.low_priority.append(article)
    return result
