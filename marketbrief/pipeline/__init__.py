"""News and market report pipelines."""

from .market import MarketPipeline
from .orchestrator import PipelineStage, ReportRunner, build_runner
from .ranking import NewsPipeline, parse_ranked_articles
from .summarizing import ArticleScraper, summarize_articles

__all__ = [
    "ArticleScraper",
    "MarketPipeline",
    "NewsPipeline",
    "PipelineStage",
    "ReportRunner",
    "build_runner",
    "parse_ranked_articles",
    "summarize_articles",
]
