"""Data models for the digest pipeline."""

from .article import Article, ArticleSource, ProcessedArticles, partition_by_priority
from .proxy import HttpProxy
from .stock import StockSummary

__all__ = [
    "Article",
    "ArticleSource",
    "HttpProxy",
    "ProcessedArticles",
    "StockSummary",
    "partition_by_priority",
]
