"""HTML cleaning and structured extraction."""

from .cleaners import CleanerRegistry, default_registry
from .llm_output import parse_json_string, strip_code_markers
from .structured import parse_source_links, parse_stock_summary
from .text import chunk_text

__all__ = [
    "CleanerRegistry",
    "chunk_text",
    "default_registry",
    "parse_json_string",
    "parse_source_links",
    "parse_stock_summary",
    "strip_code_markers",
]
