"""Report rendering."""

from .assembler import (
    MARKET_REPORT_FILENAME,
    NEWS_REPORT_FILENAME,
    ReportAssembler,
    create_environment,
)

__all__ = [
    "MARKET_REPORT_FILENAME",
    "NEWS_REPORT_FILENAME",
    "ReportAssembler",
    "create_environment",
]
