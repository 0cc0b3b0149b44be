"""Logging setup."""

import logging

from rich.console import Console
from rich.logging import RichHandler

console = Console()


def setup_logging(level: str = "INFO") -> None:
    """Route package logging through a rich handler with timestamps."""
    handler = RichHandler(
        console=console,
        show_path=False,
        log_time_format="[%Y-%m-%d %H:%M:%S]",
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level.upper(),
        format="%(name)s: %(message)s",
        handlers=[handler],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
