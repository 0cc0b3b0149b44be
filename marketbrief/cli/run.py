"""Report commands."""

from pathlib import Path
from typing import Callable, Optional

import typer

from ..config import Config
from ..errors import MarketBriefError
from ..logs import console, setup_logging
from ..pipeline import ReportRunner, build_runner

CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to config.yaml")
DRY_RUN_OPTION = typer.Option(
    False, "--dry-run", help="Write the report to the workspace instead of emailing it"
)


def _load_runner(config_path: Optional[Path], allow_mock_llm: bool) -> ReportRunner:
    try:
        config = Config(config_path)
        setup_logging(config.config.log_level)
        return build_runner(config, allow_mock_llm=allow_mock_llm)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        console.print("Run 'marketbrief init' to create a configuration.")
        raise typer.Exit(1)


def _run(
    report: Callable[[ReportRunner], Optional[Path]],
    config_path: Optional[Path],
    allow_mock_llm: bool = False,
) -> None:
    runner = _load_runner(config_path, allow_mock_llm)
    try:
        output = report(runner)
    except KeyboardInterrupt:
        console.print("\n[yellow]Run interrupted by user[/yellow]")
        raise typer.Exit(1)
    except MarketBriefError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    if output is not None:
        console.print(f"Report written to [cyan]{output}[/cyan]")


def news_command(
    config_path: Optional[Path] = CONFIG_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Rank, scrape and summarize the business news and send the daily report."""
    _run(lambda runner: runner.run_news_report(dry_run=dry_run), config_path, allow_mock_llm=dry_run)


def market_command(
    config_path: Optional[Path] = CONFIG_OPTION,
    dry_run: bool = DRY_RUN_OPTION,
) -> None:
    """Collect stock exchange posts and stock quotes and send the market report."""
    _run(lambda runner: runner.run_market_report(dry_run=dry_run), config_path, allow_mock_llm=True)
