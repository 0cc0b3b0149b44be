"""Sources listing command."""

from pathlib import Path
from typing import Optional

import pendulum
import typer
from rich.table import Table

from ..config import Config, SourceCatalog, SourceType
from ..logs import console


def sources_command(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Path to config.yaml"),
    run_date: Optional[str] = typer.Option(
        None,
        "--date",
        help="Date used for dated URLs (YYYY-MM-DD). Default: today",
    ),
) -> None:
    """List the configured sources with dates filled in."""
    config = Config(config_path)

    try:
        catalog = SourceCatalog(config.catalog)
        frequency = config.config.pipeline.frequency
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]{e}[/red]")
        console.print("Run 'marketbrief init' first.")
        raise typer.Exit(1)

    resolved_date = pendulum.parse(run_date).date() if run_date else None

    table = Table(title=f"Configured Sources ({frequency.value})")
    table.add_column("Type", style="cyan")
    table.add_column("#", style="dim")
    table.add_column("URL", style="blue")

    for source_type in SourceType:
        for index, url in enumerate(catalog.sources_for(source_type, frequency, resolved_date)):
            table.add_row(source_type.value, str(index), url)

    if not table.rows:
        console.print("[yellow]No sources configured.[/yellow]")
        return

    console.print(table)
