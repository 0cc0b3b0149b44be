"""Init command implementation."""

from pathlib import Path
from typing import List

import typer
from rich.panel import Panel

from ..config import CatalogModel, ConfigModel, save_catalog, save_config
from ..config.loader import DEFAULT_CONFIG_DIR
from ..extraction.cleaners import GLEANER_BUSINESS, ICINSIDER, JAMSTOCKEX, OBSERVER_BUSINESS
from ..logs import console

NEWSPAPER_INGEST_PROMPT = """\
You are a financial news editor for Jamaican investors. Below is the HTML of a
business news homepage. Pick the business and market headlines and rank them by
how much they matter to an investor in the Jamaica Stock Exchange, 1 being the
most important. Respond with a JSON array inside a ```json fenced block, where
each item has "headline", "link" (absolute URL) and "priority" (integer)."""

NEWSPAPER_SUMMARIZE_PROMPT = """\
Summarize the following business article for an investor in three to five
sentences. Name the companies, figures and dates involved. Respond with a
single HTML fragment made of <p> elements and nothing else."""

JAMSTOCKEX_INGEST_PROMPT = """\
List the announcements on the following Jamaica Stock Exchange page. Respond
with a JSON array inside a ```json fenced block, where each item has
"headline" and "link"."""

STOCK_INGEST_PROMPT = """\
Extract the ticker, today's trading range and the volume traded from the
following stock quote page. Respond with a JSON object inside a ```json fenced
block with the keys "ticker", "range" and "volume"."""

DEFAULT_STOCKS = ["NCBFG", "GK", "JMMBGL", "SJ", "WISYNCO"]


def create_default_stock_urls(tickers: List[str]) -> List[str]:
    """Quote page of each tracked ticker on the exchange site."""
    return [
        f"https://www.jamstockex.com/trading/instruments/?instrument={ticker.lower()}-jmd"
        for ticker in tickers
    ]


def create_default_catalog() -> CatalogModel:
    """Create the default Jamaican business news catalog."""
    return CatalogModel(
        sources={
            "daily": {
                "newspapers": [GLEANER_BUSINESS, OBSERVER_BUSINESS, ICINSIDER],
                "stock": create_default_stock_urls(DEFAULT_STOCKS),
                "jamstockex": [JAMSTOCKEX],
            }
        },
        prompts={
            "daily": {
                "newspapers": {
                    "ingest": NEWSPAPER_INGEST_PROMPT,
                    "summarize": NEWSPAPER_SUMMARIZE_PROMPT,
                },
                "jamstockex": {"ingest": JAMSTOCKEX_INGEST_PROMPT},
                "stock": {"ingest": STOCK_INGEST_PROMPT},
            }
        },
    )


def init_command(
    config_dir: Path = typer.Option(
        DEFAULT_CONFIG_DIR,
        "--config-dir",
        "-c",
        help="Configuration directory",
    ),
    workspace: Path = typer.Option(
        Path.home() / "MarketBrief",
        "--workspace",
        "-w",
        help="Workspace root directory",
    ),
    recipients: List[str] = typer.Option(
        [],
        "--recipient",
        "-r",
        help="Report recipient (repeat for several)",
    ),
    smtp_user: str = typer.Option("", "--smtp-user", help="SMTP login, also used as sender"),
    force: bool = typer.Option(False, "--force", help="Overwrite existing files"),
) -> None:
    """Initialize MarketBrief configuration and prompt catalog."""
    console.print(Panel.fit("MarketBrief - Initialization", style="bold blue"))

    config_dir.mkdir(parents=True, exist_ok=True)
    config_path = config_dir / "config.yaml"
    catalog_path = config_dir / "catalog.yaml"

    if not force and (config_path.exists() or catalog_path.exists()):
        console.print(
            f"[yellow]Configuration already exists in {config_dir}. "
            f"Use --force to overwrite.[/yellow]"
        )
        raise typer.Exit(1)

    config = ConfigModel(
        workspace_root=str(workspace),
        email={
            "username": smtp_user or None,
            "recipients": list(recipients),
        },
    )
    save_config(config, config_path)
    console.print(f"Created config: {config_path}")

    catalog = create_default_catalog()
    save_catalog(catalog, catalog_path)
    console.print(f"Created catalog: {catalog_path}")

    workspace.mkdir(parents=True, exist_ok=True)
    console.print(f"Created workspace: {workspace}")

    console.print(
        Panel(
            f"[green]MarketBrief initialized successfully![/green]\n\n"
            f"Configuration: {config_path}\n"
            f"Catalog: {catalog_path}\n"
            f"Workspace: {workspace}\n\n"
            f"Next steps:\n"
            f"1. Set LLM API key: [bold]export OPENAI_API_KEY=your_key[/bold]\n"
            f"2. Set proxy token: [bold]export PROXY_API_TOKEN=your_token[/bold]\n"
            f"3. Set SMTP app password: [bold]export SMTP_PASSWORD=your_password[/bold]\n"
            f"4. Run: [bold]marketbrief news --dry-run[/bold]",
            style="green",
        )
    )
