"""Main CLI application."""

import typer
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()

from .init import init_command
from .run import market_command, news_command
from .sources import sources_command

app = typer.Typer(
    name="marketbrief",
    help="MarketBrief - Jamaican business news and stock exchange digest",
    no_args_is_help=True,
)

app.command("init")(init_command)
app.command("news")(news_command)
app.command("market")(market_command)
app.command("sources")(sources_command)


if __name__ == "__main__":
    app()
