"""Main CLI entry point using Typer."""

import logging

import typer
from rich.console import Console

from portfolio_tracker.config import PRODUCT_NAME, PRODUCT_TAGLINE, PRODUCT_VERSION, get_settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, get_settings().log_level.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)

# Reduce noise from third-party libraries
logging.getLogger("yfinance").setLevel(logging.WARNING)
logging.getLogger("urllib3").setLevel(logging.WARNING)

console = Console()
app = typer.Typer(
    name="portfolio",
    help=f"{PRODUCT_NAME}: {PRODUCT_TAGLINE}",
    add_completion=False,
)


# Import and add subcommands
from portfolio_tracker.cli.portfolio import app as holdings_app

app.add_typer(holdings_app, name="holdings", help="Manage and value portfolio holdings")


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold #4F46E5]{PRODUCT_NAME}[/]")
    console.print(f"[bold]Version:[/] {PRODUCT_VERSION}")
    console.print(f"[bold]Tagline:[/] {PRODUCT_TAGLINE}")


if __name__ == "__main__":
    app()
