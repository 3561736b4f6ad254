"""Portfolio CLI commands."""

from contextlib import contextmanager
from typing import Generator, Optional

import typer
from rich.console import Console
from rich.table import Table

from portfolio_tracker.config import get_settings
from portfolio_tracker.core.errors import PortfolioError, QuoteError
from portfolio_tracker.core.portfolio.archive import HoldingArchive
from portfolio_tracker.core.portfolio.models import HoldingCreate
from portfolio_tracker.core.portfolio.store import HoldingStore
from portfolio_tracker.core.portfolio.validation import ValidationPolicy
from portfolio_tracker.core.portfolio.valuation import ValuationService
from portfolio_tracker.data.market import get_quote_source
from portfolio_tracker.db.database import init_db

console = Console()
app = typer.Typer()


@contextmanager
def open_portfolio(save: bool = False) -> Generator[HoldingStore, None, None]:
    """Load the saved portfolio into a fresh store for one command.

    Args:
        save: Write the store back to the archive when the command succeeds
    """
    settings = get_settings()
    init_db()
    archive = HoldingArchive()

    store = HoldingStore(
        max_holdings=settings.holding_capacity,
        policy=ValidationPolicy(require_single_share=settings.require_single_share),
    )
    store.restore(archive.load())

    yield store

    if save:
        archive.save(store.snapshot())


def _valuation_service(store: HoldingStore) -> ValuationService:
    settings = get_settings()
    return ValuationService(
        store=store,
        quote_source=get_quote_source(settings),
        max_workers=settings.valuation_max_workers,
        timeout_seconds=settings.valuation_timeout_seconds,
    )


def _money(value: Optional[float], signed: bool = False) -> str:
    if value is None:
        return "-"
    return f"${value:+,.2f}" if signed else f"${value:,.2f}"


@app.command("add")
def add_holding(
    symbol: str = typer.Argument(..., help="Stock ticker symbol (e.g., AAPL)"),
    shares: float = typer.Argument(..., help="Number of shares"),
    purchase_price: float = typer.Argument(..., help="Purchase price per share"),
    name: Optional[str] = typer.Option(None, "--name", "-n", help="Company name"),
):
    """Add a new holding to the portfolio."""
    try:
        with open_portfolio(save=True) as store:
            holding = store.add(
                HoldingCreate(symbol=symbol, shares=shares, purchase_price=purchase_price, name=name)
            )
    except PortfolioError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(
        f"[green]Added:[/green] {holding.symbol} - "
        f"{holding.shares:g} shares @ ${holding.purchase_price:.2f} = ${holding.total_cost:,.2f}"
    )


@app.command("list")
def list_holdings():
    """List all holdings in the portfolio."""
    with open_portfolio() as store:
        holdings = store.list()
        capacity = store.max_holdings

    if not holdings:
        console.print("[yellow]No holdings found.[/yellow] Use 'add' to add some.")
        return

    table = Table(title="Portfolio Holdings")
    table.add_column("Symbol", style="cyan")
    table.add_column("Name")
    table.add_column("Shares", justify="right")
    table.add_column("Purchase Price", justify="right", style="green")
    table.add_column("Total Cost", justify="right")

    for h in holdings:
        table.add_row(
            h.symbol,
            h.name or "-",
            f"{h.shares:,.2f}",
            _money(h.purchase_price),
            _money(h.total_cost),
        )

    console.print(table)
    limit = f"/{capacity}" if capacity else ""
    console.print(f"\n[dim]Total holdings: {len(holdings)}{limit}[/dim]")


@app.command("value")
def portfolio_value():
    """Show portfolio value with current prices and gain/loss."""
    with open_portfolio() as store:
        if len(store) == 0:
            console.print("[yellow]No holdings found.[/yellow] Use 'add' to add some.")
            return

        service = _valuation_service(store)
        try:
            valuation = service.valuate()
        finally:
            service.shutdown()

    table = Table(title="Portfolio Value")
    table.add_column("Symbol", style="cyan")
    table.add_column("Shares", justify="right")
    table.add_column("Purchase Price", justify="right")
    table.add_column("Current Price", justify="right")
    table.add_column("Current Value", justify="right")
    table.add_column("Gain/Loss", justify="right")
    table.add_column("Change %", justify="right")

    for h in valuation.holdings:
        if not h.is_priced:
            table.add_row(
                h.symbol,
                f"{h.shares:,.2f}",
                _money(h.purchase_price),
                "[red]N/A[/red]",
                _money(h.current_value),
                "-",
                "-",
            )
            continue

        color = "green" if h.gain_loss >= 0 else "red"
        table.add_row(
            h.symbol,
            f"{h.shares:,.2f}",
            _money(h.purchase_price),
            _money(h.current_price),
            _money(h.current_value),
            f"[{color}]{_money(h.gain_loss, signed=True)}[/{color}]",
            f"[{color}]{h.percent_change:+.2f}%[/{color}]",
        )

    console.print(table)

    summary = valuation.summary
    color = "green" if summary.total_gain_loss >= 0 else "red"

    console.print()
    console.print(f"[bold]Total Investment:[/bold] {_money(summary.total_investment)}")
    console.print(f"[bold]Total Value:[/bold]      {_money(summary.total_value)}")
    console.print(
        f"[bold]Total Gain/Loss:[/bold]  [{color}]{_money(summary.total_gain_loss, signed=True)} "
        f"({summary.gain_loss_percentage:+.2f}%)[/{color}]"
    )
    if summary.top_performer:
        console.print(
            f"[bold]Top Performer:[/bold]    [cyan]{summary.top_performer.symbol}[/cyan] "
            f"({summary.top_performer.gain_percentage:+.2f}%)"
        )
    else:
        console.print("[bold]Top Performer:[/bold]    [dim]No top performer yet[/dim]")

    if valuation.partial:
        console.print(
            f"\n[yellow]No current price for:[/yellow] {', '.join(valuation.unpriced_symbols)} "
            "(valued at purchase price)"
        )


@app.command("price")
def get_price(
    symbol: str = typer.Argument(..., help="Stock ticker symbol"),
):
    """Get current price for a symbol."""
    try:
        quote = get_quote_source(get_settings()).get_quote(symbol)
    except QuoteError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[cyan]{quote.symbol}[/cyan]: [green]${quote.price:,.2f}[/green]")


@app.command("remove")
def remove_holding(
    symbol: str = typer.Argument(..., help="Stock ticker symbol to remove"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
):
    """Remove a holding from the portfolio."""
    symbol = symbol.upper()

    try:
        with open_portfolio(save=True) as store:
            holding = store.get(symbol)

            if not force:
                confirm = typer.confirm(
                    f"Remove {symbol} ({holding.shares:g} shares @ ${holding.purchase_price:.2f})?"
                )
                if not confirm:
                    console.print("[yellow]Cancelled.[/yellow]")
                    raise typer.Exit(0)

            store.remove(symbol)
    except PortfolioError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Removed:[/green] {symbol}")
