"""CLI entry point for the multisig pro-rata swap shopping list.

Usage:
    swaplist analyze toly.sol
    swaplist analyze <ADDRESS> --all --percentage 25
    swaplist analyze <ADDRESS> --select SOL --select JUP --amount 500 --export
"""

import asyncio
import logging
import traceback
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from .analyzer import PortfolioAnalyzer
from .core.config import AppConfig, get_config, reload_config
from .core.exceptions import SwapListError
from .core.models import PortfolioSnapshot, SortState
from .core.types import LiquidationKind, SortDirection, SortField
from .output.formatters import HoldingsTableFormatter, JSONFormatter, ShoppingListFormatter
from .resolution.address import SNS_DOMAINS
from .session import LiquidationSession

# Initialize app
app = typer.Typer(
    name="swaplist",
    help="Pro-rata swap shopping lists for multisig wallets",
    add_completion=False,
)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_time=False, show_path=False)],
    )


async def fetch_snapshot(wallet_input: str, config: AppConfig) -> PortfolioSnapshot:
    async with PortfolioAnalyzer(config) as analyzer:
        return await analyzer.analyze(wallet_input)


def apply_selection(session: LiquidationSession, entries: List[str]) -> List[str]:
    """
    Select holdings by mint or (case-insensitive) symbol.

    Returns:
        Entries that matched nothing
    """
    unmatched = []
    tokens = session.snapshot.tokens
    for entry in entries:
        mints = [t.mint for t in tokens if t.mint == entry or t.symbol.lower() == entry.lower()]
        if not mints:
            unmatched.append(entry)
            continue
        session.selection.select(mints)
    return unmatched


@app.command()
def analyze(
    wallet: str = typer.Argument(..., help="Wallet address or SNS domain (e.g., bonk.sol)"),
    select: Optional[List[str]] = typer.Option(
        None,
        "--select", "-s",
        help="Token to liquidate, by symbol or mint (repeatable)",
    ),
    select_all: bool = typer.Option(
        False,
        "--all", "-a",
        help="Select every holding",
    ),
    percentage: Optional[str] = typer.Option(
        None,
        "--percentage", "-p",
        help="Liquidate this percentage of the selected value",
    ),
    amount: Optional[str] = typer.Option(
        None,
        "--amount", "-d",
        help="Liquidate this dollar amount (capped at the selected value)",
    ),
    sort: SortField = typer.Option(
        SortField.VALUE,
        "--sort",
        help="Order holdings by: symbol, balance, value, percentage",
    ),
    ascending: bool = typer.Option(
        False,
        "--asc",
        help="Sort ascending instead of descending",
    ),
    output: str = typer.Option(
        "text",
        "--output", "-o",
        help="Output format: text, table, json",
    ),
    save: Optional[Path] = typer.Option(
        None,
        "--save",
        help="Save the displayed output to file",
    ),
    export: bool = typer.Option(
        False,
        "--export", "-e",
        help="Write the shopping list to swap-shopping-list-<wallet>.txt",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        help="Path to a YAML settings file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose logging",
    ),
) -> None:
    """
    Analyze a wallet and print the pro-rata swap shopping list.

    Examples:
        swaplist analyze bonk.sol --all --percentage 50
        swaplist analyze <ADDRESS> --select SOL --amount 1000 --output table
    """
    setup_logging(verbose)

    output_lower = output.lower()
    if output_lower not in ("text", "table", "json"):
        console.print(f"[red]Invalid output format: {output}[/]")
        raise typer.Exit(1)

    if percentage is not None and amount is not None:
        console.print("[red]Use either --percentage or --amount, not both[/]")
        raise typer.Exit(1)

    try:
        settings = reload_config(settings_file=config) if config else get_config()
        console.print(f"[bold]Analyzing {wallet}...[/]")
        snapshot = asyncio.run(fetch_snapshot(wallet, settings))
    except SwapListError as e:
        console.print(f"[red]Error: {escape(e.message)}[/]")
        if verbose:
            traceback.print_exc()
        raise typer.Exit(1)

    session = LiquidationSession(snapshot, settings.zero_price_fallback)
    session.sort = SortState(
        field=sort,
        direction=SortDirection.ASC if ascending else SortDirection.DESC,
    )

    if select_all:
        session.select_all()
    elif select:
        for entry in apply_selection(session, select):
            console.print(f"[yellow]Not held (skipped): {escape(entry)}[/]")

    if percentage is not None:
        session.set_request(LiquidationKind.PERCENTAGE, percentage)
    elif amount is not None:
        session.set_request(LiquidationKind.ABSOLUTE, amount)

    raw_amount = percentage if percentage is not None else amount
    if raw_amount is not None and not session.request.is_valid:
        console.print(f"[yellow]Not a number, no liquidation computed: {escape(raw_amount)}[/]")

    report = session.report()

    # Format output
    if output_lower == "json":
        formatter = JSONFormatter()
    elif output_lower == "table":
        formatter = HoldingsTableFormatter(color=console.is_terminal)
    else:
        formatter = ShoppingListFormatter()

    display = formatter
    if report.selected_count == 0 and output_lower == "text":
        console.print("[yellow]No tokens selected; showing all holdings[/]")
        display = HoldingsTableFormatter(color=console.is_terminal)

    print(display.format(report))

    # Save if requested
    if save:
        save.parent.mkdir(parents=True, exist_ok=True)
        save_path = save.with_suffix(".json") if output_lower == "json" else save.with_suffix(".txt")
        display.format_to_file(report, str(save_path))
        console.print(f"[green]Saved to {save_path}[/]")

    if export:
        export_path = Path(session.export_filename())
        ShoppingListFormatter().format_to_file(report, str(export_path))
        console.print(f"[green]Shopping list saved to {export_path}[/]")


@app.command()
def domains() -> None:
    """List the SNS domain suffixes recognized as wallet input."""
    console.print("[bold]Supported domains:[/]")
    for suffix in SNS_DOMAINS:
        console.print(f"  - {suffix}")


@app.command()
def version() -> None:
    """Show version information."""
    from . import __version__
    console.print(f"swaplist v{__version__}")


def main() -> None:
    """Main entry point."""
    app()


if __name__ == "__main__":
    main()
