"""Output formatters for swap shopping list reports.

Provides multiple output formats:
- Text: The plain shopping list handed to multisig signers
- Table: Human-readable CLI view of every holding
- JSON: Machine-readable, complete data
"""

import json
import logging
from abc import ABC, abstractmethod
from io import StringIO

from rich.console import Console
from rich.table import Table

from ..calculator.sorter import portfolio_percentage
from ..core.models import ShoppingListReport

logger = logging.getLogger(__name__)

SCIENTIFIC_THRESHOLD = 0.0001
SYMBOL_WIDTH = 12
AMOUNT_WIDTH = 12
VALUE_WIDTH = 10
RULE_WIDTH = 50

FOOTER = "💡 use this list with your multisig wallet for pro-rata swaps."


def format_token_amount(amount: float) -> str:
    """Six decimals, or scientific notation for non-zero dust below 0.0001."""
    if amount != 0 and abs(amount) < SCIENTIFIC_THRESHOLD:
        return f"{amount:.2e}"
    return f"{amount:.6f}"


def format_price(price: float | None) -> str:
    if not price:
        return "n/a"
    if price < 0.01:
        return f"${price:.2e}"
    return f"${price:.2f}"


class OutputFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def format(self, report: ShoppingListReport) -> str:
        """Format the report as a string."""
        pass

    def format_to_file(self, report: ShoppingListReport, filepath: str) -> None:
        """Write the formatted report to a file."""
        with open(filepath, "w", encoding="utf-8") as f:
            f.write(self.format(report))
        logger.info(f"Wrote report to {filepath}")


class ShoppingListFormatter(OutputFormatter):
    """Formats the fixed-width pro-rata swap shopping list."""

    def format(self, report: ShoppingListReport) -> str:
        """Render the shopping list text."""
        label = report.display_input
        if label != report.wallet_address:
            label = f"{label} ({report.wallet_address})"

        header = f"💰 pro-rata swap shopping list for {label}\n"
        summary = (
            f"total portfolio value: ${report.total_value:.2f}\n"
            f"selected tokens: {report.selected_count}/{report.token_count}\n"
            f"selected value: ${report.selected_value:.2f}\n\n"
        )

        liquidation_info = ""
        if report.has_liquidation:
            share = report.liquidation_value / report.selected_value * 100
            liquidation_info = (
                f"\n💸 liquidation amount: ${report.liquidation_value:.2f} "
                f"({share:.1f}% of selected)\n"
                f"remaining portfolio: ${report.remaining_portfolio_value:.2f}\n"
            )

        table_header = (
            "token".ljust(SYMBOL_WIDTH)
            + " | "
            + "amount".rjust(AMOUNT_WIDTH)
            + " | "
            + "value".rjust(VALUE_WIDTH)
            + " | share\n"
            + "-" * RULE_WIDTH
            + "\n"
        )

        return (
            header
            + summary
            + liquidation_info
            + table_header
            + "\n".join(self.rows(report))
            + f"\n{FOOTER}"
        )

    def rows(self, report: ShoppingListReport) -> list[str]:
        """One line per selected token: swap amounts when liquidating, else balances."""
        if report.has_liquidation:
            return [
                self._row(a.symbol, a.swap_amount, a.liquidation_amount, a.value, report.selected_value)
                for a in report.allocations
            ]
        return [
            self._row(t.symbol, t.ui_amount, t.value_or_zero, t.value_or_zero, report.selected_value)
            for t in report.selected_holdings
        ]

    @staticmethod
    def _row(symbol: str, amount: float, dollars: float, value: float, selected_value: float) -> str:
        share = f"{value / selected_value * 100:.1f}" if selected_value > 0 else "0"
        return (
            f"{symbol.ljust(SYMBOL_WIDTH)} | "
            f"{format_token_amount(amount).rjust(AMOUNT_WIDTH)} | "
            f"${f'{dollars:.2f}'.rjust(VALUE_WIDTH)} | "
            f"{share}%"
        )


class HoldingsTableFormatter(OutputFormatter):
    """Formats every holding of the snapshot as a rich table."""

    def __init__(self, width: int = 100, color: bool = True):
        """
        Initialize table formatter.

        Args:
            width: Maximum table width
            color: Emit ANSI styling (disable for files)
        """
        self.width = width
        self.color = color

    def format(self, report: ShoppingListReport) -> str:
        """Render the holdings table with selection marks and swap amounts."""
        output = StringIO()
        console = Console(
            file=output,
            force_terminal=self.color,
            no_color=not self.color,
            width=self.width,
        )

        table = Table(title=f"Holdings of {report.display_input}")
        table.add_column("", width=1)
        table.add_column("Token", style="cyan")
        table.add_column("Balance", justify="right")
        table.add_column("Price", justify="right")
        table.add_column("Value", justify="right", style="green")
        table.add_column("Portfolio %", justify="right")
        if report.has_liquidation:
            table.add_column("Swap Amount", justify="right", style="magenta")

        for token in report.holdings:
            selected = token.mint in report.selected_mints
            row = [
                "x" if selected else "",
                token.symbol,
                format_token_amount(token.ui_amount),
                format_price(token.price),
                f"${token.value_or_zero:.2f}",
                f"{portfolio_percentage(token, report.total_value):.1f}%",
            ]
            if report.has_liquidation:
                allocation = report.allocation_for(token.mint)
                row.append(format_token_amount(allocation.swap_amount) if allocation else "")
            table.add_row(*row)

        console.print(table)
        console.print(
            f"Total: [bold]${report.total_value:.2f}[/] across {report.token_count} tokens"
        )
        if report.selected_count:
            console.print(
                f"{report.selected_count} selected (${report.selected_value:.2f})"
            )
        if report.has_liquidation:
            share = report.liquidation_value / report.selected_value * 100
            console.print(
                f"Liquidating [bold]${report.liquidation_value:.2f}[/] "
                f"({share:.1f}% of selected tokens), "
                f"remaining ${report.remaining_portfolio_value:.2f}"
            )
        elif report.selected_count:
            console.print(
                "[dim]select tokens and enter a liquidation amount to generate swap quantities[/]"
            )

        return output.getvalue()

    def format_to_file(self, report: ShoppingListReport, filepath: str) -> None:
        """Write formatted output to file."""
        # For file output, drop ANSI codes
        old_color = self.color
        self.color = False
        try:
            super().format_to_file(report, filepath)
        finally:
            self.color = old_color


class JSONFormatter(OutputFormatter):
    """Formats reports as JSON."""

    def __init__(self, indent: int = 2):
        self.indent = indent

    def format(self, report: ShoppingListReport) -> str:
        """Format report as JSON string."""
        data = report.model_dump(mode="json")
        data["selected_mints"] = sorted(report.selected_mints)
        data["selected_count"] = report.selected_count
        data["remaining_portfolio_value"] = report.remaining_portfolio_value
        return json.dumps(data, indent=self.indent)
