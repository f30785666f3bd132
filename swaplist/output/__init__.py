"""Output formatting module."""

from .formatters import (
    OutputFormatter,
    ShoppingListFormatter,
    HoldingsTableFormatter,
    JSONFormatter,
    format_token_amount,
)

__all__ = [
    "OutputFormatter",
    "ShoppingListFormatter",
    "HoldingsTableFormatter",
    "JSONFormatter",
    "format_token_amount",
]
