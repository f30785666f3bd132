"""Multi-field sorter for the holdings view.

Each sortable field maps to a key function; the table is consulted once per
sort. Python's sort is stable, so holdings with equal keys keep their
original relative order in both directions.
"""

from collections.abc import Callable, Iterable
from typing import Any

from ..core.models import SortState, TokenHolding
from ..core.types import Percentage, SortDirection, SortField, USDAmount

SortKey = Callable[[TokenHolding, USDAmount], Any]


def portfolio_percentage(token: TokenHolding, total_value: USDAmount) -> Percentage:
    """Share of the portfolio held in ``token`` (0 for an empty portfolio)."""
    if total_value <= 0:
        return 0.0
    return token.value_or_zero / total_value * 100


SORT_KEYS: dict[SortField, SortKey] = {
    SortField.SYMBOL: lambda token, _total: token.symbol.lower(),
    SortField.BALANCE: lambda token, _total: token.ui_amount,
    SortField.VALUE: lambda token, _total: token.value_or_zero,
    SortField.PERCENTAGE: portfolio_percentage,
}


def sort_holdings(
    tokens: Iterable[TokenHolding],
    field: SortField | str = SortField.VALUE,
    direction: SortDirection | str = SortDirection.DESC,
    total_value: USDAmount | None = None,
) -> list[TokenHolding]:
    """
    Return a new list of holdings ordered by ``field``.

    Args:
        tokens: Holdings to order
        field: Column to sort by
        direction: ``asc`` or ``desc``
        total_value: Portfolio total used by the percentage field; defaults
            to the sum of the given holdings' values

    Returns:
        Sorted copy of the holdings
    """
    tokens = list(tokens)
    key = SORT_KEYS[SortField(field)]
    if total_value is None:
        total_value = sum(token.value_or_zero for token in tokens)

    return sorted(
        tokens,
        key=lambda token: key(token, total_value),
        reverse=SortDirection(direction) is SortDirection.DESC,
    )


def apply_sort(
    tokens: Iterable[TokenHolding],
    state: SortState,
    total_value: USDAmount | None = None,
) -> list[TokenHolding]:
    """Sort holdings according to a SortState."""
    return sort_holdings(tokens, state.field, state.direction, total_value)
