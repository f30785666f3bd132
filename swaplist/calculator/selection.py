"""Selection set - which holdings are marked for liquidation."""

import logging
from collections.abc import Iterable, Iterator

from ..core.exceptions import ValidationError
from ..core.models import TokenHolding
from ..core.types import SelectAllState, USDAmount

logger = logging.getLogger(__name__)


class SelectionSet:
    """Set of selected mints, bound to the holdings of one snapshot.

    Every member is guaranteed to be the mint of one of the bound holdings.
    Binding a new list of holdings starts over with an empty selection.
    """

    def __init__(self, holdings: Iterable[TokenHolding] = ()):
        self._holdings: tuple[TokenHolding, ...] = tuple(holdings)
        self._known: frozenset[str] = frozenset(t.mint for t in self._holdings)
        self._selected: set[str] = set()

    def __contains__(self, mint: object) -> bool:
        return mint in self._selected

    def __iter__(self) -> Iterator[str]:
        return iter(self._selected)

    def __len__(self) -> int:
        return len(self._selected)

    def __repr__(self) -> str:
        return f"SelectionSet({len(self._selected)}/{len(self._holdings)} selected)"

    @property
    def holdings(self) -> tuple[TokenHolding, ...]:
        return self._holdings

    @property
    def mints(self) -> frozenset[str]:
        """Immutable view of the selected mints."""
        return frozenset(self._selected)

    def rebind(self, holdings: Iterable[TokenHolding]) -> None:
        """Attach to a new set of holdings and clear the selection."""
        self._holdings = tuple(holdings)
        self._known = frozenset(t.mint for t in self._holdings)
        self._selected.clear()

    def toggle(self, mint: str) -> bool:
        """
        Flip the selection of one holding.

        Returns:
            True if the holding is selected afterwards

        Raises:
            ValidationError: If the mint is not one of the bound holdings
        """
        if mint not in self._known:
            raise ValidationError("mint", mint, "not held in the current snapshot")
        if mint in self._selected:
            self._selected.discard(mint)
            return False
        self._selected.add(mint)
        return True

    def select(self, mints: Iterable[str]) -> None:
        """Add several holdings to the selection."""
        mints = list(mints)
        for mint in mints:
            if mint not in self._known:
                raise ValidationError("mint", mint, "not held in the current snapshot")
        self._selected.update(mints)

    def select_all(self) -> None:
        self._selected = set(self._known)

    def clear_all(self) -> None:
        self._selected.clear()

    @property
    def state(self) -> SelectAllState:
        """Tri-state of the "select all" control."""
        return select_all_state(len(self._selected), len(self._holdings))

    @property
    def selected_holdings(self) -> tuple[TokenHolding, ...]:
        """Selected holdings in the order they were bound."""
        return tuple(t for t in self._holdings if t.mint in self._selected)

    @property
    def selected_value(self) -> USDAmount:
        return sum_selected_value(self._holdings, self._selected)


def select_all_state(selected_count: int, holdings_count: int) -> SelectAllState:
    """Derive the tri-state of a "select all" control from two counts."""
    if selected_count == 0:
        return SelectAllState.NONE
    if selected_count == holdings_count and holdings_count > 0:
        return SelectAllState.ALL
    return SelectAllState.INDETERMINATE


def sum_selected_value(holdings: Iterable[TokenHolding], selection: Iterable[str]) -> USDAmount:
    """Sum of the values of the holdings whose mint is selected."""
    selection = set(selection)
    return sum(t.value_or_zero for t in holdings if t.mint in selection)
