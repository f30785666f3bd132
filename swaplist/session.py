"""Liquidation session - the state a user edits while building a shopping list.

The session owns the authoritative inputs (snapshot, selection, sort order,
liquidation request). Everything shown to the user is derived from them by
memoized pure functions, so derived values cannot drift out of sync.
"""

import logging
import re
from functools import lru_cache

from .calculator.allocator import DEFAULT_ZERO_PRICE_FALLBACK, LiquidationAllocator
from .calculator.selection import SelectionSet, select_all_state
from .calculator.sorter import apply_sort
from .core.exceptions import ValidationError
from .core.models import (
    LiquidationPlan,
    LiquidationRequest,
    PortfolioSnapshot,
    ShoppingListReport,
    SortState,
    TokenHolding,
)
from .core.types import LiquidationKind, SelectAllState, SortField, USDAmount
from .output.formatters import ShoppingListFormatter

logger = logging.getLogger(__name__)


@lru_cache(maxsize=64)
def sorted_view(snapshot: PortfolioSnapshot, sort: SortState) -> tuple[TokenHolding, ...]:
    """Holdings of a snapshot in display order."""
    return tuple(apply_sort(snapshot.tokens, sort, snapshot.total_value))


@lru_cache(maxsize=64)
def liquidation_plan(
    snapshot: PortfolioSnapshot,
    selection: frozenset[str],
    request: LiquidationRequest,
    zero_price_fallback: float | None = DEFAULT_ZERO_PRICE_FALLBACK,
) -> LiquidationPlan:
    """Allocations and summary figures for a selection and request."""
    allocator = LiquidationAllocator(zero_price_fallback)
    return allocator.plan(snapshot.tokens, selection, request, snapshot.total_value)


def export_filename(wallet_input: str) -> str:
    """File name for a downloaded shopping list."""
    return f"swap-shopping-list-{re.sub(r'[^a-zA-Z0-9]', '-', wallet_input)}.txt"


class LiquidationSession:
    """Selection, sort order and liquidation request over one snapshot at a time."""

    def __init__(
        self,
        snapshot: PortfolioSnapshot | None = None,
        zero_price_fallback: float | None = DEFAULT_ZERO_PRICE_FALLBACK,
    ):
        """
        Initialize the session.

        Args:
            snapshot: Initial snapshot, or None until a wallet is analyzed
            zero_price_fallback: Passed to the allocator
        """
        self.zero_price_fallback = zero_price_fallback
        self.sort = SortState()
        self.request = LiquidationRequest()
        self._snapshot: PortfolioSnapshot | None = None
        self.selection = SelectionSet()
        if snapshot is not None:
            self.load(snapshot)

    @property
    def snapshot(self) -> PortfolioSnapshot:
        if self._snapshot is None:
            raise ValidationError("snapshot", "None", "no wallet has been analyzed yet")
        return self._snapshot

    @property
    def has_snapshot(self) -> bool:
        return self._snapshot is not None

    def load(self, snapshot: PortfolioSnapshot) -> None:
        """Replace the snapshot; selection and request start over."""
        self._snapshot = snapshot
        self.selection.rebind(snapshot.tokens)
        self.request = LiquidationRequest(kind=self.request.kind)
        logger.debug(f"Loaded snapshot of {snapshot.wallet_address}")

    # Selection

    def toggle(self, mint: str) -> bool:
        return self.selection.toggle(mint)

    def select_all(self) -> None:
        self.selection.select_all()

    def clear_all(self) -> None:
        self.selection.clear_all()

    # Sorting and request

    def sort_by(self, field: SortField | str) -> SortState:
        """Click on a column: same field flips direction, new field sorts descending."""
        self.sort = self.sort.toggled(SortField(field))
        return self.sort

    def set_request(self, kind: LiquidationKind | str, amount: str | float | None) -> LiquidationRequest:
        self.request = LiquidationRequest.parse(kind, amount)
        return self.request

    # Derived values

    @property
    def sorted_tokens(self) -> tuple[TokenHolding, ...]:
        if self._snapshot is None:
            return ()
        return sorted_view(self._snapshot, self.sort)

    @property
    def select_all_state(self) -> SelectAllState:
        count = len(self._snapshot.tokens) if self._snapshot else 0
        return select_all_state(len(self.selection), count)

    @property
    def plan(self) -> LiquidationPlan:
        return liquidation_plan(
            self.snapshot, self.selection.mints, self.request, self.zero_price_fallback
        )

    @property
    def selected_value(self) -> USDAmount:
        return self.plan.selected_value

    def report(self) -> ShoppingListReport:
        """Gather the current state for the output formatters."""
        snapshot = self.snapshot
        plan = self.plan
        return ShoppingListReport(
            wallet_address=snapshot.wallet_address,
            display_input=snapshot.display_input,
            total_value=snapshot.total_value,
            holdings=self.sorted_tokens,
            selected_mints=self.selection.mints,
            selected_value=plan.selected_value,
            liquidation_value=plan.liquidation_value,
            has_liquidation=plan.has_liquidation,
            allocations=plan.allocations,
        )

    def shopping_list(self) -> str:
        """The plain text shopping list for the current state."""
        return ShoppingListFormatter().format(self.report())

    def export_filename(self) -> str:
        return export_filename(self.snapshot.display_input)
