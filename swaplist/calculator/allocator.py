"""Pro-rata liquidation allocator.

Distributes a target liquidation value across the selected holdings in
proportion to each holding's share of the selected value:

- Selected value   V = sum(value) over selected holdings
- Target value     L = V × amount / 100        (percentage request)
                   L = min(amount, V)          (absolute request)
- Token share      p = value / V
- Token liquidation = L × p
- Swap amount      = min(token liquidation / price, held balance)

Malformed requests never raise: they produce an empty allocation list,
which callers treat as "no liquidation requested".
"""

import logging
from collections.abc import Iterable

from ..core.models import Allocation, LiquidationPlan, LiquidationRequest, TokenHolding
from ..core.types import LiquidationKind, USDAmount

logger = logging.getLogger(__name__)

DEFAULT_ZERO_PRICE_FALLBACK = 1.0


class LiquidationAllocator:
    """Turns a liquidation request into per-token swap quantities."""

    def __init__(self, zero_price_fallback: float | None = DEFAULT_ZERO_PRICE_FALLBACK):
        """
        Initialize the allocator.

        Args:
            zero_price_fallback: Price assumed for a selected holding whose
                price is missing or zero. With None such holdings get a
                swap amount of 0 while keeping their dollar share.
        """
        if zero_price_fallback is not None and zero_price_fallback <= 0:
            raise ValueError(
                f"zero_price_fallback must be positive or None, got {zero_price_fallback}"
            )
        self.zero_price_fallback = zero_price_fallback

    @staticmethod
    def resolve_liquidation_value(
        selected_value: USDAmount,
        request: LiquidationRequest,
    ) -> USDAmount:
        """
        Resolve the dollar value to liquidate.

        Percentages are not clamped to 0-100: anything above 100 simply
        asks for more than the selection holds and the per-token caps apply.

        Args:
            selected_value: Combined value of the selected holdings
            request: The user's liquidation request

        Returns:
            Target liquidation value (0 for an invalid amount)
        """
        if not request.is_valid:
            return 0.0
        if request.kind is LiquidationKind.PERCENTAGE:
            return selected_value * request.amount / 100
        return min(request.amount, selected_value)

    def effective_price(self, token: TokenHolding) -> float | None:
        """Price used to convert dollars into token units."""
        if token.price is not None and token.price > 0:
            return token.price
        return self.zero_price_fallback

    def allocate(
        self,
        holdings: Iterable[TokenHolding],
        selection: Iterable[str],
        request: LiquidationRequest,
    ) -> list[Allocation]:
        """
        Compute pro-rata swap amounts for the selected holdings.

        Args:
            holdings: Holdings of the current snapshot
            selection: Selected mints (a SelectionSet or any iterable of mints)
            request: Percentage or dollar liquidation request

        Returns:
            One Allocation per selected holding, in holdings order; empty when
            nothing is selected, the selection is worthless, or the request
            resolves to a non-positive value
        """
        selected_mints = set(selection)
        selected = [t for t in holdings if t.mint in selected_mints]
        selected_value = sum(t.value_or_zero for t in selected)
        liquidation_value = self.resolve_liquidation_value(selected_value, request)

        if not selected or selected_value <= 0 or liquidation_value <= 0:
            return []

        allocations = []
        for token in selected:
            share = token.value_or_zero / selected_value
            token_liquidation = liquidation_value * share
            price = self.effective_price(token)

            if price is None:
                logger.warning(f"No price for {token.symbol}, swap amount set to 0")
                nominal_amount = 0.0
            else:
                nominal_amount = token_liquidation / price

            swap_amount = min(nominal_amount, token.ui_amount)
            capped = nominal_amount > token.ui_amount
            if capped:
                logger.debug(
                    f"{token.symbol}: swap capped at held balance "
                    f"{token.ui_amount} (wanted {nominal_amount})"
                )

            allocations.append(
                Allocation(
                    mint=token.mint,
                    symbol=token.symbol,
                    ui_amount=token.ui_amount,
                    value=token.value_or_zero,
                    effective_price=price or 0.0,
                    swap_amount=swap_amount,
                    liquidation_amount=token_liquidation,
                    percentage_of_selected=share * 100,
                    capped=capped,
                )
            )

        return allocations

    def plan(
        self,
        holdings: Iterable[TokenHolding],
        selection: Iterable[str],
        request: LiquidationRequest,
        total_value: USDAmount | None = None,
    ) -> LiquidationPlan:
        """
        Compute the allocations together with the summary figures around them.

        Args:
            holdings: Holdings of the current snapshot
            selection: Selected mints
            request: Liquidation request
            total_value: Portfolio total; defaults to the sum of ``holdings``

        Returns:
            LiquidationPlan with selected value, liquidation value and allocations
        """
        holdings = list(holdings)
        selected_mints = set(selection)
        selected = [t for t in holdings if t.mint in selected_mints]
        selected_value = sum(t.value_or_zero for t in selected)

        if total_value is None:
            total_value = sum(t.value_or_zero for t in holdings)

        # A non-positive target means nothing is liquidated
        liquidation_value = 0.0
        if selected:
            liquidation_value = max(self.resolve_liquidation_value(selected_value, request), 0.0)
        allocations = self.allocate(holdings, selected_mints, request)

        return LiquidationPlan(
            total_value=total_value,
            selected_count=len(selected),
            selected_value=selected_value,
            liquidation_value=liquidation_value,
            allocations=tuple(allocations),
        )


def allocate(
    holdings: Iterable[TokenHolding],
    selection: Iterable[str],
    request: LiquidationRequest,
) -> list[Allocation]:
    """Allocate with the default zero-price fallback."""
    return LiquidationAllocator().allocate(holdings, selection, request)
