"""Pydantic data models for the swap shopping list.

All data structures are immutable (frozen) after creation. Collections are
stored as tuples so that every model is hashable and can key memoized
derivations.
"""

import math

from pydantic import BaseModel, Field

from .types import (
    LiquidationKind,
    Percentage,
    SortDirection,
    SortField,
    TokenAmount,
    USDAmount,
)


class TokenHolding(BaseModel):
    """A single token balance held by a wallet."""

    mint: str
    symbol: str
    name: str = ""
    ui_amount: TokenAmount = Field(ge=0)
    price: float | None = Field(default=None, ge=0)
    value: USDAmount | None = None
    logo_uri: str | None = None

    model_config = {"frozen": True}

    def with_price(self, price: float | None) -> "TokenHolding":
        """Return a copy carrying ``price`` and the derived ``value``."""
        if price is None:
            return self.model_copy(update={"price": None, "value": None})
        return self.model_copy(update={"price": price, "value": self.ui_amount * price})

    @property
    def value_or_zero(self) -> USDAmount:
        return self.value or 0.0


class PortfolioSnapshot(BaseModel):
    """Result of one wallet analysis: the valuable holdings and their total."""

    wallet_address: str
    tokens: tuple[TokenHolding, ...] = ()
    total_value: USDAmount = 0.0
    is_domain: bool = False
    input_text: str = ""  # What the user typed (address or domain)

    model_config = {"frozen": True}

    @property
    def display_input(self) -> str:
        return self.input_text or self.wallet_address

    @property
    def mints(self) -> frozenset[str]:
        return frozenset(token.mint for token in self.tokens)

    def get(self, mint: str) -> TokenHolding | None:
        for token in self.tokens:
            if token.mint == mint:
                return token
        return None


class SortState(BaseModel):
    """Current ordering of the holdings view."""

    field: SortField = SortField.VALUE
    direction: SortDirection = SortDirection.DESC

    model_config = {"frozen": True}

    def toggled(self, field: SortField) -> "SortState":
        """Same field flips the direction; a new field starts descending."""
        if field == self.field:
            return SortState(field=field, direction=self.direction.flipped)
        return SortState(field=field, direction=SortDirection.DESC)


class LiquidationRequest(BaseModel):
    """How much of the selection the user wants to liquidate."""

    kind: LiquidationKind = LiquidationKind.PERCENTAGE
    amount: float = math.nan

    model_config = {"frozen": True}

    @classmethod
    def parse(cls, kind: LiquidationKind | str, raw: str | float | None) -> "LiquidationRequest":
        """Build a request from user input; unparseable input becomes NaN."""
        if isinstance(raw, (int, float)):
            amount = float(raw)
        else:
            try:
                amount = float((raw or "").strip())
            except ValueError:
                amount = math.nan
        return cls(kind=LiquidationKind(kind), amount=amount)

    @property
    def is_valid(self) -> bool:
        """Check if the amount is a usable finite number."""
        return math.isfinite(self.amount)


class Allocation(BaseModel):
    """Pro-rata swap assignment for one selected token."""

    mint: str
    symbol: str
    ui_amount: TokenAmount  # Balance held before the swap
    value: USDAmount
    effective_price: float
    swap_amount: TokenAmount
    liquidation_amount: USDAmount
    percentage_of_selected: Percentage
    capped: bool = False  # Held balance limited the swap amount

    model_config = {"frozen": True}


class LiquidationPlan(BaseModel):
    """Everything derived from a selection and a liquidation request."""

    total_value: USDAmount
    selected_count: int
    selected_value: USDAmount
    liquidation_value: USDAmount
    allocations: tuple[Allocation, ...] = ()

    model_config = {"frozen": True}

    @property
    def has_liquidation(self) -> bool:
        return self.liquidation_value > 0 and self.selected_count > 0

    @property
    def remaining_portfolio_value(self) -> USDAmount:
        return self.total_value - self.liquidation_value

    @property
    def liquidation_percentage(self) -> Percentage:
        """Liquidation value as a percentage of the selected value."""
        if self.selected_value <= 0:
            return 0.0
        return self.liquidation_value / self.selected_value * 100


class ShoppingListReport(BaseModel):
    """Everything the output formatters render, gathered from a session."""

    wallet_address: str
    display_input: str
    total_value: USDAmount
    holdings: tuple[TokenHolding, ...] = ()  # Sorted view of the snapshot
    selected_mints: frozenset[str] = frozenset()
    selected_value: USDAmount = 0.0
    liquidation_value: USDAmount = 0.0
    has_liquidation: bool = False
    allocations: tuple[Allocation, ...] = ()

    model_config = {"frozen": True}

    @property
    def token_count(self) -> int:
        return len(self.holdings)

    @property
    def selected_count(self) -> int:
        return len(self.selected_mints)

    @property
    def selected_holdings(self) -> tuple[TokenHolding, ...]:
        """Selected holdings in view order."""
        return tuple(t for t in self.holdings if t.mint in self.selected_mints)

    @property
    def remaining_portfolio_value(self) -> USDAmount:
        return self.total_value - self.liquidation_value

    def allocation_for(self, mint: str) -> Allocation | None:
        for allocation in self.allocations:
            if allocation.mint == mint:
                return allocation
        return None
