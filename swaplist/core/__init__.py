"""Core module - data models, types, and exceptions."""

from .models import (
    TokenHolding,
    PortfolioSnapshot,
    SortState,
    LiquidationRequest,
    Allocation,
    LiquidationPlan,
    ShoppingListReport,
)
from .types import (
    SortField,
    SortDirection,
    LiquidationKind,
    SelectAllState,
    RpcProvider,
    DataSource,
)
from .exceptions import (
    SwapListError,
    EmptyInputError,
    UnresolvableDomainError,
    InvalidAddressError,
    CollaboratorError,
    RateLimitError,
    HoldingsNotFoundError,
    ValidationError,
    ConfigurationError,
)

__all__ = [
    # Models
    "TokenHolding",
    "PortfolioSnapshot",
    "SortState",
    "LiquidationRequest",
    "Allocation",
    "LiquidationPlan",
    "ShoppingListReport",
    # Types
    "SortField",
    "SortDirection",
    "LiquidationKind",
    "SelectAllState",
    "RpcProvider",
    "DataSource",
    # Exceptions
    "SwapListError",
    "EmptyInputError",
    "UnresolvableDomainError",
    "InvalidAddressError",
    "CollaboratorError",
    "RateLimitError",
    "HoldingsNotFoundError",
    "ValidationError",
    "ConfigurationError",
]
