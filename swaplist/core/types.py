"""Type definitions and enums for the swap shopping list."""

from enum import Enum


class SortField(str, Enum):
    """Columns the holdings view can be ordered by."""

    SYMBOL = "symbol"
    BALANCE = "balance"
    VALUE = "value"
    PERCENTAGE = "percentage"


class SortDirection(str, Enum):
    """Sort direction."""

    ASC = "asc"
    DESC = "desc"

    @property
    def flipped(self) -> "SortDirection":
        return SortDirection.DESC if self is SortDirection.ASC else SortDirection.ASC


class LiquidationKind(str, Enum):
    """How the liquidation amount entered by the user is interpreted."""

    PERCENTAGE = "percentage"   # Percent of the selected value
    ABSOLUTE = "absolute"       # Dollar amount, capped at the selected value


class SelectAllState(str, Enum):
    """Tri-state of a "select all" control."""

    ALL = "all"
    NONE = "none"
    INDETERMINATE = "indeterminate"


class RpcProvider(str, Enum):
    """Solana RPC providers the balance client can talk to."""

    HELIUS = "helius"
    QUICKNODE = "quicknode"
    PUBLIC = "public"


class DataSource(str, Enum):
    """Data source identifiers used in error reporting and logs."""

    SOLANA_RPC = "solana_rpc"
    JUPITER = "jupiter"
    SNS = "sns"
    UNKNOWN = "unknown"


# Type aliases for common patterns
Percentage = float  # 0-100 scale
TokenAmount = float  # Human-readable token amount
USDAmount = float    # USD value
