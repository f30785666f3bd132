"""Portfolio calculation module."""

from .holdings import filter_valuable, is_valuable
from .sorter import SORT_KEYS, apply_sort, portfolio_percentage, sort_holdings
from .selection import SelectionSet, select_all_state, sum_selected_value
from .allocator import LiquidationAllocator, allocate

__all__ = [
    "filter_valuable",
    "is_valuable",
    "SORT_KEYS",
    "apply_sort",
    "portfolio_percentage",
    "sort_holdings",
    "SelectionSet",
    "select_all_state",
    "sum_selected_value",
    "LiquidationAllocator",
    "allocate",
]
