"""Holdings filter - reduces raw balances to the holdings worth analyzing."""

import logging
from collections.abc import Iterable

from ..core.models import TokenHolding
from ..core.types import USDAmount

logger = logging.getLogger(__name__)

MIN_HOLDING_VALUE: USDAmount = 0.01


def is_valuable(token: TokenHolding, min_value: USDAmount = MIN_HOLDING_VALUE) -> bool:
    """A holding counts when its value exceeds ``min_value`` and its balance is positive."""
    return token.value_or_zero > min_value and token.ui_amount > 0


def filter_valuable(
    tokens: Iterable[TokenHolding],
    min_value: USDAmount = MIN_HOLDING_VALUE,
) -> tuple[tuple[TokenHolding, ...], USDAmount]:
    """
    Keep only valuable holdings and total their value.

    Args:
        tokens: Raw balances, priced or not
        min_value: Exclusive dollar threshold for a holding to be kept

    Returns:
        Tuple of (kept holdings in input order, sum of their values)
    """
    kept = []
    dropped = 0
    for token in tokens:
        if is_valuable(token, min_value):
            kept.append(token)
        else:
            dropped += 1

    if dropped:
        logger.debug(f"Dropped {dropped} holdings worth ${min_value} or less")

    total_value = sum(token.value_or_zero for token in kept)
    return tuple(kept), total_value
