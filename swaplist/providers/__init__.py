"""Data providers for the swap shopping list.

This module contains providers for:
- Wallet balances (Solana JSON-RPC)
- Token metadata and USD prices (Jupiter)
"""

from .base import BaseProvider, CachedProvider
from .jupiter import JupiterProvider
from .solana_rpc import SolanaBalanceProvider, WRAPPED_SOL_MINT

__all__ = [
    "BaseProvider",
    "CachedProvider",
    "JupiterProvider",
    "SolanaBalanceProvider",
    "WRAPPED_SOL_MINT",
]
