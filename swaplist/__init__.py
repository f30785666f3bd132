"""Multisig Pro-Rata Swap Shopping List.

Analyzes a Solana wallet (or SNS domain) and produces the per-token swap
amounts needed to liquidate part of a selected set of holdings while
keeping their relative weights intact.
"""

__version__ = "0.1.0"
