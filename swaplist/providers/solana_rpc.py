"""Solana JSON-RPC balance provider.

Fetches the native SOL balance and every SPL token account (Token and
Token-2022 programs) owned by a wallet, and reports them as raw, unpriced
TokenHolding objects. Symbols are placeholders until metadata is applied.
"""

import logging
from typing import Any

from ..core.exceptions import CollaboratorError, HoldingsNotFoundError
from ..core.models import TokenHolding
from ..core.types import DataSource
from .base import BaseProvider

logger = logging.getLogger(__name__)

WRAPPED_SOL_MINT = "So11111111111111111111111111111111111111112"
TOKEN_PROGRAM_ID = "TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA"
TOKEN_2022_PROGRAM_ID = "TokenzQdBNbLqP5VEhdkAS6EPFLC1PHnBqCXEpPxuEb"
LAMPORTS_PER_SOL = 1_000_000_000


def short_mint(mint: str) -> str:
    """Placeholder symbol for a token without metadata."""
    return f"{mint[:4]}..{mint[-4:]}" if len(mint) > 10 else mint


class SolanaBalanceProvider(BaseProvider):
    """Reads wallet balances from a Solana RPC node."""

    SOURCE = DataSource.SOLANA_RPC

    def __init__(self, rpc_url: str, **kwargs: Any):
        """
        Initialize the balance provider.

        Args:
            rpc_url: JSON-RPC endpoint (see AppConfig.rpc_url)
            **kwargs: Passed to BaseProvider
        """
        super().__init__(**kwargs)
        self.rpc_url = rpc_url
        self._request_id = 0

    async def _rpc(self, method: str, params: list[Any]) -> Any:
        """Call a JSON-RPC method and return its ``result``."""
        self._request_id += 1
        payload = {
            "jsonrpc": "2.0",
            "id": self._request_id,
            "method": method,
            "params": params,
        }
        data = await self._request("POST", self.rpc_url, endpoint=method, json=payload)

        if not isinstance(data, dict):
            raise CollaboratorError(self.SOURCE.value, "empty RPC response", endpoint=method)
        if "error" in data:
            error = data["error"] or {}
            raise CollaboratorError(
                self.SOURCE.value,
                error.get("message", "Unknown RPC error"),
                endpoint=method,
            )
        return data.get("result")

    async def get_sol_balance(self, address: str) -> float:
        """Native SOL balance in SOL."""
        result = await self._rpc("getBalance", [address])
        lamports = result.get("value", 0) if isinstance(result, dict) else 0
        return lamports / LAMPORTS_PER_SOL

    async def get_token_accounts(
        self,
        address: str,
        program_id: str = TOKEN_PROGRAM_ID,
    ) -> list[dict[str, Any]]:
        """Parsed token accounts owned by ``address`` under one token program."""
        result = await self._rpc(
            "getTokenAccountsByOwner",
            [address, {"programId": program_id}, {"encoding": "jsonParsed"}],
        )
        if not isinstance(result, dict):
            return []
        return result.get("value", []) or []

    @staticmethod
    def _parse_account(account: dict[str, Any]) -> tuple[str, float] | None:
        """Extract (mint, ui amount) from a jsonParsed token account."""
        info = (
            account.get("account", {})
            .get("data", {})
            .get("parsed", {})
            .get("info", {})
        )
        mint = info.get("mint")
        token_amount = info.get("tokenAmount", {})
        if not mint:
            return None

        ui_amount = token_amount.get("uiAmount")
        if ui_amount is None:
            try:
                ui_amount = float(token_amount.get("uiAmountString", 0))
            except (TypeError, ValueError):
                logger.warning(f"Unreadable balance for mint {mint}")
                return None
        return mint, float(ui_amount)

    async def get_balances(self, address: str) -> list[TokenHolding]:
        """
        Get all non-zero balances held by a wallet.

        Args:
            address: Wallet address

        Returns:
            Unpriced holdings, SOL first, then tokens in account order

        Raises:
            HoldingsNotFoundError: If the wallet holds nothing
            CollaboratorError: If the RPC node fails
        """
        totals: dict[str, float] = {}

        sol_balance = await self.get_sol_balance(address)
        if sol_balance > 0:
            totals[WRAPPED_SOL_MINT] = sol_balance

        for program_id in (TOKEN_PROGRAM_ID, TOKEN_2022_PROGRAM_ID):
            for account in await self.get_token_accounts(address, program_id):
                parsed = self._parse_account(account)
                if parsed is None:
                    continue
                mint, ui_amount = parsed
                if ui_amount <= 0:
                    continue
                # Several accounts can hold the same mint
                totals[mint] = totals.get(mint, 0.0) + ui_amount

        if not totals:
            raise HoldingsNotFoundError(self.SOURCE.value, address)

        logger.info(f"Found {len(totals)} non-zero balances for {address}")

        holdings = []
        for mint, ui_amount in totals.items():
            if mint == WRAPPED_SOL_MINT:
                holdings.append(
                    TokenHolding(mint=mint, symbol="SOL", name="Solana", ui_amount=ui_amount)
                )
            else:
                holdings.append(
                    TokenHolding(mint=mint, symbol=short_mint(mint), ui_amount=ui_amount)
                )
        return holdings
