"""Pytest configuration and fixtures for swap shopping list tests."""

import json
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from swaplist.core.models import PortfolioSnapshot, TokenHolding

WALLET = "9xQeWvG816bUx9EPjHmaT23yvVM2ZWbrrpZb9PusVFin"
SOL_MINT = "So11111111111111111111111111111111111111112"
JUP_MINT = "JUPyiwrYJFskUPiHa7hkeR8VUtAeFoSYkKedZNsDvCN"
BONK_MINT = "DezXAZ8z7PnrnRJjz3wXBoRgixCa6xjnB7YaB1pPB263"
USDC_MINT = "EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"


def make_holding(
    symbol: str,
    ui_amount: float,
    price: float | None = None,
    mint: str | None = None,
) -> TokenHolding:
    """Build a holding whose value is ui_amount × price."""
    holding = TokenHolding(
        mint=mint or f"{symbol.lower()}-mint",
        symbol=symbol,
        name=symbol.title(),
        ui_amount=ui_amount,
    )
    return holding.with_price(price)


@pytest.fixture
def holding_factory() -> Callable[..., TokenHolding]:
    return make_holding


@pytest.fixture
def sample_holdings() -> list[TokenHolding]:
    """Four priced holdings worth $3800 in total."""
    return [
        make_holding("SOL", 10.0, 150.0, SOL_MINT),          # $1500
        make_holding("JUP", 1000.0, 0.8, JUP_MINT),          # $800
        make_holding("BONK", 50_000_000.0, 0.00002, BONK_MINT),  # $1000
        make_holding("USDC", 500.0, 1.0, USDC_MINT),         # $500
    ]


@pytest.fixture
def sample_snapshot(sample_holdings: list[TokenHolding]) -> PortfolioSnapshot:
    return PortfolioSnapshot(
        wallet_address=WALLET,
        tokens=tuple(sample_holdings),
        total_value=sum(h.value for h in sample_holdings),
        is_domain=False,
        input_text=WALLET,
    )


@pytest.fixture
def split_snapshot() -> PortfolioSnapshot:
    """Two holdings worth $40 and $60."""
    tokens = (
        make_holding("AAA", 4.0, 10.0),
        make_holding("BBB", 30.0, 2.0),
    )
    return PortfolioSnapshot(
        wallet_address=WALLET,
        tokens=tokens,
        total_value=100.0,
        input_text=WALLET,
    )


def token_account(mint: str, ui_amount: float | None, ui_amount_string: str | None = None) -> dict[str, Any]:
    """A jsonParsed token account as returned by getTokenAccountsByOwner."""
    return {
        "pubkey": f"acct-{mint[:6]}",
        "account": {
            "data": {
                "parsed": {
                    "info": {
                        "mint": mint,
                        "owner": WALLET,
                        "tokenAmount": {
                            "uiAmount": ui_amount,
                            "uiAmountString": ui_amount_string or str(ui_amount or 0),
                        },
                    },
                    "type": "account",
                },
                "program": "spl-token",
            }
        },
    }


@pytest.fixture
def rpc_handler() -> Callable[..., Callable[[httpx.Request], httpx.Response]]:
    """Build a MockTransport handler answering Solana JSON-RPC calls."""

    def build(
        lamports: int = 0,
        token_accounts: list[dict[str, Any]] | None = None,
        token_2022_accounts: list[dict[str, Any]] | None = None,
    ) -> Callable[[httpx.Request], httpx.Response]:
        def handler(request: httpx.Request) -> httpx.Response:
            payload = json.loads(request.content)
            method = payload["method"]
            if method == "getBalance":
                result: Any = {"context": {"slot": 1}, "value": lamports}
            elif method == "getTokenAccountsByOwner":
                program = payload["params"][1]["programId"]
                if program.startswith("Tokenz"):
                    accounts = token_2022_accounts or []
                else:
                    accounts = token_accounts or []
                result = {"context": {"slot": 1}, "value": accounts}
            else:
                return httpx.Response(
                    200,
                    json={"jsonrpc": "2.0", "id": payload["id"], "error": {"code": -32601, "message": "Method not found"}},
                )
            return httpx.Response(200, json={"jsonrpc": "2.0", "id": payload["id"], "result": result})

        return handler

    return build
