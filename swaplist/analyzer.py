"""Wallet analyzer - turns user input into a PortfolioSnapshot.

Pipeline:
1. Reject blank input
2. Resolve SNS domains to an address
3. Validate the address
4. Fetch balances, token metadata and prices
5. Keep the valuable holdings and total them
"""

import logging

import httpx

from .calculator.holdings import filter_valuable
from .core.config import AppConfig, get_config
from .core.exceptions import EmptyInputError, InvalidAddressError
from .core.models import PortfolioSnapshot
from .providers.jupiter import JupiterProvider
from .providers.solana_rpc import SolanaBalanceProvider
from .resolution.address import is_domain, validate_address
from .resolution.sns import SNSResolver

logger = logging.getLogger(__name__)


class PortfolioAnalyzer:
    """Coordinates resolution, balance and price lookups for one wallet."""

    def __init__(
        self,
        config: AppConfig | None = None,
        balance_provider: SolanaBalanceProvider | None = None,
        price_provider: JupiterProvider | None = None,
        resolver: SNSResolver | None = None,
    ):
        """
        Initialize the analyzer.

        Args:
            config: Settings (uses the global config if not provided)
            balance_provider: Balance source (built from config if not provided)
            price_provider: Metadata and price source (built from config if not provided)
            resolver: Domain resolver (built from config if not provided)
        """
        self.config = config or get_config()

        self._client: httpx.AsyncClient | None = None
        if balance_provider is None or price_provider is None or resolver is None:
            self._client = httpx.AsyncClient(timeout=self.config.request_timeout)

        self.balance_provider = balance_provider or SolanaBalanceProvider(
            self.config.rpc_url(), client=self._client
        )
        self.price_provider = price_provider or JupiterProvider(
            self.config.jupiter_api_url, client=self._client
        )
        self.resolver = resolver or SNSResolver(self.config.sns_proxy_url, client=self._client)

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def resolve_address(self, wallet_input: str) -> str:
        """
        Turn raw user input into a validated wallet address.

        Raises:
            EmptyInputError: If the input is blank
            UnresolvableDomainError: If a domain cannot be resolved
            InvalidAddressError: If the result is not a valid address
        """
        text = (wallet_input or "").strip()
        if not text:
            raise EmptyInputError()

        address = text
        if is_domain(text):
            address = await self.resolver.resolve(text)

        if not validate_address(address):
            raise InvalidAddressError(address)
        return address

    async def analyze(self, wallet_input: str) -> PortfolioSnapshot:
        """
        Analyze a wallet address or domain.

        Args:
            wallet_input: Address or SNS domain as entered by the user

        Returns:
            A fresh PortfolioSnapshot of the valuable holdings

        Raises:
            SwapListError: Any of the input, resolution or collaborator errors
        """
        address = await self.resolve_address(wallet_input)
        logger.info(f"Analyzing wallet: {address}")

        balances = await self.balance_provider.get_balances(address)
        balances = await self.price_provider.apply_metadata(balances)
        priced = await self.price_provider.get_prices(balances)

        tokens, total_value = filter_valuable(priced, self.config.min_holding_value)

        logger.info(
            f"Analysis complete: {len(tokens)} tokens, ${total_value:,.2f} total"
        )

        return PortfolioSnapshot(
            wallet_address=address,
            tokens=tokens,
            total_value=total_value,
            is_domain=is_domain(wallet_input),
            input_text=wallet_input.strip(),
        )
