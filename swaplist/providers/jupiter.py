"""Jupiter token metadata and USD price provider."""

import logging
from typing import Any

from ..core.models import TokenHolding
from ..core.types import DataSource
from .base import CachedProvider, chunked

logger = logging.getLogger(__name__)

# Jupiter caps the number of ids per request
MAX_IDS_PER_REQUEST = 50

UNKNOWN_TOKEN_NAME = "Unknown Token"


class JupiterProvider(CachedProvider):
    """Looks up token symbols, names, logos and USD prices on Jupiter."""

    SOURCE = DataSource.JUPITER
    BASE_URL = "https://lite-api.jup.ag"

    def __init__(self, base_url: str | None = None, **kwargs: Any):
        """
        Initialize Jupiter provider.

        Args:
            base_url: API root (defaults to the public lite API)
            **kwargs: Passed to CachedProvider
        """
        super().__init__(**kwargs)
        self.base_url = (base_url or self.BASE_URL).rstrip("/")

    async def get_token_metadata(self, mints: list[str]) -> dict[str, dict[str, Any]]:
        """
        Get metadata for a list of mints.

        Args:
            mints: Token mint addresses

        Returns:
            Dict of mint -> {"symbol", "name", "logo_uri"} for known tokens
        """
        metadata: dict[str, dict[str, Any]] = {}
        missing = []
        for mint in mints:
            cached = self._get_from_cache(f"meta:{mint}")
            if cached is not None:
                metadata[mint] = cached
            else:
                missing.append(mint)

        for batch in chunked(missing, MAX_IDS_PER_REQUEST):
            data = await self._request(
                "GET",
                f"{self.base_url}/tokens/v2/search",
                endpoint="tokens/v2/search",
                params={"query": ",".join(batch)},
            )
            for item in data or []:
                mint = item.get("id")
                if mint not in batch:
                    continue
                entry = {
                    "symbol": item.get("symbol") or "",
                    "name": item.get("name") or "",
                    "logo_uri": item.get("icon"),
                }
                metadata[mint] = entry
                self._set_cache(f"meta:{mint}", entry)

        return metadata

    async def get_usd_prices(self, mints: list[str]) -> dict[str, float]:
        """
        Get current USD prices.

        Args:
            mints: Token mint addresses

        Returns:
            Dict of mint -> USD price; mints without a price are absent
        """
        prices: dict[str, float] = {}
        missing = []
        for mint in mints:
            cached = self._get_from_cache(f"price:{mint}")
            if cached is not None:
                prices[mint] = cached
            else:
                missing.append(mint)

        for batch in chunked(missing, MAX_IDS_PER_REQUEST):
            data = await self._request(
                "GET",
                f"{self.base_url}/price/v3",
                endpoint="price/v3",
                params={"ids": ",".join(batch)},
            )
            for mint, quote in (data or {}).items():
                if not isinstance(quote, dict) or quote.get("usdPrice") is None:
                    continue
                try:
                    price = float(quote["usdPrice"])
                except (TypeError, ValueError):
                    logger.warning(f"Unreadable price for {mint}: {quote['usdPrice']!r}")
                    continue
                if price < 0:
                    continue
                prices[mint] = price
                self._set_cache(f"price:{mint}", price)

        return prices

    async def apply_metadata(self, holdings: list[TokenHolding]) -> list[TokenHolding]:
        """Fill in symbol, name and logo for each holding Jupiter knows about."""
        metadata = await self.get_token_metadata([h.mint for h in holdings])

        enriched = []
        for holding in holdings:
            meta = metadata.get(holding.mint)
            if meta is None:
                if not holding.name:
                    holding = holding.model_copy(update={"name": UNKNOWN_TOKEN_NAME})
                enriched.append(holding)
                continue
            enriched.append(
                holding.model_copy(
                    update={
                        "symbol": meta["symbol"] or holding.symbol,
                        "name": meta["name"] or holding.name,
                        "logo_uri": meta["logo_uri"],
                    }
                )
            )
        return enriched

    async def get_prices(self, holdings: list[TokenHolding]) -> list[TokenHolding]:
        """
        Attach USD prices and values to holdings.

        Args:
            holdings: Holdings with balances

        Returns:
            Same holdings in the same order, priced where a price is known
        """
        prices = await self.get_usd_prices([h.mint for h in holdings])

        unpriced = [h.symbol for h in holdings if h.mint not in prices]
        if unpriced:
            logger.debug(f"No price for: {', '.join(unpriced)}")

        return [h.with_price(prices.get(h.mint)) for h in holdings]
