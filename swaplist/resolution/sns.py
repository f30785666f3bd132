"""SNS domain resolution through the Jupiter-hosted SNS SDK proxy."""

import logging
from typing import Any

from ..core.exceptions import CollaboratorError, UnresolvableDomainError
from ..core.types import DataSource
from ..providers.base import CachedProvider
from .address import clean_domain

logger = logging.getLogger(__name__)


class SNSResolver(CachedProvider):
    """Resolves human-readable domains (bonk.sol, @name.poor) to wallet addresses."""

    SOURCE = DataSource.SNS
    BASE_URL = "https://sns-sdk-proxy.jup.ag"

    def __init__(self, base_url: str | None = None, **kwargs: Any):
        super().__init__(**kwargs)
        self.base_url = (base_url or self.BASE_URL).rstrip("/")

    async def resolve(self, domain: str) -> str:
        """
        Resolve a domain to the wallet address it points at.

        Args:
            domain: Domain as typed by the user, with or without '@'

        Returns:
            Wallet address string

        Raises:
            UnresolvableDomainError: If the proxy fails or knows no owner
        """
        cleaned = clean_domain(domain)
        cached = self._get_from_cache(cleaned)
        if cached is not None:
            return cached

        try:
            data = await self._request(
                "GET",
                f"{self.base_url}/resolve/{cleaned}",
                endpoint="resolve",
            )
        except CollaboratorError as e:
            logger.error(f"Domain resolution failed for {cleaned}: {e}")
            raise UnresolvableDomainError(domain, reason=e.message)

        address = None
        if isinstance(data, dict):
            address = data.get("address") or data.get("result")
        if not isinstance(address, str) or not address:
            raise UnresolvableDomainError(domain, reason=f"could not resolve domain: {cleaned}")

        logger.info(f"Resolved {cleaned} to {address}")
        self._set_cache(cleaned, address)
        return address
