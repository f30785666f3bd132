"""Base classes for data providers."""

import asyncio
import logging
import time
from abc import ABC
from typing import Any

import httpx

from ..core.exceptions import CollaboratorError, RateLimitError
from ..core.types import DataSource

logger = logging.getLogger(__name__)


class BaseProvider(ABC):
    """Abstract base class for all async HTTP data providers."""

    # Subclasses must define their data source
    SOURCE: DataSource = DataSource.UNKNOWN

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        timeout: float = 30.0,
        rate_limit_calls: int = 60,
        rate_limit_period: int = 60,
    ):
        """
        Initialize provider with rate limiting.

        Args:
            client: Shared HTTP client; one is created (and owned) if omitted
            timeout: Request timeout in seconds for an owned client
            rate_limit_calls: Maximum calls per period
            rate_limit_period: Period in seconds
        """
        self._client = client
        self._own_client = client is None
        self.timeout = timeout
        self.rate_limit_calls = rate_limit_calls
        self.rate_limit_period = rate_limit_period
        self._call_timestamps: list[float] = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        """Close the HTTP client if this provider created it."""
        if self._own_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _wait_for_rate_limit(self) -> None:
        """Enforce rate limiting by sleeping if necessary."""
        now = time.monotonic()
        # Clean old timestamps
        self._call_timestamps = [
            ts for ts in self._call_timestamps if now - ts < self.rate_limit_period
        ]

        if len(self._call_timestamps) >= self.rate_limit_calls:
            sleep_time = self._call_timestamps[0] + self.rate_limit_period - now
            if sleep_time > 0:
                logger.debug(
                    f"[{self.SOURCE.value}] Rate limit: sleeping {sleep_time:.1f}s"
                )
                await asyncio.sleep(sleep_time)

        self._call_timestamps.append(time.monotonic())

    async def _request(
        self,
        method: str,
        url: str,
        endpoint: str,
        **kwargs: Any,
    ) -> Any:
        """
        Make a rate-limited request and decode its JSON body.

        Args:
            method: HTTP method
            url: Full URL
            endpoint: Short endpoint name used in errors and logs
            **kwargs: Passed to httpx

        Returns:
            Decoded JSON, or None for a 404

        Raises:
            RateLimitError: On HTTP 429
            CollaboratorError: On any other HTTP or transport failure
        """
        await self._wait_for_rate_limit()
        start_time = time.monotonic()

        try:
            response = await self.client.request(method, url, **kwargs)

            duration_ms = int((time.monotonic() - start_time) * 1000)
            logger.debug(
                f"[{self.SOURCE.value}] {method} {endpoint} -> "
                f"{response.status_code} in {duration_ms}ms"
            )

            if response.status_code == 429:
                retry_after = response.headers.get("retry-after")
                raise RateLimitError(
                    source=self.SOURCE.value,
                    retry_after_seconds=int(retry_after) if retry_after and retry_after.isdigit() else None,
                    endpoint=endpoint,
                )

            if response.status_code == 404:
                return None

            response.raise_for_status()
            return response.json()

        except httpx.HTTPStatusError as e:
            raise CollaboratorError(
                source=self.SOURCE.value,
                message=f"HTTP {e.response.status_code}",
                endpoint=endpoint,
                status_code=e.response.status_code,
            )
        except httpx.RequestError as e:
            raise CollaboratorError(
                source=self.SOURCE.value,
                message=str(e) or e.__class__.__name__,
                endpoint=endpoint,
            )
        except ValueError as e:
            raise CollaboratorError(
                source=self.SOURCE.value,
                message=f"invalid JSON response: {e}",
                endpoint=endpoint,
            )


class CachedProvider(BaseProvider):
    """Base class for providers with caching support."""

    def __init__(
        self,
        cache_ttl_seconds: int = 300,
        **kwargs: Any,
    ):
        """
        Initialize cached provider.

        Args:
            cache_ttl_seconds: Cache time-to-live in seconds
            **kwargs: Passed to BaseProvider
        """
        super().__init__(**kwargs)
        self.cache_ttl_seconds = cache_ttl_seconds
        self._cache: dict[str, tuple[Any, float]] = {}

    def _get_from_cache(self, key: str) -> Any | None:
        """Get value from cache if not expired."""
        if key in self._cache:
            value, timestamp = self._cache[key]
            if time.monotonic() - timestamp < self.cache_ttl_seconds:
                logger.debug(f"[{self.SOURCE.value}] Cache hit: {key}")
                return value
            else:
                del self._cache[key]
        return None

    def _set_cache(self, key: str, value: Any) -> None:
        """Store value in cache."""
        self._cache[key] = (value, time.monotonic())

    def clear_cache(self) -> None:
        """Clear the cache."""
        self._cache.clear()


def chunked(items: list[str], size: int) -> list[list[str]]:
    """Split ``items`` into lists of at most ``size`` elements."""
    return [items[i:i + size] for i in range(0, len(items), size)]
