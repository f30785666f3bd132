"""Custom exceptions for the swap shopping list."""


class SwapListError(Exception):
    """Base exception for all swap shopping list errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class EmptyInputError(SwapListError):
    """Raised when no wallet address or domain was entered."""

    def __init__(self):
        super().__init__("please enter a wallet address or domain")


class UnresolvableDomainError(SwapListError):
    """Raised when a domain name cannot be resolved to a wallet address."""

    def __init__(self, domain: str, reason: str | None = None):
        super().__init__(
            f"failed to resolve domain: {domain}",
            {"domain": domain, "reason": reason},
        )
        self.domain = domain
        self.reason = reason


class InvalidAddressError(SwapListError):
    """Raised when a string is not a valid wallet address."""

    def __init__(self, address: str):
        super().__init__("invalid wallet address", {"address": address})
        self.address = address


class CollaboratorError(SwapListError):
    """Raised when a balance, price or metadata source fails."""

    def __init__(
        self,
        source: str,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
    ):
        full_message = f"[{source}] {message}"
        super().__init__(
            full_message,
            {
                "source": source,
                "endpoint": endpoint,
                "status_code": status_code,
            },
        )
        self.source = source
        self.endpoint = endpoint
        self.status_code = status_code


class RateLimitError(CollaboratorError):
    """Raised when API rate limit is hit."""

    def __init__(
        self,
        source: str,
        retry_after_seconds: int | None = None,
        endpoint: str | None = None,
    ):
        message = "Rate limit exceeded"
        if retry_after_seconds:
            message += f", retry after {retry_after_seconds}s"
        super().__init__(source, message, endpoint=endpoint, status_code=429)
        self.retry_after_seconds = retry_after_seconds


class HoldingsNotFoundError(CollaboratorError):
    """Raised when an address holds no tokens at all."""

    def __init__(self, source: str, address: str):
        super().__init__(source, f"no token holdings found for {address}")
        self.address = address


class ValidationError(SwapListError):
    """Raised when data validation fails."""

    def __init__(self, field: str, value: str, reason: str):
        message = f"Validation failed for {field}={value}: {reason}"
        super().__init__(message, {"field": field, "value": value, "reason": reason})
        self.field = field
        self.value = value
        self.reason = reason


class ConfigurationError(SwapListError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, config_key: str, message: str):
        full_message = f"Configuration error [{config_key}]: {message}"
        super().__init__(full_message, {"config_key": config_key})
        self.config_key = config_key
