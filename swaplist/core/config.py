"""Configuration management for RPC endpoints, API URLs and calculation settings.

Loads configuration from environment variables or a .env file, optionally
overridden by a YAML settings file.
"""

import logging
import math
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv

from .exceptions import ConfigurationError
from .types import RpcProvider

logger = logging.getLogger(__name__)

PUBLIC_RPC_URL = "https://api.mainnet-beta.solana.com"
HELIUS_RPC_URL = "https://mainnet.helius-rpc.com/?api-key={api_key}"

# Spellings that switch an optional numeric setting off
DISABLED_VALUES = ("none", "null", "off", "false")


def _env_float(name: str, default: Optional[float]) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    if raw.strip().lower() in DISABLED_VALUES:
        return None
    try:
        return float(raw)
    except ValueError:
        raise ConfigurationError(name, f"expected a number, got {raw!r}")


def _coerce_number(
    key: str,
    value: Any,
    minimum: float = 0.0,
    strict: bool = False,
    optional: bool = False,
) -> Optional[float]:
    """
    Turn a setting from env or YAML into a float.

    Args:
        key: Setting name used in errors
        value: Raw value (YAML may hand over bools and strings)
        minimum: Lowest accepted value
        strict: Reject ``minimum`` itself
        optional: Accept None, False and "off"-style strings as None

    Raises:
        ConfigurationError: If the value is not a finite number in range
    """
    if optional and (
        value is None
        or value is False
        or (isinstance(value, str) and value.strip().lower() in DISABLED_VALUES)
    ):
        return None
    # bool is an int subclass; YAML "yes"/"on" must not read as 1.0
    if isinstance(value, bool) or value is None:
        raise ConfigurationError(key, f"expected a number, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ConfigurationError(key, f"expected a number, got {value!r}")
    if not math.isfinite(number):
        raise ConfigurationError(key, f"expected a finite number, got {value!r}")
    if number < minimum or (strict and number == minimum):
        bound = "greater than" if strict else "at least"
        raise ConfigurationError(key, f"must be {bound} {minimum:g}, got {value!r}")
    return number


@dataclass
class AppConfig:
    """Runtime configuration for data providers and the allocator."""

    # Which Solana RPC endpoint balance lookups go through
    rpc_provider: RpcProvider = RpcProvider.PUBLIC
    helius_api_key: Optional[str] = None
    quicknode_url: Optional[str] = None
    public_rpc_url: str = PUBLIC_RPC_URL

    # Jupiter (prices, token metadata) and SNS proxy (domain resolution)
    jupiter_api_url: str = "https://lite-api.jup.ag"
    sns_proxy_url: str = "https://sns-sdk-proxy.jup.ag"

    request_timeout: float = 30.0

    # Holdings worth this many dollars or less are dropped from the analysis
    min_holding_value: float = 0.01

    # Price used for tokens without a positive price; None disables the fallback
    zero_price_fallback: Optional[float] = 1.0

    def __post_init__(self) -> None:
        try:
            self.rpc_provider = RpcProvider(self.rpc_provider)
        except ValueError:
            valid = ", ".join(p.value for p in RpcProvider)
            raise ConfigurationError(
                "rpc_provider", f"unknown provider {self.rpc_provider!r} (valid: {valid})"
            )

        self.request_timeout = _coerce_number("request_timeout", self.request_timeout, strict=True)
        self.min_holding_value = _coerce_number("min_holding_value", self.min_holding_value)
        self.zero_price_fallback = _coerce_number(
            "zero_price_fallback", self.zero_price_fallback, strict=True, optional=True
        )

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load configuration from environment variables."""
        return cls(
            rpc_provider=os.getenv("SWAPLIST_RPC_PROVIDER", RpcProvider.PUBLIC.value),
            helius_api_key=os.getenv("HELIUS_API_KEY"),
            quicknode_url=os.getenv("QUICKNODE_RPC_URL"),
            public_rpc_url=os.getenv("SOLANA_RPC_URL", PUBLIC_RPC_URL),
            jupiter_api_url=os.getenv("JUPITER_API_URL", cls.jupiter_api_url),
            sns_proxy_url=os.getenv("SNS_PROXY_URL", cls.sns_proxy_url),
            request_timeout=_env_float("SWAPLIST_TIMEOUT", cls.request_timeout),
            min_holding_value=_env_float("SWAPLIST_MIN_HOLDING_VALUE", cls.min_holding_value),
            zero_price_fallback=_env_float(
                "SWAPLIST_ZERO_PRICE_FALLBACK", cls.zero_price_fallback
            ),
        )

    @classmethod
    def load(
        cls,
        env_file: Optional[Path] = None,
        settings_file: Optional[Path] = None,
    ) -> "AppConfig":
        """
        Load configuration from .env file, environment variables and YAML settings.

        Args:
            env_file: Optional path to .env file. If not provided,
                      looks for .env in the current working directory.
            settings_file: Optional YAML file whose keys override the
                      environment (keys are AppConfig field names).

        Returns:
            AppConfig instance with loaded values
        """
        if env_file:
            load_dotenv(env_file)
        else:
            env_path = Path.cwd() / ".env"
            if env_path.exists():
                load_dotenv(env_path)

        config = cls.from_env()
        if settings_file:
            config = config.with_overrides(_read_settings(Path(settings_file)))
        return config

    def with_overrides(self, overrides: dict[str, Any]) -> "AppConfig":
        """Return a copy with the given fields replaced."""
        known = {f.name for f in fields(self)}
        unknown = sorted(set(overrides) - known)
        if unknown:
            raise ConfigurationError(unknown[0], "unknown setting")
        return replace(self, **overrides)

    def rpc_url(self) -> str:
        """Resolve the JSON-RPC endpoint for the configured provider."""
        if self.rpc_provider is RpcProvider.HELIUS:
            if not self.helius_api_key:
                raise ConfigurationError("helius_api_key", "required for the helius provider")
            return HELIUS_RPC_URL.format(api_key=self.helius_api_key)
        if self.rpc_provider is RpcProvider.QUICKNODE:
            if not self.quicknode_url:
                raise ConfigurationError("quicknode_url", "required for the quicknode provider")
            return self.quicknode_url
        return self.public_rpc_url


def _read_settings(path: Path) -> dict[str, Any]:
    """Read a YAML settings file into a flat dict."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            settings = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError("settings_file", f"file not found: {path}")
    except yaml.YAMLError as e:
        raise ConfigurationError("settings_file", f"invalid YAML in {path}: {e}")

    if settings is None:
        return {}
    if not isinstance(settings, dict):
        raise ConfigurationError("settings_file", f"expected a mapping in {path}")

    logger.info(f"Loaded settings from {path}")
    return settings


# Global config instance (lazy loaded)
_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = AppConfig.load()
    return _config


def reload_config(
    env_file: Optional[Path] = None,
    settings_file: Optional[Path] = None,
) -> AppConfig:
    """Reload configuration from environment."""
    global _config
    _config = AppConfig.load(env_file, settings_file)
    return _config
