"""Tests for configuration loading."""

import os

import pytest

from swaplist.core.config import HELIUS_RPC_URL, PUBLIC_RPC_URL, AppConfig
from swaplist.core.exceptions import ConfigurationError
from swaplist.core.types import RpcProvider

ENV_VARS = (
    "SWAPLIST_RPC_PROVIDER",
    "HELIUS_API_KEY",
    "QUICKNODE_RPC_URL",
    "SOLANA_RPC_URL",
    "JUPITER_API_URL",
    "SNS_PROXY_URL",
    "SWAPLIST_TIMEOUT",
    "SWAPLIST_MIN_HOLDING_VALUE",
    "SWAPLIST_ZERO_PRICE_FALLBACK",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the tests
    monkeypatch.chdir(tmp_path)
    yield
    # load_dotenv writes straight to os.environ
    for name in ENV_VARS:
        os.environ.pop(name, None)


class TestFromEnv:
    """Tests for environment variable loading."""

    def test_defaults(self):
        config = AppConfig.from_env()

        assert config.rpc_provider is RpcProvider.PUBLIC
        assert config.rpc_url() == PUBLIC_RPC_URL
        assert config.jupiter_api_url == "https://lite-api.jup.ag"
        assert config.min_holding_value == 0.01
        assert config.zero_price_fallback == 1.0

    def test_helius(self, monkeypatch):
        monkeypatch.setenv("SWAPLIST_RPC_PROVIDER", "helius")
        monkeypatch.setenv("HELIUS_API_KEY", "secret")

        config = AppConfig.from_env()

        assert config.rpc_provider is RpcProvider.HELIUS
        assert config.rpc_url() == HELIUS_RPC_URL.format(api_key="secret")

    def test_helius_without_key(self, monkeypatch):
        monkeypatch.setenv("SWAPLIST_RPC_PROVIDER", "helius")
        with pytest.raises(ConfigurationError, match="helius_api_key"):
            AppConfig.from_env().rpc_url()

    def test_quicknode(self, monkeypatch):
        monkeypatch.setenv("SWAPLIST_RPC_PROVIDER", "quicknode")
        monkeypatch.setenv("QUICKNODE_RPC_URL", "https://example.quiknode.pro/abc/")
        assert AppConfig.from_env().rpc_url() == "https://example.quiknode.pro/abc/"

    def test_unknown_provider(self, monkeypatch):
        monkeypatch.setenv("SWAPLIST_RPC_PROVIDER", "infura")
        with pytest.raises(ConfigurationError, match="unknown provider"):
            AppConfig.from_env()

    def test_numbers(self, monkeypatch):
        monkeypatch.setenv("SWAPLIST_TIMEOUT", "5")
        monkeypatch.setenv("SWAPLIST_MIN_HOLDING_VALUE", "1.5")

        config = AppConfig.from_env()

        assert config.request_timeout == 5.0
        assert config.min_holding_value == 1.5

    def test_disable_zero_price_fallback(self, monkeypatch):
        monkeypatch.setenv("SWAPLIST_ZERO_PRICE_FALLBACK", "off")
        assert AppConfig.from_env().zero_price_fallback is None

    def test_bad_number(self, monkeypatch):
        monkeypatch.setenv("SWAPLIST_TIMEOUT", "soon")
        with pytest.raises(ConfigurationError, match="SWAPLIST_TIMEOUT"):
            AppConfig.from_env()


class TestLoad:
    """Tests for .env and YAML settings files."""

    def test_env_file(self, tmp_path):
        env_file = tmp_path / "custom.env"
        env_file.write_text("SOLANA_RPC_URL=https://rpc.from-dotenv\n")

        config = AppConfig.load(env_file=env_file)

        assert config.rpc_url() == "https://rpc.from-dotenv"

    def test_settings_override_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv("SWAPLIST_MIN_HOLDING_VALUE", "5")
        settings = tmp_path / "settings.yaml"
        settings.write_text("min_holding_value: 0.5\nzero_price_fallback: null\n")

        config = AppConfig.load(settings_file=settings)

        assert config.min_holding_value == 0.5
        assert config.zero_price_fallback is None

    def test_settings_unknown_key(self, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("refresh_seconds: 60\n")

        with pytest.raises(ConfigurationError, match="refresh_seconds"):
            AppConfig.load(settings_file=settings)

    def test_settings_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError, match="file not found"):
            AppConfig.load(settings_file=tmp_path / "missing.yaml")

    def test_settings_not_a_mapping(self, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("- just\n- a list\n")

        with pytest.raises(ConfigurationError, match="expected a mapping"):
            AppConfig.load(settings_file=settings)

    def test_empty_settings(self, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("")
        assert AppConfig.load(settings_file=settings) == AppConfig.from_env()

    def test_settings_provider_is_coerced(self, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("rpc_provider: quicknode\nquicknode_url: https://qn.test\n")

        config = AppConfig.load(settings_file=settings)

        assert config.rpc_provider is RpcProvider.QUICKNODE
        assert config.rpc_url() == "https://qn.test"


class TestNumericSettings:
    """Tests for coercion and range checks of numeric settings."""

    def test_yaml_off_disables_zero_price_fallback(self, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("zero_price_fallback: off\n")

        config = AppConfig.load(settings_file=settings)

        assert config.zero_price_fallback is None

    def test_quoted_off_disables_zero_price_fallback(self):
        assert AppConfig(zero_price_fallback="off").zero_price_fallback is None

    def test_env_zero_fallback_rejected(self, monkeypatch):
        monkeypatch.setenv("SWAPLIST_ZERO_PRICE_FALLBACK", "0")
        with pytest.raises(ConfigurationError, match="zero_price_fallback"):
            AppConfig.from_env()

    def test_negative_fallback_rejected(self):
        with pytest.raises(ConfigurationError, match="greater than 0"):
            AppConfig(zero_price_fallback=-2)

    def test_yaml_yes_fallback_rejected(self, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("zero_price_fallback: yes\n")

        with pytest.raises(ConfigurationError, match="expected a number"):
            AppConfig.load(settings_file=settings)

    def test_string_timeout_rejected(self, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("request_timeout: slow\n")

        with pytest.raises(ConfigurationError, match="request_timeout"):
            AppConfig.load(settings_file=settings)

    def test_numeric_strings_are_coerced(self, tmp_path):
        settings = tmp_path / "settings.yaml"
        settings.write_text("request_timeout: '12'\nmin_holding_value: '0'\nzero_price_fallback: '2.5'\n")

        config = AppConfig.load(settings_file=settings)

        assert config.request_timeout == 12.0
        assert config.min_holding_value == 0.0
        assert config.zero_price_fallback == 2.5

    def test_negative_min_holding_value_rejected(self):
        with pytest.raises(ConfigurationError, match="min_holding_value"):
            AppConfig(min_holding_value=-0.01)

    def test_zero_timeout_rejected(self, monkeypatch):
        monkeypatch.setenv("SWAPLIST_TIMEOUT", "0")
        with pytest.raises(ConfigurationError, match="request_timeout"):
            AppConfig.from_env()
