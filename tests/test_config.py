"""Tests for settings loading."""

from decimal import Decimal

from oneswap.config import Settings, get_settings


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("DEBUG", raising=False)
        settings = Settings(_env_file=None)

        assert settings.oneinch_api_url == "https://api.1inch.exchange/v5.0"
        assert settings.chain_id == 42161
        assert settings.default_slippage == Decimal("1")
        assert settings.dry_run is True
        assert settings.debug is False
        assert settings.has_wallet is False

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("CHAIN_ID", "1")
        monkeypatch.setenv("DEFAULT_SLIPPAGE", "0.5")
        monkeypatch.setenv("DRY_RUN", "false")

        settings = Settings(_env_file=None)

        assert settings.chain_id == 1
        assert settings.default_slippage == Decimal("0.5")
        assert settings.dry_run is False

    def test_safe_dict_redacts_secrets(self):
        settings = Settings(_env_file=None, oneinch_api_key="secret", wallet_private_key="0x" + "11" * 32)
        data = settings.get_safe_dict()

        assert data["oneinch_api_key"] == "***"
        assert data["wallet_configured"] is True
        assert "0x" + "11" * 32 not in str(data)

    def test_get_settings_is_cached(self):
        get_settings.cache_clear()
        try:
            assert get_settings() is get_settings()
        finally:
            get_settings.cache_clear()
