"""Application configuration using pydantic-settings."""

from decimal import Decimal
from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Aggregator
    # ======================
    oneinch_api_url: str = Field(
        default="https://api.1inch.exchange/v5.0", description="1inch API base URL"
    )
    oneinch_api_key: Optional[str] = Field(default=None, description="1inch API key")
    http_timeout: float = Field(default=30.0, description="Aggregator request timeout (seconds)")

    # ======================
    # Chain
    # ======================
    rpc_url: str = Field(
        default="https://rpc.ankr.com/arbitrum", description="JSON-RPC endpoint"
    )
    chain_id: int = Field(default=42161, description="Chain ID (42161 = Arbitrum One)")

    # ======================
    # Wallet
    # ======================
    wallet_private_key: Optional[str] = Field(
        default=None, description="Hex private key used to sign transactions"
    )

    # ======================
    # Swap
    # ======================
    default_slippage: Decimal = Field(
        default=Decimal("1"), description="Default slippage tolerance in percent (1 = 1%)"
    )
    receipt_timeout: float = Field(
        default=120.0, description="Seconds to wait for a transaction receipt"
    )

    # ======================
    # Runtime
    # ======================
    dry_run: bool = Field(default=True, description="Build transactions but never broadcast")
    debug: bool = Field(default=False, description="Enable debug logging")

    @property
    def has_wallet(self) -> bool:
        """Check if a signing key is configured."""
        return bool(self.wallet_private_key)

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "oneinch_api_url": self.oneinch_api_url,
            "oneinch_api_key": "***" if self.oneinch_api_key else "(not set)",
            "rpc_url": self.rpc_url,
            "chain_id": self.chain_id,
            "wallet_configured": self.has_wallet,
            "default_slippage": str(self.default_slippage),
            "dry_run": self.dry_run,
            "debug": self.debug,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
