"""Application configuration using pydantic-settings.

All settings can be provided as OSMOSIS_* environment variables or in a .env
file. The mnemonic is only needed for signing tools.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Toolkit settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="OSMOSIS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Wallet
    # ======================
    mnemonic: Optional[str] = Field(
        default=None, description="BIP-39 seed phrase used to derive the signing key"
    )
    chain_id: str = Field(default="osmosis-1", description="Chain the account trades on")

    # ======================
    # Endpoints
    # ======================
    sqs_url: str = Field(
        default="https://sqsprod.osmosis.zone", description="Osmosis Sidecar Query Server URL"
    )
    rpc_url: Optional[str] = Field(
        default=None, description="CometBFT RPC URL (overrides the chain registry)"
    )
    rest_url: Optional[str] = Field(
        default=None, description="Cosmos REST (LCD) URL (overrides the chain registry)"
    )
    http_timeout: float = Field(default=30.0, description="HTTP timeout in seconds")

    # ======================
    # Swaps
    # ======================
    quote_cache_size: int = Field(
        default=100, ge=1, description="Maximum number of quotes kept for execution"
    )
    default_slippage_percent: float = Field(
        default=0.5, ge=0, lt=100, description="Default slippage tolerance (0.5%)"
    )
    fee_multiplier: float = Field(
        default=2.0, gt=0, description="Multiplier applied to simulated gas usage"
    )

    # ======================
    # Environment
    # ======================
    debug: bool = Field(default=False, description="Enable debug logging")

    @property
    def has_wallet(self) -> bool:
        """Check if a usable seed phrase is configured."""
        return bool(self.mnemonic and len(self.mnemonic.split()) >= 12)

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "chain_id": self.chain_id,
            "sqs_url": self.sqs_url,
            "rpc_url": self.rpc_url or "(registry)",
            "rest_url": self.rest_url or "(registry)",
            "wallet_configured": self.has_wallet,
            "mnemonic": "***" if self.mnemonic else "(not set)",
            "quote_cache_size": self.quote_cache_size,
            "default_slippage_percent": self.default_slippage_percent,
            "fee_multiplier": self.fee_multiplier,
            "debug": self.debug,
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
