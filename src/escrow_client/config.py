"""Client configuration via pydantic-settings.

Reads from .env file or ESCROW_* environment variables. Static chain,
contract and token tables are not settings; they live in environment.py
and are selected by ``environment``.

Usage:
    from escrow_client.config import get_settings
    settings = get_settings()
    print(settings.environment, settings.rpc_url)
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration for the escrow client."""

    model_config = SettingsConfigDict(
        env_prefix="ESCROW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Network ---
    environment: Literal["local", "test", "beta", "beta2", "prod"] = "test"
    rpc_url: str | None = None
    private_key: SecretStr | None = None

    # --- Logging ---
    log_level: str = "INFO"
    json_logs: bool = False

    # --- Transactions ---
    receipt_timeout_seconds: int = 120
    gas_buffer_percent: int = 30
    max_priority_fee_gwei: int = 40

    # --- Lookups ---
    lookup_retry_attempts: int = 3

    @property
    def max_priority_fee_wei(self) -> int:
        return self.max_priority_fee_gwei * 10**9


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached singleton of the client settings."""
    return Settings()
