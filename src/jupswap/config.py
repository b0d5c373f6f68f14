"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(
        default=3000,
        validation_alias=AliasChoices("PORT", "API_PORT"),
        description="API server port",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug mode")

    # ======================
    # Solana
    # ======================
    solana_rpc_url: str = Field(
        default="https://api.mainnet-beta.solana.com",
        description="Default Solana RPC URL for wallet reports",
    )
    confirm_sleep_seconds: float = Field(
        default=0.5, description="Delay between signature status polls"
    )

    # ======================
    # Jupiter
    # ======================
    jupiter_api_url: str = Field(
        default="https://lite-api.jup.ag/swap/v1",
        description="Jupiter swap API base URL (quote + swap)",
    )
    jupiter_api_key: Optional[str] = Field(
        default=None, description="Optional Jupiter API key for higher rate limits"
    )
    token_search_url: str = Field(
        default="https://lite-api.jup.ag/tokens/v2/search",
        description="Token metadata/price search endpoint",
    )

    # ======================
    # HTTP
    # ======================
    http_timeout: float = Field(default=30.0, description="Aggregator request timeout (s)")
    metadata_timeout: float = Field(default=10.0, description="Metadata request timeout (s)")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "solana_rpc_url": self._redact_url(self.solana_rpc_url),
            "jupiter": {
                "api_url": self.jupiter_api_url,
                "api_key": "***" if self.jupiter_api_key else "(not set)",
                "token_search_url": self.token_search_url,
            },
            "timeouts": {
                "http": self.http_timeout,
                "metadata": self.metadata_timeout,
            },
        }

    @staticmethod
    def _redact_url(url: str) -> str:
        """Redact query-string credentials (e.g. ?api-key=...) from an RPC URL."""
        if "?" in url:
            base, _ = url.split("?", 1)
            return f"{base}?***"
        return url


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
