"""Application configuration using pydantic-settings.

Every aggregation setting can come from the environment (or `.env`), e.g.
``METHOD=race``, ``TIMEOUT_MS=5000``, ``RPC_URLS='{"1": "https://..."}'``.
"""

from functools import lru_cache
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ======================
    # Environment
    # ======================
    environment: str = Field(default="development", description="Runtime environment")
    debug: bool = Field(default=False, description="Enable debug logging")
    dry_run: bool = Field(
        default=True, description="Register the simulated protocol family by default"
    )

    # ======================
    # API
    # ======================
    api_host: str = Field(default="0.0.0.0", description="API server host")
    api_port: int = Field(default=8000, description="API server port")

    # ======================
    # Aggregation
    # ======================
    method: Literal["best", "race"] = Field(
        default="best", description="Selection strategy: best output or first success"
    )
    timeout_ms: int = Field(default=30000, gt=0, description="Per-protocol call timeout")
    max_concurrency: Optional[int] = Field(
        default=None,
        gt=0,
        description="Bound on simultaneous protocol calls (None = unbounded)",
    )
    include_protocols: Optional[list[str]] = Field(
        default=None, description="Allow-list of protocol identifiers"
    )
    exclude_protocols: list[str] = Field(
        default_factory=list, description="Protocol identifiers never initialized"
    )

    # ======================
    # Approvals
    # ======================
    check_approvals: bool = Field(
        default=False, description="Resolve ERC-20 approval requirements on quotes"
    )
    rpc_urls: dict[int, str] = Field(
        default_factory=dict, description="Read-only RPC endpoint per chain id"
    )
    rpc_timeout_seconds: float = Field(default=15.0, gt=0, description="RPC call timeout")

    # ======================
    # Protocol credentials
    # ======================
    credentials: dict[str, str] = Field(
        default_factory=dict,
        description="Protocol-specific keys (e.g. {'okx_api_key': '...'})",
    )

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000

    def get_rpc_url(self, chain_id: int) -> Optional[str]:
        """Get the read-only RPC URL configured for a chain, if any."""
        return self.rpc_urls.get(int(chain_id)) or None

    def get_safe_dict(self) -> dict:
        """Return settings dict with secrets redacted."""
        return {
            "environment": self.environment,
            "debug": self.debug,
            "dry_run": self.dry_run,
            "api_host": self.api_host,
            "api_port": self.api_port,
            "aggregation": {
                "method": self.method,
                "timeout_ms": self.timeout_ms,
                "max_concurrency": self.max_concurrency,
                "include_protocols": self.include_protocols,
                "exclude_protocols": self.exclude_protocols,
            },
            "approvals": {
                "enabled": self.check_approvals,
                "chains": sorted(self.rpc_urls),
            },
            "credentials": {name: "***" for name in self.credentials},
        }


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
