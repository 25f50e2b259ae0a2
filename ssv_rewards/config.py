"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache), single instance per process
    - Missing SSV secrets do not block startup; the owning verifier fails on use

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box with docker-compose
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://rewards:rewards@db:5432/rewards"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting platforms provide postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # AdMob SSV (asymmetric, rotating keys)
    admob_verifier_keys_url: str = (
        "https://www.gstatic.com/admob/reward/verifier-keys.json"
    )
    admob_key_cache_ttl_seconds: int = 24 * 60 * 60
    verifier_keys_timeout_seconds: float = 10.0

    # Shared secrets, None when the network is not integrated
    applovin_ssv_signing_key: str | None = None
    ironsource_ssv_private_key: str | None = None

    # Business rules
    remote_config_id: str = "remote_config"

    # Must exceed the longest redelivery window of any integrated network
    idempotency_ttl_days: int = 30

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
