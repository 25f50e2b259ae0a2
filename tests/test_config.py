"""Settings: environment-driven configuration defaults and URL normalization."""

from ssv_rewards.config import Settings


def test_postgres_url_rewritten_for_asyncpg():
    settings = Settings(database_url="postgresql://u:p@host:5432/db")
    assert settings.database_url == "postgresql+asyncpg://u:p@host:5432/db"


def test_sqlite_url_untouched():
    settings = Settings(database_url="sqlite+aiosqlite:///x.db")
    assert settings.database_url == "sqlite+aiosqlite:///x.db"


def test_business_defaults():
    settings = Settings()
    assert settings.admob_key_cache_ttl_seconds == 86400
    assert settings.idempotency_ttl_days == 30
    assert settings.remote_config_id == "remote_config"


def test_secrets_read_from_environment(monkeypatch):
    monkeypatch.setenv("APPLOVIN_SSV_SIGNING_KEY", "from-env")
    monkeypatch.delenv("IRONSOURCE_SSV_PRIVATE_KEY", raising=False)

    settings = Settings(_env_file=None)

    assert settings.applovin_ssv_signing_key == "from-env"
    assert settings.ironsource_ssv_private_key is None
