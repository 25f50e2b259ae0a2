"""Service test fixtures: async DB, in-memory fakes and a FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db and get_verifiers overridden on the app; lifespan never runs
    - In-memory fakes record every write so tests can assert "no mutation"

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for repository and route tests
    - AdMob keys come from FakeKeySource; no test touches the network
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

import ssv_rewards.models  # noqa: F401
from ssv_rewards.api.routes.reward_webhooks import get_verifiers
from ssv_rewards.core.domain_types import AdPlatform
from ssv_rewards.db.base import Base
from ssv_rewards.infrastructure.database import get_db
from ssv_rewards.main import app
from ssv_rewards.models.remote_config import RemoteConfig
from ssv_rewards.services.admob_ssv_verifier import AdMobSsvVerifier
from ssv_rewards.services.applovin_ssv_verifier import AppLovinSsvVerifier
from ssv_rewards.services.ironsource_ssv_verifier import IronSourceSsvVerifier
from tests.services.fakes import APPLOVIN_KEY, IRONSOURCE_KEY, rewards_document
from tests.services.ssv_signing import FakeKeySource, generate_key, public_pem


@pytest.fixture
def ec_key():
    return generate_key()


@pytest.fixture
def key_source(ec_key):
    return FakeKeySource({"k1": public_pem(ec_key)})


@pytest.fixture
def verifiers(key_source):
    return {
        AdPlatform.ADMOB: AdMobSsvVerifier(key_source),
        AdPlatform.APPLOVIN: AppLovinSsvVerifier(APPLOVIN_KEY),
        AdPlatform.IRONSOURCE: IronSourceSsvVerifier(IRONSOURCE_KEY),
    }


# ─── Database ────────────────────────────────────────────────────

@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
async def seed_remote_config(test_db):
    config = RemoteConfig(id="remote_config", data=rewards_document())
    test_db.add(config)
    await test_db.commit()
    return config


@pytest.fixture
async def client(test_session_factory, verifiers):
    """FastAPI test client with DB and verifier dependencies overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_verifiers] = lambda: verifiers

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="https://rewards.test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
