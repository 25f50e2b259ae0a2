"""DatabaseSessionManager: rollback, error mapping and readiness over in-memory SQLite."""

import pytest
from sqlalchemy import text
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError

from ssv_rewards.core.errors import DatabaseError, DuplicateEventError
from ssv_rewards.infrastructure import database
from ssv_rewards.infrastructure.database import DatabaseSessionManager, to_database_error


@pytest.fixture
async def manager():
    mgr = DatabaseSessionManager("sqlite+aiosqlite:///:memory:")
    yield mgr
    await mgr.dispose()


async def test_health_check_succeeds(manager):
    assert await manager.health_check() is True


async def test_sqlalchemy_failure_becomes_database_error(manager):
    with pytest.raises(DatabaseError) as exc:
        async with manager.session() as db:
            await db.execute(text("SELECT * FROM no_such_table"))
    assert exc.value.http_status == 503
    assert exc.value.operation == "execute"


async def test_rewards_error_passes_through(manager):
    with pytest.raises(DuplicateEventError):
        async with manager.session():
            raise DuplicateEventError("reward", "evt1")


def test_error_mapping_prefers_most_specific_type():
    integrity = IntegrityError("INSERT", {}, Exception("UNIQUE"))
    operational = OperationalError("SELECT", {}, Exception("locked"))

    assert to_database_error(integrity).operation == "commit"
    assert to_database_error(operational).operation == "execute"
    assert to_database_error(SQLAlchemyError("x")).operation == "unknown"


async def test_init_db_sets_module_manager(monkeypatch):
    monkeypatch.setattr(database, "db_manager", None)

    mgr = database.init_db("sqlite+aiosqlite:///:memory:", pool_size=5, max_overflow=1)

    assert database.db_manager is mgr
    await mgr.dispose()
