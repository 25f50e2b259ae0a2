"""SQL Repositories: SQLAlchemy implementations of the core boundary Protocols.

Invariants:
    - Each write commits its own unit of work (entitlement write and marker write are separate)
    - IdempotencyRecord primary-key violation surfaces as DuplicateEventError
    - Missing remote config document surfaces as ResourceNotFoundError
    - No business logic here: rows in, domain objects out

Design Decisions:
    - Entitlement update is a plain read-modify-write; atomic merge is not provided
      (concurrent grants for one user need external serialization)
"""

import logging
from datetime import datetime

from sqlalchemy import insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from ssv_rewards.core.domain_types import UserId
from ssv_rewards.core.entitlements import UserEntitlements
from ssv_rewards.core.errors import DuplicateEventError, ResourceNotFoundError
from ssv_rewards.models.idempotency_record import IdempotencyRecord
from ssv_rewards.models.remote_config import RemoteConfig
from ssv_rewards.models.user_entitlements import UserEntitlementsRow

logger = logging.getLogger(__name__)


class SqlUserEntitlementsRepository:
    """UserEntitlementsRepository backed by the user_entitlements table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self, user_id: UserId) -> UserEntitlements | None:
        row = await self.db.get(UserEntitlementsRow, user_id)
        if row is None:
            return None
        return UserEntitlements.from_json(row.user_id, row.active_rewards)

    async def create(self, entitlements: UserEntitlements) -> None:
        self.db.add(UserEntitlementsRow(
            user_id=entitlements.user_id,
            active_rewards=entitlements.to_json(),
        ))
        await self.db.commit()

    async def update(self, entitlements: UserEntitlements) -> None:
        row = await self.db.get(UserEntitlementsRow, entitlements.user_id)
        if row is None:
            raise ResourceNotFoundError("UserEntitlements", entitlements.user_id)
        # Stored keys absent from `entitlements` keep their value; reassign so
        # the JSON column is flagged dirty
        row.active_rewards = {**(row.active_rewards or {}), **entitlements.to_json()}
        await self.db.commit()


class SqlIdempotencyRepository:
    """IdempotencyRepository backed by the idempotency_records table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists(self, record_id: str) -> bool:
        result = await self.db.execute(
            select(IdempotencyRecord.id).where(IdempotencyRecord.id == record_id),
        )
        return result.scalar_one_or_none() is not None

    async def create(
        self,
        record_id: str,
        scope: str,
        event_id: str,
        created_at: datetime,
        expires_at: datetime,
    ) -> None:
        try:
            await self.db.execute(insert(IdempotencyRecord).values(
                id=record_id,
                scope=scope,
                event_id=event_id,
                created_at=created_at,
                expires_at=expires_at,
            ))
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(
                "Idempotency marker inserted concurrently",
                extra={"event_id": event_id},
            )
            raise DuplicateEventError(scope, event_id)


class SqlRemoteConfigReader:
    """RemoteConfigReader backed by the remote_configs table."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def read(self, config_id: str) -> dict:
        result = await self.db.execute(
            select(RemoteConfig.data).where(RemoteConfig.id == config_id),
        )
        data = result.scalar_one_or_none()
        if data is None:
            raise ResourceNotFoundError("RemoteConfig", config_id)
        return data
