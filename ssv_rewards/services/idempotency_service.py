"""Idempotency Service: existence check and marker insert for external event ids.

Invariants:
    - Marker id = sha256("<scope>:<event_id>") hex, deterministic and fixed-length
    - exists() and record() are separate calls: this is NOT an atomic claim
    - record() sets expires_at = now + ttl_days for external TTL cleanup
    - Storage failures are logged and re-raised unchanged
"""

import hashlib
import logging
from datetime import datetime, timedelta, timezone
from typing import Callable

from ssv_rewards.core.repository_protocols import IdempotencyRepository

logger = logging.getLogger(__name__)


def marker_id(scope: str, event_id: str) -> str:
    return hashlib.sha256(f"{scope}:{event_id}".encode("utf-8")).hexdigest()


class IdempotencyService:
    """Tracks processed external events, scoped by a string tag."""

    def __init__(
        self,
        repository: IdempotencyRepository,
        ttl_days: int = 30,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._repository = repository
        self._ttl = timedelta(days=ttl_days)
        self._clock = clock

    async def exists(self, scope: str, event_id: str) -> bool:
        try:
            return await self._repository.exists(marker_id(scope, event_id))
        except Exception:
            logger.error(
                f"Error checking idempotency in scope {scope}",
                extra={"event_id": event_id}, exc_info=True,
            )
            raise

    async def record(self, scope: str, event_id: str) -> None:
        now = self._clock()
        try:
            await self._repository.create(
                record_id=marker_id(scope, event_id),
                scope=scope,
                event_id=event_id,
                created_at=now,
                expires_at=now + self._ttl,
            )
        except Exception:
            logger.error(
                f"Error recording idempotency in scope {scope}",
                extra={"event_id": event_id}, exc_info=True,
            )
            raise
