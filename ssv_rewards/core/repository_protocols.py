"""Boundary Protocols: contracts between the rewards core and its storage/network shell.

Invariants:
    - Core NEVER imports from shell; dependency arrows point inward only
    - All IO operations accessed through Protocol types
    - Implementations provided by shell via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - IdempotencyRepository exposes get/create only; it is NOT an atomic claim
"""

from datetime import datetime
from typing import Protocol

from ssv_rewards.core.domain_types import UserId
from ssv_rewards.core.entitlements import UserEntitlements


class UserEntitlementsRepository(Protocol):
    """Keyed read/create/update access to per-user entitlement records."""
    async def get(self, user_id: UserId) -> UserEntitlements | None: ...
    async def create(self, entitlements: UserEntitlements) -> None: ...
    async def update(self, entitlements: UserEntitlements) -> None: ...


class RemoteConfigReader(Protocol):
    """Read-only access to the remote configuration document."""
    async def read(self, config_id: str) -> dict: ...


class IdempotencyRepository(Protocol):
    """Marker storage with uniqueness enforced on record_id."""
    async def exists(self, record_id: str) -> bool: ...
    async def create(
        self,
        record_id: str,
        scope: str,
        event_id: str,
        created_at: datetime,
        expires_at: datetime,
    ) -> None: ...


class VerifierKeySource(Protocol):
    """Fetches a network's published public key set as {key_id: PEM}."""
    async def fetch_keys(self) -> dict[str, str]: ...
