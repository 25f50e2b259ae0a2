"""Rewards Service: verifies SSV callbacks and grants time-boxed entitlements.

Invariants:
    - Steps run in order: resolve verifier, verify, replay check, rules, entitlement write, mark
    - A replayed event returns success with no side effects
    - ForbiddenError does NOT record the event; a later retry is fully reprocessed
    - Duration comes only from live RewardRules; the network's raw amount is logged, never applied
    - Verifier and storage failures propagate unchanged

Design Decisions:
    - Check-then-act idempotency: a crash between the entitlement write and the marker
      insert can double-grant on redelivery, and truly concurrent duplicates can both pass
      the existence check. Atomicity of both is delegated to the storage layer.
    - RewardRules read on every callback, no caching, so config changes apply immediately
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Mapping

from ssv_rewards.core.domain_types import (
    REWARD_SCOPE, AdPlatform, VerifiedRewardPayload,
)
from ssv_rewards.core.entitlements import UserEntitlements, grant
from ssv_rewards.core.errors import ErrorContext, MisconfiguredSecretError
from ssv_rewards.core.repository_protocols import (
    RemoteConfigReader, UserEntitlementsRepository,
)
from ssv_rewards.core.reward_rules import check_reward_allowed, parse_reward_rules
from ssv_rewards.services.idempotency_service import IdempotencyService
from ssv_rewards.services.reward_verifier import RewardVerifier

logger = logging.getLogger(__name__)


class RewardsService:
    """Orchestrates one SSV callback end to end."""

    def __init__(
        self,
        verifiers: Mapping[AdPlatform, RewardVerifier],
        idempotency: IdempotencyService,
        entitlements: UserEntitlementsRepository,
        remote_config: RemoteConfigReader,
        remote_config_id: str,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc),
    ):
        self._verifiers = verifiers
        self._idempotency = idempotency
        self._entitlements = entitlements
        self._remote_config = remote_config
        self._remote_config_id = remote_config_id
        self._clock = clock

    async def process_callback(self, platform: AdPlatform, uri: str) -> bool:
        """Process one raw callback. Returns False for a replay, True when granted."""
        logger.info("Processing reward callback", extra={"platform": platform.value})

        verifier = self._verifiers.get(platform)
        if verifier is None:
            logger.error(
                "No verifier registered for platform",
                extra={"platform": platform.value},
            )
            raise MisconfiguredSecretError(
                f"No verifier configured for platform {platform.value}.",
                ErrorContext(platform=platform.value),
            )

        payload = await verifier.verify(uri)
        event_id = payload.external_event_id

        if await self._idempotency.exists(REWARD_SCOPE, event_id):
            logger.info(
                "Reward event already processed",
                extra={"platform": platform.value, "event_id": event_id},
            )
            return False

        await self._grant_reward(platform, payload)
        await self._idempotency.record(REWARD_SCOPE, event_id)

        logger.info(
            "Reward granted",
            extra={
                "platform": platform.value,
                "event_id": event_id,
                "user_id": payload.user_id,
                "reward_type": payload.reward_type.value,
            },
        )
        return True

    async def _grant_reward(
        self, platform: AdPlatform, payload: VerifiedRewardPayload,
    ) -> UserEntitlements:
        context = ErrorContext(
            platform=platform.value,
            event_id=payload.external_event_id,
            user_id=payload.user_id,
        )
        document = await self._remote_config.read(self._remote_config_id)
        details = check_reward_allowed(
            parse_reward_rules(document), payload.reward_type, context,
        )

        existing = await self._entitlements.get(payload.user_id)
        updated = grant(
            existing,
            payload.user_id,
            payload.reward_type,
            details.duration_days,
            self._clock(),
        )
        if existing is None:
            await self._entitlements.create(updated)
        else:
            await self._entitlements.update(updated)

        logger.info(
            f"Entitlement expiry set to {updated.expiry_for(payload.reward_type).isoformat()} "
            f"(raw amount {payload.raw_amount})",
            extra={"user_id": payload.user_id, "reward_type": payload.reward_type.value},
        )
        return updated
