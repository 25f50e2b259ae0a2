"""Reward Webhooks: GET endpoints that receive SSV callbacks from ad networks.

Invariants:
    - The full raw request URL reaches the verifier (signature covers the raw query)
    - 200 on success AND on idempotent replay, so the network stops retrying
    - Error statuses come from RewardsError.http_status via the global handlers

Design Decisions:
    - One path per AdPlatform member, validated by FastAPI against the enum
    - Verifier mapping read from app.state (built once in lifespan); repositories per request
"""

import logging
from typing import Mapping

from fastapi import APIRouter, Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from ssv_rewards.config import get_settings
from ssv_rewards.core.domain_types import AdPlatform
from ssv_rewards.infrastructure.database import get_db
from ssv_rewards.infrastructure.sql_repositories import (
    SqlIdempotencyRepository, SqlRemoteConfigReader, SqlUserEntitlementsRepository,
)
from ssv_rewards.services.idempotency_service import IdempotencyService
from ssv_rewards.services.reward_verifier import RewardVerifier
from ssv_rewards.services.rewards_service import RewardsService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/webhooks/rewards", tags=["rewards"])


def get_verifiers(request: Request) -> Mapping[AdPlatform, RewardVerifier]:
    return request.app.state.verifiers


async def get_rewards_service(
    verifiers: Mapping[AdPlatform, RewardVerifier] = Depends(get_verifiers),
    db: AsyncSession = Depends(get_db),
) -> RewardsService:
    settings = get_settings()
    return RewardsService(
        verifiers=verifiers,
        idempotency=IdempotencyService(
            SqlIdempotencyRepository(db), ttl_days=settings.idempotency_ttl_days,
        ),
        entitlements=SqlUserEntitlementsRepository(db),
        remote_config=SqlRemoteConfigReader(db),
        remote_config_id=settings.remote_config_id,
    )


@router.get("/{platform}")
async def receive_reward_callback(
    platform: AdPlatform,
    request: Request,
    service: RewardsService = Depends(get_rewards_service),
):
    """Verify and credit one SSV callback."""
    granted = await service.process_callback(platform, str(request.url))
    return {"status": "ok", "granted": granted}
