"""Domain Types: closed enums and the verified payload."""

import dataclasses

import pytest

from ssv_rewards.core.domain_types import (
    AdPlatform, ExternalEventId, RewardType, UserId, VerifiedRewardPayload,
)


def test_reward_type_wire_values():
    assert {r.value for r in RewardType} == {"adFree", "dailyDigest"}


def test_ad_platform_members():
    assert {p.value for p in AdPlatform} == {"admob", "applovin", "ironsource"}


def test_payload_is_immutable():
    payload = VerifiedRewardPayload(
        ExternalEventId("tx1"), UserId("u1"), RewardType.AD_FREE,
    )
    assert payload.raw_amount is None
    with pytest.raises(dataclasses.FrozenInstanceError):
        payload.user_id = UserId("u2")
