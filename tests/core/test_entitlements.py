"""Entitlements: pure expiry math and the UserEntitlements record.

Tests cover:
    - compute_new_expiry restarts from now when absent or expired
    - compute_new_expiry extends additively from an unexpired expiry
    - expiry exactly equal to now counts as expired
    - grant() never drops other reward types
    - JSON round trip keeps UTC and carries unknown tokens through a grant
"""

from datetime import datetime, timedelta, timezone

from ssv_rewards.core.domain_types import RewardType, UserId
from ssv_rewards.core.entitlements import (
    UserEntitlements, compute_new_expiry, ensure_utc, grant,
)

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc)


# ─── compute_new_expiry ──────────────────────────────────────────

def test_first_grant_starts_from_now():
    assert compute_new_expiry(None, NOW, 7) == NOW + timedelta(days=7)


def test_active_window_extends_from_current_expiry():
    current = NOW + timedelta(days=3)
    assert compute_new_expiry(current, NOW, 7) == current + timedelta(days=7)


def test_expired_window_restarts_from_now():
    past = NOW - timedelta(days=30)
    assert compute_new_expiry(past, NOW, 7) == NOW + timedelta(days=7)


def test_expiry_equal_to_now_is_not_active():
    assert compute_new_expiry(NOW, NOW, 1) == NOW + timedelta(days=1)


# ─── UserEntitlements ────────────────────────────────────────────

def test_is_active_is_strict():
    ent = UserEntitlements(UserId("u1"), {RewardType.AD_FREE: NOW})
    assert not ent.is_active(RewardType.AD_FREE, NOW)
    assert ent.is_active(RewardType.AD_FREE, NOW - timedelta(seconds=1))
    assert not ent.is_active(RewardType.DAILY_DIGEST, NOW)


def test_grant_creates_record_when_absent():
    ent = grant(None, UserId("u1"), RewardType.AD_FREE, 2, NOW)
    assert ent.user_id == "u1"
    assert ent.active_rewards == {RewardType.AD_FREE: NOW + timedelta(days=2)}


def test_grant_keeps_other_reward_types():
    digest_expiry = NOW - timedelta(days=1)
    existing = UserEntitlements(UserId("u1"), {RewardType.DAILY_DIGEST: digest_expiry})
    ent = grant(existing, UserId("u1"), RewardType.AD_FREE, 1, NOW)
    assert ent.active_rewards[RewardType.DAILY_DIGEST] == digest_expiry
    assert ent.active_rewards[RewardType.AD_FREE] == NOW + timedelta(days=1)


def test_grant_does_not_mutate_existing():
    existing = UserEntitlements(UserId("u1"), {})
    grant(existing, UserId("u1"), RewardType.AD_FREE, 1, NOW)
    assert existing.active_rewards == {}


def test_json_round_trip():
    ent = UserEntitlements(UserId("u1"), {RewardType.AD_FREE: NOW})
    data = ent.to_json()
    assert data == {"adFree": NOW.isoformat()}
    assert UserEntitlements.from_json("u1", data) == ent


def test_unknown_tokens_survive_a_grant():
    stored = {"premiumTrial": "2030-01-01T00:00:00+00:00", "adFree": NOW.isoformat()}
    ent = UserEntitlements.from_json("u1", stored)
    assert list(ent.active_rewards) == [RewardType.AD_FREE]
    assert ent.unrecognized == {"premiumTrial": "2030-01-01T00:00:00+00:00"}

    granted = grant(ent, UserId("u1"), RewardType.AD_FREE, 1, NOW)

    assert granted.to_json() == {
        "premiumTrial": "2030-01-01T00:00:00+00:00",
        "adFree": (NOW + timedelta(days=1)).isoformat(),
    }


def test_from_json_handles_none():
    assert UserEntitlements.from_json("u1", None).active_rewards == {}


def test_ensure_utc_treats_naive_as_utc():
    naive = datetime(2026, 1, 1, 0, 0)
    assert ensure_utc(naive).tzinfo == timezone.utc
    assert ensure_utc(naive).hour == 0
