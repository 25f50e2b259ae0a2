"""Reward Callback Schemas: required parameters, aliases and lenient amounts.

Tests cover:
    - Each network's required parameter set (missing -> InvalidSignatureError)
    - AppLovin reward_type falls back to custom_data
    - Non-integer amounts are dropped, not rejected
"""

import pytest

from ssv_rewards.core.errors import InvalidSignatureError
from ssv_rewards.schemas.reward_callbacks import (
    AdMobRewardCallback, AppLovinRewardCallback, IronSourceRewardCallback,
)

ADMOB = (
    "https://h/cb?reward_amount=1&transaction_id=tx1&user_id=u1"
    "&custom_data=adFree&signature=sig&key_id=k1"
)


def test_admob_parses_all_fields():
    cb = AdMobRewardCallback.from_uri(ADMOB)
    assert cb.transaction_id == "tx1"
    assert cb.user_id == "u1"
    assert cb.reward_item == "adFree"
    assert cb.key_id == "k1"
    assert cb.reward_amount == 1


@pytest.mark.parametrize(
    "param", ["transaction_id", "user_id", "custom_data", "signature", "key_id"],
)
def test_admob_missing_required_param(param):
    parts = [p for p in ADMOB.split("?")[1].split("&") if not p.startswith(f"{param}=")]
    with pytest.raises(InvalidSignatureError) as exc:
        AdMobRewardCallback.from_uri("https://h/cb?" + "&".join(parts))
    assert param in exc.value.message


def test_admob_empty_param_rejected():
    with pytest.raises(InvalidSignatureError):
        AdMobRewardCallback.from_uri(ADMOB.replace("user_id=u1", "user_id="))


def test_admob_non_integer_amount_is_dropped():
    cb = AdMobRewardCallback.from_uri(ADMOB.replace("reward_amount=1", "reward_amount=lots"))
    assert cb.reward_amount is None


def test_applovin_reward_type_falls_back_to_custom_data():
    cb = AppLovinRewardCallback.from_uri(
        "https://h/cb?event_id=e&user_id=u&ts=1&signature=s&custom_data=adFree",
    )
    assert cb.reward_item == "adFree"


def test_applovin_prefers_reward_type():
    cb = AppLovinRewardCallback.from_uri(
        "https://h/cb?event_id=e&user_id=u&ts=1&signature=s"
        "&reward_type=dailyDigest&custom_data=adFree",
    )
    assert cb.reward_item == "dailyDigest"


def test_applovin_missing_reward_type():
    with pytest.raises(InvalidSignatureError):
        AppLovinRewardCallback.from_uri("https://h/cb?event_id=e&user_id=u&ts=1&signature=s")


def test_ironsource_uses_wire_names():
    cb = IronSourceRewardCallback.from_uri(
        "https://h/cb?appUserId=u3&rewards=10%20adFree&eventId=e1&timestamp=1&signature=s",
    )
    assert cb.app_user_id == "u3"
    assert cb.event_id == "e1"
    assert cb.rewards == "10 adFree"


def test_ironsource_missing_event_id():
    with pytest.raises(InvalidSignatureError) as exc:
        IronSourceRewardCallback.from_uri(
            "https://h/cb?appUserId=u3&rewards=10%20adFree&timestamp=1&signature=s",
        )
    assert "eventId" in exc.value.message
