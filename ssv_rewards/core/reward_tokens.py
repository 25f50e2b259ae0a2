"""Reward Token Parsing: explicit mapping from network-supplied tokens to RewardType.

Invariants:
    - Matching is case-insensitive on the RewardType wire value
    - Any token outside the table raises UnrecognizedValueError
    - REWARD_TOKENS covers every RewardType member (asserted in tests)
"""

from ssv_rewards.core.domain_types import RewardType
from ssv_rewards.core.errors import ErrorContext, UnrecognizedValueError


REWARD_TOKENS: dict[str, RewardType] = {
    "adfree": RewardType.AD_FREE,
    "dailydigest": RewardType.DAILY_DIGEST,
}


def parse_reward_token(
    token: str, context: ErrorContext | None = None,
) -> RewardType:
    reward_type = REWARD_TOKENS.get(token.strip().lower())
    if reward_type is None:
        raise UnrecognizedValueError(token, context)
    return reward_type


def parse_rewards_field(rewards: str) -> tuple[int | None, str]:
    """Split an IronSource-style `"<amount> <token>"` field.

    Only the two-part shape is structural; a non-integer amount comes back as None.
    Raises ValueError on structural problems; callers decide the error class.
    """
    parts = rewards.split(" ")
    if len(parts) != 2 or not parts[1]:
        raise ValueError(f"Invalid rewards format: {rewards}")
    try:
        amount = int(parts[0])
    except ValueError:
        amount = None
    return amount, parts[1]
