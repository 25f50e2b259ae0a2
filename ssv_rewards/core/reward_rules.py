"""Reward Rules: business configuration read from the remote config document.

Invariants:
    - Rules are parsed fresh per callback; nothing here caches
    - A reward type missing from the document is disabled
    - A reward type without a positive integer durationDays is treated as missing
    - check_reward_allowed raises ForbiddenError, never returns False

Document shape:
    {"features": {"rewards": {"enabled": bool,
                              "rewards": {"adFree": {"enabled": bool, "durationDays": int}}}}}
"""

from dataclasses import dataclass, field

from ssv_rewards.core.domain_types import RewardType
from ssv_rewards.core.errors import ErrorContext, ForbiddenError


@dataclass(frozen=True)
class RewardDetails:
    enabled: bool
    duration_days: int


@dataclass(frozen=True)
class RewardRules:
    """System-wide flag plus per-RewardType enablement and duration."""
    enabled: bool
    rewards: dict[RewardType, RewardDetails] = field(default_factory=dict)


def parse_reward_rules(document: dict) -> RewardRules:
    """Extract RewardRules from a remote config document. Unknown tokens are ignored."""
    section = (document.get("features") or {}).get("rewards") or {}
    known = {r.value: r for r in RewardType}
    rewards: dict[RewardType, RewardDetails] = {}
    for token, details in (section.get("rewards") or {}).items():
        reward_type = known.get(token)
        if reward_type is None or not isinstance(details, dict):
            continue
        duration_days = _positive_days(details.get("durationDays"))
        if duration_days is None:
            continue
        rewards[reward_type] = RewardDetails(
            enabled=bool(details.get("enabled", False)),
            duration_days=duration_days,
        )
    return RewardRules(enabled=bool(section.get("enabled", False)), rewards=rewards)


def _positive_days(value: object) -> int | None:
    # bool is an int subclass; `true` is not a duration
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        days = value
    elif isinstance(value, str) and value.strip().isdigit():
        days = int(value)
    else:
        return None
    return days if days > 0 else None


def check_reward_allowed(
    rules: RewardRules,
    reward_type: RewardType,
    context: ErrorContext | None = None,
) -> RewardDetails:
    """Return the details for reward_type, or raise ForbiddenError if disabled."""
    if not rules.enabled:
        raise ForbiddenError("Rewards are currently disabled.", context)
    details = rules.rewards.get(reward_type)
    if details is None or not details.enabled:
        raise ForbiddenError(
            f"Reward {reward_type.value} is currently disabled.", context,
        )
    return details
