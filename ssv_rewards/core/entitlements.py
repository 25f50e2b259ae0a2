"""User Entitlements: per-user reward expiry map and the additive-duration merge.

Invariants:
    - A reward is active iff its expiry is strictly after `now`
    - compute_new_expiry is PURE: max(now, current) + duration_days
    - Entries are only ever overwritten, never removed, including tokens this build
      does not know (kept verbatim in `unrecognized` and written back by to_json)
    - All timestamps are timezone-aware UTC

Design Decisions:
    - Merge expressed as a pure function: the shell does the read-modify-write around it,
      atomicity is the storage layer's concern
    - to_json/from_json use ISO-8601 strings keyed by RewardType value (JSON column friendly)
"""

from dataclasses import dataclass, field, replace
from datetime import datetime, timedelta, timezone

from ssv_rewards.core.domain_types import RewardType, UserId


@dataclass(frozen=True)
class UserEntitlements:
    """Entitlement record keyed by user_id."""
    user_id: UserId
    active_rewards: dict[RewardType, datetime] = field(default_factory=dict)
    unrecognized: dict[str, str] = field(default_factory=dict)

    def expiry_for(self, reward_type: RewardType) -> datetime | None:
        return self.active_rewards.get(reward_type)

    def is_active(self, reward_type: RewardType, now: datetime) -> bool:
        expiry = self.active_rewards.get(reward_type)
        return expiry is not None and expiry > now

    def with_expiry(
        self, reward_type: RewardType, expiry: datetime,
    ) -> "UserEntitlements":
        """Return a copy with one reward's expiry overwritten."""
        rewards = dict(self.active_rewards)
        rewards[reward_type] = expiry
        return replace(self, active_rewards=rewards)

    def to_json(self) -> dict[str, str]:
        data = dict(self.unrecognized)
        for reward_type, expiry in self.active_rewards.items():
            data[reward_type.value] = expiry.isoformat()
        return data

    @classmethod
    def from_json(cls, user_id: str, data: dict | None) -> "UserEntitlements":
        """Rebuild from a JSON map. Unknown tokens are carried through untouched."""
        known = {r.value: r for r in RewardType}
        rewards: dict[RewardType, datetime] = {}
        unrecognized: dict[str, str] = {}
        for token, raw in (data or {}).items():
            reward_type = known.get(token)
            if reward_type is None:
                unrecognized[token] = raw
                continue
            rewards[reward_type] = ensure_utc(datetime.fromisoformat(raw))
        return cls(
            user_id=UserId(user_id),
            active_rewards=rewards,
            unrecognized=unrecognized,
        )


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC (SQLite drops tzinfo)."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def compute_new_expiry(
    current_expiry: datetime | None, now: datetime, duration_days: int,
) -> datetime:
    """Extend an active window from its expiry; restart an expired one from now."""
    start = now
    if current_expiry is not None and current_expiry > now:
        start = current_expiry
    return start + timedelta(days=duration_days)


def grant(
    existing: UserEntitlements | None,
    user_id: UserId,
    reward_type: RewardType,
    duration_days: int,
    now: datetime,
) -> UserEntitlements:
    """Apply one grant to an existing (or absent) record. Pure."""
    base = existing or UserEntitlements(user_id=user_id)
    new_expiry = compute_new_expiry(
        base.expiry_for(reward_type), now, duration_days,
    )
    return base.with_expiry(reward_type, new_expiry)
