"""Domain Types: rich types that replace bare primitives across the codebase.

Invariants:
    - UserId and ExternalEventId wrap str; never pass bare strings through the orchestrator
    - RewardType and AdPlatform are closed sets; values are the wire tokens
    - VerifiedRewardPayload is only constructed after a verifier's cryptographic check passed

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON (remote config keys, entitlement maps) without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

UserId = NewType("UserId", str)
ExternalEventId = NewType("ExternalEventId", str)


# ─── Enums ───────────────────────────────────────────────────────

class RewardType(str, Enum):
    """Centrally defined set of time-boxed rewards a user can earn."""
    AD_FREE = "adFree"
    DAILY_DIGEST = "dailyDigest"


class AdPlatform(str, Enum):
    """Ad-mediation networks that deliver SSV callbacks."""
    ADMOB = "admob"
    APPLOVIN = "applovin"
    IRONSOURCE = "ironsource"


# Idempotency scope for reward callbacks
REWARD_SCOPE = "reward"


# ─── Transient Payloads ──────────────────────────────────────────

@dataclass(frozen=True)
class VerifiedRewardPayload:
    """Platform-agnostic result of a successful signature verification."""
    external_event_id: ExternalEventId
    user_id: UserId
    reward_type: RewardType
    raw_amount: int | None = None
