"""UserEntitlements ORM: per-user reward expiry map.

Invariants:
    - user_id is the primary key (one row per user)
    - active_rewards maps RewardType value -> ISO-8601 UTC expiry
    - Rows are created on first grant and never deleted by the rewards core

Design Decisions:
    - JSON column for active_rewards: reward set grows without migrations
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from ssv_rewards.db.base import Base


class UserEntitlementsRow(Base):
    """Persisted entitlement windows for one user."""
    __tablename__ = "user_entitlements"

    user_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    active_rewards: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )
