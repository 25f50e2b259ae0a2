"""IdempotencyRecord ORM: marker that an external event was fully processed.

Invariants:
    - id = sha256("<scope>:<event_id>") hex; primary key enforces uniqueness
    - Rows are immutable once inserted
    - expires_at drives external TTL garbage collection (not performed here)
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from ssv_rewards.db.base import Base


class IdempotencyRecord(Base):
    """Processed-event marker scoped by a string tag."""
    __tablename__ = "idempotency_records"
    __table_args__ = (
        Index("ix_idempotency_records_expires_at", "expires_at"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    scope: Mapped[str] = mapped_column(String(50), nullable=False)
    event_id: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False,
    )
