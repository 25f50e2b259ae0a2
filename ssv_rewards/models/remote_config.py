"""RemoteConfig ORM: read-only business configuration documents.

Written by the configuration distribution mechanism; the rewards core only reads.
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from ssv_rewards.db.base import Base


class RemoteConfig(Base):
    __tablename__ = "remote_configs"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    data: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
