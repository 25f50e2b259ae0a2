"""ORM Models: SQLAlchemy declarative models for persisted reward state.

Invariants:
    - All models inherit from Base (db/base.py)
    - Imported here so Base.metadata is complete before create_all / autogenerate
"""

from ssv_rewards.models.user_entitlements import UserEntitlementsRow  # noqa: F401
from ssv_rewards.models.idempotency_record import IdempotencyRecord  # noqa: F401
from ssv_rewards.models.remote_config import RemoteConfig  # noqa: F401
