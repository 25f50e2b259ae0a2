"""Reward Callback Schemas: Pydantic models for each network's SSV query parameters.

Invariants:
    - Required parameters are non-empty strings; absence raises InvalidSignatureError
    - Parsing never checks signatures (that is the verifier's job)
    - Unknown extra parameters are ignored (networks add fields over time)

Design Decisions:
    - Field aliases carry the wire names; Python attributes stay snake_case
    - from_uri wraps pydantic's ValidationError so callers see one error taxonomy
"""

from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from ssv_rewards.core.callback_query import query_params
from ssv_rewards.core.errors import ErrorContext, InvalidSignatureError

NonEmptyStr = Annotated[str, Field(min_length=1)]


class _CallbackModel(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    @classmethod
    def from_uri(cls, uri: str, context: ErrorContext | None = None):
        """Parse the query of `uri`, raising InvalidSignatureError on missing fields."""
        try:
            return cls.model_validate(query_params(uri))
        except ValidationError as e:
            first = e.errors()[0]
            name = ".".join(str(loc) for loc in first["loc"]) or "parameters"
            raise InvalidSignatureError(f"Missing or invalid {name}", context)


class AdMobRewardCallback(_CallbackModel):
    """AdMob SSV. `custom_data` carries the reward token set by the client."""
    transaction_id: NonEmptyStr
    user_id: NonEmptyStr
    reward_item: str = Field(alias="custom_data", min_length=1)
    signature: NonEmptyStr
    key_id: NonEmptyStr
    reward_amount: int | None = None

    @field_validator("reward_amount", mode="before")
    @classmethod
    def lenient_amount(cls, v: Any) -> int | None:
        # Logged only, so an unparseable amount is dropped rather than rejected
        try:
            return int(v) if v is not None else None
        except (TypeError, ValueError):
            return None


class AppLovinRewardCallback(_CallbackModel):
    """AppLovin MAX S2S. Reward token in `reward_type`, falling back to `custom_data`."""
    event_id: NonEmptyStr
    user_id: NonEmptyStr
    ts: NonEmptyStr
    signature: NonEmptyStr
    reward_item: str = Field(alias="reward_type", min_length=1)
    amount: int | None = None

    @model_validator(mode="before")
    @classmethod
    def fallback_to_custom_data(cls, data: Any) -> Any:
        if isinstance(data, dict) and not data.get("reward_type") and data.get("custom_data"):
            data = {**data, "reward_type": data["custom_data"]}
        return data

    @field_validator("amount", mode="before")
    @classmethod
    def lenient_amount(cls, v: Any) -> int | None:
        try:
            return int(v) if v is not None else None
        except (TypeError, ValueError):
            return None


class IronSourceRewardCallback(_CallbackModel):
    """IronSource SSV. `rewards` is the compound "<amount> <token>" field."""
    app_user_id: str = Field(alias="appUserId", min_length=1)
    rewards: NonEmptyStr
    event_id: str = Field(alias="eventId", min_length=1)
    timestamp: NonEmptyStr
    signature: NonEmptyStr
