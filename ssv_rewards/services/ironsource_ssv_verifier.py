"""IronSource SSV Verifier: HMAC-SHA256 with the private key over concatenated fields.

Invariants:
    - Expected signature = HMAC-SHA256(key, timestamp + eventId + appUserId + rewards), lowercase hex
    - Missing private key raises MisconfiguredSecretError
    - Structurally malformed `rewards` raises InvalidSignatureError
    - Well-formed `rewards` with an unmapped token raises UnrecognizedValueError
"""

import hashlib
import hmac
import logging

from ssv_rewards.core.domain_types import (
    AdPlatform, ExternalEventId, UserId, VerifiedRewardPayload,
)
from ssv_rewards.core.errors import (
    ErrorContext, InvalidSignatureError, MisconfiguredSecretError,
)
from ssv_rewards.core.reward_tokens import parse_reward_token, parse_rewards_field
from ssv_rewards.schemas.reward_callbacks import IronSourceRewardCallback

logger = logging.getLogger(__name__)


def ironsource_signature(
    private_key: str, timestamp: str, event_id: str, app_user_id: str, rewards: str,
) -> str:
    return hmac.new(
        private_key.encode("utf-8"),
        f"{timestamp}{event_id}{app_user_id}{rewards}".encode("utf-8"),
        hashlib.sha256,
    ).hexdigest()


class IronSourceSsvVerifier:
    """RewardVerifier for IronSource server-side rewarded video callbacks."""

    platform = AdPlatform.IRONSOURCE

    def __init__(self, private_key: str | None):
        self._private_key = private_key

    async def verify(self, uri: str) -> VerifiedRewardPayload:
        context = ErrorContext(platform=self.platform.value)
        if not self._private_key:
            logger.error("IRONSOURCE_SSV_PRIVATE_KEY is not set")
            raise MisconfiguredSecretError(
                "IronSource verifier is not configured.", context,
            )

        callback = IronSourceRewardCallback.from_uri(uri, context)
        context.event_id = callback.event_id

        expected = ironsource_signature(
            self._private_key,
            callback.timestamp,
            callback.event_id,
            callback.app_user_id,
            callback.rewards,
        )
        if not hmac.compare_digest(expected.encode(), callback.signature.encode()):
            logger.warning(
                "IronSource SSV signature verification failed",
                extra={"event_id": callback.event_id, "platform": self.platform.value},
            )
            raise InvalidSignatureError("Invalid signature.", context)

        try:
            amount, token = parse_rewards_field(callback.rewards)
        except ValueError:
            raise InvalidSignatureError(
                f"Invalid rewards format: {callback.rewards}", context,
            )

        logger.info(
            "IronSource SSV signature verified", extra={"event_id": callback.event_id},
        )
        return VerifiedRewardPayload(
            external_event_id=ExternalEventId(callback.event_id),
            user_id=UserId(callback.app_user_id),
            reward_type=parse_reward_token(token, context),
            raw_amount=amount,
        )
