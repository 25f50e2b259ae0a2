"""AppLovin SSV Verifier: MD5 digest over concatenated fields plus shared signing key.

Invariants:
    - Expected signature = md5(event_id + user_id + ts + signing_key), lowercase hex
    - Comparison is constant-time (hmac.compare_digest)
    - Missing signing key raises MisconfiguredSecretError before the request is parsed
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
from ssv_rewards.core.reward_tokens import parse_reward_token
from ssv_rewards.schemas.reward_callbacks import AppLovinRewardCallback

logger = logging.getLogger(__name__)


def applovin_signature(event_id: str, user_id: str, ts: str, signing_key: str) -> str:
    return hashlib.md5(
        f"{event_id}{user_id}{ts}{signing_key}".encode("utf-8"),
    ).hexdigest()


class AppLovinSsvVerifier:
    """RewardVerifier for AppLovin MAX S2S reward callbacks."""

    platform = AdPlatform.APPLOVIN

    def __init__(self, signing_key: str | None):
        self._signing_key = signing_key

    async def verify(self, uri: str) -> VerifiedRewardPayload:
        context = ErrorContext(platform=self.platform.value)
        if not self._signing_key:
            logger.error("APPLOVIN_SSV_SIGNING_KEY is not set")
            raise MisconfiguredSecretError(
                "AppLovin verifier is not configured.", context,
            )

        callback = AppLovinRewardCallback.from_uri(uri, context)
        context.event_id = callback.event_id

        expected = applovin_signature(
            callback.event_id, callback.user_id, callback.ts, self._signing_key,
        )
        if not hmac.compare_digest(expected.encode(), callback.signature.encode()):
            logger.warning(
                "AppLovin signature mismatch",
                extra={"event_id": callback.event_id, "platform": self.platform.value},
            )
            raise InvalidSignatureError("Invalid signature.", context)

        reward_type = parse_reward_token(callback.reward_item, context)
        logger.info(
            "AppLovin signature verified", extra={"event_id": callback.event_id},
        )
        return VerifiedRewardPayload(
            external_event_id=ExternalEventId(callback.event_id),
            user_id=UserId(callback.user_id),
            reward_type=reward_type,
            raw_amount=callback.amount,
        )
