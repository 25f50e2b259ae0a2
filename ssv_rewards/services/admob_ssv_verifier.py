"""AdMob SSV Verifier: ECDSA verification against Google's rotating public key set.

Invariants:
    - Signed content = raw query minus `signature=` and `key_id=` parts, original order and encoding
    - Signature is URL-safe base64 (padding optional) of a DER ECDSA P-256/SHA-256 signature
    - Unknown key_id and signature mismatch both raise InvalidSignatureError
    - Reward token is parsed only after the signature check passed

Design Decisions:
    - Key set memoized in memory keyed by key_id, refreshed after cache_ttl_seconds
    - Concurrent cold-start fetches may duplicate work; the last writer wins and both
      results are equivalent, so no lock is taken
"""

import base64
import binascii
import logging
import time
from typing import Callable

from cryptography.exceptions import InvalidSignature as CryptoInvalidSignature
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import load_pem_public_key

from ssv_rewards.core.callback_query import raw_query, signed_content
from ssv_rewards.core.domain_types import (
    AdPlatform, ExternalEventId, UserId, VerifiedRewardPayload,
)
from ssv_rewards.core.errors import ErrorContext, InvalidSignatureError
from ssv_rewards.core.repository_protocols import VerifierKeySource
from ssv_rewards.core.reward_tokens import parse_reward_token
from ssv_rewards.schemas.reward_callbacks import AdMobRewardCallback

logger = logging.getLogger(__name__)

UNSIGNED_PARAMS = ("signature", "key_id")


class AdMobSsvVerifier:
    """RewardVerifier for Google AdMob server-side verification callbacks."""

    platform = AdPlatform.ADMOB

    def __init__(
        self,
        key_source: VerifierKeySource,
        cache_ttl_seconds: float = 24 * 60 * 60,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._key_source = key_source
        self._cache_ttl_seconds = cache_ttl_seconds
        self._clock = clock
        self._keys: dict[str, ec.EllipticCurvePublicKey] | None = None
        self._cache_expires_at = 0.0

    async def verify(self, uri: str) -> VerifiedRewardPayload:
        context = ErrorContext(platform=self.platform.value)
        callback = AdMobRewardCallback.from_uri(uri, context)
        context.event_id = callback.transaction_id

        content = signed_content(raw_query(uri), UNSIGNED_PARAMS).encode("utf-8")
        signature = _decode_web_safe_base64(callback.signature, context)

        public_key = await self._get_public_key(callback.key_id)
        if public_key is None:
            logger.warning(
                "AdMob public key not found",
                extra={"key_id": callback.key_id, "platform": self.platform.value},
            )
            raise InvalidSignatureError("Invalid key_id.", context)

        try:
            public_key.verify(signature, content, ec.ECDSA(hashes.SHA256()))
        except (CryptoInvalidSignature, ValueError):
            logger.warning(
                "AdMob SSV signature verification failed",
                extra={"event_id": callback.transaction_id, "key_id": callback.key_id},
            )
            raise InvalidSignatureError("Invalid signature.", context)

        logger.info(
            "AdMob SSV signature verified",
            extra={"event_id": callback.transaction_id},
        )
        return VerifiedRewardPayload(
            external_event_id=ExternalEventId(callback.transaction_id),
            user_id=UserId(callback.user_id),
            reward_type=parse_reward_token(callback.reward_item, context),
            raw_amount=callback.reward_amount,
        )

    async def _get_public_key(self, key_id: str) -> ec.EllipticCurvePublicKey | None:
        """Look up key_id, fetching the key set on first use or after expiry."""
        if self._keys is None or self._clock() >= self._cache_expires_at:
            fetched = await self._key_source.fetch_keys()
            self._keys = _load_keys(fetched)
            self._cache_expires_at = self._clock() + self._cache_ttl_seconds
        return self._keys.get(key_id)


def _load_keys(pems: dict[str, str]) -> dict[str, ec.EllipticCurvePublicKey]:
    keys: dict[str, ec.EllipticCurvePublicKey] = {}
    for key_id, pem in pems.items():
        try:
            key = load_pem_public_key(pem.encode("utf-8"))
        except ValueError as e:
            logger.warning(f"Skipping unparseable verifier key: {e}", extra={"key_id": key_id})
            continue
        if not isinstance(key, ec.EllipticCurvePublicKey):
            logger.warning("Skipping non-EC verifier key", extra={"key_id": key_id})
            continue
        keys[key_id] = key
    return keys


def _decode_web_safe_base64(value: str, context: ErrorContext) -> bytes:
    padded = value + "=" * (-len(value) % 4)
    try:
        return base64.urlsafe_b64decode(padded)
    except (binascii.Error, ValueError):
        raise InvalidSignatureError("Malformed signature encoding.", context)
