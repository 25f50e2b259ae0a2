"""Reward Verifier Contract: one interface over every network's SSV signing scheme.

Invariants:
    - verify() returns a VerifiedRewardPayload only after the cryptographic check passed
    - Failures raise InvalidSignatureError, UnrecognizedValueError or MisconfiguredSecretError
    - Implementations hold no request-scoped mutable state

Design Decisions:
    - Protocol over ABC: the orchestrator receives an explicit {AdPlatform: RewardVerifier}
      mapping built once at startup, no dispatch on platform name strings
"""

from typing import Protocol

from ssv_rewards.core.domain_types import AdPlatform, VerifiedRewardPayload


class RewardVerifier(Protocol):
    """Turns a raw callback URI into a verified, platform-agnostic payload."""
    platform: AdPlatform

    async def verify(self, uri: str) -> VerifiedRewardPayload: ...
