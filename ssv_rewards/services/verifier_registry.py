"""Verifier Registry: builds the static AdPlatform -> RewardVerifier mapping at startup.

Invariants:
    - Called once per process (FastAPI lifespan); the AdMob key cache lives as long as the app
    - Every AdPlatform member gets a verifier; missing secrets surface on use, not here
"""

from ssv_rewards.config import Settings
from ssv_rewards.core.domain_types import AdPlatform
from ssv_rewards.infrastructure.verifier_keys_client import HttpVerifierKeySource
from ssv_rewards.services.admob_ssv_verifier import AdMobSsvVerifier
from ssv_rewards.services.applovin_ssv_verifier import AppLovinSsvVerifier
from ssv_rewards.services.ironsource_ssv_verifier import IronSourceSsvVerifier
from ssv_rewards.services.reward_verifier import RewardVerifier


def build_verifiers(settings: Settings) -> dict[AdPlatform, RewardVerifier]:
    return {
        AdPlatform.ADMOB: AdMobSsvVerifier(
            key_source=HttpVerifierKeySource(
                settings.admob_verifier_keys_url,
                timeout_seconds=settings.verifier_keys_timeout_seconds,
            ),
            cache_ttl_seconds=settings.admob_key_cache_ttl_seconds,
        ),
        AdPlatform.APPLOVIN: AppLovinSsvVerifier(settings.applovin_ssv_signing_key),
        AdPlatform.IRONSOURCE: IronSourceSsvVerifier(settings.ironsource_ssv_private_key),
    }
