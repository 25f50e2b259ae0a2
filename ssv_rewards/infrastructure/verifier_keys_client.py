"""Verifier Keys Client: fetches a network's published public key set over HTTPS.

Invariants:
    - Returns {key_id: PEM}; key ids normalized to str (AdMob publishes them as ints)
    - Transport errors, non-2xx responses and malformed bodies all map to KeyFetchError
    - Entries missing keyId or pem are skipped, not fatal

Design Decisions:
    - One httpx.AsyncClient per fetch: fetches happen once per cache TTL, pooling buys nothing
    - transport injectable so tests use httpx.MockTransport instead of the network
"""

import logging

import httpx

from ssv_rewards.core.errors import KeyFetchError

logger = logging.getLogger(__name__)


class HttpVerifierKeySource:
    """VerifierKeySource for JSON key sets shaped {"keys": [{"keyId": ..., "pem": ...}]}."""

    def __init__(
        self,
        url: str,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.url = url
        self.timeout_seconds = timeout_seconds
        self._transport = transport

    async def fetch_keys(self) -> dict[str, str]:
        logger.info(f"Fetching verifier keys from {self.url}")
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds, transport=self._transport,
            ) as client:
                response = await client.get(self.url)
                response.raise_for_status()
                body = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Verifier key fetch failed: {e}")
            raise KeyFetchError(str(e))
        except ValueError as e:
            logger.error(f"Verifier key response is not JSON: {e}")
            raise KeyFetchError("response is not valid JSON")

        return _parse_key_set(body)


def _parse_key_set(body: object) -> dict[str, str]:
    if not isinstance(body, dict) or not isinstance(body.get("keys"), list):
        raise KeyFetchError("response has no 'keys' list")
    keys: dict[str, str] = {}
    for entry in body["keys"]:
        if not isinstance(entry, dict):
            continue
        key_id, pem = entry.get("keyId"), entry.get("pem")
        if key_id is None or not pem:
            continue
        keys[str(key_id)] = str(pem)
    return keys
