"""Callback Query Helpers: raw query handling shared by the SSV verifiers.

Invariants:
    - signed_content keeps the remaining parts byte-for-byte (order and percent-encoding untouched)
    - query_params decodes values; first occurrence of a repeated name wins
"""

from urllib.parse import parse_qsl, urlsplit


def raw_query(uri: str) -> str:
    """Return the undecoded query component of a URI ('' if none)."""
    return urlsplit(uri).query


def signed_content(query: str, excluded: tuple[str, ...]) -> str:
    """Drop every `name=...` part whose name is in `excluded`, keep the rest as-is."""
    if not query:
        return ""
    parts = [
        part for part in query.split("&")
        if not any(part.startswith(f"{name}=") for name in excluded)
    ]
    return "&".join(parts)


def query_params(uri: str) -> dict[str, str]:
    params: dict[str, str] = {}
    for name, value in parse_qsl(raw_query(uri), keep_blank_values=True):
        params.setdefault(name, value)
    return params
