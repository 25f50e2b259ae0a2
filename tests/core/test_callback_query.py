"""Callback Query: signed-content reconstruction and parameter decoding."""

from ssv_rewards.core.callback_query import query_params, raw_query, signed_content

EXCLUDED = ("signature", "key_id")


def test_signed_content_strips_signature_and_key_id():
    query = "a=1&b=2&signature=abc&key_id=k1"
    assert signed_content(query, EXCLUDED) == "a=1&b=2"


def test_signed_content_keeps_order_and_encoding():
    query = "z=%2Fpath&a=hello+world&signature=x&m=caf%C3%A9&key_id=1"
    assert signed_content(query, EXCLUDED) == "z=%2Fpath&a=hello+world&m=caf%C3%A9"


def test_signed_content_keeps_similarly_named_params():
    query = "signature_version=2&key_ids=3&signature=x"
    assert signed_content(query, EXCLUDED) == "signature_version=2&key_ids=3"


def test_signed_content_empty_query():
    assert signed_content("", EXCLUDED) == ""


def test_raw_query_is_undecoded():
    assert raw_query("https://h/p?a=%20b&c=d") == "a=%20b&c=d"


def test_query_params_decodes_and_keeps_first():
    params = query_params("https://h/p?a=1&rewards=10%20adFree&a=2&empty=")
    assert params == {"a": "1", "rewards": "10 adFree", "empty": ""}
