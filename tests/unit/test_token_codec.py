import pytest

from chatpass.domain.entities import AccessToken
from chatpass.domain.errors import MalformedToken
from chatpass.domain.tokens import b64url_encode, decode_token, encode_token


def test_encode_and_decode_token():
    token = AccessToken(expires_at=1700000000000, signature="abc_-XYZ")
    assert encode_token(token) == "1700000000000.abc_-XYZ"
    assert decode_token("1700000000000.abc_-XYZ") == token


def test_b64url_has_no_padding_and_is_url_safe():
    encoded = b64url_encode(b"\xfb\xff\xfe")
    assert encoded == "-__-"
    assert "=" not in b64url_encode(b"a")


@pytest.mark.parametrize(
    "raw",
    [
        "",
        "123",
        "123.abc.def",
        "abc.signature",
        "12a4.signature",
        "-5.signature",
        " 12.signature",
        "1e3.signature",
        "0123.signature",
        "123.",
    ],
)
def test_malformed_tokens_raise(raw):
    with pytest.raises(MalformedToken):
        decode_token(raw)


def test_non_string_is_malformed():
    with pytest.raises(MalformedToken):
        decode_token(None)


def test_access_token_expiry_boundary():
    token = AccessToken(expires_at=1000, signature="x")
    assert token.is_expired(1000) is False
    assert token.is_expired(1001) is True


@pytest.mark.parametrize("digits", [20, 4301, 5000])
def test_oversized_timestamp_is_malformed(digits):
    with pytest.raises(MalformedToken):
        decode_token("9" * digits + ".abc")


def test_largest_accepted_timestamp():
    token = decode_token("9" * 19 + ".abc")
    assert token.expires_at == int("9" * 19)
