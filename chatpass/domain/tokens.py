"""
Token codec: `<expiresAtMs>.<base64url signature>`.

Pure string handling, no secrets and no clock.
"""
from __future__ import annotations

import base64
import re

from chatpass.domain.entities import AccessToken
from chatpass.domain.errors import MalformedToken

SEPARATOR = "."
# ms timestamps fit in 19 digits; longer strings are rejected before int()
_DIGITS = re.compile(r"0|[1-9][0-9]{0,18}")


def b64url_encode(raw: bytes) -> str:
    """URL-safe base64 with the trailing '=' padding stripped."""
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def encode_token(token: AccessToken) -> str:
    return f"{token.expires_at}{SEPARATOR}{token.signature}"


def decode_token(text: str) -> AccessToken:
    """
    Split a token string into its parts.
    Raises MalformedToken on anything but exactly two parts with a decimal timestamp.
    """
    if not isinstance(text, str):
        raise MalformedToken("token must be a string")
    parts = text.split(SEPARATOR)
    if len(parts) != 2:
        raise MalformedToken("expected exactly one separator")
    ts_str, signature = parts
    if not _DIGITS.fullmatch(ts_str):
        raise MalformedToken("timestamp is not a canonical decimal integer")
    if not signature:
        raise MalformedToken("empty signature")
    try:
        expires_at = int(ts_str)
    except ValueError as e:
        raise MalformedToken("timestamp out of range") from e
    return AccessToken(expires_at=expires_at, signature=signature)
