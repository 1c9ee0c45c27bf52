# chatpass/domain/services.py
from __future__ import annotations

import hashlib
import hmac
import math
import time
from typing import Any, Callable, Optional

from chatpass.domain.entities import AccessToken
from chatpass.domain.errors import ConfigError, InvalidToken, TokenExpired
from chatpass.domain.tokens import b64url_encode, decode_token, encode_token

DEFAULT_DURATION_MINUTES = 360
MS_PER_MINUTE = 60_000


def now_ms() -> int:
    """Wall-clock milliseconds since epoch."""
    return time.time_ns() // 1_000_000


def secure_compare(a: str, b: str) -> bool:
    """
    Constant-time comparison for secrets.
    Accepts strings; falls back to bytes if needed.
    """
    try:
        # hmac.compare_digest supports str if types match
        return hmac.compare_digest(a, b)
    except TypeError:
        return hmac.compare_digest(a.encode("utf-8"), b.encode("utf-8"))


def sign_expiry(secret: str, expires_at: int) -> str:
    """
    Return base64url(HMAC-SHA256(secret, str(expires_at))) without padding.
    """
    mac = hmac.new(
        secret.encode("utf-8"), str(expires_at).encode("utf-8"), hashlib.sha256
    )
    return b64url_encode(mac.digest())


def normalize_duration(value: Any, default: int = DEFAULT_DURATION_MINUTES):
    """
    Coerce a requested duration (minutes) to a positive finite number.
    Anything else (missing, non-numeric, zero, negative, NaN) gives `default`.
    """
    if value is None or isinstance(value, bool):
        return default
    try:
        minutes = float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(minutes) or minutes <= 0:
        return default
    return int(minutes) if minutes.is_integer() else minutes


def issue_raw(secret: Optional[str], expires_at: int) -> str:
    if not secret:
        raise ConfigError("TOKEN_SECRET is not configured")
    token = AccessToken(expires_at=expires_at, signature=sign_expiry(secret, expires_at))
    return encode_token(token)


def issue(
    secret: Optional[str],
    duration_minutes: Any = DEFAULT_DURATION_MINUTES,
    *,
    clock: Callable[[], int] = now_ms,
) -> str:
    """
    Issue a token valid for `duration_minutes` from now.
    Raises ConfigError if the secret is missing.
    """
    if not secret:
        raise ConfigError("TOKEN_SECRET is not configured")
    minutes = normalize_duration(duration_minutes)
    expires_at = int(clock() + minutes * MS_PER_MINUTE)
    return issue_raw(secret, expires_at)


def check(
    secret: Optional[str], token: str, *, clock: Callable[[], int] = now_ms
) -> AccessToken:
    """
    Parse and verify a token. Raises MalformedToken or TokenExpired
    (expired deadline and bad signature are reported the same way).
    """
    parsed = decode_token(token)
    if parsed.is_expired(clock()):
        raise TokenExpired("deadline passed")
    if not secret:
        raise TokenExpired("no secret to verify against")
    expected = sign_expiry(secret, parsed.expires_at)
    if not secure_compare(expected, parsed.signature):
        raise TokenExpired("signature mismatch")
    return parsed


def verify(
    secret: Optional[str], token: Optional[str], *, clock: Callable[[], int] = now_ms
) -> bool:
    """Fail-closed boolean form of check(); never raises."""
    if not token:
        return False
    try:
        check(secret, token, clock=clock)
    except InvalidToken:
        return False
    return True
