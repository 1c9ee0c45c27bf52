import hashlib
import hmac

import pytest

from chatpass.domain import services
from chatpass.domain.errors import ConfigError, MalformedToken, TokenExpired
from chatpass.domain.tokens import b64url_encode
from tests.conftest import NOW_MS, SECRET


def fixed_clock():
    return NOW_MS


def test_signature_is_hmac_sha256_of_decimal_expiry():
    expected = b64url_encode(
        hmac.new(SECRET.encode(), b"1700000000000", hashlib.sha256).digest()
    )
    assert services.sign_expiry(SECRET, 1700000000000) == expected
    assert len(expected) == 43


def test_issue_uses_duration_and_clock():
    token = services.issue(SECRET, 90, clock=fixed_clock)
    ts, sig = token.split(".")
    assert int(ts) == NOW_MS + 90 * 60_000
    assert sig == services.sign_expiry(SECRET, NOW_MS + 90 * 60_000)


@pytest.mark.parametrize("duration", [None, 0, -10, "abc", float("nan"), float("inf"), True])
def test_issue_falls_back_to_default_duration(duration):
    token = services.issue(SECRET, duration, clock=fixed_clock)
    assert int(token.split(".")[0]) == NOW_MS + 360 * 60_000


@pytest.mark.parametrize("secret", [None, ""])
def test_issue_without_secret_raises_config_error(secret):
    with pytest.raises(ConfigError):
        services.issue(secret, 60)
    with pytest.raises(ConfigError):
        services.issue_raw(secret, NOW_MS)


def test_verify_accepts_future_token():
    token = services.issue_raw(SECRET, NOW_MS + 1)
    assert services.verify(SECRET, token, clock=fixed_clock) is True


def test_verify_accepts_token_at_exact_deadline():
    token = services.issue_raw(SECRET, NOW_MS)
    assert services.verify(SECRET, token, clock=fixed_clock) is True


def test_verify_rejects_past_token_even_when_signature_is_correct():
    token = services.issue_raw(SECRET, NOW_MS - 1)
    assert services.verify(SECRET, token, clock=fixed_clock) is False
    with pytest.raises(TokenExpired):
        services.check(SECRET, token, clock=fixed_clock)


def test_verify_rejects_other_secret():
    token = services.issue_raw("another-secret", NOW_MS + 60_000)
    assert services.verify(SECRET, token, clock=fixed_clock) is False


def test_verify_rejects_every_single_character_change_in_signature():
    token = services.issue_raw(SECRET, NOW_MS + 60_000)
    ts, sig = token.split(".")
    for i, ch in enumerate(sig):
        replacement = "A" if ch != "A" else "B"
        tampered = f"{ts}.{sig[:i]}{replacement}{sig[i + 1:]}"
        assert services.verify(SECRET, tampered, clock=fixed_clock) is False, i


def test_verify_rejects_moved_deadline():
    token = services.issue_raw(SECRET, NOW_MS + 60_000)
    _, sig = token.split(".")
    assert services.verify(SECRET, f"{NOW_MS + 120_000}.{sig}", clock=fixed_clock) is False


@pytest.mark.parametrize("token", [None, "", "garbage", "1.2.3", "abc.def"])
def test_verify_fails_closed_on_malformed_input(token):
    assert services.verify(SECRET, token, clock=fixed_clock) is False


def test_check_reports_malformed_separately_from_expired():
    with pytest.raises(MalformedToken):
        services.check(SECRET, "nope", clock=fixed_clock)


def test_verify_without_secret_is_false():
    token = services.issue_raw(SECRET, NOW_MS + 60_000)
    assert services.verify(None, token, clock=fixed_clock) is False


def test_normalize_duration():
    assert services.normalize_duration("90") == 90
    assert services.normalize_duration(1.5) == 1.5
    assert services.normalize_duration(None, default=10) == 10


def test_secure_compare_handles_non_ascii():
    assert services.secure_compare("é", "é") is True
    assert services.secure_compare("é", "e") is False


def test_verify_fails_closed_on_huge_timestamp():
    assert services.verify(SECRET, "9" * 5000 + ".abc", clock=fixed_clock) is False
    with pytest.raises(MalformedToken):
        services.check(SECRET, "9" * 5000 + ".abc", clock=fixed_clock)
