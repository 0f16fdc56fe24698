"""Tests for TokenCodec: round-trip, expiry boundary, tamper and claim rejection."""

import base64
from datetime import datetime, timedelta, timezone

import jwt
import pytest

from tasklist.core.errors import InvalidTokenError, SigningError
from tasklist.core.token_codec import TokenCodec

SECRET = "codec-test-secret-0123456789abcdef0123456789"
ISSUED_AT = datetime(2026, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


class _Clock:
    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now


def _codec(clock=None, secret=SECRET):
    return TokenCodec(secret, clock=clock or _Clock(ISSUED_AT))


def _b64(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode()


def _unb64(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


@pytest.mark.parametrize("identity", ["alice", "firstUser", "user@example.com", "ü-名前"])
def test_verify_returns_issued_identity(identity):
    codec = _codec()
    assert codec.verify(codec.issue(identity)) == identity


def test_token_carries_user_id_and_exp_claims():
    token = _codec().issue("alice")
    claims = jwt.decode(token, SECRET, algorithms=["HS256"], options={"verify_exp": False})
    assert claims["user_id"] == "alice"
    assert claims["exp"] == int((ISSUED_AT + timedelta(minutes=15)).timestamp())


def test_token_valid_just_before_expiry():
    clock = _Clock(ISSUED_AT)
    codec = _codec(clock)
    token = codec.issue("alice")
    clock.now = ISSUED_AT + timedelta(minutes=15) - timedelta(seconds=1)
    assert codec.verify(token) == "alice"


def test_token_rejected_at_expiry():
    clock = _Clock(ISSUED_AT)
    codec = _codec(clock)
    token = codec.issue("alice")
    clock.now = ISSUED_AT + timedelta(minutes=15)
    with pytest.raises(InvalidTokenError):
        codec.verify(token)


def test_token_rejected_long_after_expiry():
    clock = _Clock(ISSUED_AT)
    codec = _codec(clock)
    token = codec.issue("alice")
    clock.now = ISSUED_AT + timedelta(days=2)
    with pytest.raises(InvalidTokenError):
        codec.verify(token)


def test_custom_ttl_respected():
    clock = _Clock(ISSUED_AT)
    codec = TokenCodec(SECRET, ttl=timedelta(minutes=1), clock=clock)
    token = codec.issue("alice")
    clock.now = ISSUED_AT + timedelta(seconds=61)
    with pytest.raises(InvalidTokenError):
        codec.verify(token)


def test_flipping_any_signature_byte_rejects_token():
    codec = _codec()
    header, payload, signature = codec.issue("alice").split(".")
    raw = _unb64(signature)
    for i in range(len(raw)):
        tampered = bytearray(raw)
        tampered[i] ^= 0x01
        forged = f"{header}.{payload}.{_b64(bytes(tampered))}"
        with pytest.raises(InvalidTokenError):
            codec.verify(forged)


def test_payload_swap_rejected():
    codec = _codec()
    header, _, signature = codec.issue("alice").split(".")
    _, bob_payload, _ = codec.issue("bob").split(".")
    with pytest.raises(InvalidTokenError):
        codec.verify(f"{header}.{bob_payload}.{signature}")


def test_token_signed_with_other_secret_rejected():
    foreign = _codec(secret="another-secret-0123456789abcdef0123456789ab")
    with pytest.raises(InvalidTokenError):
        _codec().verify(foreign.issue("alice"))


def test_unsigned_token_rejected():
    exp = int((ISSUED_AT + timedelta(minutes=15)).timestamp())
    token = jwt.encode({"user_id": "alice", "exp": exp}, None, algorithm="none")
    with pytest.raises(InvalidTokenError):
        _codec().verify(token)


@pytest.mark.parametrize("token", ["", "garbage", "a.b.c", "...."])
def test_malformed_token_rejected(token):
    with pytest.raises(InvalidTokenError):
        _codec().verify(token)


@pytest.mark.parametrize("claims", [
    {"exp": 1_900_000_000},
    {"user_id": 42, "exp": 1_900_000_000},
    {"user_id": "", "exp": 1_900_000_000},
    {"user_id": ["alice"], "exp": 1_900_000_000},
    {"user_id": "alice"},
])
def test_bad_claims_rejected(claims):
    token = jwt.encode(claims, SECRET, algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        _codec().verify(token)


def test_issue_requires_identity():
    with pytest.raises(ValueError):
        _codec().issue("")


def test_empty_secret_refused():
    with pytest.raises(ValueError):
        TokenCodec("")


def test_signing_failure_raises_signing_error():
    codec = TokenCodec(SECRET, algorithm="NOT-AN-ALGORITHM", clock=_Clock(ISSUED_AT))
    with pytest.raises(SigningError):
        codec.issue("alice")
