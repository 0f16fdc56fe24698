"""Tests for the auth gate: header parsing and fail-closed authentication."""

from datetime import datetime, timedelta, timezone

import pytest

from tasklist.core.auth_gate import AuthenticatedRequest, authenticate, extract_token
from tasklist.core.token_codec import TokenCodec

NOW = datetime(2026, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def codec():
    return TokenCodec(
        "gate-test-secret-0123456789abcdef0123456789", clock=lambda: NOW,
    )


@pytest.mark.parametrize("header,expected", [
    ("Bearer abc.def.ghi", "abc.def.ghi"),
    ("bearer abc.def.ghi", "abc.def.ghi"),
    ("BEARER   abc.def.ghi  ", "abc.def.ghi"),
    ("abc.def.ghi", "abc.def.ghi"),
    (None, None),
    ("", None),
    ("   ", None),
    ("Basic dXNlcjpwdw==", None),
    ("Bearer a b", None),
])
def test_extract_token(header, expected):
    assert extract_token(header) == expected


def test_bearer_header_authenticates(codec):
    token = codec.issue("alice")
    auth = authenticate(f"Bearer {token}", codec)
    assert auth == AuthenticatedRequest(identity="alice")


def test_bare_token_authenticates(codec):
    token = codec.issue("alice")
    assert authenticate(token, codec).identity == "alice"


def test_missing_header_rejected(codec):
    assert authenticate(None, codec) is None


def test_garbage_token_rejected(codec):
    assert authenticate("Bearer not-a-token", codec) is None


def test_expired_token_rejected():
    issuer = TokenCodec("gate-test-secret-0123456789abcdef0123456789", clock=lambda: NOW)
    later = TokenCodec(
        "gate-test-secret-0123456789abcdef0123456789",
        clock=lambda: NOW + timedelta(minutes=16),
    )
    assert authenticate(issuer.issue("alice"), later) is None
