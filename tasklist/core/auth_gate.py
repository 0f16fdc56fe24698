"""Auth Gate: turns an Authorization header into an authenticated identity.

Invariants:
    - Pure: never touches storage, never mutates anything
    - Rejection is all-or-nothing (None), never a partially trusted identity
    - The identity travels as an explicit AuthenticatedRequest value, no ambient lookup

Design Decisions:
    - Accepts "Bearer <token>" and a bare token: existing clients send the raw token
"""

import logging
from dataclasses import dataclass

from tasklist.core.domain_types import UserId
from tasklist.core.errors import InvalidTokenError
from tasklist.core.token_codec import TokenCodec

logger = logging.getLogger(__name__)

BEARER_SCHEME = "bearer"


@dataclass(frozen=True)
class AuthenticatedRequest:
    """Identity resolved from a verified token, handed to protected handlers."""
    identity: UserId


def extract_token(authorization: str | None) -> str | None:
    """Pull the credential out of an Authorization header value."""
    if not authorization:
        return None
    parts = authorization.strip().split()
    if len(parts) == 1:
        return parts[0]
    if len(parts) == 2 and parts[0].lower() == BEARER_SCHEME:
        return parts[1]
    return None


def authenticate(
    authorization: str | None, codec: TokenCodec,
) -> AuthenticatedRequest | None:
    """Verify the header's token. None means the request must be rejected."""
    token = extract_token(authorization)
    if token is None:
        logger.info("Rejected request: no usable Authorization header")
        return None
    try:
        identity = codec.verify(token)
    except InvalidTokenError as e:
        logger.info(f"Rejected request: {e.reason}")
        return None
    return AuthenticatedRequest(identity=identity)
