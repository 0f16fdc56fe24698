"""Token Codec: issues and verifies signed, time-bounded identity tokens.

Invariants:
    - A token is valid only if its signature verifies under the secret AND now < exp
    - verify() is fail-closed: any defect raises InvalidTokenError, never a partial result
    - The secret is constructor configuration, never module-level state
    - No persisted state: issue/verify depend only on secret, algorithm and clock

Design Decisions:
    - HS256 JWT with claims {"user_id", "exp"}: wire-compatible with existing clients
    - Expiry checked against the injected clock instead of PyJWT's wall clock,
      so the boundary (now >= exp rejects) is deterministic under test
"""

import logging
from datetime import datetime, timedelta
from typing import Callable

import jwt

from tasklist.core.domain_types import UserId, utc_now
from tasklist.core.errors import InvalidTokenError, SigningError

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(minutes=15)
IDENTITY_CLAIM = "user_id"


class TokenCodec:
    """Stateless JWT issuer/verifier bound to one shared secret."""

    def __init__(
        self,
        secret: str,
        ttl: timedelta = DEFAULT_TTL,
        algorithm: str = "HS256",
        clock: Callable[[], datetime] = utc_now,
    ):
        if not secret:
            raise ValueError("token signing secret must not be empty")
        self._secret = secret
        self._ttl = ttl
        self._algorithm = algorithm
        self._clock = clock

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, identity: str) -> str:
        """Sign a token for an already-authenticated identity."""
        if not identity:
            raise ValueError("cannot issue a token for an empty identity")
        expires_at = self._clock() + self._ttl
        claims = {IDENTITY_CLAIM: identity, "exp": int(expires_at.timestamp())}
        try:
            return jwt.encode(claims, self._secret, algorithm=self._algorithm)
        except (jwt.PyJWTError, NotImplementedError, TypeError, ValueError) as e:
            logger.error(f"Token signing failed: {e}", exc_info=True)
            raise SigningError(str(e)) from e

    def verify(self, token: str) -> UserId:
        """Return the identity embedded in a valid token."""
        if not token:
            raise InvalidTokenError("empty token")
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "require": ["exp", IDENTITY_CLAIM]},
            )
        except jwt.PyJWTError as e:
            raise InvalidTokenError(f"undecodable token: {e}") from e

        exp = claims["exp"]
        if isinstance(exp, bool) or not isinstance(exp, (int, float)):
            raise InvalidTokenError("exp claim is not numeric")
        if self._clock().timestamp() >= exp:
            raise InvalidTokenError("token expired")

        identity = claims[IDENTITY_CLAIM]
        if not isinstance(identity, str) or not identity:
            raise InvalidTokenError("identity claim missing or not a string")
        return UserId(identity)
