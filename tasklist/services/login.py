"""Login Flow: exchanges a (user_id, password) credential for a signed token.

Invariants:
    - Unknown user and wrong password raise the SAME AuthenticationFailedError
    - A token is issued only after the identity store accepts the credential
"""

import logging

from tasklist.core.errors import AuthenticationFailedError
from tasklist.core.repository_protocols import IdentityStore
from tasklist.core.token_codec import TokenCodec

logger = logging.getLogger(__name__)


class LoginService:
    """Credential check followed by token issuance."""

    def __init__(self, identity_store: IdentityStore, codec: TokenCodec):
        self.identity_store = identity_store
        self.codec = codec

    async def login(self, user_id: str, password: str) -> str:
        if not user_id or not password:
            raise AuthenticationFailedError()
        if not await self.identity_store.validate_credential(user_id, password):
            logger.info("Login rejected", extra={"user_id": user_id})
            raise AuthenticationFailedError()
        token = self.codec.issue(user_id)
        logger.info("Token issued", extra={"user_id": user_id})
        return token
