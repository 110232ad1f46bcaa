"""
Authentication service implementation.

Session lifecycle on top of TokenService: issuing token pairs at login,
exchanging refresh tokens, and revoking every session of a user by
raising their token version.
"""

import logging

from .interfaces import IAuthService, ITokenVersionStore, IUserDirectory
from .models import SessionUser, TokenPair
from .tokens import TokenService
from .exceptions import RevokedTokenError, UserNotFoundError

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the session lifecycle.

    The stored token version is the only revocation mechanism: a refresh
    token whose embedded version differs from the stored one is refused.
    """

    def __init__(
        self,
        tokens: TokenService,
        versions: ITokenVersionStore,
        users: IUserDirectory,
    ):
        self._tokens = tokens
        self._versions = versions
        self._users = users

    async def issue_tokens(self, user: SessionUser) -> TokenPair:
        version = self._versions.get_version(user.id)
        return self._tokens.generate_token_pair(user, version)

    async def refresh_session(self, refresh_token: str) -> TokenPair:
        """
        Exchange a refresh token for a new token pair.

        The user is re-read from the directory so that revoked admin rights
        or a lapsed subscription show up in the new access token.
        """
        claims = self._tokens.verify_refresh_token(refresh_token)

        current_version = self._versions.get_version(claims.user_id)
        if claims.token_version != current_version:
            logger.info(
                f"Refused refresh for user {claims.user_id}: "
                f"token version {claims.token_version}, current {current_version}"
            )
            raise RevokedTokenError()

        user = self._users.get_user(claims.user_id)
        if user is None:
            raise UserNotFoundError(claims.user_id)

        return self._tokens.generate_token_pair(user, current_version)

    async def revoke_sessions(self, user_id: str) -> int:
        version = self._versions.increment_version(user_id)
        logger.info(f"Revoked sessions for user {user_id}; token version is now {version}")
        return version
