"""
Authentication module interfaces.

Other modules should depend on these protocols, not the concrete
implementations. This enables testing with in-memory stores and swapping
the Supabase-backed ones without touching the service.
"""

from typing import Protocol, Optional, runtime_checkable

from .models import SessionUser, TokenPair


@runtime_checkable
class ITokenVersionStore(Protocol):
    """
    Server-side record of each user's current refresh token version.

    A refresh token is only honoured while its embedded version equals
    the stored one.
    """

    def get_version(self, user_id: str) -> int:
        """Current version for a user; 1 for users never revoked."""
        ...

    def increment_version(self, user_id: str) -> int:
        """Bump the version, invalidating all outstanding refresh tokens."""
        ...


@runtime_checkable
class IUserDirectory(Protocol):
    """Lookup of the user fields that go into a session token."""

    def get_user(self, user_id: str) -> Optional[SessionUser]:
        """Return the user, or None if they do not exist."""
        ...


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for session lifecycle operations.

    Token signing and verification live in TokenService; this protocol
    covers the flows that also need the version store and user directory.
    """

    async def issue_tokens(self, user: SessionUser) -> TokenPair:
        """
        Issue a token pair for a freshly authenticated user.

        Args:
            user: The authenticated user

        Returns:
            TokenPair carrying the user's current token version
        """
        ...

    async def refresh_session(self, refresh_token: str) -> TokenPair:
        """
        Exchange a refresh token for a new token pair.

        Raises:
            ExpiredTokenError: If the refresh token has expired
            InvalidTokenError: If it is malformed, mis-signed or revoked
            UserNotFoundError: If the user no longer exists
        """
        ...

    async def revoke_sessions(self, user_id: str) -> int:
        """
        Invalidate every outstanding refresh token of a user.

        Returns:
            The new token version
        """
        ...
