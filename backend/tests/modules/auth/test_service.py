import pytest

from modules.auth.models import SessionUser, TokenConfig
from modules.auth.repository import InMemoryTokenVersionStore, InMemoryUserDirectory
from modules.auth.service import AuthService
from modules.auth.tokens import TokenService
from modules.auth.exceptions import (
    ExpiredTokenError,
    InvalidTokenError,
    RevokedTokenError,
    UserNotFoundError,
)

from tests.conftest import create_test_refresh_token


class TestAuthService:
    @pytest.fixture
    def user(self) -> SessionUser:
        return SessionUser(
            id="test-user-123",
            email="test@example.com",
            is_admin=False,
            subscription_status="active",
        )

    @pytest.fixture
    def tokens(self, token_config: TokenConfig) -> TokenService:
        return TokenService(token_config)

    @pytest.fixture
    def versions(self) -> InMemoryTokenVersionStore:
        return InMemoryTokenVersionStore()

    @pytest.fixture
    def users(self, user) -> InMemoryUserDirectory:
        return InMemoryUserDirectory([user])

    @pytest.fixture
    def service(self, tokens, versions, users) -> AuthService:
        return AuthService(tokens=tokens, versions=versions, users=users)

    @pytest.mark.asyncio
    async def test_issue_tokens_uses_current_version(self, service, tokens, versions, user):
        """Tokens issued at login carry the stored token version."""
        versions.increment_version(user.id)
        pair = await service.issue_tokens(user)

        assert tokens.verify_refresh_token(pair.refresh_token).token_version == 2
        assert tokens.verify_access_token(pair.access_token).user_id == user.id

    @pytest.mark.asyncio
    async def test_refresh_returns_new_pair(self, service, tokens, user):
        pair = await service.issue_tokens(user)
        refreshed = await service.refresh_session(pair.refresh_token)

        claims = tokens.verify_access_token(refreshed.access_token)
        assert claims.user_id == user.id
        assert claims.subscription_status == "active"
        assert refreshed.expires_in == "7d"

    @pytest.mark.asyncio
    async def test_refresh_rereads_user(self, service, tokens, users, user):
        """Changes to the user show up in the refreshed access token."""
        pair = await service.issue_tokens(user)
        users.add(user.model_copy(update={"is_admin": True, "subscription_status": "canceled"}))

        refreshed = await service.refresh_session(pair.refresh_token)
        claims = tokens.verify_access_token(refreshed.access_token)
        assert claims.is_admin is True
        assert claims.subscription_status == "canceled"

    @pytest.mark.asyncio
    async def test_revoke_invalidates_outstanding_refresh_tokens(self, service, user):
        pair = await service.issue_tokens(user)

        new_version = await service.revoke_sessions(user.id)
        assert new_version == 2

        with pytest.raises(RevokedTokenError) as exc_info:
            await service.refresh_session(pair.refresh_token)
        assert exc_info.value.code == "TOKEN_REVOKED"

    @pytest.mark.asyncio
    async def test_revoked_is_a_kind_of_invalid(self, service, user):
        pair = await service.issue_tokens(user)
        await service.revoke_sessions(user.id)
        with pytest.raises(InvalidTokenError):
            await service.refresh_session(pair.refresh_token)

    @pytest.mark.asyncio
    async def test_tokens_issued_after_revoke_work(self, service, user):
        await service.revoke_sessions(user.id)
        pair = await service.issue_tokens(user)
        refreshed = await service.refresh_session(pair.refresh_token)
        assert refreshed.access_token

    @pytest.mark.asyncio
    async def test_future_version_rejected(self, service):
        """Only the exact stored version is honoured."""
        with pytest.raises(RevokedTokenError):
            await service.refresh_session(create_test_refresh_token(token_version=7))

    @pytest.mark.asyncio
    async def test_expired_refresh_token(self, service):
        with pytest.raises(ExpiredTokenError):
            await service.refresh_session(create_test_refresh_token(expired=True))

    @pytest.mark.asyncio
    async def test_access_token_cannot_refresh(self, service, user):
        pair = await service.issue_tokens(user)
        with pytest.raises(InvalidTokenError):
            await service.refresh_session(pair.access_token)

    @pytest.mark.asyncio
    async def test_unknown_user(self, service):
        with pytest.raises(UserNotFoundError):
            await service.refresh_session(create_test_refresh_token(user_id="ghost"))
