"""
Auth API endpoints.

Refreshing and revoking sessions. Login itself belongs to the external
backend that checks passwords; it calls AuthService.issue_tokens.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_auth_service
from api.middleware.auth import get_admin_user, get_current_user

from .interfaces import IAuthService
from .models import RefreshRequest, SessionClaims, TokenPair, TokenVersionResponse

router = APIRouter()
admin_router = APIRouter()


@router.post("/refresh", response_model=TokenPair)
async def refresh_tokens(
    request: RefreshRequest,
    service: IAuthService = Depends(get_auth_service),
) -> TokenPair:
    """
    Exchange a refresh token for a new token pair.

    Returns 401 if the refresh token is expired, invalid or revoked.
    """
    return await service.refresh_session(request.refresh_token)


@router.post("/revoke", response_model=TokenVersionResponse)
async def revoke_own_sessions(
    user: SessionClaims = Depends(get_current_user),
    service: IAuthService = Depends(get_auth_service),
) -> TokenVersionResponse:
    """
    Log out everywhere.

    Invalidates all of the caller's refresh tokens. Access tokens already
    issued stay valid until they expire.
    """
    version = await service.revoke_sessions(user.user_id)
    return TokenVersionResponse(user_id=user.user_id, token_version=version)


@admin_router.post("/users/{user_id}/revoke-sessions", response_model=TokenVersionResponse)
async def revoke_user_sessions(
    user_id: str,
    admin: SessionClaims = Depends(get_admin_user),
    service: IAuthService = Depends(get_auth_service),
) -> TokenVersionResponse:
    """Invalidate all refresh tokens of any user. Admin only."""
    version = await service.revoke_sessions(user_id)
    return TokenVersionResponse(user_id=user_id, token_version=version)
