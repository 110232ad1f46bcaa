"""
Bearer token authentication for routes.

Wraps TokenService.authenticate_request / require_admin as FastAPI
dependencies. Auth errors propagate to the handlers registered in
api.app, which turn them into 401/403 responses.
"""

from fastapi import Depends, Request

from modules.auth.models import SessionClaims
from modules.auth.tokens import TokenService
from ..dependencies import get_token_service


async def get_current_user(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> SessionClaims:
    """
    Dependency that requires authentication.

    Usage:
        @router.get("/protected")
        async def protected_route(user: SessionClaims = Depends(get_current_user)):
            return {"user_id": user.user_id}
    """
    return tokens.authenticate_request(request.headers)


async def get_admin_user(
    request: Request,
    tokens: TokenService = Depends(get_token_service),
) -> SessionClaims:
    """Dependency that requires an authenticated administrator."""
    return tokens.require_admin(request.headers)
