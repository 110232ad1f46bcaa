"""
User-related endpoints.
"""

from fastapi import APIRouter, Depends

from modules.auth.models import SessionClaims
from ..middleware.auth import get_current_user

router = APIRouter()


@router.get("/me", response_model=SessionClaims)
async def get_current_user_profile(
    user: SessionClaims = Depends(get_current_user),
) -> SessionClaims:
    """
    Get the current session's claims.

    Requires authentication.
    """
    return user
