"""
Authentication module.

Issues and verifies session/refresh tokens and manages session revocation.

Public API:
- TokenService: Signs and verifies access and refresh tokens
- IAuthService: Interface for refresh/revoke flows
- SessionClaims, RefreshClaims, TokenPair: Token models
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, ITokenVersionStore, IUserDirectory
from .models import (
    TokenConfig,
    SessionUser,
    SessionClaims,
    RefreshClaims,
    TokenPair,
)
from .tokens import (
    TokenService,
    extract_token_from_header,
    decode_token,
    is_token_expiring_soon,
    is_valid_token_format,
)
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    RevokedTokenError,
    TokenVerificationError,
    MissingTokenError,
    UserNotFoundError,
    AdminRequiredError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "ITokenVersionStore",
    "IUserDirectory",
    # Models
    "TokenConfig",
    "SessionUser",
    "SessionClaims",
    "RefreshClaims",
    "TokenPair",
    # Tokens
    "TokenService",
    "extract_token_from_header",
    "decode_token",
    "is_token_expiring_soon",
    "is_valid_token_format",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "RevokedTokenError",
    "TokenVerificationError",
    "MissingTokenError",
    "UserNotFoundError",
    "AdminRequiredError",
]
