"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from dataclasses import dataclass, field
from datetime import timedelta
from typing import Optional
from pydantic import Field

from shared.durations import parse_duration
from shared.exceptions import ConfigurationError
from shared.models import CamelModel

TOKEN_ISSUER = "coinbitclub"
ACCESS_TOKEN_AUDIENCE = "coinbitclub-users"
REFRESH_TOKEN_AUDIENCE = "coinbitclub-refresh"


@dataclass(frozen=True)
class TokenConfig:
    """
    Signing configuration for the token service.

    Validated on construction so a bad secret or lifetime fails at startup
    instead of at the first login.
    """

    secret: str
    access_expires_in: str = "7d"
    refresh_expires_in: str = "30d"
    issuer: str = TOKEN_ISSUER
    access_audience: str = ACCESS_TOKEN_AUDIENCE
    refresh_audience: str = REFRESH_TOKEN_AUDIENCE
    algorithm: str = "HS256"
    access_ttl: timedelta = field(init=False)
    refresh_ttl: timedelta = field(init=False)

    def __post_init__(self) -> None:
        if not self.secret:
            raise ConfigurationError(
                "JWT secret not configured. Set the JWT_SECRET environment variable."
            )
        if self.access_audience == self.refresh_audience:
            raise ConfigurationError(
                "Access and refresh tokens must use different audiences"
            )
        try:
            object.__setattr__(self, "access_ttl", parse_duration(self.access_expires_in))
            object.__setattr__(self, "refresh_ttl", parse_duration(self.refresh_expires_in))
        except ValueError as e:
            raise ConfigurationError(str(e))

    def __repr__(self) -> str:
        return (
            f"TokenConfig(access_expires_in={self.access_expires_in!r}, "
            f"refresh_expires_in={self.refresh_expires_in!r}, issuer={self.issuer!r})"
        )


class SessionUser(CamelModel):
    """
    The user fields a session token is minted from.

    Loaded from the user directory on login and on every refresh, so
    admin rights and billing state are re-read rather than copied forward.
    """

    id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")
    is_admin: bool = Field(default=False, description="Administrator flag")
    subscription_status: str = Field(
        default="inactive",
        description="Billing state (e.g. active, trialing, canceled)",
    )


class SessionClaims(CamelModel):
    """
    Claims carried by an access token.

    ``iat``/``exp``/``iss``/``aud`` are stamped by the signer; they are
    ignored when the model is used as input to token generation.
    """

    user_id: str = Field(..., description="User ID")
    email: str = Field(..., description="User's email address")
    is_admin: bool = Field(..., description="Administrator flag")
    subscription_status: str = Field(..., description="Billing state")

    iat: Optional[int] = Field(None, description="Issued at timestamp")
    exp: Optional[int] = Field(None, description="Expiration timestamp")
    iss: Optional[str] = Field(None, description="Issuer")
    aud: Optional[str] = Field(None, description="Audience")

    model_config = {"frozen": True}

    @classmethod
    def for_user(cls, user: SessionUser) -> "SessionClaims":
        return cls(
            user_id=user.id,
            email=user.email,
            is_admin=user.is_admin,
            subscription_status=user.subscription_status,
        )


class RefreshClaims(CamelModel):
    """Claims carried by a refresh token."""

    user_id: str = Field(..., description="User ID")
    token_version: int = Field(..., ge=1, description="Account-wide refresh token version")

    iat: Optional[int] = Field(None, description="Issued at timestamp")
    exp: Optional[int] = Field(None, description="Expiration timestamp")
    iss: Optional[str] = Field(None, description="Issuer")
    aud: Optional[str] = Field(None, description="Audience")

    model_config = {"frozen": True}


class TokenPair(CamelModel):
    """Access and refresh token issued together."""

    access_token: str = Field(..., description="Signed access token")
    refresh_token: str = Field(..., description="Signed refresh token")
    expires_in: str = Field(..., description="Access token lifetime (e.g. 7d)")


class RefreshRequest(CamelModel):
    """Body of POST /api/auth/refresh."""

    refresh_token: str = Field(..., description="Refresh token to exchange")


class TokenVersionResponse(CamelModel):
    """Result of a session revocation."""

    user_id: str = Field(..., description="User whose sessions were revoked")
    token_version: int = Field(..., description="New refresh token version")
