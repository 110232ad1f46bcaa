"""
Token service.

Mints and verifies the two kinds of signed tokens the product uses:

- access tokens (audience ``coinbitclub-users``) carrying the session claims
- refresh tokens (audience ``coinbitclub-refresh``) carrying only the user ID
  and the account-wide token version

Both are HS256 JWTs issued by ``coinbitclub``. The module-level helpers at
the bottom never verify signatures and must not be used for authorization.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

import jwt
from pydantic import ValidationError as PydanticValidationError

from .exceptions import (
    AdminRequiredError,
    ExpiredTokenError,
    InvalidTokenError,
    MissingTokenError,
    TokenVerificationError,
)
from .models import (
    RefreshClaims,
    SessionClaims,
    SessionUser,
    TokenConfig,
    TokenPair,
)

logger = logging.getLogger(__name__)

BEARER_PREFIX = "Bearer "
EXPIRING_SOON_SECONDS = 60 * 60

_REQUIRED_CLAIMS = ["exp", "iat", "iss", "aud"]


class TokenService:
    """
    Issues and verifies access and refresh tokens.

    Stateless apart from its configuration; revocation via token version
    is enforced by AuthService against the version store.
    """

    def __init__(self, config: TokenConfig):
        self._config = config

    @property
    def config(self) -> TokenConfig:
        return self._config

    # -------------------------------------------------------------------------
    # Issuing
    # -------------------------------------------------------------------------

    def generate_access_token(self, claims: SessionClaims) -> str:
        """
        Sign an access token for the given session claims.

        Any ``iat``/``exp``/``iss``/``aud`` on the input are replaced.

        Raises:
            Whatever the signing primitive raises (logged, then propagated).
        """
        payload = claims.model_dump(
            by_alias=True,
            exclude={"iat", "exp", "iss", "aud"},
        )
        return self._sign(
            payload,
            audience=self._config.access_audience,
            ttl=self._config.access_ttl,
            kind="access",
        )

    def generate_refresh_token(self, user_id: str, token_version: int = 1) -> str:
        """Sign a refresh token carrying the user's token version."""
        payload = {"userId": user_id, "tokenVersion": token_version}
        return self._sign(
            payload,
            audience=self._config.refresh_audience,
            ttl=self._config.refresh_ttl,
            kind="refresh",
        )

    def generate_token_pair(self, user: SessionUser, token_version: int = 1) -> TokenPair:
        """Issue an access token and a refresh token together."""
        return TokenPair(
            access_token=self.generate_access_token(SessionClaims.for_user(user)),
            refresh_token=self.generate_refresh_token(user.id, token_version),
            expires_in=self._config.access_expires_in,
        )

    def _sign(self, payload: dict[str, Any], audience: str, ttl: timedelta, kind: str) -> str:
        issued_at = int(datetime.now(timezone.utc).timestamp())
        payload = {
            **payload,
            "iat": issued_at,
            "exp": issued_at + int(ttl.total_seconds()),
            "iss": self._config.issuer,
            "aud": audience,
        }
        try:
            return jwt.encode(payload, self._config.secret, algorithm=self._config.algorithm)
        except Exception:
            logger.exception(f"Failed to sign {kind} token")
            raise

    # -------------------------------------------------------------------------
    # Verifying
    # -------------------------------------------------------------------------

    def verify_access_token(self, token: str) -> SessionClaims:
        """
        Verify an access token and return its claims.

        Refresh tokens are rejected here because their audience differs.

        Raises:
            ExpiredTokenError: Token is past its expiry
            InvalidTokenError: Bad signature, structure, issuer or audience
            TokenVerificationError: Any other failure
        """
        payload = self._decode(
            token,
            audience=self._config.access_audience,
            expired=ExpiredTokenError("Token expirado"),
            invalid=InvalidTokenError("Token inválido"),
            failed=TokenVerificationError("Erro ao verificar token"),
        )
        try:
            return SessionClaims.model_validate(payload)
        except PydanticValidationError:
            logger.warning("Access token passed signature checks but lacks session claims")
            raise TokenVerificationError("Erro ao verificar token")

    def verify_refresh_token(self, token: str) -> RefreshClaims:
        """
        Verify a refresh token and return its claims.

        Raises:
            ExpiredTokenError: Token is past its expiry
            InvalidTokenError: Bad signature, structure, issuer or audience
            TokenVerificationError: Any other failure
        """
        payload = self._decode(
            token,
            audience=self._config.refresh_audience,
            expired=ExpiredTokenError("Refresh token expirado"),
            invalid=InvalidTokenError("Refresh token inválido"),
            failed=TokenVerificationError("Erro ao verificar refresh token"),
        )
        try:
            return RefreshClaims.model_validate(payload)
        except PydanticValidationError:
            logger.warning("Refresh token passed signature checks but lacks refresh claims")
            raise TokenVerificationError("Erro ao verificar refresh token")

    def _decode(
        self,
        token: str,
        audience: str,
        expired: ExpiredTokenError,
        invalid: InvalidTokenError,
        failed: TokenVerificationError,
    ) -> dict[str, Any]:
        try:
            return jwt.decode(
                token,
                self._config.secret,
                algorithms=[self._config.algorithm],
                audience=audience,
                issuer=self._config.issuer,
                options={"require": _REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError:
            raise expired
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected token for audience {audience}: {e}")
            raise invalid
        except Exception as e:
            logger.warning(f"Unexpected error verifying token for audience {audience}: {e}")
            raise failed

    # -------------------------------------------------------------------------
    # Request helpers
    # -------------------------------------------------------------------------

    def authenticate_request(self, headers: Mapping[str, str]) -> SessionClaims:
        """
        Authenticate a request from its headers.

        Args:
            headers: Request headers (Starlette Headers or a plain dict)

        Raises:
            MissingTokenError: No usable "Bearer <token>" header
            ExpiredTokenError, InvalidTokenError, TokenVerificationError:
                propagated from verify_access_token
        """
        header = headers.get("authorization")
        if header is None:
            header = headers.get("Authorization")

        token = extract_token_from_header(header)
        if not token:
            raise MissingTokenError()

        return self.verify_access_token(token)

    def require_admin(self, headers: Mapping[str, str]) -> SessionClaims:
        """
        Authenticate a request and require administrator privileges.

        Raises:
            AdminRequiredError: The session is valid but not an admin
        """
        claims = self.authenticate_request(headers)
        if not claims.is_admin:
            logger.info(f"Admin access denied for user {claims.user_id}")
            raise AdminRequiredError()
        return claims


def extract_token_from_header(header: Optional[str]) -> Optional[str]:
    """
    Return the token from an ``Authorization: Bearer <token>`` header.

    Anything else (missing header, other scheme, empty token) gives None.
    """
    if not header or not header.startswith(BEARER_PREFIX):
        return None
    token = header[len(BEARER_PREFIX):]
    return token or None


def decode_token(token: str) -> Optional[dict[str, Any]]:
    """
    Decode a token WITHOUT verifying it.

    For introspection only (e.g. deciding when to refresh). Returns None
    if the token cannot be parsed.
    """
    try:
        return jwt.decode(token, options={"verify_signature": False})
    except Exception:
        return None


def is_token_expiring_soon(token: str, now: Optional[datetime] = None) -> bool:
    """True if the token has no readable expiry or expires within an hour."""
    payload = decode_token(token)
    if not payload:
        return True

    exp = payload.get("exp")
    if not isinstance(exp, (int, float)) or isinstance(exp, bool):
        return True

    now = now or datetime.now(timezone.utc)
    return exp - now.timestamp() < EXPIRING_SOON_SECONDS


def is_valid_token_format(token: str) -> bool:
    """Structural pre-check: exactly three dot-separated segments."""
    return len(token.split(".")) == 3
