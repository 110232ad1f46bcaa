"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
Messages are in Portuguese, the product's locale.
"""

from shared.exceptions import AuthenticationError, AuthorizationError


class InvalidTokenError(AuthenticationError):
    """Raised when a token's signature, structure, issuer or audience is wrong."""

    def __init__(self, message: str = "Token inválido", code: str = "INVALID_TOKEN"):
        super().__init__(message, code=code)


class ExpiredTokenError(AuthenticationError):
    """Raised when a token has expired."""

    def __init__(self, message: str = "Token expirado"):
        super().__init__(message, code="TOKEN_EXPIRED")


class RevokedTokenError(InvalidTokenError):
    """Raised when a refresh token carries an outdated token version."""

    def __init__(self, message: str = "Refresh token revogado"):
        super().__init__(message, code="TOKEN_REVOKED")


class TokenVerificationError(AuthenticationError):
    """Raised for any other failure while verifying a token."""

    def __init__(self, message: str = "Erro ao verificar token"):
        super().__init__(message, code="VERIFICATION_ERROR")


class MissingTokenError(AuthenticationError):
    """Raised when no bearer token is provided."""

    def __init__(self, message: str = "Token de acesso não fornecido"):
        super().__init__(message, code="MISSING_TOKEN")


class UserNotFoundError(AuthenticationError):
    """Raised when the user behind a refresh token no longer exists."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Usuário não encontrado: {user_id}",
            code="USER_NOT_FOUND",
            details={"user_id": user_id},
        )


class AdminRequiredError(AuthorizationError):
    """Raised when a valid session lacks administrator privileges."""

    def __init__(
        self,
        message: str = "Acesso negado. Privilégios de administrador necessários.",
    ):
        super().__init__(message, code="ADMIN_REQUIRED")
