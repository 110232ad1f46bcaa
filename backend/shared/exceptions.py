"""
Base exception classes for the CoinBitClub backend.

Each module should define its own exceptions that inherit from these bases.
This enables consistent error handling across the application.
"""

from typing import Optional, Any


class CoinBitClubError(Exception):
    """
    Base exception for all CoinBitClub errors.

    All custom exceptions should inherit from this class.
    """

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.__class__.__name__
        self.details = details or {}


class ValidationError(CoinBitClubError):
    """Input validation failed."""

    pass


class AuthenticationError(CoinBitClubError):
    """Authentication failed (invalid or missing credentials)."""

    pass


class AuthorizationError(CoinBitClubError):
    """Authorization failed (insufficient permissions)."""

    pass


class ConfigurationError(CoinBitClubError):
    """The application is misconfigured and cannot start."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, code="CONFIGURATION_ERROR", details=details)
