"""
Shared infrastructure for the CoinBitClub backend.

This package contains cross-cutting concerns that are used by multiple modules:
- config: Centralized settings management
- database: Supabase client factory
- exceptions: Base exception classes
- durations: Token lifetime parsing

Note: Business logic should NOT go here. This is for infrastructure only.
"""

from .config import Settings, get_settings
from .database import create_supabase_client
from .durations import parse_duration
from .exceptions import (
    CoinBitClubError,
    ValidationError,
    AuthenticationError,
    AuthorizationError,
    ConfigurationError,
)
from .models import CamelModel

__all__ = [
    "Settings",
    "get_settings",
    "create_supabase_client",
    "parse_duration",
    "CoinBitClubError",
    "ValidationError",
    "AuthenticationError",
    "AuthorizationError",
    "ConfigurationError",
    "CamelModel",
]
