"""
Dependency injection setup for FastAPI.

This module provides the "container" that wires together all module
implementations. It is the composition root: it owns the Supabase client
and the stores, and nothing else reaches for them through module state.

STORAGE_BACKEND selects the store implementations:
- "memory": in-process stores (simulated mode)
- "supabase": Supabase-backed stores (live mode)
"""

from typing import TYPE_CHECKING, Optional

from shared.config import Settings, get_settings

# Type checking imports for interfaces (avoids circular imports)
if TYPE_CHECKING:
    from supabase import Client
    from modules.auth.interfaces import IAuthService, ITokenVersionStore, IUserDirectory
    from modules.auth.models import TokenConfig
    from modules.auth.tokens import TokenService
    from modules.trading.interfaces import ITradingService, ITradingSettingsRepository


class ServiceContainer:
    """
    Container for all service instances.

    Services are created lazily on first access and cached as singletons
    within the container. Use reset() to clear them for testing.
    """

    def __init__(self, settings: Optional[Settings] = None) -> None:
        self._settings = settings
        self._db: "Client | None" = None
        self._token_service: "TokenService | None" = None
        self._token_versions: "ITokenVersionStore | None" = None
        self._users: "IUserDirectory | None" = None
        self._auth_service: "IAuthService | None" = None
        self._trading_settings: "ITradingSettingsRepository | None" = None
        self._trading_service: "ITradingService | None" = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            self._settings = get_settings()
        return self._settings

    @property
    def is_live(self) -> bool:
        return self.settings.storage_backend == "supabase"

    @property
    def db(self) -> "Client":
        """Get the Supabase client (live mode only)."""
        if self._db is None:
            from shared.database import create_supabase_client
            self._db = create_supabase_client(self.settings)
        return self._db

    def token_config(self) -> "TokenConfig":
        """Build the signing configuration; raises ConfigurationError if invalid."""
        from modules.auth.models import TokenConfig
        return TokenConfig(
            secret=self.settings.jwt_secret,
            access_expires_in=self.settings.jwt_expires_in,
            refresh_expires_in=self.settings.refresh_token_expires_in,
        )

    @property
    def tokens(self) -> "TokenService":
        """Get the token service instance."""
        if self._token_service is None:
            from modules.auth.tokens import TokenService
            self._token_service = TokenService(self.token_config())
        return self._token_service

    @property
    def token_versions(self) -> "ITokenVersionStore":
        """Get the token version store."""
        if self._token_versions is None:
            from modules.auth.repository import (
                InMemoryTokenVersionStore,
                SupabaseTokenVersionStore,
            )
            if self.is_live:
                self._token_versions = SupabaseTokenVersionStore(self.db)
            else:
                self._token_versions = InMemoryTokenVersionStore()
        return self._token_versions

    @property
    def users(self) -> "IUserDirectory":
        """Get the user directory."""
        if self._users is None:
            from modules.auth.repository import InMemoryUserDirectory, SupabaseUserDirectory
            if self.is_live:
                self._users = SupabaseUserDirectory(self.db)
            else:
                self._users = InMemoryUserDirectory()
        return self._users

    @property
    def auth(self) -> "IAuthService":
        """Get the auth service instance."""
        if self._auth_service is None:
            from modules.auth.service import AuthService
            self._auth_service = AuthService(
                tokens=self.tokens,
                versions=self.token_versions,
                users=self.users,
            )
        return self._auth_service

    @property
    def trading_settings(self) -> "ITradingSettingsRepository":
        """Get the trading settings repository."""
        if self._trading_settings is None:
            from modules.trading.repository import (
                InMemoryTradingSettingsRepository,
                SupabaseTradingSettingsRepository,
            )
            if self.is_live:
                self._trading_settings = SupabaseTradingSettingsRepository(self.db)
            else:
                self._trading_settings = InMemoryTradingSettingsRepository()
        return self._trading_settings

    @property
    def trading(self) -> "ITradingService":
        """Get the trading service instance."""
        if self._trading_service is None:
            from modules.trading.service import TradingService
            self._trading_service = TradingService(self.trading_settings)
        return self._trading_service

    def reset(self) -> None:
        """
        Reset all cached services.

        This is primarily for testing - allows tests to get fresh
        service instances with different settings or mock dependencies.
        """
        self._settings = None
        self._db = None
        self._token_service = None
        self._token_versions = None
        self._users = None
        self._auth_service = None
        self._trading_settings = None
        self._trading_service = None


# Module-level container singleton
_container: ServiceContainer | None = None


def get_container() -> ServiceContainer:
    """Get the singleton service container."""
    global _container
    if _container is None:
        _container = ServiceContainer()
    return _container


def reset_container() -> None:
    """
    Reset the service container.

    The next call to get_container() creates a fresh container with new
    service instances. Primarily used for testing.
    """
    global _container
    _container = None


# FastAPI dependency functions
# These are the functions that should be used in route Depends() calls


def get_token_service() -> "TokenService":
    """FastAPI dependency for the token service."""
    return get_container().tokens


def get_auth_service() -> "IAuthService":
    """FastAPI dependency for auth service."""
    return get_container().auth


def get_trading_service() -> "ITradingService":
    """FastAPI dependency for trading service."""
    return get_container().trading
