"""
Trading module interfaces.

Other modules should depend on ITradingService, not the concrete implementation.
"""

from typing import Protocol, Optional, Sequence, runtime_checkable

from .models import (
    Exchange,
    TradeDecision,
    TradeOperation,
    TradingSettingsUpdate,
    UserTradingSettings,
)


@runtime_checkable
class ITradingSettingsRepository(Protocol):
    """Storage of per-user trading settings."""

    def get(self, user_id: str) -> Optional[UserTradingSettings]:
        """Stored settings for a user, or None if never saved."""
        ...

    def save(self, settings: UserTradingSettings) -> UserTradingSettings:
        """Insert or replace a user's settings."""
        ...


@runtime_checkable
class ITradingService(Protocol):
    """
    Interface for trading settings and pre-trade checks.

    Settings are always validated before they are persisted.
    """

    async def get_settings(self, user_id: str) -> UserTradingSettings:
        """
        Get a user's trading settings.

        Users without stored settings get the platform defaults,
        inactive and without exchange credentials.
        """
        ...

    async def update_settings(
        self,
        user_id: str,
        update: TradingSettingsUpdate,
    ) -> UserTradingSettings:
        """
        Apply a partial settings update.

        Raises:
            TradingSettingsValidationError: If any present field is out of range.
                Nothing is written in that case.
        """
        ...

    async def check_new_trade(
        self,
        user_id: str,
        open_trades: Sequence[TradeOperation],
        exchange: Exchange,
    ) -> TradeDecision:
        """Run the pre-trade check against the user's stored settings."""
        ...
