"""
Trading service implementation.

Persists trading settings behind the policy checks in validator.py.
"""

import logging
from datetime import datetime, timezone
from typing import Sequence

from .interfaces import ITradingService, ITradingSettingsRepository
from .models import (
    Exchange,
    TradeDecision,
    TradeOperation,
    TradingSettingsUpdate,
    UserTradingSettings,
    is_masked_secret,
)
from .exceptions import TradingSettingsValidationError
from .validator import (
    DEFAULT_TRADING_LIMITS,
    can_open_new_trade,
    validate_trading_settings,
)

logger = logging.getLogger(__name__)


def default_settings(user_id: str) -> UserTradingSettings:
    """Settings for a user who has never saved any."""
    return UserTradingSettings(
        user_id=user_id,
        max_leverage=DEFAULT_TRADING_LIMITS.max_leverage,
        max_stop_loss=DEFAULT_TRADING_LIMITS.max_stop_loss,
        max_percent_per_trade=DEFAULT_TRADING_LIMITS.max_percent_per_trade,
        is_active=False,
    )


class TradingService(ITradingService):
    """Implementation of trading settings management."""

    def __init__(self, repository: ITradingSettingsRepository):
        self._repository = repository

    async def get_settings(self, user_id: str) -> UserTradingSettings:
        return self._repository.get(user_id) or default_settings(user_id)

    async def update_settings(
        self,
        user_id: str,
        update: TradingSettingsUpdate,
    ) -> UserTradingSettings:
        violations = validate_trading_settings(update)
        if violations:
            logger.info(f"Rejected trading settings update for user {user_id}: {violations}")
            raise TradingSettingsValidationError(violations)

        changes = update.changes()
        # A masked secret is the client echoing back what GET returned
        for name in ("binance_api_secret", "bybit_api_secret"):
            if is_masked_secret(changes.get(name)):
                logger.debug(f"Keeping stored {name} for user {user_id}")
                del changes[name]

        current = await self.get_settings(user_id)
        updated = current.model_copy(
            update={
                **changes,
                "updated_at": datetime.now(timezone.utc),
            }
        )
        return self._repository.save(updated)

    async def check_new_trade(
        self,
        user_id: str,
        open_trades: Sequence[TradeOperation],
        exchange: Exchange,
    ) -> TradeDecision:
        settings = await self.get_settings(user_id)
        return can_open_new_trade(open_trades, settings, exchange)
