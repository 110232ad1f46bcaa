"""
Trading settings repositories.

In-memory for simulated mode and tests; Supabase table
``user_trading_settings`` for live mode.
"""

from datetime import datetime
from typing import Optional

from shared.repository import BaseRepository
from .models import UserTradingSettings


class InMemoryTradingSettingsRepository:
    """Settings kept in a dict keyed by user ID."""

    def __init__(self) -> None:
        self._settings: dict[str, UserTradingSettings] = {}

    def get(self, user_id: str) -> Optional[UserTradingSettings]:
        return self._settings.get(user_id)

    def save(self, settings: UserTradingSettings) -> UserTradingSettings:
        self._settings[settings.user_id] = settings
        return settings


class SupabaseTradingSettingsRepository(BaseRepository[UserTradingSettings]):
    """
    Repository for the ``user_trading_settings`` table.

    Columns mirror UserTradingSettings in snake_case, keyed by ``user_id``.
    """

    TABLE = "user_trading_settings"

    def get(self, user_id: str) -> Optional[UserTradingSettings]:
        result = (
            self._db.table(self.TABLE)
            .select("*")
            .eq("user_id", user_id)
            .execute()
        )
        if not result.data:
            return None
        return self._map_to_settings(result.data[0])

    def save(self, settings: UserTradingSettings) -> UserTradingSettings:
        data = settings.model_dump(mode="json")
        result = (
            self._db.table(self.TABLE)
            .upsert(data, on_conflict="user_id")
            .execute()
        )
        return self._map_to_settings(result.data[0]) if result.data else settings

    def _map_to_settings(self, data: dict) -> UserTradingSettings:
        updated_at = data.get("updated_at")
        if isinstance(updated_at, str):
            updated_at = datetime.fromisoformat(updated_at.replace("Z", "+00:00"))

        return UserTradingSettings(
            user_id=data["user_id"],
            max_leverage=float(data["max_leverage"]),
            max_stop_loss=float(data["max_stop_loss"]),
            max_percent_per_trade=float(data["max_percent_per_trade"]),
            binance_api_key=data.get("binance_api_key"),
            binance_api_secret=data.get("binance_api_secret"),
            bybit_api_key=data.get("bybit_api_key"),
            bybit_api_secret=data.get("bybit_api_secret"),
            is_active=bool(data.get("is_active", False)),
            **({"updated_at": updated_at} if updated_at else {}),
        )
