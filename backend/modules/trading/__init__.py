"""
Trading module.

Risk-limit checks over trading settings and trades, and persistence of
per-user trading settings.

Public API:
- validate_trading_settings, can_open_new_trade: Policy checks
- calculate_operation_result, calculate_success_rate, summarize_operations:
  Result arithmetic
- ITradingService: Interface for settings management
- Models: TradeOperation, UserTradingSettings, TradingSettingsUpdate, ...
"""

from .interfaces import ITradingService, ITradingSettingsRepository
from .models import (
    Exchange,
    TradeType,
    TradeStatus,
    TradeOperation,
    TradingLimits,
    UserTradingSettings,
    TradingSettingsUpdate,
    TradeDecision,
    OperationStats,
)
from .validator import (
    DEFAULT_TRADING_LIMITS,
    validate_trading_settings,
    can_open_new_trade,
    calculate_operation_result,
    calculate_success_rate,
    summarize_operations,
)
from .exceptions import TradingSettingsValidationError

__all__ = [
    # Interfaces
    "ITradingService",
    "ITradingSettingsRepository",
    # Models
    "Exchange",
    "TradeType",
    "TradeStatus",
    "TradeOperation",
    "TradingLimits",
    "UserTradingSettings",
    "TradingSettingsUpdate",
    "TradeDecision",
    "OperationStats",
    # Policy
    "DEFAULT_TRADING_LIMITS",
    "validate_trading_settings",
    "can_open_new_trade",
    "calculate_operation_result",
    "calculate_success_rate",
    "summarize_operations",
    # Exceptions
    "TradingSettingsValidationError",
]
