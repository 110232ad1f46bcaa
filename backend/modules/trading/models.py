"""
Trading module data models.

Trade operations, per-user trading settings and the results of the
policy checks run over them. Field names serialize as camelCase to match
the web frontend.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import Field

from shared.models import CamelModel

MASK_PREFIX = "*" * 8

CREDENTIAL_FIELDS = (
    "binance_api_key",
    "binance_api_secret",
    "bybit_api_key",
    "bybit_api_secret",
)


class Exchange(str, Enum):
    """Exchanges a user can connect API credentials for."""

    BINANCE = "binance"
    BYBIT = "bybit"


class TradeType(str, Enum):
    """Trade direction."""

    LONG = "LONG"
    SHORT = "SHORT"


class TradeStatus(str, Enum):
    """Lifecycle state of a trade operation."""

    OPEN = "open"
    CLOSED = "closed"
    CANCELLED = "cancelled"


class TradeOperation(CamelModel):
    """A single trade opened by the trading engine on behalf of a user."""

    id: str = Field(..., description="Operation ID")
    user_id: str = Field(..., description="Owner user ID")
    exchange: Exchange = Field(..., description="Exchange the trade runs on")
    symbol: str = Field(..., description="Trading pair, e.g. BTCUSDT")
    type: TradeType = Field(..., description="LONG or SHORT")
    status: TradeStatus = Field(..., description="open, closed or cancelled")

    entry_price: float = Field(..., gt=0, description="Entry price")
    exit_price: Optional[float] = Field(None, description="Exit price once closed")
    quantity: float = Field(..., description="Position size in base units")
    leverage: float = Field(default=1, description="Leverage multiplier")
    stop_loss: float = Field(default=0, description="Stop loss price")
    take_profit: Optional[float] = Field(None, description="Take profit price")

    # Profit (positive) or loss (negative), as recorded by the engine
    result: Optional[float] = Field(None, description="Realised result")
    result_percentage: Optional[float] = Field(None, description="Realised result in %")

    opened_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="When the trade was opened",
    )
    closed_at: Optional[datetime] = Field(None, description="When the trade was closed")
    ai_justification: Optional[str] = Field(
        None,
        description="Engine's explanation for losing trades",
    )

    commission: float = Field(default=0, description="Platform commission charged")
    fees: float = Field(default=0, description="Exchange fees charged")


class TradingLimits(CamelModel):
    """Platform-wide limits and the defaults for new trading settings."""

    max_concurrent_trades: int = Field(..., description="Open trades allowed at once")
    max_leverage: float = Field(..., description="Default leverage cap")
    max_stop_loss: float = Field(..., description="Default stop loss (%)")
    max_percent_per_trade: float = Field(..., description="Default % of balance per trade")
    min_balance_for_trade: float = Field(..., description="Minimum balance to open a trade")

    model_config = {"frozen": True}


class UserTradingSettings(CamelModel):
    """A user's stored trading settings."""

    user_id: str = Field(..., description="Owner user ID")
    max_leverage: float = Field(..., description="Leverage cap (1-100)")
    max_stop_loss: float = Field(..., description="Stop loss cap in % (0.1-50)")
    max_percent_per_trade: float = Field(
        ...,
        description="Share of balance per trade in % (0.1-20)",
    )

    binance_api_key: Optional[str] = Field(None, description="Binance API key")
    binance_api_secret: Optional[str] = Field(None, description="Binance API secret")
    bybit_api_key: Optional[str] = Field(None, description="Bybit API key")
    bybit_api_secret: Optional[str] = Field(None, description="Bybit API secret")

    is_active: bool = Field(default=False, description="Whether automatic trading is on")
    updated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        description="Last update time",
    )

    def masked(self) -> "UserTradingSettings":
        """Copy with API secrets hidden, for returning to clients."""
        return self.model_copy(
            update={
                "binance_api_secret": _mask(self.binance_api_secret),
                "bybit_api_secret": _mask(self.bybit_api_secret),
            }
        )


def _mask(secret: Optional[str]) -> Optional[str]:
    if not secret:
        return secret
    return MASK_PREFIX + secret[-4:] if len(secret) > 4 else MASK_PREFIX


def is_masked_secret(value: Optional[str]) -> bool:
    """True for a secret as returned by masked(), i.e. not a real credential."""
    return bool(value) and value.startswith(MASK_PREFIX)


class TradingSettingsUpdate(CamelModel):
    """
    Partial update of trading settings.

    Only the fields present are validated and written.
    """

    max_leverage: Optional[float] = None
    max_stop_loss: Optional[float] = None
    max_percent_per_trade: Optional[float] = None
    binance_api_key: Optional[str] = None
    binance_api_secret: Optional[str] = None
    bybit_api_key: Optional[str] = None
    bybit_api_secret: Optional[str] = None
    is_active: Optional[bool] = None

    def changes(self) -> dict:
        """
        Fields sent on this update, keyed by attribute name.

        An explicit null clears an API credential and is ignored elsewhere.
        """
        return {
            name: value
            for name, value in self.model_dump(exclude_unset=True).items()
            if value is not None or name in CREDENTIAL_FIELDS
        }


class TradeDecision(CamelModel):
    """Outcome of the pre-trade check."""

    can_open: bool = Field(..., description="Whether a new trade may be opened")
    reason: Optional[str] = Field(None, description="Why not, for display")


class OperationStats(CamelModel):
    """Aggregate results over a set of operations."""

    total_operations: int = Field(..., description="Closed operations considered")
    successful_operations: int = Field(..., description="Closed with a profit")
    failed_operations: int = Field(..., description="Closed without a profit")
    success_rate: float = Field(..., description="Successful / closed, in %")
    total_profit: float = Field(..., description="Sum of positive results")
    total_loss: float = Field(..., description="Sum of negative results (as a positive number)")
    net_result: float = Field(..., description="total_profit - total_loss")


class CanOpenTradeRequest(CamelModel):
    """Body of POST /api/trading/can-open."""

    exchange: Exchange
    open_trades: list[TradeOperation] = Field(default_factory=list)


class OperationStatsRequest(CamelModel):
    """Body of POST /api/trading/stats."""

    operations: list[TradeOperation] = Field(default_factory=list)
