"""
Trading API endpoints.

Settings management, the pre-trade check and operation statistics.
Order execution itself happens in the external trading engine.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_trading_service
from api.middleware.auth import get_current_user
from modules.auth.models import SessionClaims

from .interfaces import ITradingService
from .models import (
    CanOpenTradeRequest,
    OperationStats,
    OperationStatsRequest,
    TradeDecision,
    TradingLimits,
    TradingSettingsUpdate,
    UserTradingSettings,
)
from .validator import DEFAULT_TRADING_LIMITS, summarize_operations

router = APIRouter()


@router.get("/limits", response_model=TradingLimits)
async def get_trading_limits() -> TradingLimits:
    """Platform-wide trading limits and defaults."""
    return DEFAULT_TRADING_LIMITS


@router.get("/settings", response_model=UserTradingSettings)
async def get_trading_settings(
    user: SessionClaims = Depends(get_current_user),
    service: ITradingService = Depends(get_trading_service),
) -> UserTradingSettings:
    """Get the caller's trading settings, with API secrets masked."""
    settings = await service.get_settings(user.user_id)
    return settings.masked()


@router.put("/settings", response_model=UserTradingSettings)
async def update_trading_settings(
    update: TradingSettingsUpdate,
    user: SessionClaims = Depends(get_current_user),
    service: ITradingService = Depends(get_trading_service),
) -> UserTradingSettings:
    """
    Partially update the caller's trading settings.

    Returns 422 with the list of violations if any value is out of range;
    nothing is saved in that case. A null API key or secret clears it; a
    masked secret sent back unchanged keeps the stored one.
    """
    settings = await service.update_settings(user.user_id, update)
    return settings.masked()


@router.post("/can-open", response_model=TradeDecision)
async def can_open_trade(
    request: CanOpenTradeRequest,
    user: SessionClaims = Depends(get_current_user),
    service: ITradingService = Depends(get_trading_service),
) -> TradeDecision:
    """Check whether a new trade may be opened on the given exchange."""
    return await service.check_new_trade(user.user_id, request.open_trades, request.exchange)


@router.post("/stats", response_model=OperationStats)
async def operation_stats(
    request: OperationStatsRequest,
    user: SessionClaims = Depends(get_current_user),
) -> OperationStats:
    """Success rate and profit/loss totals over the given operations."""
    return summarize_operations(request.operations)
