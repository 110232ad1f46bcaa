"""
Trading policy checks.

Pure functions over candidate settings and trades. No I/O, no clock,
no exceptions: callers decide how to present a refusal.
"""

from typing import Any, Iterable, Mapping, Sequence, Union

from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from .models import (
    Exchange,
    OperationStats,
    TradeDecision,
    TradeOperation,
    TradeStatus,
    TradeType,
    TradingLimits,
    TradingSettingsUpdate,
    UserTradingSettings,
)

DEFAULT_TRADING_LIMITS = TradingLimits(
    max_concurrent_trades=2,
    max_leverage=10,
    max_stop_loss=5,
    max_percent_per_trade=2,
    min_balance_for_trade=10,  # USD/BRL
)

LEVERAGE_RANGE = (1, 100)
STOP_LOSS_RANGE = (0.1, 50)
PERCENT_PER_TRADE_RANGE = (0.1, 20)

LEVERAGE_VIOLATION = "Alavancagem deve estar entre 1x e 100x"
STOP_LOSS_VIOLATION = "Stop Loss deve estar entre 0.1% e 50%"
PERCENT_PER_TRADE_VIOLATION = "Porcentagem por operação deve estar entre 0.1% e 20%"

SettingsLike = Union[UserTradingSettings, TradingSettingsUpdate, Mapping[str, Any]]

_FIELD_NAMES = {
    key: name
    for name in TradingSettingsUpdate.model_fields
    for key in (name, to_camel(name))
}


def _as_settings(
    settings: SettingsLike,
) -> tuple[Union[UserTradingSettings, TradingSettingsUpdate], set[str]]:
    """
    Coerce input into a settings model.

    Returns the model plus the names of fields whose values could not be
    read; those fields are left unset on the model.
    """
    if isinstance(settings, (UserTradingSettings, TradingSettingsUpdate)):
        return settings, set()
    if not isinstance(settings, Mapping):
        return TradingSettingsUpdate(), set(TradingSettingsUpdate.model_fields)

    try:
        return TradingSettingsUpdate.model_validate(settings), set()
    except PydanticValidationError as e:
        invalid = {_FIELD_NAMES.get(err["loc"][0], err["loc"][0]) for err in e.errors()}

    readable = {k: v for k, v in settings.items() if _FIELD_NAMES.get(k, k) not in invalid}
    return TradingSettingsUpdate.model_validate(readable), invalid


def _out_of_range(value, bounds: tuple[float, float]) -> bool:
    low, high = bounds
    return value is not None and not (low <= value <= high)


def validate_trading_settings(settings: SettingsLike) -> list[str]:
    """
    Check a (possibly partial) settings update against the allowed ranges.

    Only fields that are present are checked. A value that is not a number
    counts as out of range.

    Returns:
        Human-readable violations; empty when the update is valid.
    """
    settings, invalid = _as_settings(settings)
    errors: list[str] = []

    if "max_leverage" in invalid or _out_of_range(settings.max_leverage, LEVERAGE_RANGE):
        errors.append(LEVERAGE_VIOLATION)

    if "max_stop_loss" in invalid or _out_of_range(settings.max_stop_loss, STOP_LOSS_RANGE):
        errors.append(STOP_LOSS_VIOLATION)

    if "max_percent_per_trade" in invalid or _out_of_range(
        settings.max_percent_per_trade, PERCENT_PER_TRADE_RANGE
    ):
        errors.append(PERCENT_PER_TRADE_VIOLATION)

    return errors


def can_open_new_trade(
    open_trades: Sequence[TradeOperation],
    settings: SettingsLike,
    exchange: Union[Exchange, str],
) -> TradeDecision:
    """
    Decide whether a new trade may be opened on an exchange.

    Rules, first failure wins:
    1. fewer than ``max_concurrent_trades`` trades already open
    2. both API key and secret configured for the exchange
    """
    limit = DEFAULT_TRADING_LIMITS.max_concurrent_trades
    if len(open_trades) >= limit:
        return TradeDecision(
            can_open=False,
            reason=f"Limite máximo de {limit} operações simultâneas atingido",
        )

    try:
        exchange = Exchange(exchange)
    except ValueError:
        return TradeDecision(can_open=False, reason=f"Exchange não suportada: {exchange}")

    settings, invalid = _as_settings(settings)
    key_field = f"{exchange.value}_api_key"
    secret_field = f"{exchange.value}_api_secret"
    if key_field in invalid or secret_field in invalid:
        return TradeDecision(
            can_open=False,
            reason=f"Chaves API da {exchange.value} inválidas",
        )

    key = getattr(settings, key_field)
    secret = getattr(settings, secret_field)
    if not (key and secret):
        return TradeDecision(
            can_open=False,
            reason=f"Chaves API da {exchange.value} não configuradas",
        )

    return TradeDecision(can_open=True)


def calculate_operation_result(operation: TradeOperation) -> float:
    """
    Profit or loss of a closed operation, net of fees and commission.

    Returns 0 for operations that are not closed or have no exit price.
    Check ``status`` before reading 0 as a break-even trade.
    """
    if operation.status != TradeStatus.CLOSED or operation.exit_price is None:
        return 0

    if operation.type == TradeType.LONG:
        price_change = operation.exit_price - operation.entry_price
    else:
        price_change = operation.entry_price - operation.exit_price

    percentage_change = (price_change / operation.entry_price) * 100
    leveraged_change = percentage_change * operation.leverage

    notional = operation.quantity * operation.entry_price
    result = (leveraged_change / 100) * notional

    return result - operation.fees - operation.commission


def calculate_success_rate(operations: Iterable[TradeOperation]) -> float:
    """Percentage of closed operations with a positive result; 0 if none closed."""
    closed = [op for op in operations if op.status == TradeStatus.CLOSED]
    if not closed:
        return 0

    successful = sum(1 for op in closed if (op.result or 0) > 0)
    return successful / len(closed) * 100


def _realised_result(operation: TradeOperation) -> float:
    if operation.result is not None:
        return operation.result
    return calculate_operation_result(operation)


def summarize_operations(operations: Iterable[TradeOperation]) -> OperationStats:
    """
    Aggregate profit, loss and success rate over the closed operations.

    Uses the engine-recorded ``result`` when present, otherwise computes it.
    """
    closed = [op for op in operations if op.status == TradeStatus.CLOSED]
    results = [_realised_result(op) for op in closed]

    total_profit = sum(r for r in results if r > 0)
    total_loss = -sum(r for r in results if r < 0)
    successful = sum(1 for r in results if r > 0)

    return OperationStats(
        total_operations=len(closed),
        successful_operations=successful,
        failed_operations=len(closed) - successful,
        success_rate=successful / len(closed) * 100 if closed else 0,
        total_profit=total_profit,
        total_loss=total_loss,
        net_result=total_profit - total_loss,
    )
