"""Fixtures for trading module tests."""

import pytest

from modules.trading.models import UserTradingSettings


@pytest.fixture
def configured_settings() -> UserTradingSettings:
    """Settings with credentials for both exchanges."""
    return UserTradingSettings(
        user_id="test-user-123",
        max_leverage=10,
        max_stop_loss=5,
        max_percent_per_trade=2,
        binance_api_key="binance-key",
        binance_api_secret="binance-secret",
        bybit_api_key="bybit-key",
        bybit_api_secret="bybit-secret",
        is_active=True,
    )
