import pytest

from modules.trading.models import (
    Exchange,
    TradeOperation,
    TradingSettingsUpdate,
    UserTradingSettings,
    is_masked_secret,
)


class TestTradeOperation:
    def test_parse_camel_case(self):
        op = TradeOperation.model_validate({
            "id": "op-1",
            "userId": "u1",
            "exchange": "bybit",
            "symbol": "ETHUSDT",
            "type": "SHORT",
            "status": "closed",
            "entryPrice": 2000,
            "exitPrice": 1900,
            "quantity": 0.5,
            "leverage": 3,
            "stopLoss": 2100,
            "commission": 1,
            "fees": 0.5,
        })
        assert op.exchange == Exchange.BYBIT
        assert op.exit_price == 1900
        assert op.result is None

    def test_entry_price_must_be_positive(self):
        with pytest.raises(Exception):
            TradeOperation(
                id="op-1",
                user_id="u1",
                exchange="binance",
                symbol="BTCUSDT",
                type="LONG",
                status="open",
                entry_price=0,
                quantity=1,
            )


class TestUserTradingSettings:
    @pytest.fixture
    def settings(self) -> UserTradingSettings:
        return UserTradingSettings(
            user_id="u1",
            max_leverage=10,
            max_stop_loss=5,
            max_percent_per_trade=2,
            binance_api_key="bk",
            binance_api_secret="binance-secret-value",
            bybit_api_key="yk",
            bybit_api_secret="abc",
        )

    def test_masked_hides_secrets(self, settings):
        masked = settings.masked()
        assert masked.binance_api_secret == "********alue"
        assert masked.bybit_api_secret == "********"
        assert masked.binance_api_key == "bk"
        assert settings.binance_api_secret == "binance-secret-value"

    def test_masked_keeps_missing_secrets(self):
        settings = UserTradingSettings(
            user_id="u1", max_leverage=10, max_stop_loss=5, max_percent_per_trade=2
        )
        assert settings.masked().binance_api_secret is None


class TestTradingSettingsUpdate:
    def test_changes_only_include_present_fields(self):
        update = TradingSettingsUpdate.model_validate({"maxLeverage": 20, "isActive": False})
        assert update.changes() == {"max_leverage": 20, "is_active": False}

    def test_omitted_fields_are_not_changes(self):
        update = TradingSettingsUpdate.model_validate({"maxStopLoss": 3})
        assert update.changes() == {"max_stop_loss": 3}

    def test_explicit_null_clears_credentials(self):
        update = TradingSettingsUpdate.model_validate(
            {"binanceApiKey": None, "binanceApiSecret": None}
        )
        assert update.changes() == {"binance_api_key": None, "binance_api_secret": None}

    def test_explicit_null_ignored_on_limits(self):
        update = TradingSettingsUpdate.model_validate({"maxLeverage": None, "isActive": None})
        assert update.changes() == {}


class TestIsMaskedSecret:
    def test_masked_output_is_recognised(self):
        settings = UserTradingSettings(
            user_id="u1",
            max_leverage=10,
            max_stop_loss=5,
            max_percent_per_trade=2,
            binance_api_secret="binance-secret-value",
            bybit_api_secret="abc",
        ).masked()
        assert is_masked_secret(settings.binance_api_secret) is True
        assert is_masked_secret(settings.bybit_api_secret) is True

    @pytest.mark.parametrize("value", [None, "", "real-secret", "***short"])
    def test_real_or_missing_values(self, value):
        assert is_masked_secret(value) is False
