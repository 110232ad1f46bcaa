"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
from typing import Optional
import jwt  # PyJWT

from api.dependencies import reset_container
from shared.config import get_settings
from modules.auth.models import (
    ACCESS_TOKEN_AUDIENCE,
    REFRESH_TOKEN_AUDIENCE,
    TOKEN_ISSUER,
    TokenConfig,
)
from modules.trading.models import (
    Exchange,
    TradeOperation,
    TradeStatus,
    TradeType,
)


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    is_admin: bool = False,
    subscription_status: str = "active",
    expired: bool = False,
    audience: str = ACCESS_TOKEN_AUDIENCE,
    issuer: str = TOKEN_ISSUER,
    secret: str = TEST_JWT_SECRET,
) -> str:
    """
    Create a signed access token for tests.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        is_admin: Administrator flag
        subscription_status: Billing state claim
        expired: If True, creates an expired token
        audience: Token audience
        issuer: Token issuer
        secret: Signing secret

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "userId": user_id,
        "email": email,
        "isAdmin": is_admin,
        "subscriptionStatus": subscription_status,
        "iss": issuer,
        "aud": audience,
        "exp": int(exp.timestamp()),
        "iat": int((exp - timedelta(hours=2)).timestamp()),
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def create_test_refresh_token(
    user_id: str = "test-user-123",
    token_version: int = 1,
    expired: bool = False,
) -> str:
    """Create a signed refresh token for tests."""
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(days=1)

    payload = {
        "userId": user_id,
        "tokenVersion": token_version,
        "iss": TOKEN_ISSUER,
        "aud": REFRESH_TOKEN_AUDIENCE,
        "exp": int(exp.timestamp()),
        "iat": int((exp - timedelta(days=2)).timestamp()),
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


@pytest.fixture(autouse=True)
def test_environment(monkeypatch):
    """Configure a test secret and in-memory storage; reset cached services."""
    monkeypatch.setenv("JWT_SECRET", TEST_JWT_SECRET)
    monkeypatch.setenv("STORAGE_BACKEND", "memory")
    get_settings.cache_clear()
    reset_container()
    yield
    get_settings.cache_clear()
    reset_container()


@pytest.fixture
def token_config() -> TokenConfig:
    """Token configuration using the test secret."""
    return TokenConfig(secret=TEST_JWT_SECRET)


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Authorization headers for an administrator."""
    token = create_test_token(user_id="admin-1", email="admin@example.com", is_admin=True)
    return {"Authorization": f"Bearer {token}"}


def make_operation(
    op_id: str = "op-1",
    status: TradeStatus = TradeStatus.CLOSED,
    type: TradeType = TradeType.LONG,
    entry_price: float = 100,
    exit_price: Optional[float] = 110,
    quantity: float = 1,
    leverage: float = 5,
    fees: float = 0,
    commission: float = 0,
    result: Optional[float] = None,
) -> TradeOperation:
    """Build a trade operation; defaults to a closed 5x LONG from 100 to 110."""
    return TradeOperation(
        id=op_id,
        user_id="test-user-123",
        exchange=Exchange.BINANCE,
        symbol="BTCUSDT",
        type=type,
        status=status,
        entry_price=entry_price,
        exit_price=exit_price,
        quantity=quantity,
        leverage=leverage,
        stop_loss=95,
        fees=fees,
        commission=commission,
        result=result,
    )
