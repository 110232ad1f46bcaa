"""
FastAPI application factory.

Creates and configures the FastAPI application instance.
"""

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shared.config import get_settings
from shared.exceptions import (
    AuthenticationError,
    AuthorizationError,
    CoinBitClubError,
    ValidationError,
)
from shared.logging_config import configure_logging
from .dependencies import get_container
from .models.errors import ErrorResponse, ValidationErrorResponse
from .routes import health, users
from modules.auth.routes import router as auth_router, admin_router
from modules.trading.exceptions import TradingSettingsValidationError
from modules.trading.routes import router as trading_router

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    Startup fails if the token signing configuration is unusable
    (e.g. JWT_SECRET is not set).
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    get_container().token_config()
    logger.info(
        f"Starting {settings.app_name} on {settings.host}:{settings.port} "
        f"(storage: {settings.storage_backend})"
    )
    yield
    # Shutdown
    logger.info(f"Shutting down {settings.app_name}")


def _status_for(exc: CoinBitClubError) -> int:
    if isinstance(exc, AuthenticationError):
        return 401
    if isinstance(exc, AuthorizationError):
        return 403
    if isinstance(exc, ValidationError):
        return 422
    return 500


async def handle_app_error(request: Request, exc: CoinBitClubError) -> JSONResponse:
    """Translate module exceptions into the standard error response."""
    status_code = _status_for(exc)
    if status_code >= 500:
        logger.error(f"Unhandled application error on {request.url.path}: {exc.message}")

    body = ErrorResponse(error=exc.code, detail=exc.message, details=exc.details)
    headers = {"WWW-Authenticate": "Bearer"} if status_code == 401 else None
    return JSONResponse(status_code=status_code, content=body.model_dump(), headers=headers)


async def handle_settings_validation_error(
    request: Request, exc: TradingSettingsValidationError
) -> JSONResponse:
    """Rejected settings update: list the violations at the top level."""
    body = ValidationErrorResponse(error=exc.code, detail=exc.message, violations=exc.violations)
    return JSONResponse(status_code=422, content=body.model_dump())


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI instance
    """
    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Session tokens and trading policy API for CoinBitClub",
        version=settings.app_version,
        lifespan=lifespan,
        docs_url="/api/docs" if settings.debug else None,
        redoc_url="/api/redoc" if settings.debug else None,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )

    app.add_exception_handler(CoinBitClubError, handle_app_error)
    app.add_exception_handler(TradingSettingsValidationError, handle_settings_validation_error)

    # Register routes
    app.include_router(health.router, prefix="/api", tags=["health"])
    app.include_router(auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(admin_router, prefix="/api/admin", tags=["admin"])
    app.include_router(users.router, prefix="/api/users", tags=["users"])
    app.include_router(trading_router, prefix="/api/trading", tags=["trading"])

    return app


# Application instance for uvicorn
app = create_app()
