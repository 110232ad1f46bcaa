"""
CoinBitClub API package.

Provides the FastAPI application for session tokens and trading settings.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
