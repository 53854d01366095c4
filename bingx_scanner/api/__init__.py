"""API endpoints."""

from bingx_scanner.api.routes import get_market_service, get_signal_engine, router

__all__ = [
    "router",
    "get_market_service",
    "get_signal_engine",
]
