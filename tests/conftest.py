"""Shared test fixtures."""

import pytest

from bingx_scanner.api.routes import get_signal_engine
from bingx_scanner.config import get_settings
from bingx_scanner.models import PricePoint


@pytest.fixture(autouse=True)
def clear_cached_settings():
    """Settings and the shared engine are cached; reset between tests."""
    get_settings.cache_clear()
    get_signal_engine.cache_clear()
    yield
    get_settings.cache_clear()
    get_signal_engine.cache_clear()


@pytest.fixture
def price_points():
    """A small, valid batch of price points."""
    return [
        PricePoint(symbol="BTC-USDT", price="64250.5"),
        PricePoint(symbol="ETH-USDT", price="3120.75"),
        PricePoint(symbol="DOGE-USDT", price="0.1234"),
    ]
