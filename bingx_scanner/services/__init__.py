"""Business logic services."""

from bingx_scanner.services.market_data import (
    MarketDataService,
    filter_prices,
    select_top_symbols,
)
from bingx_scanner.services.pipeline import scan_market

__all__ = [
    "MarketDataService",
    "filter_prices",
    "select_top_symbols",
    "scan_market",
]
