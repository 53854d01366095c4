"""Retrieval followed by analysis."""

import logging

from bingx_scanner.core.signal_engine import SignalEngine
from bingx_scanner.models import SignalRecord
from bingx_scanner.services.market_data import MarketDataService

logger = logging.getLogger(__name__)


async def scan_market(
    service: MarketDataService,
    engine: SignalEngine | None = None,
    concurrent: bool | None = None,
) -> list[SignalRecord]:
    """Run one retrieval cycle and analyze the resulting prices."""
    engine = engine or SignalEngine()
    points = await service.fetch_market_data(concurrent=concurrent)
    signals = engine.analyze(points)
    logger.info(f"Generated {len(signals)} signals")
    return signals
