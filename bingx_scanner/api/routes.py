"""REST API routes."""

import logging
from functools import lru_cache
from typing import AsyncIterator, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from bingx_scanner.config import get_settings
from bingx_scanner.core.signal_engine import SignalEngine
from bingx_scanner.errors import AnalysisError, MarketDataError
from bingx_scanner.models import PricePoint, SignalRecord
from bingx_scanner.services import MarketDataService, scan_market

logger = logging.getLogger(__name__)

router = APIRouter()


# Dependencies
async def get_market_service() -> AsyncIterator[MarketDataService]:
    """Per-request market data service; its HTTP client closes with the request."""
    service = MarketDataService.from_settings(get_settings())
    try:
        yield service
    finally:
        await service.close()


@lru_cache
def get_signal_engine() -> SignalEngine:
    return SignalEngine(quote_suffixes=get_settings().quote_suffixes)


@router.get("/signals", response_model=list[SignalRecord])
async def get_signals(
    limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum signals to return"),
    service: MarketDataService = Depends(get_market_service),
    engine: SignalEngine = Depends(get_signal_engine),
):
    """Fetch the top contracts and return a signal for each."""
    try:
        signals = await scan_market(service, engine)
    except MarketDataError as e:
        logger.error(f"Market data unavailable: {e}")
        raise HTTPException(status_code=502, detail=f"Failed to fetch market data: {e}")
    except AnalysisError as e:
        logger.error(f"Analysis failed: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to analyze market data: {e}")

    if limit is not None:
        signals = signals[:limit]
    return signals


@router.get("/market", response_model=list[PricePoint])
async def get_market(
    service: MarketDataService = Depends(get_market_service),
):
    """Return latest prices for the top contracts by volume."""
    try:
        return await service.fetch_market_data()
    except MarketDataError as e:
        logger.error(f"Market data unavailable: {e}")
        raise HTTPException(status_code=502, detail=f"Failed to fetch market data: {e}")
