"""Market data retrieval: top contracts by volume and their latest prices."""

import asyncio
import logging
from typing import Iterable

from bingx_scanner.clients import BingXRestClient
from bingx_scanner.config import Settings, get_settings
from bingx_scanner.core.retry import with_retry
from bingx_scanner.errors import MarketDataError, ShapeError, TransientIOError
from bingx_scanner.models import Instrument, PricePoint

logger = logging.getLogger(__name__)

DEFAULT_TOP_N = 100


def select_top_symbols(instruments: Iterable[Instrument], top_n: int = DEFAULT_TOP_N) -> list[str]:
    """
    Rank instruments by volume and return the top symbols.

    Sorting is stable, so instruments with equal volume keep catalog order.
    """
    ranked = sorted(instruments, key=lambda i: i.volume_value, reverse=True)
    return [instrument.symbol for instrument in ranked[:top_n]]


def filter_prices(prices: Iterable[PricePoint], symbols: Iterable[str]) -> list[PricePoint]:
    """Keep prices for the given symbols, in price-list order."""
    selected = set(symbols)
    return [point for point in prices if point.symbol in selected]


class MarketDataService:
    """Fetches prices for the most traded perpetual contracts.

    Each remote call is retried independently on TransientIOError with a
    fixed delay. Shape errors fail the retrieval immediately. No state is kept
    between calls to fetch_market_data.
    """

    def __init__(
        self,
        client: BingXRestClient,
        top_n: int = DEFAULT_TOP_N,
        max_attempts: int = 3,
        retry_delay: float = 1.0,
        concurrent: bool = False,
    ):
        self.client = client
        self.top_n = top_n
        self.max_attempts = max_attempts
        self.retry_delay = retry_delay
        self.concurrent = concurrent

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "MarketDataService":
        """Build a service and its client from application settings."""
        settings = settings or get_settings()
        client = BingXRestClient(
            api_key=settings.bingx_api_key,
            base_url=settings.bingx_base_url,
            timeout=settings.request_timeout,
        )
        return cls(
            client,
            top_n=settings.top_n,
            max_attempts=settings.max_retries,
            retry_delay=settings.retry_delay,
            concurrent=settings.concurrent_fetch,
        )

    async def close(self) -> None:
        await self.client.close()

    async def fetch_catalog(self) -> list[Instrument]:
        """Fetch the contract catalog with retries."""
        return await with_retry(
            self.client.get_contracts,
            max_attempts=self.max_attempts,
            delay=self.retry_delay,
            retry_on=(TransientIOError,),
            name="fetch catalog",
        )

    async def fetch_prices(self) -> list[PricePoint]:
        """Fetch the full price list with retries."""
        return await with_retry(
            self.client.get_prices,
            max_attempts=self.max_attempts,
            delay=self.retry_delay,
            retry_on=(TransientIOError,),
            name="fetch prices",
        )

    async def _fetch_both(self) -> tuple[list[Instrument], list[PricePoint]]:
        catalog_task = asyncio.create_task(self.fetch_catalog())
        prices_task = asyncio.create_task(self.fetch_prices())
        tasks = (catalog_task, prices_task)
        try:
            catalog, prices = await asyncio.gather(*tasks)
        except BaseException:
            for task in tasks:
                task.cancel()
            # Collect the sibling's outcome so its exception is retrieved
            await asyncio.gather(*tasks, return_exceptions=True)
            raise
        return catalog, prices

    async def fetch_market_data(self, concurrent: bool | None = None) -> list[PricePoint]:
        """
        Fetch prices for the top contracts by volume.

        Args:
            concurrent: Fetch catalog and prices at the same time. Defaults to
                the service setting; sequential (catalog first) otherwise.

        Returns:
            PricePoint list for the selected symbols, in price-list order

        Raises:
            TransientIOError: A call still failed after all retries
            ShapeError: A response was malformed or the selection came out empty
            MarketDataError: Any other non-retryable exchange failure
        """
        concurrent = self.concurrent if concurrent is None else concurrent
        try:
            if concurrent:
                catalog, prices = await self._fetch_both()
                symbols = select_top_symbols(catalog, self.top_n)
                if not symbols:
                    raise ShapeError("no symbols")
            else:
                catalog = await self.fetch_catalog()
                symbols = select_top_symbols(catalog, self.top_n)
                if not symbols:
                    raise ShapeError("no symbols")
                prices = await self.fetch_prices()

            selected = filter_prices(prices, symbols)
            if not selected:
                raise ShapeError("no prices for selection")
        except MarketDataError as e:
            logger.error(f"Error fetching market data: {e}")
            raise

        logger.info(
            f"Fetched {len(selected)} prices for top {len(symbols)} "
            f"of {len(catalog)} contracts"
        )
        return selected
