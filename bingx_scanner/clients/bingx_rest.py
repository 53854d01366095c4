"""BingX perpetual swap REST API client for market data."""

import logging
from typing import Any

import httpx
from pydantic import ValidationError

from bingx_scanner.errors import MarketDataError, ShapeError, TransientIOError
from bingx_scanner.models import Instrument, PricePoint

logger = logging.getLogger(__name__)

CONTRACTS_ENDPOINT = "/openApi/swap/v2/quote/contracts"
PRICE_ENDPOINT = "/openApi/swap/v2/quote/price"

# Status codes worth another attempt
RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})


class BingXRestClient:
    """BingX Swap V2 REST API client.

    Every request carries the API key header and a fixed timeout. Transport
    failures, timeouts and retryable statuses surface as TransientIOError;
    anything else that goes wrong is a non-retryable MarketDataError.
    """

    BASE_URL = "https://open-api.bingx.com"

    def __init__(
        self,
        api_key: str = "",
        base_url: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url or self.BASE_URL
        self.timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def __aenter__(self) -> "BingXRestClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            headers = {
                "X-BX-APIKEY": self.api_key,
                "Content-Type": "application/json",
            }
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                headers=headers,
                timeout=self.timeout,
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def _request(
        self, method: str, endpoint: str, params: dict[str, Any] | None = None
    ) -> Any:
        """Make an API request and decode the JSON body."""
        client = await self._get_client()
        try:
            response = await client.request(method, endpoint, params=params)
            response.raise_for_status()
        except httpx.TimeoutException as e:
            raise TransientIOError(f"{endpoint} timed out: {e}") from e
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status in RETRYABLE_STATUS:
                raise TransientIOError(f"{endpoint} returned HTTP {status}") from e
            raise MarketDataError(f"{endpoint} returned HTTP {status}") from e
        except httpx.TransportError as e:
            raise TransientIOError(f"{endpoint} request failed: {e}") from e

        try:
            return response.json()
        except ValueError as e:
            raise ShapeError(f"{endpoint} returned a non-JSON body") from e

    @staticmethod
    def _data_list(payload: Any, endpoint: str) -> list[Any] | None:
        """Extract the ``data`` list from a response envelope."""
        if not isinstance(payload, dict):
            return None
        data = payload.get("data")
        if not isinstance(data, list):
            if payload.get("code"):
                logger.warning(
                    f"{endpoint} error code {payload.get('code')}: {payload.get('msg')}"
                )
            return None
        return data

    async def get_contracts(self) -> list[Instrument]:
        """
        Fetch the perpetual contract catalog.

        Returns:
            List of Instrument objects in exchange order

        Raises:
            TransientIOError: Network failure, timeout or retryable status
            ShapeError: Response lacks a ``data`` list of objects with a symbol
        """
        payload = await self._request("GET", CONTRACTS_ENDPOINT)
        data = self._data_list(payload, CONTRACTS_ENDPOINT)
        if data is None:
            raise ShapeError("invalid catalog shape")
        try:
            return [Instrument.model_validate(item) for item in data]
        except ValidationError as e:
            raise ShapeError("invalid catalog shape") from e

    async def get_prices(self) -> list[PricePoint]:
        """
        Fetch latest prices for every contract.

        Returns:
            List of PricePoint objects in exchange order

        Raises:
            TransientIOError: Network failure, timeout or retryable status
            ShapeError: Response lacks a ``data`` list of objects with a symbol
        """
        payload = await self._request("GET", PRICE_ENDPOINT)
        data = self._data_list(payload, PRICE_ENDPOINT)
        if data is None:
            raise ShapeError("invalid price shape")
        try:
            return [PricePoint.model_validate(item) for item in data]
        except ValidationError as e:
            raise ShapeError("invalid price shape") from e
