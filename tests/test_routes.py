"""Tests for the REST API."""

import pytest
from fastapi.testclient import TestClient

from bingx_scanner.api import get_market_service, get_signal_engine
from bingx_scanner.core import SignalEngine
from bingx_scanner.errors import ShapeError, TransientIOError
from bingx_scanner.main import create_app
from bingx_scanner.models import PricePoint, Trend, WavePattern


class FixedTrend:
    def classify_trend(self, price, history=None):
        return Trend.UP


class FixedWave:
    def classify_wave(self, price, history=None):
        return WavePattern.W1


class StubService:
    """Stands in for MarketDataService."""

    def __init__(self, points=None, error=None):
        self.points = points or []
        self.error = error
        self.calls = 0

    async def fetch_market_data(self, concurrent=None):
        self.calls += 1
        if self.error:
            raise self.error
        return self.points


POINTS = [
    PricePoint(symbol="BTC-USDT", price="100"),
    PricePoint(symbol="ETH-USDT", price="3120.75"),
    PricePoint(symbol="DOGE-USDT", price="0.1234"),
]


@pytest.fixture
def app():
    app = create_app()
    app.dependency_overrides[get_signal_engine] = lambda: SignalEngine(FixedTrend(), FixedWave())
    yield app
    app.dependency_overrides.clear()


def client_with(app, service) -> TestClient:
    app.dependency_overrides[get_market_service] = lambda: service
    return TestClient(app)


class TestSystemRoutes:
    """Tests for root and health endpoints."""

    def test_health(self, app):
        response = TestClient(app).get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "healthy"}

    def test_root(self, app):
        body = TestClient(app).get("/").json()
        assert body["name"] == "BingX Wave Scanner"
        assert body["docs"] == "/docs"


class TestSignalRoutes:
    """Tests for /api/signals and /api/market."""

    def test_get_signals(self, app):
        response = client_with(app, StubService(POINTS)).get("/api/signals")

        assert response.status_code == 200
        body = response.json()
        assert [s["symbol"] for s in body] == ["btc", "eth", "doge"]
        assert body[0] == {
            "symbol": "btc",
            "trend": "Up",
            "currentPrice": "100.00",
            "wavePattern": "W1",
            "entryPoint": "98.0000",
            "takeProfit": "105.00",
            "stopLoss": "95.0000",
            "probability": "0.60",
        }

    def test_get_signals_limit(self, app):
        response = client_with(app, StubService(POINTS)).get("/api/signals?limit=2")

        assert response.status_code == 200
        assert len(response.json()) == 2

    @pytest.mark.parametrize("limit", [0, 101])
    def test_get_signals_limit_bounds(self, app, limit):
        response = client_with(app, StubService(POINTS)).get(f"/api/signals?limit={limit}")
        assert response.status_code == 422

    def test_market_failure_returns_502(self, app):
        service = StubService(error=TransientIOError("timed out"))
        response = client_with(app, service).get("/api/signals")

        assert response.status_code == 502
        assert "timed out" in response.json()["detail"]

    def test_shape_failure_returns_502(self, app):
        service = StubService(error=ShapeError("no symbols"))
        response = client_with(app, service).get("/api/signals")

        assert response.status_code == 502
        assert response.json()["detail"] == "Failed to fetch market data: no symbols"

    def test_analysis_failure_returns_500(self, app):
        service = StubService([PricePoint(symbol="BTC-USDT", price="not-a-price")])
        response = client_with(app, service).get("/api/signals")

        assert response.status_code == 500
        assert "not-a-price" in response.json()["detail"]

    def test_get_market(self, app):
        response = client_with(app, StubService(POINTS)).get("/api/market")

        assert response.status_code == 200
        assert response.json()[0] == {"symbol": "BTC-USDT", "price": "100"}

    def test_get_market_failure(self, app):
        response = client_with(app, StubService(error=ShapeError("invalid price shape"))).get(
            "/api/market"
        )
        assert response.status_code == 502


class TestDependencies:
    """Tests for default dependency wiring."""

    def test_signal_engine_uses_settings(self, monkeypatch):
        monkeypatch.setenv("QUOTE_SUFFIXES", '["USDT", "USDC"]')
        engine = get_signal_engine()

        assert engine.quote_suffixes == ("USDT", "USDC")
        assert get_signal_engine() is engine

    @pytest.mark.asyncio
    async def test_market_service_closes_client(self, monkeypatch):
        monkeypatch.setenv("TOP_N", "5")
        gen = get_market_service()
        service = await gen.__anext__()
        assert service.top_n == 5

        await service.client._get_client()
        with pytest.raises(StopAsyncIteration):
            await gen.__anext__()
        assert service.client._client is None
