"""Shared fixtures: fixed clock, fake market data source and a test client."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from src.api.dependencies import get_clock
from src.app import create_app
from src.config import Config
from src.datasources import MarketDataSource
from src.errors import TokenNotFoundError
from src.models import MarketChart, MarketData, TokenData, TokenMetadata
from src.services import AIService

FIXED_NOW = datetime(2024, 6, 15, 12, 0, 0, tzinfo=timezone.utc)
WALLET = "0xABCDEF1234567890"


def fixed_clock() -> datetime:
    return FIXED_NOW


def make_token(change_24h: float = 2.5, market_cap: float = 1.3e12) -> TokenData:
    return TokenData(
        id="bitcoin",
        symbol="btc",
        name="Bitcoin",
        market_data=MarketData(
            current_price=67012.4567,
            market_cap=market_cap,
            total_volume=2.1e10,
            price_change_percentage_24h=change_24h,
            price_change_percentage_7d=-1.234,
            price_change_percentage_30d=10.0,
            high_24h=68000.111,
            low_24h=66000.999,
        ),
        metadata=TokenMetadata(coingecko_rank=1, categories=["Cryptocurrency"]),
    )


class FakeMarketDataSource(MarketDataSource):
    """In-memory market data source that only knows bitcoin."""

    def __init__(self):
        self.token_calls: list[tuple[str, str]] = []
        self.chart_calls: list[tuple[str, int, str]] = []

    async def get_token_data(self, token_id: str, vs_currency: str = "usd") -> TokenData:
        self.token_calls.append((token_id, vs_currency))
        if token_id != "bitcoin":
            raise TokenNotFoundError(token_id)
        return make_token()

    async def get_market_chart(
        self,
        token_id: str,
        days: int = 30,
        vs_currency: str = "usd",
    ) -> MarketChart:
        self.chart_calls.append((token_id, days, vs_currency))
        return MarketChart(
            prices=[[1718409600000, 66500.0], [1718496000000, 67012.45]],
            market_caps=[[1718409600000, 1.3e12]],
            total_volumes=[[1718409600000, 2.1e10]],
        )


@pytest.fixture
def config() -> Config:
    return Config()


@pytest.fixture
def market_datasource() -> FakeMarketDataSource:
    return FakeMarketDataSource()


@pytest.fixture
def app(config, market_datasource):
    app = create_app(
        config,
        datasource=market_datasource,
        ai_service=AIService(config),
    )
    app.dependency_overrides[get_clock] = lambda: fixed_clock
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c
