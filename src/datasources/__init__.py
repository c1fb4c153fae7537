from .base import MarketDataSource
from .coingecko import CoinGeckoDataSource

__all__ = [
    "MarketDataSource",
    "CoinGeckoDataSource",
]
