"""Token market data and insight models."""

from typing import Optional
from pydantic import BaseModel, Field


class MarketData(BaseModel):
    """
    Normalized CoinGecko market data in a single quote currency.
    
    Missing upstream values are reported as 0.
    """
    current_price: float = 0.0
    market_cap: float = 0.0
    total_volume: float = 0.0
    price_change_percentage_24h: float = 0.0
    price_change_percentage_7d: float = 0.0
    price_change_percentage_30d: float = 0.0
    high_24h: float = 0.0
    low_24h: float = 0.0
    circulating_supply: float = 0.0
    total_supply: float = 0.0
    max_supply: Optional[float] = None
    ath: float = 0.0
    ath_change_percentage: float = 0.0
    atl: float = 0.0
    atl_change_percentage: float = 0.0


class TokenMetadata(BaseModel):
    coingecko_rank: Optional[int] = None
    categories: list[str] = Field(default_factory=list)


class TokenData(BaseModel):
    """Token metadata plus market data as returned by the market data source."""
    id: str
    symbol: str
    name: str
    description: str = "No description available"
    image: str = ""
    market_data: MarketData
    metadata: TokenMetadata = Field(default_factory=TokenMetadata)


class MarketChart(BaseModel):
    """Historical series as [timestamp_ms, value] pairs."""
    prices: list[list[float]] = Field(default_factory=list)
    market_caps: list[list[float]] = Field(default_factory=list)
    total_volumes: list[list[float]] = Field(default_factory=list)


class Insight(BaseModel):
    reasoning: str
    sentiment: str = Field(description="'Bullish', 'Bearish' or 'Neutral'")


class TokenInsightRequest(BaseModel):
    vs_currency: str = Field(default="usd", description="Quote currency")
    history_days: int = Field(default=30, description="Days of price history (1-365)")


class MarketDataSummary(BaseModel):
    """Headline market figures rounded to 2 decimals."""
    current_price_usd: float
    market_cap_usd: float
    total_volume_usd: float
    price_change_percentage_24h: float
    price_change_percentage_7d: float
    price_change_percentage_30d: float
    high_24h: float
    low_24h: float


class PriceHistory(MarketChart):
    days: int


class TokenSummary(BaseModel):
    id: str
    symbol: str
    name: str
    market_data: MarketDataSummary
    price_history: Optional[PriceHistory] = None


class ModelInfo(BaseModel):
    provider: str
    model: str


class InsightMetadata(BaseModel):
    generated_at: str
    vs_currency: str
    has_history: bool


class TokenInsightResponse(BaseModel):
    """Response body for the token insight endpoint."""
    success: bool = True
    source: str = "coingecko"
    token: TokenSummary
    insight: Insight
    model: ModelInfo
    metadata: InsightMetadata
