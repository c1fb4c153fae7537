"""Token insight service combining market data with AI commentary."""

import logging
from typing import Optional

from src.datasources import MarketDataSource
from src.errors import InvalidInsightRequest
from src.models import (
    TokenInsightRequest,
    TokenInsightResponse,
    TokenSummary,
    MarketDataSummary,
    PriceHistory,
    InsightMetadata,
    TokenData,
)
from src.utils.dates import Clock, system_clock, utc_timestamp
from .ai_service import AIService

logger = logging.getLogger(__name__)

SUPPORTED_CURRENCIES = ("usd", "eur", "gbp", "jpy", "btc", "eth")
MIN_HISTORY_DAYS = 1
MAX_HISTORY_DAYS = 365


def _round2(value: Optional[float]) -> float:
    return round(value or 0, 2)


def summarize_market_data(token: TokenData) -> MarketDataSummary:
    """Headline figures rounded to 2 decimals."""
    market = token.market_data
    return MarketDataSummary(
        current_price_usd=_round2(market.current_price),
        market_cap_usd=_round2(market.market_cap),
        total_volume_usd=_round2(market.total_volume),
        price_change_percentage_24h=_round2(market.price_change_percentage_24h),
        price_change_percentage_7d=_round2(market.price_change_percentage_7d),
        price_change_percentage_30d=_round2(market.price_change_percentage_30d),
        high_24h=_round2(market.high_24h),
        low_24h=_round2(market.low_24h),
    )


class InsightService:
    """Service for building token insight responses."""

    def __init__(
        self,
        datasource: MarketDataSource,
        ai_service: AIService,
        clock: Clock = system_clock,
    ):
        self.datasource = datasource
        self.ai_service = ai_service
        self.clock = clock

    async def generate_token_insight(
        self,
        token_id: str,
        request: TokenInsightRequest,
    ) -> TokenInsightResponse:
        """
        Fetch market data and history for a token and attach an AI insight.
        
        Args:
            token_id: CoinGecko token ID
            request: Quote currency and history length
            
        Returns:
            TokenInsightResponse
            
        Raises:
            InvalidInsightRequest: On unsupported currency or history length
            TokenNotFoundError: If the token is unknown upstream
        """
        if not token_id:
            raise InvalidInsightRequest("Token ID is required")
        
        vs_currency = (request.vs_currency or "").lower()
        if vs_currency not in SUPPORTED_CURRENCIES:
            raise InvalidInsightRequest(
                f"Invalid vs_currency. Supported: {', '.join(SUPPORTED_CURRENCIES)}"
            )
        
        history_days = request.history_days
        if history_days < MIN_HISTORY_DAYS or history_days > MAX_HISTORY_DAYS:
            raise InvalidInsightRequest(
                f"history_days must be between {MIN_HISTORY_DAYS} and {MAX_HISTORY_DAYS}"
            )
        
        logger.info(f"Generating insight for token: {token_id}")
        
        token = await self.datasource.get_token_data(token_id, vs_currency)
        chart = await self.datasource.get_market_chart(token_id, history_days, vs_currency)
        insight = await self.ai_service.generate_insight(token)
        
        logger.info(f"Insight generated successfully for: {token_id}")
        
        return TokenInsightResponse(
            token=TokenSummary(
                id=token.id,
                symbol=token.symbol,
                name=token.name,
                market_data=summarize_market_data(token),
                price_history=PriceHistory(
                    prices=chart.prices,
                    market_caps=chart.market_caps,
                    total_volumes=chart.total_volumes,
                    days=history_days,
                ),
            ),
            insight=insight,
            model=self.ai_service.model_info(),
            metadata=InsightMetadata(
                generated_at=utc_timestamp(self.clock),
                vs_currency=vs_currency,
                has_history=True,
            ),
        )
