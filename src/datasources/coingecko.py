"""CoinGecko public API data source implementation."""

import logging
import asyncio
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from src.errors import TokenNotFoundError, UpstreamServiceError
from src.models import TokenData, MarketData, TokenMetadata, MarketChart
from src.utils.cache import TTLCache
from .base import MarketDataSource

logger = logging.getLogger(__name__)

# API constants
COINGECKO_API_URL = "https://api.coingecko.com/api/v3"
REQUEST_TIMEOUT = 10.0
MAX_RETRIES = 3
RETRY_DELAY = 1.0
TOKEN_CACHE_TTL = 5 * 60
CHART_CACHE_TTL = 10 * 60


def _pick(values: Any, currency: str) -> float:
    """Read a per-currency value from a CoinGecko dict, defaulting to 0."""
    if isinstance(values, dict):
        return float(values.get(currency) or 0)
    return 0.0


def _clean_series(points: Any) -> list[list[float]]:
    """Keep [timestamp, value] pairs, dropping points with missing values."""
    if not isinstance(points, list):
        return []
    return [
        point for point in points
        if isinstance(point, list) and len(point) == 2 and None not in point
    ]


def transform_token_data(data: dict, vs_currency: str = "usd") -> TokenData:
    """
    Transform a raw ``/coins/{id}`` response into TokenData.
    
    Args:
        data: Raw CoinGecko response
        vs_currency: Currency to extract from per-currency dicts
        
    Returns:
        Normalized TokenData
    """
    market = data.get("market_data") or {}
    description = (data.get("description") or {}).get("en")
    image = data.get("image") or {}
    
    return TokenData(
        id=data.get("id", ""),
        symbol=data.get("symbol", ""),
        name=data.get("name", ""),
        description=description or "No description available",
        image=image.get("large") or image.get("small") or "",
        market_data=MarketData(
            current_price=_pick(market.get("current_price"), vs_currency),
            market_cap=_pick(market.get("market_cap"), vs_currency),
            total_volume=_pick(market.get("total_volume"), vs_currency),
            price_change_percentage_24h=market.get("price_change_percentage_24h") or 0,
            price_change_percentage_7d=market.get("price_change_percentage_7d") or 0,
            price_change_percentage_30d=market.get("price_change_percentage_30d") or 0,
            high_24h=_pick(market.get("high_24h"), vs_currency),
            low_24h=_pick(market.get("low_24h"), vs_currency),
            circulating_supply=market.get("circulating_supply") or 0,
            total_supply=market.get("total_supply") or 0,
            max_supply=market.get("max_supply"),
            ath=_pick(market.get("ath"), vs_currency),
            ath_change_percentage=_pick(market.get("ath_change_percentage"), vs_currency),
            atl=_pick(market.get("atl"), vs_currency),
            atl_change_percentage=_pick(market.get("atl_change_percentage"), vs_currency),
        ),
        metadata=TokenMetadata(
            coingecko_rank=data.get("market_cap_rank"),
            categories=[c for c in data.get("categories") or [] if c],
        ),
    )


class CoinGeckoDataSource(MarketDataSource):
    """
    Data source implementation using the CoinGecko v3 API.
    
    Responses are cached in-process: token data for 5 minutes and
    market charts for 10 minutes by default.
    """

    def __init__(
        self,
        api_url: str = COINGECKO_API_URL,
        api_key: Optional[str] = None,
        cache: Optional[TTLCache] = None,
        token_ttl: float = TOKEN_CACHE_TTL,
        chart_ttl: float = CHART_CACHE_TTL,
        retry_delay: float = RETRY_DELAY,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize CoinGecko data source.
        
        Args:
            api_url: Base URL for the CoinGecko API
            api_key: Optional demo API key
            cache: Response cache, a private one is created if None
            token_ttl: Seconds to cache token data
            chart_ttl: Seconds to cache market charts
            retry_delay: Seconds to wait between retries
            transport: Optional httpx transport (used by tests)
        """
        self.api_url = api_url
        self.api_key = api_key
        self.cache = cache if cache is not None else TTLCache()
        self.token_ttl = token_ttl
        self.chart_ttl = chart_ttl
        self.retry_delay = retry_delay
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            headers = {"Accept": "application/json"}
            if self.api_key:
                headers["x-cg-demo-api-key"] = self.api_key
            self._client = httpx.AsyncClient(
                base_url=self.api_url,
                headers=headers,
                timeout=REQUEST_TIMEOUT,
                transport=self._transport,
            )
        return self._client

    async def _make_request(
        self,
        endpoint: str,
        params: dict,
        token_id: str,
        retry_count: int = 0,
    ) -> Any:
        """
        Make a GET request with timeout handling and retries.
        
        Args:
            endpoint: API endpoint path
            params: Query parameters
            token_id: Token the request is about (for 404 reporting)
            retry_count: Current retry attempt
            
        Returns:
            Response JSON data
        """
        client = await self._get_client()
        
        try:
            response = await client.get(endpoint, params=params)
            response.raise_for_status()
            
        except httpx.TimeoutException as e:
            if retry_count < MAX_RETRIES:
                logger.warning(
                    f"Request to {endpoint} timed out (attempt {retry_count + 1}/{MAX_RETRIES}). "
                    f"Retrying in {self.retry_delay}s..."
                )
                await asyncio.sleep(self.retry_delay)
                return await self._make_request(endpoint, params, token_id, retry_count + 1)
            logger.error(f"Request to {endpoint} failed after {MAX_RETRIES} retries: {e}")
            raise UpstreamServiceError(f"CoinGecko request timed out: {endpoint}") from e
                
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            if status == 404:
                raise TokenNotFoundError(token_id) from e
            
            # Handle rate limiting (429 Too Many Requests)
            if status == 429 and retry_count < MAX_RETRIES:
                logger.warning(
                    f"Rate limited (429) on {endpoint} (attempt {retry_count + 1}/{MAX_RETRIES}). "
                    f"Retrying in {self.retry_delay}s..."
                )
                await asyncio.sleep(self.retry_delay)
                return await self._make_request(endpoint, params, token_id, retry_count + 1)
            
            logger.error(f"HTTP error {status} for {endpoint}: {e}")
            raise UpstreamServiceError(
                f"CoinGecko API error: {status} - {e.response.reason_phrase}"
            ) from e
            
        except httpx.HTTPError as e:
            logger.error(f"Transport error for {endpoint}: {e}")
            raise UpstreamServiceError(f"Failed to reach CoinGecko: {e}") from e
        
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Invalid JSON from {endpoint}: {e}")
            raise UpstreamServiceError("CoinGecko returned invalid JSON") from e

    async def get_token_data(self, token_id: str, vs_currency: str = "usd") -> TokenData:
        """
        Retrieve token metadata and market data.
        
        Uses the /coins/{id} endpoint with market data only.
        """
        cache_key = f"coingecko_token_{token_id}_{vs_currency}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            logger.info(f"Cache hit for token: {token_id}")
            return cached
        
        logger.info(f"Fetching token data for: {token_id}")
        data = await self._make_request(
            f"/coins/{token_id}",
            {
                "localization": "false",
                "tickers": "false",
                "market_data": "true",
                "community_data": "false",
                "developer_data": "false",
                "sparkline": "false",
            },
            token_id,
        )
        
        try:
            token_data = transform_token_data(data, vs_currency)
        except (ValueError, AttributeError, TypeError) as e:
            logger.error(f"Unexpected token payload for {token_id}: {e}")
            raise UpstreamServiceError(f"Unexpected CoinGecko response for token '{token_id}'") from e
        
        self.cache.set(cache_key, token_data, self.token_ttl)
        return token_data

    async def get_market_chart(
        self,
        token_id: str,
        days: int = 30,
        vs_currency: str = "usd",
    ) -> MarketChart:
        """
        Retrieve historical market chart data.
        
        Uses the /coins/{id}/market_chart endpoint, hourly for a single
        day of history and daily otherwise.
        """
        cache_key = f"coingecko_chart_{token_id}_{days}_{vs_currency}"
        cached = self.cache.get(cache_key)
        if cached is not None:
            return cached
        
        data = await self._make_request(
            f"/coins/{token_id}/market_chart",
            {
                "vs_currency": vs_currency,
                "days": days,
                "interval": "hourly" if days <= 1 else "daily",
            },
            token_id,
        )
        
        if not isinstance(data, dict):
            raise UpstreamServiceError(f"Unexpected CoinGecko chart response for token '{token_id}'")
        
        try:
            chart = MarketChart(
                prices=_clean_series(data.get("prices")),
                market_caps=_clean_series(data.get("market_caps")),
                total_volumes=_clean_series(data.get("total_volumes")),
            )
        except ValidationError as e:
            logger.error(f"Unexpected chart payload for {token_id}: {e}")
            raise UpstreamServiceError(f"Unexpected CoinGecko chart response for token '{token_id}'") from e
        
        self.cache.set(cache_key, chart, self.chart_ttl)
        return chart

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
