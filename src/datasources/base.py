"""Abstract base class for market data sources."""

from abc import ABC, abstractmethod

from src.models import TokenData, MarketChart


class MarketDataSource(ABC):
    """
    Abstract interface for token market data providers.
    
    This abstraction allows swapping CoinGecko for another provider
    (or a fake in tests) without touching the insight service.
    """

    @abstractmethod
    async def get_token_data(self, token_id: str, vs_currency: str = "usd") -> TokenData:
        """
        Retrieve token metadata and current market data.
        
        Args:
            token_id: Provider token ID (e.g. 'bitcoin')
            vs_currency: Quote currency for price fields
            
        Returns:
            Normalized TokenData
            
        Raises:
            TokenNotFoundError: If the provider does not know the token
            UpstreamServiceError: If the provider fails
        """
        pass

    @abstractmethod
    async def get_market_chart(
        self,
        token_id: str,
        days: int = 30,
        vs_currency: str = "usd",
    ) -> MarketChart:
        """
        Retrieve historical prices, market caps and volumes.
        
        Args:
            token_id: Provider token ID
            days: Number of days of history
            vs_currency: Quote currency
            
        Returns:
            MarketChart series
        """
        pass

    async def close(self) -> None:
        """
        Clean up resources (e.g., close HTTP sessions).
        
        Override this if the data source holds resources that need cleanup.
        """
        pass
