"""FastAPI dependencies for dependency injection."""

from src.config import Config
from src.datasources import MarketDataSource
from src.services import AIService
from src.utils.dates import Clock, system_clock

# Global instances - initialized at app startup
_config: Config | None = None
_datasource: MarketDataSource | None = None
_ai_service: AIService | None = None


def set_config(config: Config) -> None:
    """Set the global configuration."""
    global _config
    _config = config


def get_config() -> Config:
    """Get the global configuration for dependency injection."""
    if _config is None:
        raise RuntimeError("Config not initialized. Call set_config() first.")
    return _config


def set_datasource(datasource: MarketDataSource) -> None:
    """Set the global market data source instance."""
    global _datasource
    _datasource = datasource


def get_datasource() -> MarketDataSource:
    """Get the global market data source for dependency injection."""
    if _datasource is None:
        raise RuntimeError("DataSource not initialized. Call set_datasource() first.")
    return _datasource


def set_ai_service(ai_service: AIService) -> None:
    """Set the global AI service instance."""
    global _ai_service
    _ai_service = ai_service


def get_ai_service() -> AIService:
    """Get the global AI service for dependency injection."""
    if _ai_service is None:
        raise RuntimeError("AIService not initialized. Call set_ai_service() first.")
    return _ai_service


def get_clock() -> Clock:
    """Clock used for date-relative validation. Override in tests."""
    return system_clock
