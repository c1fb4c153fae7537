"""Application configuration."""

import os
from dataclasses import dataclass, field


def _split_origins(raw: str) -> list[str]:
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Config:
    """Application configuration loaded from environment variables."""
    
    # API settings
    host: str = "0.0.0.0"
    port: int = 5000
    environment: str = "development"
    log_level: str = "INFO"
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    
    # Hyperliquid API
    # When a key is present, PnL diagnostics report the Hyperliquid source.
    hyperliquid_api_key: str | None = None
    
    # CoinGecko API
    coingecko_api_url: str = "https://api.coingecko.com/api/v3"
    coingecko_api_key: str | None = None
    
    # AI provider: HUGGINGFACE or OPENAI
    ai_provider: str = "HUGGINGFACE"
    huggingface_api_key: str | None = None
    huggingface_model: str = "tiiuae/falcon-7b-instruct"
    openai_api_key: str | None = None
    openai_model: str = "gpt-3.5-turbo"
    
    # PnL windows in days
    pnl_max_range_days: int = 90
    summary_lookback_days: int = 30
    
    # Cache TTLs in seconds
    token_cache_ttl: float = 300.0
    chart_cache_ttl: float = 600.0
    
    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", "5000")),
            environment=os.getenv("ENVIRONMENT", "development"),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            allowed_origins=_split_origins(os.getenv("ALLOWED_ORIGINS", "*")),
            hyperliquid_api_key=os.getenv("HYPERLIQUID_API_KEY") or None,
            coingecko_api_url=os.getenv(
                "COINGECKO_API_URL",
                "https://api.coingecko.com/api/v3"
            ),
            coingecko_api_key=os.getenv("COINGECKO_API_KEY") or None,
            ai_provider=os.getenv("AI_PROVIDER", "HUGGINGFACE").upper(),
            huggingface_api_key=os.getenv("HUGGINGFACE_API_KEY") or None,
            huggingface_model=os.getenv(
                "HUGGINGFACE_MODEL",
                "tiiuae/falcon-7b-instruct"
            ),
            openai_api_key=os.getenv("OPENAI_API_KEY") or None,
            openai_model=os.getenv("OPENAI_MODEL", "gpt-3.5-turbo"),
            pnl_max_range_days=int(os.getenv("PNL_MAX_RANGE_DAYS", "90")),
            summary_lookback_days=int(os.getenv("SUMMARY_LOOKBACK_DAYS", "30")),
            token_cache_ttl=float(os.getenv("TOKEN_CACHE_TTL", "300")),
            chart_cache_ttl=float(os.getenv("CHART_CACHE_TTL", "600")),
        )
