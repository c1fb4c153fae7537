"""FastAPI application factory."""

import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from src.config import Config
from src.datasources import CoinGeckoDataSource, MarketDataSource
from src.services import AIService
from src.utils.cache import TTLCache
from src.api import pnl_router, token_router, register_error_handlers
from src.api.dependencies import set_config, set_datasource, set_ai_service

logger = logging.getLogger(__name__)

SERVICE_NAME = "Token Insight & Analytics API"
SERVICE_VERSION = "1.0.0"


def create_app(
    config: Config | None = None,
    datasource: MarketDataSource | None = None,
    ai_service: AIService | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.
    
    Args:
        config: Application configuration. If None, loads from environment.
        datasource: Market data source. If None, a CoinGecko client is built.
        ai_service: AI insight service. If None, built from config.
        
    Returns:
        Configured FastAPI application
    """
    if config is None:
        config = Config.from_env()
    
    if datasource is None:
        datasource = CoinGeckoDataSource(
            api_url=config.coingecko_api_url,
            api_key=config.coingecko_api_key,
            cache=TTLCache(),
            token_ttl=config.token_cache_ttl,
            chart_ttl=config.chart_cache_ttl,
        )
    
    if ai_service is None:
        ai_service = AIService(config)
    
    started_at = time.monotonic()
    
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler for startup/shutdown."""
        # Startup
        logger.info(f"Starting {SERVICE_NAME} ({config.environment})")
        logger.info(f"Using CoinGecko API: {config.coingecko_api_url}")
        logger.info(f"AI provider: {ai_service.provider}")
        if not config.hyperliquid_api_key:
            logger.info("No Hyperliquid API key configured, PnL reports use mock data")
        
        set_config(config)
        set_datasource(datasource)
        set_ai_service(ai_service)
        
        yield
        
        # Shutdown
        logger.info("Shutting down...")
        await datasource.close()
        await ai_service.close()
    
    app = FastAPI(
        title=SERVICE_NAME,
        description="CoinGecko market data with AI commentary, and wallet PnL summaries",
        version=SERVICE_VERSION,
        lifespan=lifespan,
    )
    
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        logger.info(
            f"{request.method} {request.url.path} {response.status_code} {elapsed_ms:.1f}ms"
        )
        return response
    
    register_error_handlers(app)
    
    # Include API routes
    app.include_router(pnl_router)
    app.include_router(token_router)
    
    # Health check endpoint
    @app.get("/health")
    async def health_check():
        return {
            "status": "OK",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "uptime": round(time.monotonic() - started_at, 3),
            "environment": config.environment,
        }
    
    @app.get("/")
    async def root():
        return {
            "message": SERVICE_NAME,
            "version": SERVICE_VERSION,
            "endpoints": {
                "token_insight": "POST /api/token/{id}/insight",
                "wallet_pnl": "GET /api/hyperliquid/{wallet}/pnl?start=YYYY-MM-DD&end=YYYY-MM-DD",
                "wallet_summary": "GET /api/hyperliquid/{wallet}/summary",
                "health": "GET /health",
            },
            "documentation": "/docs",
        }
    
    return app
