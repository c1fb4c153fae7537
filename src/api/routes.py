"""API routes for the token insight and wallet PnL gateway."""

from typing import Optional

from fastapi import APIRouter, Body, Depends, Path, Query

from src.config import Config
from src.datasources import MarketDataSource
from src.models import (
    PnLMetadata,
    SummaryMetadata,
    TokenInsightRequest,
    TokenInsightResponse,
    WalletPnLResponse,
    WalletSummaryResponse,
)
from src.services import AIService, InsightService, PnLService
from src.utils.dates import Clock, utc_timestamp
from .dependencies import get_ai_service, get_clock, get_config, get_datasource

pnl_router = APIRouter(prefix="/api/hyperliquid", tags=["pnl"])
token_router = APIRouter(prefix="/api/token", tags=["token"])


@pnl_router.get("/{wallet}/pnl", response_model=WalletPnLResponse)
async def get_wallet_pnl(
    wallet: str = Path(
        ...,
        description="Wallet address",
        examples=["0xABCDEF1234567890"],
    ),
    start: Optional[str] = Query(
        None,
        description="Start date (YYYY-MM-DD)",
        examples=["2024-03-01"],
    ),
    end: Optional[str] = Query(
        None,
        description="End date (YYYY-MM-DD)",
        examples=["2024-03-03"],
    ),
    config: Config = Depends(get_config),
    clock: Clock = Depends(get_clock),
) -> WalletPnLResponse:
    """
    Get daily PnL for a wallet over a date range (max 90 days).
    
    Returns: daily[], summary, diagnostics
    """
    service = PnLService(config, clock)
    report = service.get_wallet_pnl(wallet=wallet, start=start, end=end)
    
    return WalletPnLResponse(
        **report.model_dump(),
        metadata=PnLMetadata(
            generated_at=utc_timestamp(clock),
            total_days=len(report.daily),
            date_range_validated=True,
        ),
    )


@pnl_router.get("/{wallet}/summary", response_model=WalletSummaryResponse)
async def get_wallet_summary(
    wallet: str = Path(
        ...,
        description="Wallet address",
        examples=["0xABCDEF1234567890"],
    ),
    config: Config = Depends(get_config),
    clock: Clock = Depends(get_clock),
) -> WalletSummaryResponse:
    """
    Get PnL totals for a wallet over the trailing lookback window.
    """
    service = PnLService(config, clock)
    report = service.get_wallet_summary(wallet=wallet)
    
    return WalletSummaryResponse(
        wallet=report.wallet,
        period=f"{config.summary_lookback_days}d",
        summary=report.summary,
        metadata=SummaryMetadata(generated_at=utc_timestamp(clock)),
    )


@token_router.post(
    "/{token_id}/insight",
    response_model=TokenInsightResponse,
    response_model_exclude_none=True,
)
async def generate_token_insight(
    token_id: str = Path(
        ...,
        description="CoinGecko token ID",
        examples=["bitcoin"],
    ),
    request: Optional[TokenInsightRequest] = Body(None),
    datasource: MarketDataSource = Depends(get_datasource),
    ai_service: AIService = Depends(get_ai_service),
    clock: Clock = Depends(get_clock),
) -> TokenInsightResponse:
    """
    Get market data, price history and AI commentary for a token.
    
    Body: { vs_currency, history_days } (both optional)
    """
    service = InsightService(datasource, ai_service, clock)
    return await service.generate_token_insight(
        token_id=token_id,
        request=request or TokenInsightRequest(),
    )
