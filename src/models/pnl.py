"""PnL report models for API responses."""

from typing import Literal
from pydantic import BaseModel, Field


class DailyPnL(BaseModel):
    """
    PnL breakdown for a single calendar day.
    
    All amounts are USD rounded to 2 decimals.
    net_pnl_usd = realized + unrealized - fees + funding
    """
    date: str = Field(description="Calendar date (YYYY-MM-DD)")
    realized_pnl_usd: float = Field(description="PnL from closed positions")
    unrealized_pnl_usd: float = Field(description="PnL from open positions")
    fees_usd: float = Field(description="Trading fees paid")
    funding_usd: float = Field(description="Net funding received")
    net_pnl_usd: float = Field(description="Net PnL for the day")
    equity_usd: float = Field(description="Account equity at end of day")


class PnLSummary(BaseModel):
    """Period totals over a sequence of daily records."""
    total_realized_usd: float = 0.0
    total_unrealized_usd: float = 0.0
    total_fees_usd: float = 0.0
    total_funding_usd: float = 0.0
    net_pnl_usd: float = 0.0


class PnLDiagnostics(BaseModel):
    """Where the numbers came from and when."""
    data_source: Literal["mock_data", "hyperliquid_api"]
    last_api_call: str = Field(description="ISO-8601 generation timestamp")
    notes: str


class PnLReport(BaseModel):
    """
    Daily PnL for a wallet over an inclusive date range.
    
    Daily records are chronological with exactly one entry per day.
    """
    wallet: str
    start: str = Field(description="Range start (YYYY-MM-DD)")
    end: str = Field(description="Range end (YYYY-MM-DD)")
    daily: list[DailyPnL]
    summary: PnLSummary
    diagnostics: PnLDiagnostics


class PnLMetadata(BaseModel):
    generated_at: str
    total_days: int
    date_range_validated: bool = True


class WalletPnLResponse(PnLReport):
    """Response body for the explicit date range endpoint."""
    success: bool = True
    metadata: PnLMetadata


class SummaryMetadata(BaseModel):
    generated_at: str


class WalletSummaryResponse(BaseModel):
    """Response body for the trailing-window summary endpoint."""
    success: bool = True
    wallet: str
    period: str = Field(description="Lookback window, e.g. '30d'")
    summary: PnLSummary
    metadata: SummaryMetadata
