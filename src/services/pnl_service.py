"""PnL service: request validation, synthesis and summary aggregation."""

import logging
from datetime import date, timedelta
from typing import Optional

from src.config import Config
from src.errors import (
    InvalidWallet,
    MissingDateRange,
    RangeOrderError,
    FutureStartDate,
    RangeTooLarge,
)
from src.models import PnLDiagnostics, PnLReport, PnLSummary, DailyPnL
from src.utils.dates import (
    Clock,
    system_clock,
    parse_date,
    format_date,
    enumerate_dates,
    validate_span,
    today,
    utc_timestamp,
)
from .pnl_generator import generate_daily_pnl, round_usd

logger = logging.getLogger(__name__)

MIN_WALLET_LENGTH = 10
DIAGNOSTIC_NOTES = "PnL calculated using daily close prices"


def calculate_pnl_summary(daily: list[DailyPnL]) -> PnLSummary:
    """
    Reduce daily records into period totals.
    
    An empty sequence yields an all-zero summary.
    
    Returns:
        PnLSummary with every field rounded to 2 decimals
    """
    total_realized = sum(d.realized_pnl_usd for d in daily)
    total_unrealized = sum(d.unrealized_pnl_usd for d in daily)
    total_fees = sum(d.fees_usd for d in daily)
    total_funding = sum(d.funding_usd for d in daily)
    net_pnl = total_realized + total_unrealized - total_fees + total_funding
    
    return PnLSummary(
        total_realized_usd=round_usd(total_realized),
        total_unrealized_usd=round_usd(total_unrealized),
        total_fees_usd=round_usd(total_fees),
        total_funding_usd=round_usd(total_funding),
        net_pnl_usd=round_usd(net_pnl),
    )


class PnLService:
    """Service for validating PnL requests and building wallet reports."""

    def __init__(self, config: Config, clock: Clock = system_clock):
        """
        Args:
            config: Application configuration (range limits, API keys)
            clock: Source of the current time, used for future-date
                checks, the summary window and diagnostics timestamps
        """
        self.config = config
        self.clock = clock

    @property
    def data_source(self) -> str:
        return "hyperliquid_api" if self.config.hyperliquid_api_key else "mock_data"

    def get_wallet_pnl(
        self,
        wallet: Optional[str],
        start: Optional[str],
        end: Optional[str],
    ) -> PnLReport:
        """
        Build a daily PnL report for an explicit date range.
        
        Checks run in order and the first failure is raised:
        wallet, presence of both dates, date format, ordering,
        start not in the future, maximum span.
        
        Args:
            wallet: Wallet address (at least 10 characters)
            start: Range start (YYYY-MM-DD)
            end: Range end (YYYY-MM-DD)
            
        Returns:
            PnLReport covering every day from start to end inclusive
        """
        self._validate_wallet(wallet)
        
        if not start or not end:
            raise MissingDateRange()
        
        start_date = parse_date(start)
        end_date = parse_date(end)
        
        self._validate_range(start_date, end_date, self.config.pnl_max_range_days)
        
        logger.info(f"Building PnL for wallet: {wallet[:15]}... ({start} to {end})")
        return self.build_report(wallet, start_date, end_date)

    def get_wallet_summary(self, wallet: Optional[str]) -> PnLReport:
        """
        Build a report over the trailing lookback window ending today.
        
        The window is ``[today - lookback, today]``.
        """
        self._validate_wallet(wallet)
        
        lookback = self.config.summary_lookback_days
        end_date = today(self.clock)
        start_date = end_date - timedelta(days=lookback)
        
        self._validate_range(start_date, end_date, lookback)
        
        logger.info(f"Building {lookback}d summary for wallet: {wallet[:15]}...")
        return self.build_report(wallet, start_date, end_date)

    def build_report(self, wallet: str, start: date, end: date) -> PnLReport:
        """Synthesize daily records for a validated range and summarize them."""
        dates = enumerate_dates(start, end)
        daily = generate_daily_pnl(wallet, dates)
        summary = calculate_pnl_summary(daily)
        
        return PnLReport(
            wallet=wallet,
            start=format_date(start),
            end=format_date(end),
            daily=daily,
            summary=summary,
            diagnostics=PnLDiagnostics(
                data_source=self.data_source,
                last_api_call=utc_timestamp(self.clock),
                notes=DIAGNOSTIC_NOTES,
            ),
        )

    def _validate_wallet(self, wallet: Optional[str]) -> None:
        if not wallet or len(wallet) < MIN_WALLET_LENGTH:
            raise InvalidWallet()

    def _validate_range(self, start: date, end: date, max_days: int) -> None:
        if end < start:
            raise RangeOrderError()
        
        if start > today(self.clock):
            raise FutureStartDate()
        
        if not validate_span(start, end, max_days):
            raise RangeTooLarge(max_days)
