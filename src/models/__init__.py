from .pnl import (
    DailyPnL,
    PnLSummary,
    PnLDiagnostics,
    PnLReport,
    PnLMetadata,
    WalletPnLResponse,
    SummaryMetadata,
    WalletSummaryResponse,
)
from .token import (
    MarketData,
    TokenMetadata,
    TokenData,
    MarketChart,
    Insight,
    TokenInsightRequest,
    MarketDataSummary,
    PriceHistory,
    TokenSummary,
    ModelInfo,
    InsightMetadata,
    TokenInsightResponse,
)

__all__ = [
    "DailyPnL",
    "PnLSummary",
    "PnLDiagnostics",
    "PnLReport",
    "PnLMetadata",
    "WalletPnLResponse",
    "SummaryMetadata",
    "WalletSummaryResponse",
    "MarketData",
    "TokenMetadata",
    "TokenData",
    "MarketChart",
    "Insight",
    "TokenInsightRequest",
    "MarketDataSummary",
    "PriceHistory",
    "TokenSummary",
    "ModelInfo",
    "InsightMetadata",
    "TokenInsightResponse",
]
