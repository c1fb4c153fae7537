from .pnl_service import PnLService, calculate_pnl_summary
from .pnl_generator import generate_daily_pnl
from .ai_service import AIService
from .insight_service import InsightService

__all__ = [
    "PnLService",
    "calculate_pnl_summary",
    "generate_daily_pnl",
    "AIService",
    "InsightService",
]
