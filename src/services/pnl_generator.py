"""Deterministic daily PnL synthesis seeded by wallet address.

No exchange is queried. Numbers come from a linear congruential
generator so the same wallet and range always yields the same report.
"""

from datetime import date
from typing import Callable

from src.models import DailyPnL
from src.utils.dates import format_date

STARTING_EQUITY = 10000.0

# LCG parameters
LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280

# Share of draws at or below this threshold are no-trade days
NO_TRADE_THRESHOLD = 0.3


def round_usd(amount: float) -> float:
    """Round a USD amount to cents."""
    return round(amount, 2)


def hash_wallet(wallet: str) -> int:
    """Order-sensitive 32-bit rolling hash (h * 31 + code point)."""
    seed = 0
    for char in wallet:
        seed = (seed * 31 + ord(char)) & 0xFFFFFFFF
    return seed


def seeded_random(seed: int) -> Callable[[], float]:
    """
    Build a pseudo-random stream in [0, 1) from an integer seed.
    
    Each call advances ``value = (value * 9301 + 49297) % 233280``.
    """
    value = seed

    def draw() -> float:
        nonlocal value
        value = (value * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return value / LCG_MODULUS

    return draw


def generate_daily_pnl(wallet: str, dates: list[date]) -> list[DailyPnL]:
    """
    Synthesize one PnL record per date.
    
    Day ``i`` draws five values from a stream seeded with
    ``hash_wallet(wallet) + i``, always in the same order, so the
    stream position never depends on whether the day had trades.
    
    Args:
        wallet: Wallet address used as the seed source
        dates: Ascending calendar dates without gaps
        
    Returns:
        Daily records with running equity starting from 10,000 USD
    """
    seed = hash_wallet(wallet)
    equity = STARTING_EQUITY
    daily: list[DailyPnL] = []
    
    for index, day in enumerate(dates):
        random = seeded_random(seed + index)
        r1, r2, r3, r4, r5 = (random() for _ in range(5))
        
        has_trades = r1 > NO_TRADE_THRESHOLD
        realized = round_usd(r2 * 500 - 250) if has_trades else 0.0
        # Unrealized is drawn whether or not the day traded
        unrealized = round_usd(r3 * 100 - 50)
        fees = round_usd(r4 * 10 + 0.5) if has_trades else round_usd(r4 * 2)
        funding = round_usd(r5 * 2 - 1)
        
        net = round_usd(realized + unrealized - fees + funding)
        equity = round_usd(equity + net)
        
        daily.append(DailyPnL(
            date=format_date(day),
            realized_pnl_usd=realized,
            unrealized_pnl_usd=unrealized,
            fees_usd=fees,
            funding_usd=funding,
            net_pnl_usd=net,
            equity_usd=equity,
        ))
    
    return daily
