#!/usr/bin/env python3
"""
Wallet PnL Report
Queries a running gateway and prints daily PnL and period totals.

Usage:
    pnl-report <wallet> --start=2024-03-01 --end=2024-03-07
    pnl-report <wallet> --summary
"""

import argparse
import sys
from typing import Dict, List, Optional

import requests
from tabulate import tabulate

DEFAULT_URL = "http://localhost:5000"
REQUEST_TIMEOUT = 30


class GatewayClient:
    """Minimal client for the wallet PnL endpoints."""
    
    def __init__(self, base_url: str = DEFAULT_URL, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
    
    def _get(self, path: str, params: Optional[Dict] = None) -> Dict:
        response = self.session.get(
            f"{self.base_url}{path}",
            params=params,
            timeout=REQUEST_TIMEOUT,
        )
        data = response.json()
        if response.status_code >= 400 or not data.get("success", False):
            raise RuntimeError(data.get("error") or f"HTTP {response.status_code}")
        return data
    
    def get_pnl(self, wallet: str, start: str, end: str) -> Dict:
        """Daily PnL for an explicit date range."""
        return self._get(f"/api/hyperliquid/{wallet}/pnl", {"start": start, "end": end})
    
    def get_summary(self, wallet: str) -> Dict:
        """Totals over the trailing lookback window."""
        return self._get(f"/api/hyperliquid/{wallet}/summary")


def format_amount(amount: float) -> str:
    """Format a signed USD amount"""
    if amount >= 0:
        return f"+${amount:,.2f}"
    else:
        return f"-${abs(amount):,.2f}"


def daily_table(daily: List[Dict]) -> str:
    """Render daily records as a grid table"""
    rows = [
        [
            day["date"],
            format_amount(day["realized_pnl_usd"]),
            format_amount(day["unrealized_pnl_usd"]),
            f"${day['fees_usd']:,.2f}",
            format_amount(day["funding_usd"]),
            format_amount(day["net_pnl_usd"]),
            f"${day['equity_usd']:,.2f}",
        ]
        for day in daily
    ]
    return tabulate(
        rows,
        headers=["Date", "Realized", "Unrealized", "Fees", "Funding", "Net", "Equity"],
        tablefmt="grid",
    )


def summary_lines(summary: Dict) -> List[str]:
    """Period totals, one per line"""
    return [
        f"  Realized:   {format_amount(summary['total_realized_usd']):>15}",
        f"  Unrealized: {format_amount(summary['total_unrealized_usd']):>15}",
        f"  Fees:       {format_amount(-summary['total_fees_usd']):>15}",
        f"  Funding:    {format_amount(summary['total_funding_usd']):>15}",
        f"  Net PnL:    {format_amount(summary['net_pnl_usd']):>15}",
    ]


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point"""
    parser = argparse.ArgumentParser(
        description="Print the PnL report for a wallet from a running gateway"
    )
    parser.add_argument("wallet", help="Wallet address")
    parser.add_argument("--start", help="Start date (YYYY-MM-DD)")
    parser.add_argument("--end", help="End date (YYYY-MM-DD)")
    parser.add_argument(
        "--summary",
        action="store_true",
        help="Show trailing-window totals instead of a daily table"
    )
    parser.add_argument(
        "--url",
        default=DEFAULT_URL,
        help=f"Gateway base URL (default: {DEFAULT_URL})"
    )
    
    args = parser.parse_args(argv)
    
    if not args.summary and not (args.start and args.end):
        parser.error("--start and --end are required unless --summary is given")
    
    client = GatewayClient(args.url)
    
    try:
        if args.summary:
            data = client.get_summary(args.wallet)
        else:
            data = client.get_pnl(args.wallet, args.start, args.end)
    except (requests.RequestException, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    
    print("=" * 80)
    print(f"Wallet: {args.wallet}")
    if args.summary:
        print(f"Period: {data['period']}")
    else:
        print(f"Period: {data['start']} to {data['end']} ({len(data['daily'])} days)")
        print()
        print(daily_table(data["daily"]))
    print()
    print("Totals:")
    print("\n".join(summary_lines(data["summary"])))
    print("=" * 80)
    return 0


if __name__ == "__main__":
    sys.exit(main())
