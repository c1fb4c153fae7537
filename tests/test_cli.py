"""Tests for the PnL report CLI."""

import pytest

from src import cli

PNL_BODY = {
    "success": True,
    "wallet": "0xABCDEF1234567890",
    "start": "2024-03-01",
    "end": "2024-03-02",
    "daily": [
        {"date": "2024-03-01", "realized_pnl_usd": 120.5, "unrealized_pnl_usd": -10.0,
         "fees_usd": 3.25, "funding_usd": 0.4, "net_pnl_usd": 107.65, "equity_usd": 10107.65},
        {"date": "2024-03-02", "realized_pnl_usd": 0.0, "unrealized_pnl_usd": 4.0,
         "fees_usd": 1.1, "funding_usd": -0.2, "net_pnl_usd": 2.7, "equity_usd": 10110.35},
    ],
    "summary": {"total_realized_usd": 120.5, "total_unrealized_usd": -6.0,
                "total_fees_usd": 4.35, "total_funding_usd": 0.2, "net_pnl_usd": 110.35},
}


class FakeResponse:
    def __init__(self, status_code, body):
        self.status_code = status_code
        self._body = body

    def json(self):
        return self._body


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append((url, params))
        return self.response


def test_format_amount():
    assert cli.format_amount(1234.5) == "+$1,234.50"
    assert cli.format_amount(-3.1) == "-$3.10"


def test_daily_table_lists_every_day():
    table = cli.daily_table(PNL_BODY["daily"])
    assert "2024-03-01" in table
    assert "2024-03-02" in table
    assert "$10,110.35" in table


def test_client_builds_pnl_request():
    session = FakeSession(FakeResponse(200, PNL_BODY))
    client = cli.GatewayClient("http://gateway.test/", session=session)
    data = client.get_pnl("0xABCDEF1234567890", "2024-03-01", "2024-03-02")
    assert data["start"] == "2024-03-01"
    assert session.calls == [(
        "http://gateway.test/api/hyperliquid/0xABCDEF1234567890/pnl",
        {"start": "2024-03-01", "end": "2024-03-02"},
    )]


def test_client_raises_gateway_error():
    session = FakeSession(FakeResponse(400, {"success": False, "error": "Valid wallet address is required"}))
    client = cli.GatewayClient(session=session)
    with pytest.raises(RuntimeError, match="Valid wallet address"):
        client.get_summary("abc")


def test_main_prints_report(monkeypatch, capsys):
    session = FakeSession(FakeResponse(200, PNL_BODY))
    client_cls = cli.GatewayClient
    monkeypatch.setattr(cli, "GatewayClient", lambda url: client_cls(url, session=session))
    
    code = cli.main(["0xABCDEF1234567890", "--start", "2024-03-01", "--end", "2024-03-02"])
    
    out = capsys.readouterr().out
    assert code == 0
    assert "2024-03-01 to 2024-03-02 (2 days)" in out
    assert "+$110.35" in out


def test_main_reports_errors(monkeypatch, capsys):
    session = FakeSession(FakeResponse(400, {"success": False, "error": "Start date cannot be in the future"}))
    client_cls = cli.GatewayClient
    monkeypatch.setattr(cli, "GatewayClient", lambda url: client_cls(url, session=session))
    
    code = cli.main(["0xABCDEF1234567890", "--summary"])
    
    assert code == 1
    assert "Start date cannot be in the future" in capsys.readouterr().err


def test_main_requires_dates():
    with pytest.raises(SystemExit):
        cli.main(["0xABCDEF1234567890"])
