"""CLI command tests."""

import json

import pytest
from typer.testing import CliRunner

from helpers import NOW_MS
from predpricer.cli.app import app

runner = CliRunner()

MATCH = {
    "id": "m1",
    "type": "football_1x2",
    "liquidity_usdc": 1000,
    "outcomes": [
        {"id": "h", "label": "Arsenal", "outcome_slug": "home", "pool": 100},
        {"id": "d", "label": "Draw", "outcome_slug": "draw", "pool": 300},
        {"id": "a", "label": "Chelsea", "outcome_slug": "away", "pool": 300},
    ],
}


@pytest.fixture
def market_file(tmp_path):
    path = tmp_path / "market.json"
    path.write_text(json.dumps(MATCH))
    return path


def test_odds_command():
    result = runner.invoke(app, ["odds", "-p", "0.5", "-f", "US"])
    assert result.exit_code == 0
    assert result.output.strip() == "-100 (50¢)"
    result = runner.invoke(app, ["odds", "-p", "0.2", "--all"])
    assert "EU: 5.00" in result.output
    assert "UK: 4/1" in result.output
    assert "US: +400" in result.output


def test_odds_unknown_format():
    result = runner.invoke(app, ["odds", "-p", "0.5", "-f", "XX"])
    assert result.exit_code == 2


def test_price_command(market_file):
    result = runner.invoke(app, ["price", "-f", str(market_file), "--investment", "150"])
    assert result.exit_code == 0, result.output
    assert "Market m1 (1X2), 3 outcomes" in result.output
    assert "1X2: home 60¢  draw 20¢  away 20¢" in result.output
    assert "Arsenal: YES 0.6000  NO 0.4000" in result.output
    assert "buy 0.6060  sell 0.5940" in result.output
    assert "Max bet: 150.00 USDC" in result.output
    assert "Cooldown after trade: 1200s" in result.output


def test_price_locked_market(tmp_path):
    path = tmp_path / "locked.json"
    path.write_text(json.dumps({**MATCH, "status": "RESOLVED"}))
    result = runner.invoke(app, ["price", "-f", str(path), "--investment", "10"])
    assert result.exit_code == 0
    assert "Trading locked (status RESOLVED)" in result.output
    assert "Max bet" not in result.output


def test_price_json(market_file):
    result = runner.invoke(app, ["price", "-f", str(market_file), "--json"])
    assert result.exit_code == 0
    data = json.loads(result.output)
    assert [o["id"] for o in data] == ["h", "d", "a"]
    assert data[0]["effective_price"] == pytest.approx(0.6)


def test_price_unknown_outcome(market_file):
    result = runner.invoke(app, ["price", "-f", str(market_file), "-o", "nope"])
    assert result.exit_code == 1


def test_price_missing_file(tmp_path):
    result = runner.invoke(app, ["price", "-f", str(tmp_path / "missing.json")])
    assert result.exit_code == 1


def test_price_invalid_snapshot(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps([{"id": "a", "label": "no pool"}]))
    assert runner.invoke(app, ["price", "-f", str(path)]).exit_code == 1


def test_history_command_falls_back(tmp_path):
    path = tmp_path / "history.json"
    path.write_text(json.dumps({"outcomes": MATCH["outcomes"], "rows": []}))
    result = runner.invoke(app, ["history", "-f", str(path), "-t", "1d", "--now", str(NOW_MS), "-n", "2"])
    assert result.exit_code == 0, result.output
    assert "10 buckets (1D), 0 observations, 0 dropped" in result.output
    assert "Current: home=60.0%  draw=20.0%  away=20.0%" in result.output
    assert "Y axis: 10-70" in result.output


def test_history_unknown_timeframe(tmp_path):
    path = tmp_path / "history.json"
    path.write_text(json.dumps({"outcomes": [], "rows": []}))
    assert runner.invoke(app, ["history", "-f", str(path), "-t", "2Y"]).exit_code == 2


def test_book_command(tmp_path):
    path = tmp_path / "trades.json"
    trades = [
        {"price": 0.5, "shares": 10, "side": "buy"},
        {"price": 0.45, "shares": 5, "side": "buy"},
        {"price": 0.55, "shares": 5, "side": "sell"},
    ]
    path.write_text(json.dumps({"trades": trades}))
    result = runner.invoke(app, ["book", "-f", str(path)])
    assert result.exit_code == 0, result.output
    assert "Spread: 5.0¢  (2 bid / 1 ask levels)" in result.output
    assert "##########" in result.output
