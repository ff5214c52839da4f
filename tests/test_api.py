"""API endpoint tests."""

import pytest
from fastapi.testclient import TestClient

from helpers import NOW_MS, iso
from predpricer import __version__
from predpricer.api import main as api_main
from predpricer.api.main import app
from predpricer.config import Settings

OUTCOMES = [{"id": "a", "label": "A", "pool": 100}, {"id": "b", "label": "B", "pool": 300}]


@pytest.fixture
def client():
    return TestClient(app)


def test_health(client):
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "version": __version__}


def test_pricing(client):
    r = client.post("/pricing", json={"outcomes": OUTCOMES, "selected_outcome_id": "a"})
    assert r.status_code == 200
    data = r.json()
    assert data["market_type"] == "BINARY"
    assert [o["price"] for o in data["priced_outcomes"]] == [0.75, 0.25]
    assert [o["price_display"] for o in data["priced_outcomes"]] == ["75¢", "25¢"]
    assert data["total_effective"] == pytest.approx(1.0)
    assert data["odds"] == {"a": "1.33", "b": "4.00"}
    assert data["match_prices"]["draw"] == {"yes": 0, "no": 100}
    assert data["default_outcome_id"] == "a"
    assert data["selected"]["yes"] == pytest.approx(0.75)
    assert data["selected"]["no"] == pytest.approx(0.25)


def test_pricing_in_requested_format(client):
    r = client.post("/pricing", json={"outcomes": OUTCOMES, "odds_format": "US"})
    assert r.json()["odds"] == {"a": "-300", "b": "+300"}
    assert r.json()["selected"] is None


def test_pricing_unknown_outcome(client):
    r = client.post("/pricing", json={"outcomes": OUTCOMES, "selected_outcome_id": "zzz"})
    assert r.status_code == 404
    assert r.json()["code"] == "unknown_outcome"


def test_pricing_rejects_outcome_without_pool(client):
    r = client.post("/pricing", json={"outcomes": [{"id": "a", "label": "A"}]})
    assert r.status_code == 422


def test_odds(client):
    r = client.get("/odds", params={"probability": 0.5, "format": "US"})
    assert r.status_code == 200
    assert r.json() == {"probability": 0.5, "format": "US", "odds": "-100"}
    assert client.get("/odds", params={"probability": 1, "format": "EU"}).json()["odds"] == "∞"
    assert client.get("/odds", params={"probability": 0.2, "format": "UK"}).json()["odds"] == "4/1"


def test_history_falls_back_to_pool_prices(client):
    r = client.post("/history", json={"outcomes": OUTCOMES, "rows": [], "now_ms": NOW_MS})
    assert r.status_code == 200
    data = r.json()
    assert len(data["buckets"]) == 10
    assert data["buckets"][-1]["prices"] == {"a": 75.0, "b": 25.0}
    assert data["current_prices"] == {"a": 75.0, "b": 25.0}
    assert data["y_domain"] == [15.0, 85.0]


def test_history_from_rows(client):
    rows = [
        {"created_at": iso(NOW_MS), "outcome_id": "a", "price": 0.7},
        {"created_at": "yesterday", "outcome_id": "b", "price": 0.1},
    ]
    r = client.post("/history", json={"outcomes": OUTCOMES, "rows": rows, "timeframe": "1H", "now_ms": NOW_MS})
    data = r.json()
    assert data["timeframe"] == "1H"
    assert len(data["buckets"]) == 60
    assert data["buckets"][0]["prices"] == {"a": 50.0, "b": 50.0}
    assert data["buckets"][-1]["prices"] == {"a": 58.3, "b": 41.7}
    assert data["dropped_rows"] == 1


def test_orderbook(client):
    trades = [
        {"price": 0.5, "shares": 10, "side": "buy"},
        {"price": 0.45, "shares": 5, "side": "buy"},
        {"price": 0.55, "shares": 5, "side": "sell"},
        {"price": 0.6, "shares": 5, "side": "hold"},
    ]
    r = client.post("/orderbook", json={"trades": trades})
    assert r.status_code == 200
    data = r.json()
    assert [(lev["price"], lev["size"]) for lev in data["bids"]] == [(0.5, 10), (0.45, 5)]
    assert data["best_ask"] == 0.55
    assert data["spread_cents"] == "5.0"
    assert data["imbalance"] == pytest.approx(0.5)
    assert data["dropped_rows"] == 1


def test_orderbook_window(client):
    trades = [{"price": 0.5, "shares": 1, "side": "buy"}, {"price": 0.2, "shares": 9, "side": "buy"}]
    data = client.post("/orderbook", json={"trades": trades, "window": 1}).json()
    assert [lev["price"] for lev in data["bids"]] == [0.5]
    assert data["spread_cents"] == "N/A"


def test_configured_pool_floor_applies_to_pricing_and_history(client, monkeypatch):
    monkeypatch.setattr(api_main, "get_settings", lambda profile=None: Settings(pricing={"pool_floor": 300}))
    pricing = client.post("/pricing", json={"outcomes": OUTCOMES}).json()
    assert [o["price"] for o in pricing["priced_outcomes"]] == [0.5, 0.5]
    history = client.post("/history", json={"outcomes": OUTCOMES, "now_ms": NOW_MS}).json()
    assert history["buckets"][-1]["prices"] == {"a": 50.0, "b": 50.0}
    assert history["current_prices"] == {"a": 50.0, "b": 50.0}
