from __future__ import annotations

from unittest.mock import patch

from fastapi.testclient import TestClient

from lostfound.analytics.aggregator import compute_analytics
from lostfound.analytics.store import clear_events, get_events, record_event
from lostfound.app import app
from lostfound.items.store import reset_store

client = TestClient(app)


def _login_admin(c):
    c.post("/auth/login", json={"email": "admin@example.com", "password": "admin123"})


def test_analytics_returns_empty_initially():
    clear_events()
    _login_admin(client)
    resp = client.get("/analytics")
    assert resp.status_code == 200
    body = resp.json()
    assert body["total_searches"] == 0
    assert body["avg_response_time_ms"] == 0.0
    assert body["zero_result_rate"] == 0.0


@patch("lostfound.search.service.explain_matches", return_value={})
def test_analytics_tracks_search(mock_explain):
    clear_events()
    reset_store()
    client.post("/search", json={"query": "Wallet"})
    client.post("/search", json={"query": "wallet", "category": "Bags & Wallets"})
    client.post("/search", json={"query": "zebra"})
    _login_admin(client)
    body = client.get("/analytics").json()
    assert body["total_searches"] == 3
    assert body["top_queries"][0] == {"query": "wallet", "count": 2}
    assert body["top_categories"] == [{"name": "Bags & Wallets", "count": 1}]
    assert body["zero_result_rate"] == 33.3


def test_analytics_includes_listing_summary():
    reset_store()
    _login_admin(client)
    listings = client.get("/analytics").json()["listings"]
    assert listings["total_items"] == 5
    assert listings["items_by_status"] == {"lost": 3, "found": 2}


def test_compute_analytics_filter_usage():
    clear_events()
    record_event("search", {
        "query": "keys", "category": "Keys", "status": "lost", "time_range": None,
        "near_me": True, "results_returned": 2, "smart_matches": 1, "response_time_ms": 4.0,
    })
    record_event("search", {
        "query": "", "category": None, "status": None, "time_range": "week",
        "near_me": False, "results_returned": 0, "smart_matches": 0, "response_time_ms": 2.0,
    })
    record_event("login", {"user": "x"})

    result = compute_analytics(get_events())
    assert result["total_searches"] == 2
    assert result["avg_response_time_ms"] == 3.0
    assert result["filter_usage"] == {
        "query": 50.0, "category": 50.0, "status": 50.0, "time_range": 50.0, "near_me": 50.0,
    }
    assert result["status_usage"] == {"lost": 1}
    assert result["avg_smart_matches"] == 0.5
