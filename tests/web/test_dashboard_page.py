"""GET / — HTML dashboard."""

from __future__ import annotations


def test_dashboard_renders_fleet_summary(client):
    resp = client.get("/")
    assert resp.status_code == 200
    assert "text/html" in resp.headers["content-type"]
    assert "Total trips: 5" in resp.text
    assert "Urban Dense Delivery" in resp.text


def test_dashboard_shows_trip_card(client):
    client.post("/api/trips/select", json={"name": "Urban Dense Delivery"})
    client.put("/api/playback/index", json={"index": 1})
    text = client.get("/").text
    assert "Current Lat:</span> 11.0000" in text
    assert "Status:</span> Stopped" in text
    assert "Event: 2 / 2" in text


def test_dashboard_cancelled_trip_hides_controls(client):
    client.post("/api/trips/select", json={"name": "Mountain Route Cancelled"})
    text = client.get("/").text
    assert "Cancelled/Problem Detected" in text
    assert "Trip Timeline" not in text
