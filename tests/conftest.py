"""Shared trip-log builders for tests."""

from __future__ import annotations

from fleet_replay.trips.loader import TripLoader
from fleet_replay.trips.models import Trip


def ping(
    lat: float = 10.0,
    lng: float = 20.0,
    moving: bool | None = True,
    speed_kmh: float | None = 50.0,
    timestamp: str = "2025-11-03T08:00:00Z",
    **extra,
) -> dict:
    """Build a raw ``location_ping`` record."""
    record = {
        "event_type": "location_ping",
        "timestamp": timestamp,
        "location": {"lat": lat, "lng": lng},
        "movement": {"moving": moving, "speed_kmh": speed_kmh},
    }
    record.update(extra)
    return record


def status_event(event_type: str = "trip_started", **fields) -> dict:
    """Build a raw non-ping record."""
    record = {"event_type": event_type, "timestamp": "2025-11-03T08:00:00Z"}
    record.update(fields)
    return record


def route(n: int, moving: bool = True) -> list[dict]:
    """*n* consecutive pings along a straight line."""
    return [ping(lat=10.0 + i, lng=20.0 + i, moving=moving) for i in range(n)]


def make_trip(name: str, records: list[dict]) -> Trip:
    return TripLoader().from_records(name, records)


def cancelled_trip(name: str = "Mountain Route Cancelled", pings: int = 3) -> Trip:
    return make_trip(
        name,
        route(pings) + [status_event("issue_reported", status="cancelled")],
    )
