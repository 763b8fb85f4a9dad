"""Shared fixtures for web tests."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from fleet_replay.playback.scheduler import ManualScheduler
from fleet_replay.playback.selection import TripSelection
from fleet_replay.web.app import app, get_selection
from tests.conftest import cancelled_trip, make_trip, ping, route


def make_fleet():
    """Five-trip fleet mirroring the demo data set."""
    return [
        make_trip("Cross Country Long Haul", route(6)),
        make_trip(
            "Urban Dense Delivery",
            [ping(lat=10, lng=20, moving=True), ping(lat=11, lng=21, moving=False)],
        ),
        cancelled_trip("Mountain Route Cancelled", pings=4),
        make_trip("Southern Technical Issues", route(1)),
        make_trip("Regional Logistics", []),
    ]


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def selection(scheduler) -> TripSelection:
    return TripSelection(make_fleet(), scheduler)


@pytest.fixture
def client(selection):
    """FastAPI test client bound to an in-memory fleet on a virtual clock."""
    app.dependency_overrides[get_selection] = lambda: selection
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
