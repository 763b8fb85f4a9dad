"""EventFilter — extracts the ordered position sequence from a trip log."""

from __future__ import annotations

from fleet_replay.trips.models import PositionPing, Trip
from fleet_replay.trips.parser import TripEventParser

_parser = TripEventParser()


def _events(log):
    return log.events if isinstance(log, Trip) else log


def location_pings(log) -> list[PositionPing]:
    """Return the valid location pings of *log*, in log order.

    *log* may be a :class:`Trip`, a sequence of parsed events, or a sequence
    of raw records. No reordering, no deduplication; an empty list is a
    valid result.
    """
    pings: list[PositionPing] = []
    for raw in _events(log):
        event = _parser.parse(raw)
        if isinstance(event, PositionPing):
            pings.append(event)
    return pings


def position_sequence(log) -> list[tuple[float, float]]:
    """Return ``(lat, lng)`` pairs for every valid ping in *log*."""
    return [p.location.as_tuple() for p in location_pings(log)]
