"""TripEventParser — converts raw event-log records to typed TripEvents."""

from __future__ import annotations

import math

from fleet_replay.trips.models import (
    LOCATION_PING,
    Location,
    Movement,
    PositionPing,
    StatusUpdate,
    TripEvent,
    UnknownEvent,
)


def _as_number(value) -> float | None:
    """Return *value* as a finite float, or None.

    Booleans are rejected even though ``bool`` subclasses ``int``.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    value = float(value)
    return value if math.isfinite(value) else None


def _as_text(value) -> str | None:
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


def _parse_location(raw) -> Location | None:
    if not isinstance(raw, dict):
        return None
    lat = _as_number(raw.get("lat"))
    lng = _as_number(raw.get("lng"))
    if lat is None or lng is None:
        return None
    return Location(lat=lat, lng=lng)


def _parse_movement(raw) -> Movement | None:
    if not isinstance(raw, dict):
        return None
    moving = raw.get("moving")
    return Movement(
        moving=moving if isinstance(moving, bool) else None,
        speed_kmh=_as_number(raw.get("speed_kmh")),
    )


class TripEventParser:
    """Parses a raw event-log record into a :class:`TripEvent` variant.

    Malformed records never raise: a record that is not a mapping, or whose
    fields have the wrong types, becomes an :class:`UnknownEvent` (or loses
    the offending optional field).
    """

    def parse(self, raw) -> TripEvent:
        """Convert one raw record (a JSON object) to a typed event."""
        if isinstance(raw, TripEvent):
            return raw
        if not isinstance(raw, dict):
            return UnknownEvent(event_type="")

        kwargs = dict(
            event_type=_as_text(raw.get("event_type")) or "",
            timestamp=_as_text(raw.get("timestamp")),
            location=_parse_location(raw.get("location")),
            movement=_parse_movement(raw.get("movement")),
            status=_as_text(raw.get("status")),
            reason=_as_text(raw.get("reason")),
        )

        if kwargs["event_type"] == LOCATION_PING and kwargs["location"] is not None:
            return PositionPing(**kwargs)
        if kwargs["status"] is not None or kwargs["reason"] is not None:
            return StatusUpdate(**kwargs)
        return UnknownEvent(**kwargs)

    def parse_log(self, records) -> tuple[TripEvent, ...]:
        """Parse an ordered sequence of records, preserving order and length."""
        return tuple(self.parse(r) for r in records)
