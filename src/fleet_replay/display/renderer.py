"""Display rendering — data formatting for the trip and fleet cards."""

from __future__ import annotations

from datetime import datetime

from fleet_replay.playback.clock import SPEED_PRESETS
from fleet_replay.playback.selection import PlaybackSnapshot
from fleet_replay.trips.models import TripEvent

NOT_AVAILABLE = "N/A"
CANCELLED_STATUS = "Cancelled/Problem Detected"
DEFAULT_MAP_CENTER = (39.5, -98.35)


class TripCardRenderer:
    """Formats a :class:`PlaybackSnapshot` for display.

    Missing optional fields become ``"N/A"``. Pure data transformations; no
    side effects.
    """

    def format_coord(self, value: float) -> str:
        """Format a latitude or longitude with 4 decimal places.

        >>> TripCardRenderer().format_coord(39.739176)
        '39.7392'
        """
        return f"{value:.4f}"

    def format_speed(self, event: TripEvent) -> str:
        speed = event.movement.speed_kmh if event.movement else None
        if speed is None:
            return f"{NOT_AVAILABLE} km/h"
        return f"{speed:g} km/h"

    def format_timestamp(self, timestamp: str | None) -> str:
        """Render an ISO-8601 instant as local ``YYYY-MM-DD HH:MM:SS``.

        Unparseable values are returned unchanged; a missing value is ``"N/A"``.
        """
        if not timestamp:
            return NOT_AVAILABLE
        try:
            dt = datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        except ValueError:
            return timestamp
        if dt.tzinfo is not None:
            dt = dt.astimezone()
        return dt.strftime("%Y-%m-%d %H:%M:%S")

    def timeline_label(self, snapshot: PlaybackSnapshot) -> str:
        """``"Event: 3 / 10"`` style position label."""
        return f"Event: {snapshot.current_index + 1} / {len(snapshot.positions)}"

    def render(self, snapshot: PlaybackSnapshot) -> dict:
        """Return a display-ready dict for the selected trip.

        Returns
        -------
        dict with keys:
            ``trip_name``        – selected trip or ``None``
            ``cancelled``        – bool
            ``status``           – ``'Moving'``, ``'Stopped'`` or the cancelled label
            ``lat`` / ``lng``    – 4-dp strings or ``'N/A'``
            ``speed``            – e.g. ``'62 km/h'`` or ``'N/A km/h'``
            ``timestamp``        – local time string or ``'N/A'``
            ``progress``         – integer percentage 0–100
            ``timeline``         – e.g. ``'Event: 3 / 10'``
            ``has_timeline``     – more than one ping to step through
            ``show_controls``    – slider/buttons visible (not cancelled, >1 ping)
            ``show_route``       – route and marker visible on the map
            ``map_center``       – (lat, lng) of the first ping or a default
            ``speed_label``      – e.g. ``'Normal'``
        """
        event = snapshot.current_event
        multi = len(snapshot.positions) > 1
        card = {
            "trip_name": snapshot.trip_name,
            "cancelled": snapshot.is_cancelled,
            "status": NOT_AVAILABLE,
            "lat": NOT_AVAILABLE,
            "lng": NOT_AVAILABLE,
            "speed": f"{NOT_AVAILABLE} km/h",
            "timestamp": NOT_AVAILABLE,
            "progress": snapshot.progress_percent,
            "timeline": self.timeline_label(snapshot),
            "has_timeline": multi,
            "show_controls": multi and not snapshot.is_cancelled,
            "show_route": multi and not snapshot.is_cancelled,
            "map_center": snapshot.positions[0] if snapshot.positions else DEFAULT_MAP_CENTER,
            "speed_label": SPEED_PRESETS.get(snapshot.speed_ms, str(snapshot.speed_ms)),
        }

        if snapshot.is_cancelled:
            card["status"] = CANCELLED_STATUS
            return card
        if event is None:
            return card

        card.update(
            status="Stopped" if event.is_stopped else "Moving",
            lat=self.format_coord(event.location.lat),
            lng=self.format_coord(event.location.lng),
            speed=self.format_speed(event),
            timestamp=self.format_timestamp(event.timestamp),
        )
        return card
