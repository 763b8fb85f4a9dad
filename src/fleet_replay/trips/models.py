"""Trip event data models."""

from __future__ import annotations

from dataclasses import dataclass

LOCATION_PING = "location_ping"


@dataclass(frozen=True)
class Location:
    """A GPS fix in decimal degrees."""

    lat: float
    lng: float

    def as_tuple(self) -> tuple[float, float]:
        return (self.lat, self.lng)


@dataclass(frozen=True)
class Movement:
    """Vehicle motion reported alongside a ping.

    Either field may be ``None`` when the source record omits it or carries a
    value of the wrong type.
    """

    moving: bool | None = None
    speed_kmh: float | None = None


@dataclass(frozen=True)
class TripEvent:
    """One record of a trip event log.

    Concrete records are always one of the subclasses below; the parser picks
    the variant once at ingestion so consumers never re-check field presence.
    """

    event_type: str
    timestamp: str | None = None
    location: Location | None = None
    movement: Movement | None = None
    status: str | None = None
    reason: str | None = None

    @property
    def is_stopped(self) -> bool:
        """True only when the record explicitly says the vehicle is not moving."""
        return self.movement is not None and self.movement.moving is False


@dataclass(frozen=True)
class PositionPing(TripEvent):
    """A ``location_ping`` with a valid, finite latitude/longitude.

    ``location`` is guaranteed to be set.
    """


@dataclass(frozen=True)
class StatusUpdate(TripEvent):
    """A non-ping record carrying a ``status`` and/or ``reason``."""


@dataclass(frozen=True)
class UnknownEvent(TripEvent):
    """Anything else, including pings whose location failed validation."""


@dataclass(frozen=True)
class Trip:
    """One vehicle's recorded event log plus a display name."""

    name: str
    events: tuple[TripEvent, ...] = ()

    def __len__(self) -> int:
        return len(self.events)

    @property
    def last_event(self) -> TripEvent | None:
        return self.events[-1] if self.events else None
