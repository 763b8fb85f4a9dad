"""Trip event logs: typed records, parsing, loading and classification.

Public API
----------
Trip                 - named, immutable event log
TripEvent            - base record; PositionPing / StatusUpdate / UnknownEvent
TripEventParser      - raw dict → TripEvent variant
TripLoader           - JSON files / directories → Trip
TripLoadError        - raised on unreadable trip files
location_pings       - ordered valid pings of a log
position_sequence    - ordered (lat, lng) pairs of a log
CancellationDetector - terminal-event cancellation/problem classification
"""

from fleet_replay.trips.cancellation import CancellationDetector, is_cancelled
from fleet_replay.trips.filter import location_pings, position_sequence
from fleet_replay.trips.loader import TripLoader, TripLoadError
from fleet_replay.trips.models import (
    LOCATION_PING,
    Location,
    Movement,
    PositionPing,
    StatusUpdate,
    Trip,
    TripEvent,
    UnknownEvent,
)
from fleet_replay.trips.parser import TripEventParser

__all__ = [
    "LOCATION_PING",
    "CancellationDetector",
    "Location",
    "Movement",
    "PositionPing",
    "StatusUpdate",
    "Trip",
    "TripEvent",
    "TripEventParser",
    "TripLoadError",
    "TripLoader",
    "UnknownEvent",
    "is_cancelled",
    "location_pings",
    "position_sequence",
]
