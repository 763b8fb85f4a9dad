"""Fleet summary data model."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class FleetSummary:
    """Fleet-wide counts and average progress.

    Trips with no valid pings count towards ``total_trips`` only, so
    ``moving + stopped + completed + cancelled`` can be less than
    ``total_trips``. ``in_progress == moving + stopped``.
    """

    total_trips: int = 0
    moving: int = 0
    stopped: int = 0
    completed: int = 0
    cancelled: int = 0
    in_progress: int = 0
    fleet_progress_avg: int = 0
    """Mean progress percentage [0, 100] over non-cancelled trips."""

    def to_dict(self) -> dict:
        """Return the presentation-layer dict (camelCase keys)."""
        return {
            "totalTrips": self.total_trips,
            "moving": self.moving,
            "stopped": self.stopped,
            "completed": self.completed,
            "cancelled": self.cancelled,
            "inProgress": self.in_progress,
            "fleetProgressAvg": self.fleet_progress_avg,
        }
