"""Fleet status aggregation."""

from __future__ import annotations

import math

from fleet_replay.fleet.models import FleetSummary
from fleet_replay.trips.cancellation import CancellationDetector
from fleet_replay.trips.filter import location_pings
from fleet_replay.trips.models import Trip


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for positives.

    >>> round_half_up(62.5)
    63
    """
    return int(math.floor(value + 0.5))


def progress_percent(index: int, total_steps: int) -> int:
    """Share of a position sequence traversed at *index*, as 0–100.

    A sequence of zero or one steps has no meaningful progress and yields 0.
    """
    if total_steps <= 1:
        return 0
    return round_half_up((index + 1) / total_steps * 100)


class FleetAggregator:
    """Combine per-trip classification and playback position into a :class:`FleetSummary`.

    Only the active trip is assumed to have advanced; every other trip is
    evaluated at index 0.

    Parameters
    ----------
    detector:
        Optional :class:`CancellationDetector` (injectable for tests).
    """

    def __init__(self, detector: CancellationDetector | None = None) -> None:
        self._detector = detector or CancellationDetector()

    def aggregate(
        self,
        trips: list[Trip],
        active_trip: str | None = None,
        active_index: int = 0,
    ) -> FleetSummary:
        """Build a :class:`FleetSummary` for *trips*.

        Parameters
        ----------
        trips:
            The whole fleet, in display order.
        active_trip:
            Name of the selected trip, or None.
        active_index:
            Playback index of the selected trip.
        """
        summary = FleetSummary(total_trips=len(trips))
        progress_sum = 0

        for trip in trips:
            events = location_pings(trip)
            total_steps = len(events)
            if total_steps == 0:
                continue

            if self._detector.is_cancelled(trip):
                summary.cancelled += 1
                continue

            index = active_index if trip.name == active_trip else 0
            index = min(max(index, 0), total_steps - 1)

            if index >= total_steps - 1:
                summary.completed += 1
            else:
                summary.in_progress += 1
                if events[index].is_stopped:
                    summary.stopped += 1
                else:
                    summary.moving += 1

            progress_sum += progress_percent(index, total_steps)

        denominator = summary.total_trips - summary.cancelled
        if denominator > 0:
            summary.fleet_progress_avg = round_half_up(progress_sum / denominator)
        return summary
