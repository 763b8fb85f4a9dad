"""TripSelection — the active trip, its playback clock and the derived view."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from fleet_replay.fleet.aggregator import FleetAggregator, progress_percent
from fleet_replay.fleet.models import FleetSummary
from fleet_replay.playback.clock import DEFAULT_SPEED_MS, PlaybackClock, PlaybackState
from fleet_replay.trips.cancellation import CancellationDetector
from fleet_replay.trips.filter import location_pings
from fleet_replay.trips.models import PositionPing, Trip

_logger = logging.getLogger(__name__)


@dataclass
class PlaybackSnapshot:
    """Everything the presentation layer reads after a state change."""

    trip_name: str | None
    positions: list[tuple[float, float]]
    current_index: int
    current_event: PositionPing | None
    progress_percent: int
    is_cancelled: bool
    playing: bool
    speed_ms: int
    status: str
    fleet_summary: FleetSummary = field(default_factory=FleetSummary)


class TripSelection:
    """Holds the fleet, the selected trip and the clock advancing it.

    Selecting a trip recomputes its position sequence and resets the clock to
    index 0 (paused if the trip is cancelled, playing otherwise).

    Parameters
    ----------
    trips:
        The fleet, in display order. Names must be unique (``ValueError``
        otherwise).
    scheduler:
        Timer scheduler passed to :class:`PlaybackClock`.
    speed_ms:
        Initial playback speed preset.
    on_change:
        Optional callable invoked with a fresh :class:`PlaybackSnapshot` after
        every observable state change, including timer ticks.
    """

    def __init__(
        self,
        trips: list[Trip],
        scheduler,
        speed_ms: int = DEFAULT_SPEED_MS,
        on_change: Callable[[PlaybackSnapshot], None] | None = None,
        detector: CancellationDetector | None = None,
    ) -> None:
        self._trips = list(trips)
        self._by_name = {t.name: t for t in self._trips}
        if len(self._by_name) != len(self._trips):
            raise ValueError("Trip names must be unique")
        self._detector = detector or CancellationDetector()
        self._aggregator = FleetAggregator(self._detector)
        self._on_change = on_change
        self._active: Trip | None = None
        self._pings: list[PositionPing] = []
        self._cancelled = False
        self._clock = PlaybackClock(scheduler, speed_ms=speed_ms, on_change=self._notify)

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def trips(self) -> list[Trip]:
        return list(self._trips)

    @property
    def active(self) -> Trip | None:
        return self._active

    @property
    def state(self) -> PlaybackState:
        return self._clock.state

    @property
    def clock(self) -> PlaybackClock:
        return self._clock

    def select(self, name: str) -> PlaybackSnapshot:
        """Make *name* the active trip and restart playback from index 0.

        Raises
        ------
        ValueError
            If no trip has that name.
        """
        trip = self._by_name.get(name)
        if trip is None:
            raise ValueError(f"Unknown trip: {name!r}")

        self._active = trip
        self._pings = location_pings(trip)
        self._cancelled = self._detector.is_cancelled(trip)
        _logger.info(
            "Selected trip %r (%d pings, cancelled=%s)",
            name,
            len(self._pings),
            self._cancelled,
        )
        self._clock.select(name, len(self._pings), self._cancelled)
        return self.snapshot()

    def deselect(self) -> PlaybackSnapshot:
        self._active = None
        self._pings = []
        self._cancelled = False
        self._clock.deselect()
        return self.snapshot()

    def close(self) -> None:
        """Cancel any pending tick."""
        self._clock.close()

    # ------------------------------------------------------------------
    # Playback control
    # ------------------------------------------------------------------

    def play(self) -> PlaybackSnapshot:
        self._clock.play()
        return self.snapshot()

    def pause(self) -> PlaybackSnapshot:
        self._clock.pause()
        return self.snapshot()

    def toggle(self) -> PlaybackSnapshot:
        self._clock.toggle()
        return self.snapshot()

    def set_index(self, index: int) -> PlaybackSnapshot:
        self._clock.set_index(index)
        return self.snapshot()

    def set_speed(self, speed_ms: int) -> PlaybackSnapshot:
        self._clock.set_speed(speed_ms)
        return self.snapshot()

    # ------------------------------------------------------------------
    # Derived view
    # ------------------------------------------------------------------

    def is_cancelled(self, name: str) -> bool:
        trip = self._by_name.get(name)
        return trip is not None and self._detector.is_cancelled(trip)

    def fleet_summary(self) -> FleetSummary:
        state = self._clock.state
        return self._aggregator.aggregate(self._trips, state.trip_name, state.index)

    def snapshot(self) -> PlaybackSnapshot:
        """Build the presentation view of the current state."""
        state = self._clock.state
        current = self._pings[state.index] if state.index < len(self._pings) else None
        return PlaybackSnapshot(
            trip_name=state.trip_name,
            positions=[p.location.as_tuple() for p in self._pings],
            current_index=state.index,
            current_event=current,
            progress_percent=progress_percent(state.index, len(self._pings)),
            is_cancelled=self._cancelled,
            playing=state.playing,
            speed_ms=state.speed_ms,
            status=state.status.value,
            fleet_summary=self.fleet_summary(),
        )

    def _notify(self, _state: PlaybackState) -> None:
        if self._on_change is not None:
            self._on_change(self.snapshot())
