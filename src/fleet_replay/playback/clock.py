"""PlaybackClock — steppable, looping index into a trip's position sequence.

The state machine is split in two:

* :class:`PlaybackState` plus :func:`transition` — immutable state and pure
  ``(state, event) -> state`` rules, testable without any timer.
* :class:`PlaybackClock` — owns the current state and a single-shot timer on
  a scheduler, arming it whenever the state can tick.
"""

from __future__ import annotations

import dataclasses
import enum
import logging
from collections.abc import Callable
from dataclasses import dataclass

_logger = logging.getLogger(__name__)

SPEED_PRESETS: dict[int, str] = {
    120: "Very Fast",
    400: "Fast",
    800: "Normal",
    1200: "Slow",
}

DEFAULT_SPEED_MS = 800


class PlaybackStatus(str, enum.Enum):
    IDLE = "idle"
    READY = "ready"
    PLAYING = "playing"
    PAUSED = "paused"


# ---------------------------------------------------------------------------
# Events
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Select:
    trip_name: str
    length: int
    cancelled: bool = False


@dataclass(frozen=True)
class Deselect:
    pass


@dataclass(frozen=True)
class Tick:
    pass


@dataclass(frozen=True)
class Scrub:
    index: int


@dataclass(frozen=True)
class Toggle:
    pass


@dataclass(frozen=True)
class Play:
    pass


@dataclass(frozen=True)
class Pause:
    pass


@dataclass(frozen=True)
class SetSpeed:
    speed_ms: int


# ---------------------------------------------------------------------------
# State
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class PlaybackState:
    """Playback state of the active trip. Replaced wholesale on every transition."""

    trip_name: str | None = None
    length: int = 0
    cancelled: bool = False
    index: int = 0
    playing: bool = False
    speed_ms: int = DEFAULT_SPEED_MS
    ticked: bool = False

    @property
    def last_index(self) -> int:
        return max(self.length - 1, 0)

    @property
    def can_tick(self) -> bool:
        """True when a timer should be armed for this state."""
        return (
            self.trip_name is not None
            and self.playing
            and not self.cancelled
            and self.length > 1
        )

    @property
    def status(self) -> PlaybackStatus:
        """``READY`` is a selected, playing trip at index 0 that has not ticked yet.

        Sequences of 0 or 1 pings never tick, so they stay ``READY``.
        """
        if self.trip_name is None:
            return PlaybackStatus.IDLE
        if not self.playing:
            return PlaybackStatus.PAUSED
        if self.index == 0 and not self.ticked:
            return PlaybackStatus.READY
        return PlaybackStatus.PLAYING


def validate_speed(speed_ms: int) -> int:
    """Return *speed_ms* if it is a preset, else raise ValueError."""
    if speed_ms not in SPEED_PRESETS:
        raise ValueError(
            f"Unsupported speed {speed_ms!r} ms; expected one of {sorted(SPEED_PRESETS)}"
        )
    return speed_ms


def _controllable(state: PlaybackState) -> bool:
    return state.trip_name is not None and not state.cancelled and state.length > 1


def transition(state: PlaybackState, event) -> PlaybackState:
    """Apply *event* to *state* and return the new state.

    Events that do not apply in the current state return *state* unchanged.
    Only :class:`SetSpeed` can raise (``ValueError`` for a non-preset speed).
    """
    replace = dataclasses.replace

    if isinstance(event, Select):
        return PlaybackState(
            trip_name=event.trip_name,
            length=max(event.length, 0),
            cancelled=event.cancelled,
            index=0,
            playing=not event.cancelled,
            speed_ms=state.speed_ms,
        )

    if isinstance(event, SetSpeed):
        return replace(state, speed_ms=validate_speed(event.speed_ms))

    if state.trip_name is None:
        return state

    if isinstance(event, Deselect):
        return PlaybackState(speed_ms=state.speed_ms)

    if isinstance(event, Tick):
        if not state.can_tick:
            return state
        nxt = state.index + 1 if state.index < state.length - 1 else 0
        return replace(state, index=nxt, ticked=True)

    if isinstance(event, Scrub):
        index = min(max(int(event.index), 0), state.last_index)
        return replace(state, index=index, playing=False)

    if isinstance(event, Toggle):
        if not _controllable(state):
            return state
        return replace(state, playing=not state.playing)

    if isinstance(event, Play):
        if not _controllable(state):
            return state
        return replace(state, playing=True)

    if isinstance(event, Pause):
        if not _controllable(state):
            return state
        return replace(state, playing=False)

    raise TypeError(f"Unknown playback event: {event!r}")


# ---------------------------------------------------------------------------
# Timer-driven clock
# ---------------------------------------------------------------------------


class PlaybackClock:
    """Drives :class:`PlaybackState` forward on a scheduler.

    At most one timer is pending at any time. It is armed when the state can
    tick and cancelled on selection change, pause, scrub, deselect and
    :meth:`close`. A speed change does not reschedule the pending wait; the
    new period applies from the next tick boundary.

    Parameters
    ----------
    scheduler:
        Object with ``call_later(delay_s, callback) -> handle`` — see
        :mod:`fleet_replay.playback.scheduler`.
    speed_ms:
        Initial tick period; must be one of :data:`SPEED_PRESETS`.
    on_change:
        Optional callable invoked with the new state after every transition
        that changed it.
    """

    def __init__(
        self,
        scheduler,
        speed_ms: int = DEFAULT_SPEED_MS,
        on_change: Callable[[PlaybackState], None] | None = None,
    ) -> None:
        self._scheduler = scheduler
        self._state = PlaybackState(speed_ms=validate_speed(speed_ms))
        self._on_change = on_change
        self._handle = None
        self._generation = 0

    @property
    def state(self) -> PlaybackState:
        return self._state

    @property
    def armed(self) -> bool:
        """True while a tick is pending."""
        return self._handle is not None

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def select(self, trip_name: str, length: int, cancelled: bool = False) -> PlaybackState:
        return self._apply(Select(trip_name, length, cancelled), restart=True)

    def deselect(self) -> PlaybackState:
        return self._apply(Deselect(), restart=True)

    def play(self) -> PlaybackState:
        return self._apply(Play())

    def pause(self) -> PlaybackState:
        return self._apply(Pause())

    def toggle(self) -> PlaybackState:
        return self._apply(Toggle())

    def set_index(self, index: int) -> PlaybackState:
        return self._apply(Scrub(index))

    def set_speed(self, speed_ms: int) -> PlaybackState:
        return self._apply(SetSpeed(speed_ms))

    def close(self) -> None:
        """Cancel any pending tick and pause playback."""
        self._disarm()
        self._state = dataclasses.replace(self._state, playing=False)

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _apply(self, event, restart: bool = False) -> PlaybackState:
        prev = self._state
        self._state = transition(prev, event)
        if restart:
            self._disarm()
        self._sync_timer()
        if self._on_change is not None and self._state != prev:
            self._on_change(self._state)
        return self._state

    def _sync_timer(self) -> None:
        if not self._state.can_tick:
            self._disarm()
        elif self._handle is None:
            self._arm()

    def _arm(self) -> None:
        self._generation += 1
        generation = self._generation
        delay_s = self._state.speed_ms / 1000.0
        self._handle = self._scheduler.call_later(delay_s, lambda: self._on_timer(generation))
        _logger.debug("Armed tick #%d in %d ms", generation, self._state.speed_ms)

    def _disarm(self) -> None:
        if self._handle is None:
            return
        self._handle.cancel()
        self._handle = None
        self._generation += 1
        _logger.debug("Disarmed pending tick")

    def _on_timer(self, generation: int) -> None:
        if generation != self._generation:
            return
        self._handle = None
        self._apply(Tick())
