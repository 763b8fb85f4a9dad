"""Trip playback: timer scheduling, the playback clock and trip selection."""

from fleet_replay.playback.clock import (
    SPEED_PRESETS,
    PlaybackClock,
    PlaybackState,
    PlaybackStatus,
    transition,
)
from fleet_replay.playback.scheduler import AsyncioScheduler, ManualScheduler
from fleet_replay.playback.selection import PlaybackSnapshot, TripSelection

__all__ = [
    "SPEED_PRESETS",
    "AsyncioScheduler",
    "ManualScheduler",
    "PlaybackClock",
    "PlaybackSnapshot",
    "PlaybackState",
    "PlaybackStatus",
    "TripSelection",
    "transition",
]
