"""Fleet trip replay: event-log interpretation, playback and fleet metrics."""

__version__ = "0.1.0"
