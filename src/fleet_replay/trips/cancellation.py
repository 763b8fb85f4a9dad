"""CancellationDetector — classifies a trip by its terminal event.

Only the last record of the log is inspected. A problem reported mid-trip
and followed by further records does not mark the trip as cancelled.

Each field is split into words at camelCase boundaries and non-alphanumerics,
then lower-cased; the trip is cancelled when any word is a recognised token. Whole-word matching keeps notes such as
``"discussion"`` from tripping the ``issue`` token.
"""

from __future__ import annotations

import re

from fleet_replay.trips.models import Trip, TripEvent
from fleet_replay.trips.parser import TripEventParser

SIGNAL_TOKENS = frozenset(
    {
        "cancel",
        "cancelled",
        "canceled",
        "cancellation",
        "cancelling",
        "canceling",
        "problem",
        "problems",
        "issue",
        "issues",
    }
)

_CAMEL = re.compile(r"([a-z0-9])([A-Z])")
_WORD = re.compile(r"[a-z0-9]+")
_parser = TripEventParser()


def _words(text: str | None) -> set[str]:
    if not text:
        return set()
    return set(_WORD.findall(_CAMEL.sub(r"\1 \2", text).lower()))


class CancellationDetector:
    """Decides whether a trip ended cancelled or with a reported problem.

    Token sets are injectable so deployments can extend the vocabulary.
    """

    def __init__(
        self,
        event_type_tokens: frozenset[str] = SIGNAL_TOKENS,
        status_tokens: frozenset[str] = SIGNAL_TOKENS,
        reason_tokens: frozenset[str] = SIGNAL_TOKENS,
    ) -> None:
        self._event_type_tokens = event_type_tokens
        self._status_tokens = status_tokens
        self._reason_tokens = reason_tokens

    def matches(self, event: TripEvent) -> bool:
        """Return True if *event* carries a cancellation/problem signal."""
        return bool(
            _words(event.event_type) & self._event_type_tokens
            or _words(event.status) & self._status_tokens
            or _words(event.reason) & self._reason_tokens
        )

    def is_cancelled(self, log) -> bool:
        """Classify *log* (a :class:`Trip` or sequence of records) by its last event.

        An empty log is not cancelled.
        """
        events = log.events if isinstance(log, Trip) else log
        if not events:
            return False
        return self.matches(_parser.parse(events[-1]))


_default = CancellationDetector()


def is_cancelled(log) -> bool:
    """Module-level shortcut using the default token sets."""
    return _default.is_cancelled(log)
