"""TripLoader — reads trip event logs from JSON files.

A trip file holds either a bare array of event records, or an object of the
form ``{"name": "...", "events": [...]}``.  A fleet is a directory of such
files, loaded in filename order.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from fleet_replay.trips.models import Trip
from fleet_replay.trips.parser import TripEventParser

_logger = logging.getLogger(__name__)


class TripLoadError(Exception):
    """Raised when a trip file is missing, unreadable, or has the wrong shape."""


def name_from_path(path: Path) -> str:
    """Derive a display name from a file stem.

    >>> name_from_path(Path("urban_dense_delivery.json"))
    'Urban Dense Delivery'
    """
    return path.stem.replace("_", " ").replace("-", " ").strip().title()


class TripLoader:
    """Loads :class:`Trip` objects from JSON trip logs.

    Parameters
    ----------
    parser:
        Optional :class:`TripEventParser` (injectable for tests).
    """

    def __init__(self, parser: TripEventParser | None = None) -> None:
        self._parser = parser or TripEventParser()

    def from_records(self, name: str, records) -> Trip:
        """Build a trip from already-decoded records."""
        if not isinstance(records, list):
            raise TripLoadError(f"Trip {name!r}: expected a list of events")
        return Trip(name=name, events=self._parser.parse_log(records))

    def load_file(self, path: str | Path) -> Trip:
        """Read a single trip file.

        Raises
        ------
        TripLoadError
            If the file does not exist, is not valid JSON, or does not hold an
            event array.
        """
        path = Path(path)
        if not path.is_file():
            raise TripLoadError(f"File not found: {str(path)!r}")
        try:
            doc = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise TripLoadError(f"Could not read trip file {str(path)!r}: {exc}") from exc

        if isinstance(doc, dict):
            name = str(doc.get("name") or name_from_path(path))
            return self.from_records(name, doc.get("events"))
        return self.from_records(name_from_path(path), doc)

    def load_fleet(self, directory: str | Path) -> list[Trip]:
        """Load every ``*.json`` trip in *directory*, sorted by filename.

        Files that fail to load are logged and skipped, as is a file whose
        trip name repeats one already loaded. A missing directory yields an
        empty fleet.
        """
        directory = Path(directory)
        if not directory.is_dir():
            _logger.warning("Fleet directory %s does not exist", directory)
            return []

        trips: list[Trip] = []
        seen: set[str] = set()
        for path in sorted(directory.glob("*.json")):
            try:
                trip = self.load_file(path)
            except TripLoadError as exc:
                _logger.warning("Skipping trip file: %s", exc)
                continue
            if trip.name in seen:
                _logger.warning("Skipping trip file %s: duplicate trip name %r", path, trip.name)
                continue
            seen.add(trip.name)
            trips.append(trip)

        _logger.info("Loaded %d trip(s) from %s", len(trips), directory)
        return trips
