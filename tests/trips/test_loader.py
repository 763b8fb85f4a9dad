"""Tests for TripLoader."""

from __future__ import annotations

import json
import logging

import pytest

from fleet_replay.trips.loader import TripLoader, TripLoadError, name_from_path
from fleet_replay.trips.models import PositionPing
from tests.conftest import ping, status_event


def _write(path, doc) -> None:
    path.write_text(json.dumps(doc), encoding="utf-8")


def test_load_bare_array_uses_file_stem_as_name(tmp_path):
    path = tmp_path / "urban_dense_delivery.json"
    _write(path, [ping(lat=1.0), status_event("trip_completed")])
    trip = TripLoader().load_file(path)
    assert trip.name == "Urban Dense Delivery"
    assert len(trip) == 2
    assert isinstance(trip.events[0], PositionPing)


def test_load_named_document(tmp_path):
    path = tmp_path / "t1.json"
    _write(path, {"name": "Cross Country Long Haul", "events": [ping()]})
    trip = TripLoader().load_file(path)
    assert trip.name == "Cross Country Long Haul"
    assert len(trip) == 1


def test_missing_file_raises(tmp_path):
    with pytest.raises(TripLoadError, match="not found"):
        TripLoader().load_file(tmp_path / "nope.json")


def test_invalid_json_raises(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[{", encoding="utf-8")
    with pytest.raises(TripLoadError):
        TripLoader().load_file(path)


@pytest.mark.parametrize("doc", [{"name": "x"}, {"events": "nope"}, 42, "text"])
def test_wrong_shape_raises(tmp_path, doc):
    path = tmp_path / "odd.json"
    _write(path, doc)
    with pytest.raises(TripLoadError):
        TripLoader().load_file(path)


def test_empty_array_is_a_valid_trip(tmp_path):
    path = tmp_path / "empty.json"
    _write(path, [])
    trip = TripLoader().load_file(path)
    assert len(trip) == 0
    assert trip.last_event is None


def test_load_fleet_sorted_by_filename(tmp_path):
    _write(tmp_path / "trip_2_b.json", [ping()])
    _write(tmp_path / "trip_1_a.json", [ping()])
    _write(tmp_path / "notes.txt", "ignored")
    trips = TripLoader().load_fleet(tmp_path)
    assert [t.name for t in trips] == ["Trip 1 A", "Trip 2 B"]


def test_load_fleet_skips_bad_files(tmp_path, caplog):
    _write(tmp_path / "good.json", [ping()])
    (tmp_path / "bad.json").write_text("not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING):
        trips = TripLoader().load_fleet(tmp_path)
    assert [t.name for t in trips] == ["Good"]
    assert "Skipping trip file" in caplog.text


def test_load_fleet_missing_directory_is_empty(tmp_path):
    assert TripLoader().load_fleet(tmp_path / "absent") == []


def test_name_from_path_handles_dashes(tmp_path):
    assert name_from_path(tmp_path / "regional-logistics.json") == "Regional Logistics"


def test_load_fleet_skips_duplicate_trip_names(tmp_path, caplog):
    _write(tmp_path / "a.json", {"name": "Same", "events": [ping(lat=1.0), ping(lat=2.0)]})
    _write(tmp_path / "b.json", {"name": "Same", "events": [ping(lat=9.0)]})
    _write(tmp_path / "c.json", {"name": "Other", "events": [ping()]})
    with caplog.at_level(logging.WARNING):
        trips = TripLoader().load_fleet(tmp_path)
    assert [t.name for t in trips] == ["Same", "Other"]
    assert len(trips[0]) == 2
    assert "duplicate trip name 'Same'" in caplog.text
