"""Tests for TripSelection."""

from __future__ import annotations

import pytest

from fleet_replay.playback.scheduler import ManualScheduler
from fleet_replay.playback.selection import TripSelection
from tests.conftest import cancelled_trip, make_trip, ping, route


def _fleet():
    return [
        make_trip("Cross Country", route(4)),
        make_trip("Urban", [ping(lat=10, lng=20, moving=True), ping(lat=11, lng=21, moving=False)]),
        cancelled_trip("Mountain", pings=3),
        make_trip("Single", route(1)),
        make_trip("Empty", []),
    ]


@pytest.fixture
def scheduler() -> ManualScheduler:
    return ManualScheduler()


@pytest.fixture
def selection(scheduler) -> TripSelection:
    return TripSelection(_fleet(), scheduler)


def test_initial_snapshot_is_idle(selection):
    snap = selection.snapshot()
    assert snap.trip_name is None
    assert snap.status == "idle"
    assert snap.positions == []
    assert snap.current_event is None
    assert snap.progress_percent == 0
    assert snap.fleet_summary.total_trips == 5


def test_duplicate_trip_names_rejected(scheduler):
    fleet = [make_trip("Same", route(4)), make_trip("Same", route(4))]
    with pytest.raises(ValueError, match="unique"):
        TripSelection(fleet, scheduler)


def test_select_unknown_trip_raises(selection):
    with pytest.raises(ValueError, match="Unknown trip"):
        selection.select("Nope")


def test_select_builds_position_sequence(selection, scheduler):
    snap = selection.select("Urban")
    assert snap.positions == [(10.0, 20.0), (11.0, 21.0)]
    assert snap.current_index == 0
    assert snap.current_event.location.as_tuple() == (10.0, 20.0)
    assert snap.playing
    assert not snap.is_cancelled
    assert scheduler.pending == 1


def test_example_two_pings_at_last_index(selection):
    selection.select("Urban")
    snap = selection.set_index(1)
    assert snap.current_event.is_stopped
    assert snap.progress_percent == 100


def test_select_cancelled_trip_starts_paused(selection, scheduler):
    snap = selection.select("Mountain")
    assert snap.is_cancelled
    assert not snap.playing
    assert snap.status == "paused"
    assert scheduler.pending == 0


def test_single_ping_trip_progress_is_zero(selection, scheduler):
    snap = selection.select("Single")
    assert snap.progress_percent == 0
    assert snap.status == "ready"
    assert scheduler.pending == 0
    assert selection.toggle().playing


def test_empty_trip_has_no_current_event(selection):
    snap = selection.select("Empty")
    assert snap.positions == []
    assert snap.current_event is None
    assert snap.progress_percent == 0


def test_new_selection_resets_index(selection, scheduler):
    selection.select("Cross Country")
    scheduler.fire_next()
    scheduler.fire_next()
    assert selection.state.index == 2
    snap = selection.select("Urban")
    assert snap.current_index == 0
    assert scheduler.pending == 1


def test_progress_follows_ticks(selection, scheduler):
    selection.select("Cross Country")
    progress = []
    for _ in range(4):
        progress.append(selection.snapshot().progress_percent)
        scheduler.fire_next()
    assert progress == [25, 50, 75, 100]
    assert selection.snapshot().progress_percent == 25


def test_speed_and_toggle_delegate(selection):
    selection.select("Cross Country")
    assert selection.set_speed(120).speed_ms == 120
    assert not selection.toggle().playing
    assert selection.play().playing
    assert not selection.pause().playing
    with pytest.raises(ValueError):
        selection.set_speed(999)


def test_deselect_returns_to_idle(selection, scheduler):
    selection.select("Cross Country")
    snap = selection.deselect()
    assert snap.trip_name is None
    assert snap.positions == []
    assert scheduler.pending == 0


def test_close_cancels_timer(selection, scheduler):
    selection.select("Cross Country")
    selection.close()
    assert scheduler.pending == 0


def test_fleet_summary_tracks_active_trip(selection):
    selection.select("Cross Country")
    selection.set_index(3)
    summary = selection.snapshot().fleet_summary
    assert summary.completed == 2  # Cross Country at end + Single
    assert summary.cancelled == 1


def test_on_change_called_on_ticks(scheduler):
    snaps = []
    sel = TripSelection(_fleet(), scheduler, on_change=snaps.append)
    sel.select("Cross Country")
    scheduler.fire_next()
    assert [s.current_index for s in snaps] == [0, 1]
    assert snaps[-1].fleet_summary.moving >= 1


def test_is_cancelled_lookup(selection):
    assert selection.is_cancelled("Mountain")
    assert not selection.is_cancelled("Urban")
    assert not selection.is_cancelled("Nope")
