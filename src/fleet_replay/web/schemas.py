"""Pydantic request/response schemas for the Web API."""

from __future__ import annotations

from pydantic import BaseModel

from fleet_replay.playback.selection import PlaybackSnapshot
from fleet_replay.trips.models import PositionPing


class HealthResponse(BaseModel):
    status: str
    version: str


class SelectRequest(BaseModel):
    name: str


class IndexRequest(BaseModel):
    index: int


class SpeedRequest(BaseModel):
    speed_ms: int


class TripRecord(BaseModel):
    name: str
    selected: bool
    ping_count: int
    cancelled: bool


class TripsResponse(BaseModel):
    trips: list[TripRecord]


class FleetSummaryResponse(BaseModel):
    totalTrips: int
    moving: int
    stopped: int
    completed: int
    cancelled: int
    inProgress: int
    fleetProgressAvg: int


class EventRecord(BaseModel):
    event_type: str
    timestamp: str | None = None
    lat: float
    lng: float
    moving: bool | None = None
    speed_kmh: float | None = None
    status: str | None = None
    reason: str | None = None

    @classmethod
    def from_ping(cls, ping: PositionPing) -> EventRecord:
        movement = ping.movement
        return cls(
            event_type=ping.event_type,
            timestamp=ping.timestamp,
            lat=ping.location.lat,
            lng=ping.location.lng,
            moving=movement.moving if movement else None,
            speed_kmh=movement.speed_kmh if movement else None,
            status=ping.status,
            reason=ping.reason,
        )


class PlaybackResponse(BaseModel):
    trip_name: str | None
    status: str
    playing: bool
    speed_ms: int
    is_cancelled: bool
    current_index: int
    progress_percent: int
    positions: list[tuple[float, float]]
    current_event: EventRecord | None
    fleet_summary: FleetSummaryResponse

    @classmethod
    def from_snapshot(cls, snap: PlaybackSnapshot) -> PlaybackResponse:
        event = snap.current_event
        return cls(
            trip_name=snap.trip_name,
            status=snap.status,
            playing=snap.playing,
            speed_ms=snap.speed_ms,
            is_cancelled=snap.is_cancelled,
            current_index=snap.current_index,
            progress_percent=snap.progress_percent,
            positions=snap.positions,
            current_event=EventRecord.from_ping(event) if event is not None else None,
            fleet_summary=FleetSummaryResponse(**snap.fleet_summary.to_dict()),
        )
