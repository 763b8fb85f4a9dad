"""FastAPI Web application — trip playback control and fleet dashboard."""

from __future__ import annotations

import os
from contextlib import asynccontextmanager
from pathlib import Path

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from fleet_replay import __version__
from fleet_replay.display.renderer import TripCardRenderer
from fleet_replay.playback.clock import SPEED_PRESETS
from fleet_replay.playback.scheduler import AsyncioScheduler
from fleet_replay.playback.selection import TripSelection
from fleet_replay.trips.filter import location_pings
from fleet_replay.trips.loader import TripLoader
from fleet_replay.web.schemas import (
    FleetSummaryResponse,
    HealthResponse,
    IndexRequest,
    PlaybackResponse,
    SelectRequest,
    SpeedRequest,
    TripRecord,
    TripsResponse,
)

load_dotenv()  # loads .env from project root; must run before env vars are consumed

# ---------------------------------------------------------------------------
# App setup
# ---------------------------------------------------------------------------

_HERE = Path(__file__).parent

_DEFAULT_DATA_DIR = os.environ.get("FLEET_REPLAY_DATA_DIR", "data/trips")
_DEFAULT_SPEED_MS = int(os.environ.get("FLEET_REPLAY_SPEED_MS", "800"))

_selection: TripSelection | None = None


async def get_selection() -> TripSelection:
    """Return the process-wide :class:`TripSelection`, loading the fleet on first use.

    Declared ``async`` so FastAPI resolves it on the event loop thread rather
    than in the threadpool.
    """
    global _selection
    if _selection is None:
        trips = TripLoader().load_fleet(_DEFAULT_DATA_DIR)
        _selection = TripSelection(trips, AsyncioScheduler(), speed_ms=_DEFAULT_SPEED_MS)
    return _selection


@asynccontextmanager
async def lifespan(_app: FastAPI):
    yield
    if _selection is not None:
        _selection.close()


app = FastAPI(title="Fleet Replay", version=__version__, lifespan=lifespan)

templates = Jinja2Templates(directory=str(_HERE / "templates"))


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse)
def health() -> HealthResponse:
    return HealthResponse(status="ok", version=__version__)


@app.get("/api/trips", response_model=TripsResponse)
async def list_trips(sel: TripSelection = Depends(get_selection)) -> TripsResponse:
    """Return the fleet in display order."""
    active = sel.state.trip_name
    return TripsResponse(
        trips=[
            TripRecord(
                name=t.name,
                selected=t.name == active,
                ping_count=len(location_pings(t)),
                cancelled=sel.is_cancelled(t.name),
            )
            for t in sel.trips
        ]
    )


@app.post("/api/trips/select", response_model=PlaybackResponse)
async def select_trip(
    req: SelectRequest, sel: TripSelection = Depends(get_selection)
) -> PlaybackResponse:
    """Make a trip active and restart its playback."""
    try:
        snap = sel.select(req.name)
    except ValueError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return PlaybackResponse.from_snapshot(snap)


@app.get("/api/playback", response_model=PlaybackResponse)
async def playback(sel: TripSelection = Depends(get_selection)) -> PlaybackResponse:
    return PlaybackResponse.from_snapshot(sel.snapshot())


@app.post("/api/playback/play", response_model=PlaybackResponse)
async def play(sel: TripSelection = Depends(get_selection)) -> PlaybackResponse:
    return PlaybackResponse.from_snapshot(sel.play())


@app.post("/api/playback/pause", response_model=PlaybackResponse)
async def pause(sel: TripSelection = Depends(get_selection)) -> PlaybackResponse:
    return PlaybackResponse.from_snapshot(sel.pause())


@app.post("/api/playback/toggle", response_model=PlaybackResponse)
async def toggle(sel: TripSelection = Depends(get_selection)) -> PlaybackResponse:
    return PlaybackResponse.from_snapshot(sel.toggle())


@app.put("/api/playback/index", response_model=PlaybackResponse)
async def set_index(
    req: IndexRequest, sel: TripSelection = Depends(get_selection)
) -> PlaybackResponse:
    """Scrub to an index (clamped) and pause."""
    return PlaybackResponse.from_snapshot(sel.set_index(req.index))


@app.put("/api/playback/speed", response_model=PlaybackResponse)
async def set_speed(
    req: SpeedRequest, sel: TripSelection = Depends(get_selection)
) -> PlaybackResponse:
    try:
        snap = sel.set_speed(req.speed_ms)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return PlaybackResponse.from_snapshot(snap)


@app.get("/api/fleet", response_model=FleetSummaryResponse)
async def fleet(sel: TripSelection = Depends(get_selection)) -> FleetSummaryResponse:
    return FleetSummaryResponse(**sel.fleet_summary().to_dict())


@app.get("/", response_class=HTMLResponse)
async def dashboard(
    request: Request, sel: TripSelection = Depends(get_selection)
) -> HTMLResponse:
    """Render the fleet dashboard sidebar for the current state."""
    snap = sel.snapshot()
    return templates.TemplateResponse(
        request,
        "dashboard.html",
        {
            "fleet": snap.fleet_summary,
            "trips": sel.trips,
            "selected": snap.trip_name,
            "card": TripCardRenderer().render(snap),
            "playing": snap.playing,
            "speed_presets": SPEED_PRESETS,
            "speed_ms": snap.speed_ms,
        },
    )
