"""
Family Timeline: Dashboard API Server
=====================================

Read-only API serving computed week timelines.
The client holds (offset, selection); every request carries them and
receives the fully laid-out view back.

Endpoints:
- GET  /health                  -> Liveness + source type
- GET  /api/v1/timeline         -> Timeline view for (offset, selection, now)
- POST /api/v1/timeline/actions -> Apply one interaction, return next view

Usage:
    uvicorn backend.api.server:app --reload
"""
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Optional

from fastapi import Depends, FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from ..engine import TimelineBackend, TimelineConfig
from ..observability import configure_logging
from ..temporal.clock import to_local
from ..temporal.window import compute_week_window
from .mapper import map_view_to_dto
from frontend.interaction.actions import ActionType, InteractionRequest, apply_action
from frontend.interaction.selection import parse_selection
from frontend.state.timeline import TimelineState
from frontend.visualization.timeline import build_timeline_view

logger = logging.getLogger(__name__)

# =============================================================================
# INFRASTRUCTURE SETUP
# =============================================================================

# Global Backend Instance
backend_instance: Optional[TimelineBackend] = None

# Roughly a century either way
MAX_WEEK_OFFSET = 5000


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize the fetch/normalize backend from the environment on startup."""
    global backend_instance

    config = TimelineConfig.from_env()
    configure_logging(config.log_level)

    backend_instance = TimelineBackend(config)
    logger.info(
        "Timeline backend ready (source=%s, language=%s, cap=%d)",
        backend_instance.source.source_type, config.language, config.visible_cap
    )

    yield

    logger.info("Shutting down timeline backend")
    backend_instance = None


app = FastAPI(
    title="Family Timeline API",
    version="0.1.0",
    description="Weekly event timeline for the family dashboard",
    lifespan=lifespan
)

# CORS (Allow Dashboard)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["GET", "POST"],
    allow_headers=["*"],
)


def get_backend() -> TimelineBackend:
    if backend_instance is None:
        raise HTTPException(status_code=503, detail="Backend not initialized")
    return backend_instance


class ActionBody(BaseModel):
    """Current client state plus the interaction to apply."""
    action: ActionType
    offset: int = Field(0, ge=-MAX_WEEK_OFFSET, le=MAX_WEEK_OFFSET)
    selection: str = "none"
    event_id: Optional[str] = None
    now: Optional[str] = None
    subject: Optional[str] = None


def _parse_now(value: Optional[str]) -> datetime:
    if not value:
        return datetime.now()
    try:
        return to_local(datetime.fromisoformat(value.replace("Z", "+00:00")))
    except (ValueError, OverflowError):
        raise HTTPException(400, detail=f"Invalid timestamp format: {value}")


def _render(backend: TimelineBackend, state: TimelineState, now: datetime,
            subject: Optional[str]) -> dict:
    """Fetch the state's window, then build and map its view."""
    subject_name = backend.config.subject_name if subject is None else subject
    try:
        window = compute_week_window(state.week_offset, now)
    except OverflowError:
        raise HTTPException(400, detail=f"Week {state.week_offset} is out of range for {now.isoformat()}")
    snapshot = backend.load_events(window, now, subject_name)

    view = build_timeline_view(
        events=snapshot.events,
        state=state,
        now=now,
        formatter=backend.formatter,
        subject_name=subject_name,
        visible_cap=backend.config.visible_cap,
    )
    dto = map_view_to_dto(view, snapshot)

    # A failed fetch shows the collaborator's message instead of the empty state
    if not snapshot.is_available and snapshot.message:
        dto["details_text"] = snapshot.message
    return dto


# =============================================================================
# ENDPOINTS
# =============================================================================

@app.get("/health")
async def health_check(backend: TimelineBackend = Depends(get_backend)):
    """System status."""
    return {"status": "online", "source": backend.source.source_type}


@app.get("/api/v1/timeline")
def get_timeline(
    offset: int = Query(0, ge=-MAX_WEEK_OFFSET, le=MAX_WEEK_OFFSET),
    selection: str = "none",
    now: Optional[str] = None,
    subject: Optional[str] = None,
    backend: TimelineBackend = Depends(get_backend),
):
    """
    Timeline view for the given week offset and selection token.

    "now" is optional (ISO 8601); defaults to the server's local time.
    """
    try:
        parsed_selection = parse_selection(selection)
    except ValueError as e:
        raise HTTPException(400, detail=str(e))

    state = TimelineState(week_offset=offset, selection=parsed_selection)
    return _render(backend, state, _parse_now(now), subject)


@app.post("/api/v1/timeline/actions")
def post_action(body: ActionBody, backend: TimelineBackend = Depends(get_backend)):
    """
    Apply one interaction to the client's state.

    Returns the next state (offset + selection token) and its view.
    """
    try:
        current = TimelineState(
            week_offset=body.offset,
            selection=parse_selection(body.selection),
        )
        request = InteractionRequest(action=body.action, event_id=body.event_id)
    except ValueError as e:
        raise HTTPException(400, detail=str(e))

    next_state = apply_action(current, request)
    logger.debug(
        "Action %s: offset %d -> %d, selection %s -> %s",
        body.action.value, current.week_offset, next_state.week_offset,
        current.selection.to_token(), next_state.selection.to_token()
    )
    return {
        "state": {
            "offset": next_state.week_offset,
            "selection": next_state.selection.to_token(),
        },
        "view": _render(backend, next_state, _parse_now(body.now), body.subject),
    }
