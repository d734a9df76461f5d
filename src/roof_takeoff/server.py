"""FastAPI adapter that lets a map UI drive drawing sessions over HTTP.

Sessions live in memory only; saving the measurement record is the caller's job.
"""

from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException, status
from pydantic import BaseModel

from .config import EngineSettings
from .errors import SessionStateError, UnknownShapeError
from .models import LinearCategory, RoofMeasurements, ToolKind, Vertex
from .pitch import PITCH_MULTIPLIERS
from .session import DrawingSession

logger = logging.getLogger(__name__)

app = FastAPI(title="Roof Takeoff", version="0.1.0")

_sessions: dict[str, DrawingSession] = {}


class ToolRequest(BaseModel):
    kind: ToolKind
    category: LinearCategory | None = None


class ShapeRequest(BaseModel):
    kind: ToolKind
    category: LinearCategory | None = None
    vertices: list[Vertex]


class VerticesRequest(BaseModel):
    vertices: list[Vertex]


class PitchRequest(BaseModel):
    pitch: str


class SessionView(BaseModel):
    session_id: str
    state: str
    tool: ToolKind | None = None
    category: LinearCategory | None = None
    pitch: str
    measurements: RoofMeasurements | None = None


class ShapeCreated(BaseModel):
    shape_id: str
    session: SessionView


class PitchOption(BaseModel):
    label: str
    multiplier: float


def _view(session: DrawingSession) -> SessionView:
    tool = session.tool
    return SessionView(
        session_id=session.session_id,
        state=session.state.name,
        tool=tool.kind if tool else None,
        category=tool.category if tool else None,
        pitch=session.pitch,
        measurements=session.measurements,
    )


def _get_session(session_id: str) -> DrawingSession:
    try:
        return _sessions[session_id]
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Unknown session: {session_id}") from None


def _conflict(exc: SessionStateError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


@app.get("/pitches")
async def list_pitches() -> list[PitchOption]:
    return [PitchOption(label=label, multiplier=m) for label, m in PITCH_MULTIPLIERS.items()]


@app.post("/sessions", status_code=status.HTTP_201_CREATED, response_model_exclude_none=True)
async def create_session() -> SessionView:
    session = DrawingSession(EngineSettings.from_env())
    _sessions[session.session_id] = session
    logger.info("Created session %s", session.session_id)
    return _view(session)


@app.get("/sessions/{session_id}", response_model_exclude_none=True)
async def get_session(session_id: str) -> SessionView:
    return _view(_get_session(session_id))


@app.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_session(session_id: str) -> None:
    _get_session(session_id)
    del _sessions[session_id]


@app.get("/sessions/{session_id}/measurements", response_model_exclude_none=True)
async def get_measurements(session_id: str) -> RoofMeasurements | None:
    """Current record for the external save action; null until an outline exists."""
    return _get_session(session_id).measurements


@app.post("/sessions/{session_id}/tool", response_model_exclude_none=True)
async def select_tool(session_id: str, body: ToolRequest) -> SessionView:
    session = _get_session(session_id)
    try:
        session.on_tool_selected(body.kind, body.category)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return _view(session)


@app.post("/sessions/{session_id}/cancel", response_model_exclude_none=True)
async def cancel_drawing(session_id: str) -> SessionView:
    session = _get_session(session_id)
    session.on_cancel()
    return _view(session)


@app.post("/sessions/{session_id}/shapes", response_model_exclude_none=True)
async def complete_shape(session_id: str, body: ShapeRequest) -> ShapeCreated:
    session = _get_session(session_id)
    try:
        shape_id = session.on_shape_completed(body.kind, body.vertices, body.category)
    except SessionStateError as exc:
        raise _conflict(exc) from exc
    return ShapeCreated(shape_id=shape_id, session=_view(session))


@app.put("/sessions/{session_id}/shapes/{shape_id}/vertices", response_model_exclude_none=True)
async def mutate_vertices(session_id: str, shape_id: str, body: VerticesRequest) -> SessionView:
    session = _get_session(session_id)
    try:
        session.on_vertices_mutated(shape_id, body.vertices)
    except UnknownShapeError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _view(session)


@app.delete("/sessions/{session_id}/shapes/{shape_id}", response_model_exclude_none=True)
async def remove_segment(session_id: str, shape_id: str) -> SessionView:
    session = _get_session(session_id)
    try:
        session.on_segment_removed(shape_id)
    except UnknownShapeError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    return _view(session)


@app.delete("/sessions/{session_id}/categories/{category}", response_model_exclude_none=True)
async def clear_category(session_id: str, category: LinearCategory) -> SessionView:
    session = _get_session(session_id)
    session.on_clear_category(category)
    return _view(session)


@app.delete("/sessions/{session_id}/area", response_model_exclude_none=True)
async def clear_area(session_id: str) -> SessionView:
    session = _get_session(session_id)
    session.on_clear_area()
    return _view(session)


@app.delete("/sessions/{session_id}/lines", response_model_exclude_none=True)
async def clear_lines(session_id: str) -> SessionView:
    session = _get_session(session_id)
    session.on_clear_lines()
    return _view(session)


@app.post("/sessions/{session_id}/restart", response_model_exclude_none=True)
async def restart(session_id: str) -> SessionView:
    session = _get_session(session_id)
    session.on_restart()
    return _view(session)


@app.put("/sessions/{session_id}/pitch", response_model_exclude_none=True)
async def change_pitch(session_id: str, body: PitchRequest) -> SessionView:
    session = _get_session(session_id)
    session.on_pitch_changed(body.pitch)
    return _view(session)
