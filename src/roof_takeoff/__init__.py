"""Roof takeoff measurement engine."""

from .aggregator import recompute
from .config import EngineSettings
from .errors import SessionStateError, TakeoffError, UnknownShapeError
from .geometry import (
    compute_polygon_area,
    compute_polygon_perimeter,
    compute_segment_length,
    haversine_ft,
    nearest_vertex,
)
from .ledger import SegmentLedger
from .models import AreaShape, LinearCategory, LinearSegment, RoofMeasurements, ToolKind, Vertex
from .pitch import PITCH_MULTIPLIERS, available_pitches, is_valid_pitch, resolve_pitch_multiplier
from .session import DrawingSession

__all__ = [
    "AreaShape",
    "DrawingSession",
    "EngineSettings",
    "LinearCategory",
    "LinearSegment",
    "PITCH_MULTIPLIERS",
    "RoofMeasurements",
    "SegmentLedger",
    "SessionStateError",
    "TakeoffError",
    "ToolKind",
    "UnknownShapeError",
    "Vertex",
    "available_pitches",
    "compute_polygon_area",
    "compute_polygon_perimeter",
    "compute_segment_length",
    "haversine_ft",
    "is_valid_pitch",
    "nearest_vertex",
    "recompute",
    "resolve_pitch_multiplier",
]
