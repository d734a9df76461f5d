"""Pydantic data models for the roof takeoff engine."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class LinearCategory(str, Enum):
    """Roof-edge category a linear measurement is tagged with."""

    EAVES = "eaves"
    RAKES = "rakes"
    VALLEYS = "valleys"
    RIDGES = "ridges"
    HIPS = "hips"
    FLASHING = "flashing"


class ToolKind(str, Enum):
    AREA = "area"
    LINEAR = "linear"


class Vertex(BaseModel):
    """A geographic point in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90.0, le=90.0)
    lng: float = Field(ge=-180.0, le=180.0)


class AreaShape(BaseModel):
    """The closed roof outline. The closing edge back to the first vertex is implied."""

    shape_id: str
    vertices: list[Vertex]


class LinearSegment(BaseModel):
    """An open polyline tagged with a roof-edge category and its cached length."""

    segment_id: str
    category: LinearCategory
    vertices: list[Vertex]
    length_ft: float = 0.0


class RoofMeasurements(BaseModel):
    """Measurement record handed to the hosting screen for display and save."""

    model_config = ConfigDict(frozen=True)

    flat_area: int
    total_area: int
    perimeter: int
    pitch: str
    pitch_multiplier: float
    squares: float
    eaves: int | None = None
    rakes: int | None = None
    valleys: int | None = None
    ridges: int | None = None
    hips: int | None = None
    flashing: int | None = None

    def category_total(self, category: LinearCategory) -> int:
        """Rounded feet for a category, 0 when the category is absent."""
        return getattr(self, category.value) or 0
