import pytest

from roof_takeoff import Vertex
from roof_takeoff.geometry import FEET_PER_DEGREE

ORLANDO_BOX = [
    (28.5383, -81.3792),
    (28.5384, -81.3792),
    (28.5384, -81.3791),
    (28.5383, -81.3791),
]


def vertices(*pairs: tuple[float, float]) -> list[Vertex]:
    return [Vertex(lat=lat, lng=lng) for lat, lng in pairs]


def north_line(length_ft: float, lat: float = 28.5383, lng: float = -81.3792) -> list[Vertex]:
    """Two vertices on one meridian, ``length_ft`` apart."""
    return vertices((lat, lng), (lat + length_ft / FEET_PER_DEGREE, lng))


@pytest.fixture
def orlando_box():
    return vertices(*ORLANDO_BOX)


@pytest.fixture
def line_of():
    return north_line
