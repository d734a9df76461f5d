"""Area, perimeter and length of geographic vertex sequences, in imperial units.

Area uses a local tangent-plane approximation: longitudes are scaled by the
cosine of the mean latitude and both axes converted with a fixed
feet-per-degree constant before applying the shoelace formula. Roof outlines
span tens of meters at most, where the planar error is negligible. Keep it
planar rather than switching to spherical excess; rounded outputs depend on it.

Lengths use great-circle (haversine) distances on the same earth radius.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from .models import Vertex

EARTH_RADIUS_FT = 20_902_231.0  # 6371 km
FEET_PER_DEGREE = EARTH_RADIUS_FT * math.pi / 180


def haversine_ft(a: Vertex, b: Vertex) -> float:
    """Great-circle distance between two vertices in feet."""
    lat1, lng1, lat2, lng2 = map(math.radians, (a.lat, a.lng, b.lat, b.lng))
    dlat = lat2 - lat1
    dlng = lng2 - lng1
    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlng / 2) ** 2
    return 2 * EARTH_RADIUS_FT * math.asin(min(1.0, math.sqrt(h)))


def compute_polygon_area(vertices: Sequence[Vertex]) -> float:
    """Flat area of a closed polygon in square feet. Fewer than 3 vertices yields 0."""
    if len(vertices) < 3:
        return 0.0

    mean_lat = sum(v.lat for v in vertices) / len(vertices)
    lng_scale = math.cos(math.radians(mean_lat))
    origin = vertices[0]
    xs = [(v.lng - origin.lng) * lng_scale * FEET_PER_DEGREE for v in vertices]
    ys = [(v.lat - origin.lat) * FEET_PER_DEGREE for v in vertices]

    twice_area = 0.0
    n = len(vertices)
    for i in range(n):
        j = (i + 1) % n
        twice_area += xs[i] * ys[j] - xs[j] * ys[i]
    return abs(twice_area) / 2


def compute_polygon_perimeter(vertices: Sequence[Vertex]) -> float:
    """Perimeter in feet, including the implied closing edge."""
    if len(vertices) < 2:
        return 0.0
    total = compute_segment_length(vertices)
    return total + haversine_ft(vertices[-1], vertices[0])


def compute_segment_length(vertices: Sequence[Vertex]) -> float:
    """Length of an open polyline in feet. A single vertex yields 0."""
    total = 0.0
    for i in range(1, len(vertices)):
        total += haversine_ft(vertices[i - 1], vertices[i])
    return total


def nearest_vertex(
    target: Vertex, candidates: Sequence[Vertex], tolerance_ft: float
) -> Vertex | None:
    """Closest candidate within ``tolerance_ft`` of ``target``; ties keep the earliest."""
    if tolerance_ft <= 0:
        return None

    best: Vertex | None = None
    best_distance = tolerance_ft
    for candidate in candidates:
        distance = haversine_ft(target, candidate)
        if distance <= best_distance and (best is None or distance < best_distance):
            best = candidate
            best_distance = distance
    return best
