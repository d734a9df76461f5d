"""Combine outline geometry, pitch, and linear totals into RoofMeasurements."""

from __future__ import annotations

import logging
import math

from .geometry import compute_polygon_area, compute_polygon_perimeter
from .ledger import SegmentLedger
from .models import AreaShape, LinearCategory, RoofMeasurements
from .pitch import resolve_pitch_multiplier

logger = logging.getLogger(__name__)

SQUARE_FEET_PER_SQUARE = 100


def round_half_up(value: float, decimals: int = 0) -> float:
    scale = 10**decimals
    return math.floor(value * scale + 0.5) / scale


def recompute(
    area_shape: AreaShape | None, pitch_label: str | None, ledger: SegmentLedger
) -> RoofMeasurements | None:
    """Build the measurement record, or None when there is no outline.

    Raw values flow through unrounded; rounding happens once, here, so repeated
    edits never accumulate rounding error.
    """
    if area_shape is None:
        return None

    flat_area = compute_polygon_area(area_shape.vertices)
    multiplier = resolve_pitch_multiplier(pitch_label)
    total_area = flat_area * multiplier
    perimeter = compute_polygon_perimeter(area_shape.vertices)

    linear: dict[str, int | None] = {}
    for category in LinearCategory:
        total = ledger.category_total(category)
        linear[category.value] = int(round_half_up(total)) if total > 0 else None

    measurements = RoofMeasurements(
        flat_area=int(round_half_up(flat_area)),
        total_area=int(round_half_up(total_area)),
        perimeter=int(round_half_up(perimeter)),
        pitch=pitch_label if pitch_label is not None else "",
        pitch_multiplier=multiplier,
        squares=round_half_up(total_area / SQUARE_FEET_PER_SQUARE, 1),
        **linear,
    )
    logger.debug(
        "Recomputed: flat=%d total=%d perimeter=%d squares=%.1f",
        measurements.flat_area,
        measurements.total_area,
        measurements.perimeter,
        measurements.squares,
    )
    return measurements
