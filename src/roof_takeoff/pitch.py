"""Roof pitch labels and their flat-to-sloped area multipliers.

Each multiplier is sqrt(1 + (rise / 12) ** 2) rounded to three places.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)

PITCH_MULTIPLIERS: dict[str, float] = {
    "flat": 1.000,
    "2/12": 1.014,
    "3/12": 1.031,
    "4/12": 1.054,
    "5/12": 1.083,
    "6/12": 1.118,
    "7/12": 1.158,
    "8/12": 1.202,
    "9/12": 1.250,
    "10/12": 1.302,
    "11/12": 1.357,
    "12/12": 1.414,
}

# Unknown or missing labels fall back to this entry instead of failing.
# This hides typos in the label; validate with is_valid_pitch at the input boundary.
FALLBACK_PITCH = "4/12"
FALLBACK_MULTIPLIER = PITCH_MULTIPLIERS[FALLBACK_PITCH]


def resolve_pitch_multiplier(label: str | None) -> float:
    """Multiplier for ``label``, or the 4/12 multiplier when the label is not tabled."""
    multiplier = PITCH_MULTIPLIERS.get(label) if label is not None else None
    if multiplier is None:
        logger.warning("Unknown pitch %r, using %s multiplier %.3f", label, FALLBACK_PITCH, FALLBACK_MULTIPLIER)
        return FALLBACK_MULTIPLIER
    return multiplier


def is_valid_pitch(label: str) -> bool:
    return label in PITCH_MULTIPLIERS


def available_pitches() -> list[str]:
    return list(PITCH_MULTIPLIERS)
