"""Collection of committed linear measurements, grouped by roof-edge category."""

from __future__ import annotations

import logging
import uuid
from collections.abc import Sequence

from .errors import UnknownShapeError
from .geometry import compute_segment_length
from .models import LinearCategory, LinearSegment, Vertex

logger = logging.getLogger(__name__)


class SegmentLedger:
    """Owns every LinearSegment and its cached length.

    The ledger never notifies anyone; its owner recomputes after each mutation.
    """

    def __init__(self) -> None:
        self._segments: dict[str, LinearSegment] = {}

    def __len__(self) -> int:
        return len(self._segments)

    def __contains__(self, segment_id: object) -> bool:
        return segment_id in self._segments

    def add_segment(self, category: LinearCategory | str, vertices: Sequence[Vertex]) -> str:
        """Store a new segment and return its id."""
        segment_id = f"seg_{uuid.uuid4().hex[:8]}"
        segment = LinearSegment(
            segment_id=segment_id,
            category=LinearCategory(category),
            vertices=list(vertices),
            length_ft=compute_segment_length(vertices),
        )
        self._segments[segment_id] = segment
        logger.debug("Added %s segment %s (%.1f ft)", segment.category.value, segment_id, segment.length_ft)
        return segment_id

    def get(self, segment_id: str) -> LinearSegment:
        try:
            return self._segments[segment_id]
        except KeyError:
            raise UnknownShapeError(segment_id) from None

    def update_segment_vertices(self, segment_id: str, vertices: Sequence[Vertex]) -> LinearSegment:
        """Replace a segment's vertices and recompute its cached length."""
        segment = self.get(segment_id)
        segment.vertices = list(vertices)
        segment.length_ft = compute_segment_length(vertices)
        return segment

    def remove_segment(self, segment_id: str) -> LinearSegment:
        segment = self.get(segment_id)
        del self._segments[segment_id]
        return segment

    def segments(self, category: LinearCategory | str | None = None) -> list[LinearSegment]:
        """Live segments in insertion order, optionally limited to one category."""
        if category is None:
            return list(self._segments.values())
        category = LinearCategory(category)
        return [s for s in self._segments.values() if s.category is category]

    def category_total(self, category: LinearCategory | str) -> float:
        """Summed cached length of a category in feet; 0 when it has no segments."""
        return sum(s.length_ft for s in self.segments(category))

    def clear_category(self, category: LinearCategory | str) -> int:
        """Remove every segment of one category and return how many were removed."""
        category = LinearCategory(category)
        doomed = [sid for sid, s in self._segments.items() if s.category is category]
        for sid in doomed:
            del self._segments[sid]
        return len(doomed)

    def clear_all(self) -> int:
        count = len(self._segments)
        self._segments.clear()
        return count
