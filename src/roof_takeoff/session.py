"""Drawing session: the single-active-tool state machine behind the takeoff screen.

The hosting map surface raises notifications (tool selected, shape completed,
vertices mutated, cancel, clear, restart, pitch changed). Each one is handled
synchronously, and every notification that changes a committed shape or the
pitch ends with a recompute and an ``on_measurements_changed`` callback.
"""

from __future__ import annotations

import logging
import uuid
from collections.abc import Callable, Sequence
from typing import ClassVar, Literal, Union

from pydantic import BaseModel, ConfigDict, model_validator

from .aggregator import recompute
from .config import EngineSettings
from .errors import SessionStateError, UnknownShapeError
from .geometry import nearest_vertex
from .ledger import SegmentLedger
from .models import AreaShape, LinearCategory, RoofMeasurements, ToolKind, Vertex

logger = logging.getLogger(__name__)

MeasurementsListener = Callable[[Union[RoofMeasurements, None]], None]


class ToolSelection(BaseModel):
    """An area tool, or a linear tool for one category."""

    model_config = ConfigDict(frozen=True)

    kind: ToolKind
    category: LinearCategory | None = None

    @model_validator(mode="after")
    def _check_category(self) -> ToolSelection:
        if self.kind is ToolKind.LINEAR and self.category is None:
            raise ValueError("linear tool requires a category")
        if self.kind is ToolKind.AREA and self.category is not None:
            raise ValueError("area tool takes no category")
        return self


class _State(BaseModel):
    model_config = ConfigDict(frozen=True)

    drawing: ClassVar[bool] = False


class Idle(_State):
    name: Literal["idle"] = "idle"


class DrawingArea(_State):
    drawing: ClassVar[bool] = True
    name: Literal["drawing_area"] = "drawing_area"


class DrawingLinear(_State):
    drawing: ClassVar[bool] = True
    name: Literal["drawing_linear"] = "drawing_linear"
    category: LinearCategory


class HasArea(_State):
    name: Literal["has_area"] = "has_area"


class HasAreaDrawingLinear(_State):
    drawing: ClassVar[bool] = True
    name: Literal["has_area_drawing_linear"] = "has_area_drawing_linear"
    category: LinearCategory


SessionState = Union[Idle, DrawingArea, DrawingLinear, HasArea, HasAreaDrawingLinear]


class DrawingSession:
    """Owns the outline, the linear ledger, the active tool, and the current record.

    There is exactly one tool slot, so two tools can never be active at once.
    The visible state is derived from that slot and from whether an outline exists.
    """

    def __init__(
        self,
        settings: EngineSettings | None = None,
        on_measurements_changed: MeasurementsListener | None = None,
    ):
        self.settings = settings or EngineSettings()
        self.session_id = f"ts_{uuid.uuid4().hex[:8]}"
        self.ledger = SegmentLedger()
        self._area: AreaShape | None = None
        self._tool: ToolSelection | None = None
        self._draft: list[Vertex] = []
        self._pitch: str = self.settings.default_pitch
        self._measurements: RoofMeasurements | None = None
        self._listeners: list[MeasurementsListener] = []
        if on_measurements_changed is not None:
            self._listeners.append(on_measurements_changed)

    @property
    def state(self) -> SessionState:
        tool = self._tool
        if tool is None:
            return HasArea() if self._area is not None else Idle()
        if tool.kind is ToolKind.AREA:
            return DrawingArea()
        if self._area is not None:
            return HasAreaDrawingLinear(category=tool.category)
        return DrawingLinear(category=tool.category)

    @property
    def tool(self) -> ToolSelection | None:
        return self._tool

    @property
    def area_shape(self) -> AreaShape | None:
        return self._area

    @property
    def pitch(self) -> str:
        return self._pitch

    @property
    def draft(self) -> tuple[Vertex, ...]:
        """Vertices placed for the active tool but not yet committed."""
        return tuple(self._draft)

    @property
    def measurements(self) -> RoofMeasurements | None:
        """The current record, for the external save action."""
        return self._measurements

    def subscribe(self, callback: MeasurementsListener) -> None:
        self._listeners.append(callback)

    def unsubscribe(self, callback: MeasurementsListener) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)

    def on_tool_selected(self, kind: ToolKind | str, category: LinearCategory | str | None = None) -> None:
        """Activate a tool. Selecting the tool that is already active deselects it."""
        selection = ToolSelection(kind=kind, category=category)
        if selection == self._tool:
            self.on_cancel()
            return

        if self._draft:
            logger.debug("Discarding %d draft vertices on tool switch", len(self._draft))
        self._draft.clear()
        self._tool = selection
        logger.debug("Tool selected: %s -> %s", selection.kind.value, self.state.name)

    def on_cancel(self) -> None:
        """Leave the drawing state, dropping only the uncommitted draft."""
        if self._tool is None:
            return
        self._tool = None
        self._draft.clear()
        logger.debug("Drawing cancelled -> %s", self.state.name)

    def on_shape_completed(
        self,
        kind: ToolKind | str,
        vertices: Sequence[Vertex],
        category: LinearCategory | str | None = None,
    ) -> str:
        """Commit a finished shape drawn with the active tool and return its id."""
        kind = ToolKind(kind)
        tool = self._tool
        if tool is None:
            raise SessionStateError(f"{kind.value} shape completed with no active tool")
        if tool.kind is not kind:
            raise SessionStateError(f"{kind.value} shape completed while the {tool.kind.value} tool is active")
        if category is None:
            return self._commit(list(vertices))
        if tool.kind is ToolKind.AREA:
            raise SessionStateError(f"area shape completed with category {LinearCategory(category).value}")
        if LinearCategory(category) is not tool.category:
            raise SessionStateError(
                f"{LinearCategory(category).value} line completed while the {tool.category.value} tool is active"
            )
        return self._commit(list(vertices))

    def place_vertex(self, vertex: Vertex, snap: bool = True) -> str | None:
        """Add a vertex to the active draft, snapping to a nearby committed vertex.

        A linear draft commits itself on its second vertex and the tool exits.
        Returns the id of the committed segment in that case, otherwise None.
        """
        if self._tool is None:
            raise SessionStateError("vertex placed with no active tool")
        if snap:
            snapped = nearest_vertex(vertex, self._snap_candidates(), self.settings.snap_tolerance_ft)
            if snapped is not None:
                vertex = snapped
        self._draft.append(vertex)

        if self._tool.kind is ToolKind.LINEAR and len(self._draft) >= 2:
            return self._commit(list(self._draft))
        return None

    def complete_draft(self) -> str:
        """Commit the placed draft vertices with the active tool."""
        if self._tool is None:
            raise SessionStateError("no active tool to complete")
        return self._commit(list(self._draft))

    def _commit(self, vertices: list[Vertex]) -> str:
        tool = self._tool
        if tool.kind is ToolKind.AREA:
            replaced = self._area is not None
            shape_id = f"area_{uuid.uuid4().hex[:8]}"
            self._area = AreaShape(shape_id=shape_id, vertices=vertices)
            logger.info(
                "Roof outline %s committed (%d vertices%s)",
                shape_id,
                len(vertices),
                ", replaced previous" if replaced else "",
            )
        else:
            shape_id = self.ledger.add_segment(tool.category, vertices)
            logger.info("%s line %s committed (%d vertices)", tool.category.value, shape_id, len(vertices))

        self._tool = None
        self._draft.clear()
        self._refresh()
        return shape_id

    def _snap_candidates(self) -> list[Vertex]:
        candidates: list[Vertex] = list(self._area.vertices) if self._area is not None else []
        for segment in self.ledger.segments():
            candidates.extend(segment.vertices)
        return candidates

    def on_vertices_mutated(self, shape_id: str, vertices: Sequence[Vertex]) -> None:
        """Replace the vertices of the outline or of a line. The tool state is untouched."""
        if self._area is not None and self._area.shape_id == shape_id:
            self._area = AreaShape(shape_id=shape_id, vertices=list(vertices))
        elif shape_id in self.ledger:
            self.ledger.update_segment_vertices(shape_id, vertices)
        else:
            raise UnknownShapeError(shape_id)
        self._refresh()

    def on_segment_removed(self, segment_id: str) -> None:
        self.ledger.remove_segment(segment_id)
        self._refresh()

    def on_pitch_changed(self, label: str) -> None:
        self._pitch = label
        self._refresh()

    def on_clear_category(self, category: LinearCategory | str) -> None:
        """Drop every line of one category; other categories keep their totals."""
        category = LinearCategory(category)
        removed = self.ledger.clear_category(category)
        if self._tool is not None and self._tool.category is category:
            self._tool = None
            self._draft.clear()
        logger.info("Cleared %d %s lines", removed, category.value)
        self._refresh()

    def on_clear_lines(self) -> None:
        removed = self.ledger.clear_all()
        if self._tool is not None and self._tool.kind is ToolKind.LINEAR:
            self._tool = None
            self._draft.clear()
        logger.info("Cleared all %d lines", removed)
        self._refresh()

    def on_clear_area(self) -> None:
        """Discard the outline but keep the lines; the record becomes None."""
        if self._area is None:
            return
        self._area = None
        if self._tool is not None and self._tool.kind is ToolKind.AREA:
            self._tool = None
            self._draft.clear()
        logger.info("Roof outline cleared")
        self._refresh()

    def on_restart(self) -> None:
        """Discard the outline, every line, and the active tool in one step."""
        self._area = None
        self.ledger.clear_all()
        self._tool = None
        self._draft.clear()
        logger.info("Session %s restarted", self.session_id)
        self._refresh()

    def _refresh(self) -> None:
        self._measurements = recompute(self._area, self._pitch, self.ledger)
        for callback in list(self._listeners):
            try:
                callback(self._measurements)
            except Exception:
                logger.exception("Measurements listener %r failed", callback)
