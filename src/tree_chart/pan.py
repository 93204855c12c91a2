"""Pan controller: pointer-drag state machine over a display-only transform.

The transform maps a layout point ``p`` to the screen as
``(p + offset) * scale``.  It is applied identically to the node layer and
the link layer and never feeds back into layout coordinates.

Drag handling is an explicit state machine ``idle -> dragging -> idle``:

- ``drag_start`` records the pointer and the current offset.
- ``drag_move`` (only while dragging) sets
  ``offset = start_offset + (pointer - start_pointer) / scale``.
- ``drag_end`` returns to idle; the offset persists.

The transition functions are pure; ``PanController`` owns the current
``DragState`` and ``PanTransform`` and exposes pointer-event handlers that
never raise.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, replace
from enum import StrEnum, auto

from loguru import logger

from tree_chart.algorithm.links import fmt_number
from tree_chart.result import Point

__all__ = [
    "DragPhase",
    "DragState",
    "PanController",
    "PanTransform",
    "center_transform",
    "drag_end",
    "drag_move",
    "drag_start",
]


class DragPhase(StrEnum):
    IDLE = auto()
    DRAGGING = auto()


@dataclass(frozen=True, slots=True)
class PanTransform:
    """Offset and scale applied after layout.

    Attributes:
        offset_x: Horizontal translation in layout units.
        offset_y: Vertical translation in layout units.
        scale:    Zoom factor (> 0).
    """

    offset_x: float = 0.0
    offset_y: float = 0.0
    scale: float = 1.0

    def apply(self, point: Point) -> Point:
        """Map a layout point to screen coordinates."""
        return (
            (point[0] + self.offset_x) * self.scale,
            (point[1] + self.offset_y) * self.scale,
        )

    def invert(self, point: Point) -> Point:
        """Map a screen point back to layout coordinates."""
        return (
            point[0] / self.scale - self.offset_x,
            point[1] / self.scale - self.offset_y,
        )

    def svg(self) -> str:
        """SVG ``transform`` attribute equivalent to ``apply``."""
        tx = fmt_number(self.offset_x * self.scale)
        ty = fmt_number(self.offset_y * self.scale)
        return f"translate({tx},{ty}) scale({fmt_number(self.scale)})"


@dataclass(frozen=True, slots=True)
class DragState:
    """Where a drag gesture started.

    Attributes:
        phase:         Idle or dragging.
        start_pointer: Pointer position at drag start (None while idle).
        start_offset:  Transform offset at drag start (None while idle).
    """

    phase: DragPhase = DragPhase.IDLE
    start_pointer: Point | None = None
    start_offset: Point | None = None


def drag_start(state: DragState, transform: PanTransform, pointer: Point) -> DragState:
    """Begin (or restart) a drag at ``pointer``."""
    return DragState(
        phase=DragPhase.DRAGGING,
        start_pointer=pointer,
        start_offset=(transform.offset_x, transform.offset_y),
    )


def drag_move(state: DragState, transform: PanTransform, pointer: Point) -> PanTransform:
    """Return the transform after moving the pointer to ``pointer``.

    Idle states leave the transform unchanged.
    """
    if (
        state.phase != DragPhase.DRAGGING
        or state.start_pointer is None
        or state.start_offset is None
    ):
        return transform
    dx = (pointer[0] - state.start_pointer[0]) / transform.scale
    dy = (pointer[1] - state.start_pointer[1]) / transform.scale
    return replace(
        transform,
        offset_x=state.start_offset[0] + dx,
        offset_y=state.start_offset[1] + dy,
    )


def drag_end(state: DragState) -> DragState:
    """Finish the gesture; the transform keeps its last offset."""
    return DragState()


def center_transform(
    bounds: tuple[float, float, float, float] | None,
    container_width: float,
) -> PanTransform:
    """Initial transform: chart centred horizontally, no vertical offset, scale 1."""
    if bounds is None:
        return PanTransform(offset_x=container_width / 2)
    min_x, _, max_x, _ = bounds
    return PanTransform(offset_x=container_width / 2 - (min_x + max_x) / 2)


class PanController:
    """Owns the pan transform and the drag state of one chart.

    Example::

        pan = PanController()
        pan.pointer_down(100, 100)
        pan.pointer_move(130, 90)
        pan.pointer_up()
        pan.transform  # PanTransform(offset_x=30.0, offset_y=-10.0, scale=1.0)

    Args:
        min_scale: Lower zoom bound.
        max_scale: Upper zoom bound.
    """

    def __init__(self, min_scale: float = 0.1, max_scale: float = 4.0) -> None:
        self.min_scale = min_scale
        self.max_scale = max_scale
        self.transform = PanTransform()
        self.state = DragState()
        self._last_pointer: Point | None = None

    @property
    def dragging(self) -> bool:
        return self.state.phase == DragPhase.DRAGGING

    # ------------------------------------------------------------------
    # Pointer events
    # ------------------------------------------------------------------

    def pointer_down(self, x: float, y: float) -> None:
        self.state = drag_start(self.state, self.transform, (x, y))
        self._last_pointer = (x, y)

    def pointer_move(self, x: float, y: float) -> PanTransform:
        if self.dragging:
            self.transform = drag_move(self.state, self.transform, (x, y))
            self._last_pointer = (x, y)
        return self.transform

    def pointer_up(self) -> None:
        self.state = drag_end(self.state)
        self._last_pointer = None

    # ------------------------------------------------------------------
    # Whole-transform updates
    # ------------------------------------------------------------------

    def center(
        self,
        bounds: tuple[float, float, float, float] | None,
        container_width: float,
    ) -> PanTransform:
        """Reset to the initial centred transform and cancel any drag."""
        self.transform = center_transform(bounds, container_width)
        self.state = DragState()
        self._last_pointer = None
        logger.debug("Pan reset: {}", self.transform)
        return self.transform

    def zoom(self, factor: float, anchor: Point = (0.0, 0.0)) -> PanTransform:
        """Multiply the scale by ``factor`` keeping screen point ``anchor`` fixed.

        The resulting scale is clamped to ``[min_scale, max_scale]``.
        Non-finite or non-positive factors are ignored.
        """
        if not math.isfinite(factor) or factor <= 0:
            logger.debug("Ignoring zoom factor {}", factor)
            return self.transform

        old = self.transform
        scale = min(self.max_scale, max(self.min_scale, old.scale * factor))
        ax, ay = anchor
        self.transform = PanTransform(
            offset_x=ax / scale - ax / old.scale + old.offset_x,
            offset_y=ay / scale - ay / old.scale + old.offset_y,
            scale=scale,
        )
        if self.dragging and self._last_pointer is not None:
            # rebase the gesture so the next move continues from here
            self.state = drag_start(self.state, self.transform, self._last_pointer)
        return self.transform
