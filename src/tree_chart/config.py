"""ChartConfig, Orientation and LinkStyle for chart configuration.

ChartConfig is a frozen (immutable) dataclass holding every option read at
layout and render time.  Changing options means building a new config (see
``dataclasses.replace``) and re-running the layout; the normalized tree is
never rebuilt for a configuration change.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum, auto


class Orientation(StrEnum):
    """Direction in which depth grows.

    - TOP_TO_BOTTOM: depth along y, siblings along x (classic org chart).
    - LEFT_TO_RIGHT: depth along x, siblings along y (file-tree style).
    """

    TOP_TO_BOTTOM = auto()
    LEFT_TO_RIGHT = auto()


class LinkStyle(StrEnum):
    """Shape of the path drawn between a parent and a visible child.

    - ELBOW: two straight segments meeting at a right angle.
    - CURVE: one cubic Bézier segment.
    """

    ELBOW = auto()
    CURVE = auto()


@dataclass(frozen=True, slots=True)
class ChartConfig:
    """Immutable configuration for a tree chart.

    Attributes:
        node_width: Slot width of a node box in layout units (> 0).
        node_height: Slot height of a node box in layout units (> 0).
        level_spacing: Distance between consecutive depths (> 0).
        collapse_enabled: When False, collapse toggles are ignored.
        sibling_separation: Gap between adjacent nodes sharing a parent, in
            node slots (> 0).
        subtree_separation: Gap between adjacent nodes with different
            parents, in node slots (> 0).
        orientation: Which axis depth grows along.
        link_style: Edge shape.
        duration_ms: Duration of enter/update transitions.  Exits use half.
        collapse_depth: When set, nodes at this depth or deeper start
            collapsed after a dataset is loaded.  Top-level nodes are depth 0.
        min_scale: Lower zoom bound (> 0).
        max_scale: Upper zoom bound (>= min_scale).
    """

    node_width: float = 100.0
    node_height: float = 100.0
    level_spacing: float = 200.0
    collapse_enabled: bool = True
    sibling_separation: float = 1.0
    subtree_separation: float = 1.0
    orientation: Orientation = Orientation.TOP_TO_BOTTOM
    link_style: LinkStyle = LinkStyle.ELBOW
    duration_ms: float = 750.0
    collapse_depth: int | None = None
    min_scale: float = 0.1
    max_scale: float = 4.0

    def __post_init__(self) -> None:
        for name in ("node_width", "node_height", "level_spacing"):
            value = getattr(self, name)
            if value <= 0:
                msg = f"{name} must be > 0, got {value}"
                raise ValueError(msg)
        for name in ("sibling_separation", "subtree_separation"):
            value = getattr(self, name)
            if value <= 0:
                msg = f"{name} must be > 0, got {value}"
                raise ValueError(msg)
        if self.duration_ms < 0:
            msg = f"duration_ms must be >= 0, got {self.duration_ms}"
            raise ValueError(msg)
        if self.collapse_depth is not None and self.collapse_depth < 0:
            msg = f"collapse_depth must be >= 0 or None, got {self.collapse_depth}"
            raise ValueError(msg)
        if self.min_scale <= 0:
            msg = f"min_scale must be > 0, got {self.min_scale}"
            raise ValueError(msg)
        if self.max_scale < self.min_scale:
            msg = (
                f"max_scale must be >= min_scale, got {self.max_scale} < "
                f"{self.min_scale}"
            )
            raise ValueError(msg)
