"""Layout output types: PositionedNode, LinkGeometry and LayoutResult.

All three are transient: a layout pass produces fresh instances and the next
pass supersedes them entirely.  Continuity between passes is by key only.
"""

from __future__ import annotations

from dataclasses import dataclass

from tree_chart.config import LinkStyle
from tree_chart.tree.nodes import TreeNode

__all__ = ["LayoutResult", "LinkGeometry", "LinkId", "Point", "PositionedNode"]

Point = tuple[float, float]
LinkId = tuple[str, str]


@dataclass(frozen=True, slots=True)
class PositionedNode:
    """A visible node placed by one layout pass.

    Attributes:
        node:   The normalized node being placed.
        x, y:   Centre of the node box in layout coordinates.
        width:  Box width.
        height: Box height.
        depth:  Depth below the top level (top-level nodes are 0).
    """

    node: TreeNode
    x: float
    y: float
    width: float
    height: float
    depth: int

    @property
    def key(self) -> str:
        return self.node.key


@dataclass(frozen=True, slots=True)
class LinkGeometry:
    """Geometry of one parent -> visible child edge.

    Attributes:
        source_key:   Key of the parent node.
        target_key:   Key of the child node.
        source_point: Where the path leaves the parent box.
        target_point: Where the path enters the child box.
        points:       All path control points, endpoints included.
        style:        Which path shape ``points`` describes.
    """

    source_key: str
    target_key: str
    source_point: Point
    target_point: Point
    points: tuple[Point, ...]
    style: LinkStyle = LinkStyle.ELBOW

    @property
    def link_id(self) -> LinkId:
        """Identity used for diffing successive passes."""
        return (self.source_key, self.target_key)


@dataclass(frozen=True, slots=True)
class LayoutResult:
    """Ordered output of one layout pass.

    Attributes:
        nodes: Visible nodes in breadth-first order, siblings left to right.
        links: One link per visible parent -> child edge, ordered by target.
    """

    nodes: tuple[PositionedNode, ...] = ()
    links: tuple[LinkGeometry, ...] = ()

    def bounds(self) -> tuple[float, float, float, float] | None:
        """Return ``(min_x, min_y, max_x, max_y)`` over node boxes, or None."""
        if not self.nodes:
            return None
        min_x = min(n.x - n.width / 2 for n in self.nodes)
        min_y = min(n.y - n.height / 2 for n in self.nodes)
        max_x = max(n.x + n.width / 2 for n in self.nodes)
        max_y = max(n.y + n.height / 2 for n in self.nodes)
        return min_x, min_y, max_x, max_y
