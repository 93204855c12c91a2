"""Link geometry between positioned nodes, and SVG path serialisation.

Elbow links (default) are two straight segments: the path leaves the source
box, runs along the depth axis to the target's depth coordinate, then turns
along the sibling axis into the target box.  For a top-to-bottom chart the
corner is directly below the source, level with the target's top edge.

Curve links replace the corner with a cubic Bézier whose two control points
sit halfway along the depth axis.
"""

from __future__ import annotations

from collections.abc import Sequence

from tree_chart.config import LinkStyle, Orientation
from tree_chart.result import LinkGeometry, Point, PositionedNode

__all__ = ["fmt_number", "link_geometry", "path_data"]


def _anchors(
    source: PositionedNode,
    target: PositionedNode,
    orientation: Orientation,
) -> tuple[Point, Point]:
    """Outgoing edge centre of the source and incoming edge centre of the target."""
    if orientation == Orientation.LEFT_TO_RIGHT:
        return (
            (source.x + source.width / 2, source.y),
            (target.x - target.width / 2, target.y),
        )
    return (
        (source.x, source.y + source.height / 2),
        (target.x, target.y - target.height / 2),
    )


def link_geometry(
    source: PositionedNode,
    target: PositionedNode,
    orientation: Orientation = Orientation.TOP_TO_BOTTOM,
    style: LinkStyle = LinkStyle.ELBOW,
) -> LinkGeometry:
    """Build the geometry of the edge ``source -> target``.

    Returns:
        A LinkGeometry whose ``points`` are ``(source, corner, target)`` for
        elbows and ``(source, c1, c2, target)`` for curves.
    """
    sp, tp = _anchors(source, target, orientation)
    vertical = orientation == Orientation.TOP_TO_BOTTOM

    if style == LinkStyle.CURVE:
        if vertical:
            mid = (sp[1] + tp[1]) / 2
            points: tuple[Point, ...] = (sp, (sp[0], mid), (tp[0], mid), tp)
        else:
            mid = (sp[0] + tp[0]) / 2
            points = (sp, (mid, sp[1]), (mid, tp[1]), tp)
    else:
        corner = (sp[0], tp[1]) if vertical else (tp[0], sp[1])
        points = (sp, corner, tp)

    return LinkGeometry(
        source_key=source.key,
        target_key=target.key,
        source_point=sp,
        target_point=tp,
        points=points,
        style=style,
    )


def fmt_number(value: float) -> str:
    """Format a coordinate with at most three decimals and no trailing zeros."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return "0" if text in ("-0", "") else text


def path_data(points: Sequence[Point], style: LinkStyle = LinkStyle.ELBOW) -> str:
    """Serialise control points into an SVG path ``d`` attribute.

    Elbows become ``M x,y L x,y L x,y``; curves ``M x,y C x,y x,y x,y``.

    Raises:
        ValueError: If there are too few points for the style.
    """
    needed = 4 if style == LinkStyle.CURVE else 2
    if len(points) < needed:
        msg = f"{style} path needs at least {needed} points, got {len(points)}"
        raise ValueError(msg)

    coords = [f"{fmt_number(x)},{fmt_number(y)}" for x, y in points]
    if style == LinkStyle.CURVE:
        return f"M {coords[0]} C {' '.join(coords[1:4])}"
    return "M " + " L ".join(coords)
