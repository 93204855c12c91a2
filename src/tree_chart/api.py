"""Public API functions for tree-chart.

Thin functional entry points over the engine components.  Each call builds
fresh component objects, so no state leaks between calls; use ``TreeChart``
when state across passes (transitions, pan, collapse) is needed.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from tree_chart.algorithm.tidy import TidyTreeLayout
from tree_chart.config import ChartConfig
from tree_chart.render.diff import KeyedDiff
from tree_chart.render.diff import diff_links as _diff_links
from tree_chart.result import LayoutResult, LinkGeometry, LinkId
from tree_chart.tree.collapse import toggle as _toggle
from tree_chart.tree.nodes import TreeNode
from tree_chart.tree.normalizer import TreeNormalizer

__all__ = ["diff_links", "layout", "normalize", "toggle"]


def normalize(raw: Any, children_field: str = "children") -> TreeNode:
    """Normalize a tree or forest into a fresh keyed tree.

    Args:
        raw:            A mapping, a list/tuple of mappings, or None.
        children_field: Name of the field holding child nodes.

    Returns:
        The synthetic super-root.  Forest members hang beneath it in reverse
        input order.

    Raises:
        TypeError: If the data is malformed.
    """
    return TreeNormalizer(children_field=children_field).normalize(raw)


def layout(
    root: TreeNode,
    node_width: float = 100.0,
    node_height: float = 100.0,
    level_spacing: float = 200.0,
    config: ChartConfig | None = None,
) -> LayoutResult:
    """Compute positions and links for the visible part of ``root``.

    Args:
        root:          Synthetic super-root from ``normalize``.
        node_width:    Node slot width.  Ignored when ``config`` is given.
        node_height:   Node slot height.  Ignored when ``config`` is given.
        level_spacing: Depth spacing.  Ignored when ``config`` is given.
        config:        Full chart configuration.

    Returns:
        A LayoutResult; identical inputs always give identical coordinates.
    """
    if config is None:
        config = ChartConfig(
            node_width=node_width,
            node_height=node_height,
            level_spacing=level_spacing,
        )
    return TidyTreeLayout(config).compute(root)


def toggle(node: TreeNode) -> bool:
    """Flip ``node`` between expanded and collapsed; False for leaves."""
    return _toggle(node)


def diff_links(
    previous: Iterable[LinkGeometry],
    current: Iterable[LinkGeometry],
) -> KeyedDiff[LinkId, LinkGeometry]:
    """Partition two link collections into enter, update and exit."""
    return _diff_links(previous, current)
