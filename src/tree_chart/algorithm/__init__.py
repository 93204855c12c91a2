"""algorithm subpackage — public API for the tidy tree layout.

Example::

    from tree_chart.config import ChartConfig
    from tree_chart.algorithm import TidyTreeLayout
    from tree_chart.tree import normalize

    root = normalize({"label": "root", "children": [{"label": "a"}]})
    result = TidyTreeLayout(ChartConfig()).compute(root)
    # result.nodes: PositionedNode per visible node, breadth-first
    # result.links: LinkGeometry per visible parent -> child edge
"""

from __future__ import annotations

from tree_chart.algorithm.links import fmt_number, link_geometry, path_data
from tree_chart.algorithm.tidy import TidyTreeLayout

__all__ = ["TidyTreeLayout", "fmt_number", "link_geometry", "path_data"]
