"""tree-chart - interactive tidy-tree layout and rendering engine."""

from __future__ import annotations

from loguru import logger

from tree_chart.api import diff_links, layout, normalize, toggle
from tree_chart.chart import TreeChart
from tree_chart.config import ChartConfig, LinkStyle, Orientation
from tree_chart.pan import PanController, PanTransform
from tree_chart.render import RenderFrame, TransitionKind, TransitionRenderer
from tree_chart.result import LayoutResult, LinkGeometry, PositionedNode
from tree_chart.tree import TreeNode

# Silent until the application calls logger.enable("tree_chart")
logger.disable("tree_chart")

__version__: str = "0.1.0"
__all__: list[str] = [
    "ChartConfig",
    "LayoutResult",
    "LinkGeometry",
    "LinkStyle",
    "Orientation",
    "PanController",
    "PanTransform",
    "PositionedNode",
    "RenderFrame",
    "TransitionKind",
    "TransitionRenderer",
    "TreeChart",
    "TreeNode",
    "diff_links",
    "layout",
    "normalize",
    "toggle",
]
