"""render subpackage — keyed diffing and animated transitions.

Import from this module (not from sub-modules directly) to stay on the
stable public interface.

Example::

    from tree_chart import layout
    from tree_chart.render import TransitionRenderer

    renderer = TransitionRenderer(duration_ms=500)
    frame = renderer.render(layout(root))
    # frame.links: one Transition per link, enter/update/exit
"""

from __future__ import annotations

from tree_chart.render.diff import KeyedDiff, diff_keyed, diff_links, diff_nodes
from tree_chart.render.renderer import FrameSample, RenderFrame, TransitionRenderer
from tree_chart.render.transitions import (
    ElementState,
    Transition,
    TransitionKind,
    ease_cubic_in_out,
)

__all__ = [
    "ElementState",
    "FrameSample",
    "KeyedDiff",
    "RenderFrame",
    "Transition",
    "TransitionKind",
    "TransitionRenderer",
    "diff_keyed",
    "diff_links",
    "diff_nodes",
    "ease_cubic_in_out",
]
