"""TidyTreeLayout: fixed-node-size tidy tree placement.

Implements the linear-time Reingold-Tilford layout as refined by Walker and
Buchheim et al. (the same formulation d3-hierarchy uses for ``tree()``):

- A post-order *first walk* gives each node a preliminary sibling-axis
  coordinate (``prelim``).  Leaves sit one separation to the right of their
  left sibling; parents are centred over the span of their children.
- ``apportion`` walks the right contour of the left subtrees against the left
  contour of the new subtree and shifts it right until nothing overlaps.
  Threads link contour nodes across subtrees of different height so each walk
  is proportional to the height of the smaller subtree.
- A pre-order *second walk* accumulates modifiers into final coordinates.

Coordinates are in units of one node slot along the sibling axis and are
scaled by the node size afterwards.  The depth axis is simply
``depth * level_spacing``.

The synthetic super-root takes part in the walk so that top-level trees are
placed as siblings, then it and its links are filtered out of the result.

All walks are iterative: no recursion on tree depth.
"""

from __future__ import annotations

from dataclasses import dataclass

from loguru import logger

from tree_chart.algorithm.links import link_geometry
from tree_chart.config import ChartConfig, Orientation
from tree_chart.result import LayoutResult, LinkGeometry, PositionedNode
from tree_chart.tree.nodes import TreeNode

__all__ = ["TidyTreeLayout"]


@dataclass(slots=True, eq=False)
class _Slot:
    """Per-pass layout bookkeeping for one visible node.

    Attributes:
        node:      The wrapped node (None for the sentinel above the root).
        index:     Position among siblings.
        parent:    Wrapping slot of the parent.
        children:  Child slots, or None for leaves.
        depth:     Depth below the top level (super-root is -1).
        default_ancestor: Per-parent default ancestor used by apportion.
        ancestor:  Greatest distinct ancestor pointer (initially itself).
        prelim:    Preliminary sibling-axis coordinate.
        mod:       Modifier propagated to the subtree in the second walk.
        change:    Pending shift increment spread across siblings.
        shift:     Pending shift of this subtree.
        thread:    Contour thread for leaves of shallower subtrees.
        x:         Final sibling-axis coordinate in slot units.
    """

    node: TreeNode | None
    index: int
    parent: _Slot | None = None
    children: list[_Slot] | None = None
    depth: int = -1
    default_ancestor: _Slot | None = None
    ancestor: _Slot | None = None
    prelim: float = 0.0
    mod: float = 0.0
    change: float = 0.0
    shift: float = 0.0
    thread: _Slot | None = None
    x: float = 0.0

    def __post_init__(self) -> None:
        self.ancestor = self


def _next_left(v: _Slot) -> _Slot | None:
    return v.children[0] if v.children else v.thread


def _next_right(v: _Slot) -> _Slot | None:
    return v.children[-1] if v.children else v.thread


def _move_subtree(wm: _Slot, wp: _Slot, shift: float) -> None:
    change = shift / (wp.index - wm.index)
    wp.change -= change
    wp.shift += shift
    wm.change += change
    wp.prelim += shift
    wp.mod += shift


def _execute_shifts(v: _Slot) -> None:
    shift = 0.0
    change = 0.0
    for w in reversed(v.children or []):
        w.prelim += shift
        w.mod += shift
        change += w.change
        shift += w.shift + change


def _next_ancestor(vim: _Slot, v: _Slot, ancestor: _Slot) -> _Slot:
    assert vim.ancestor is not None
    return vim.ancestor if vim.ancestor.parent is v.parent else ancestor


class TidyTreeLayout:
    """Computes positions and link geometry for the visible part of a tree.

    Stateless between calls: every ``compute()`` builds fresh bookkeeping, so
    identical trees and configs always give identical coordinates.

    Example::

        from tree_chart.config import ChartConfig
        from tree_chart.algorithm import TidyTreeLayout
        from tree_chart.tree import normalize

        root = normalize({"label": "a", "children": [{"label": "b"}, {"label": "c"}]})
        result = TidyTreeLayout(ChartConfig()).compute(root)
        # a centred at x=0; b at x=-50, c at x=50, both at y=200
    """

    def __init__(self, config: ChartConfig | None = None) -> None:
        self._config = config if config is not None else ChartConfig()

    @property
    def config(self) -> ChartConfig:
        return self._config

    def compute(self, root: TreeNode) -> LayoutResult:
        """Lay out every node reachable from ``root`` through ``children``.

        Args:
            root: The synthetic super-root of a normalized tree.  A real node
                may also be passed; it is then laid out and returned as the
                single top-level node.

        Returns:
            A LayoutResult with nodes in breadth-first order and one link per
            visible parent -> child edge (edges out of the synthetic root are
            omitted).
        """
        sentinel = _Slot(node=None, index=0)
        top = _Slot(node=root, index=0, parent=sentinel, depth=-1 if root.synthetic else 0)
        sentinel.children = [top]

        level_order = self._build_slots(top)
        self._first_walks(top)
        sentinel.mod = -top.prelim
        for v in level_order:
            assert v.parent is not None
            v.x = v.prelim + v.parent.mod
            v.mod += v.parent.mod

        return self._collect(level_order)

    # ------------------------------------------------------------------
    # Walks
    # ------------------------------------------------------------------

    def _build_slots(self, top: _Slot) -> list[_Slot]:
        """Wrap visible nodes breadth-first; return slots in level order."""
        order = [top]
        i = 0
        while i < len(order):
            slot = order[i]
            i += 1
            assert slot.node is not None
            kids = slot.node.children
            if kids:
                slot.children = [
                    _Slot(node=kid, index=n, parent=slot, depth=slot.depth + 1)
                    for n, kid in enumerate(kids)
                ]
                order.extend(slot.children)
        return order

    def _first_walks(self, top: _Slot) -> None:
        """Run the first walk over every slot in post-order."""
        # Pre-order pushing children left to right, reversed, is a post-order
        # with left siblings finished before right ones.
        stack = [top]
        pre: list[_Slot] = []
        while stack:
            v = stack.pop()
            pre.append(v)
            stack.extend(v.children or [])
        for v in reversed(pre):
            self._first_walk(v)

    def _separation(self, a: _Slot, b: _Slot) -> float:
        if a.parent is b.parent:
            return self._config.sibling_separation
        return self._config.subtree_separation

    def _first_walk(self, v: _Slot) -> None:
        assert v.parent is not None and v.parent.children is not None
        siblings = v.parent.children
        w = siblings[v.index - 1] if v.index else None

        if v.children:
            _execute_shifts(v)
            midpoint = (v.children[0].prelim + v.children[-1].prelim) / 2
            if w is not None:
                v.prelim = w.prelim + self._separation(v, w)
                v.mod = v.prelim - midpoint
            else:
                v.prelim = midpoint
        elif w is not None:
            v.prelim = w.prelim + self._separation(v, w)

        v.parent.default_ancestor = self._apportion(
            v, w, v.parent.default_ancestor or siblings[0]
        )

    def _apportion(self, v: _Slot, w: _Slot | None, ancestor: _Slot) -> _Slot:
        """Push subtree ``v`` right until it clears its left siblings."""
        if w is None:
            return ancestor

        assert v.parent is not None and v.parent.children is not None
        vip: _Slot | None = v
        vop: _Slot = v
        vim: _Slot | None = w
        vom: _Slot = v.parent.children[0]
        sip = v.mod
        sop = v.mod
        sim = w.mod
        som = vom.mod

        vim = _next_right(w)
        vip = _next_left(v)
        while vim is not None and vip is not None:
            vom = _next_left(vom)  # type: ignore[assignment]
            vop = _next_right(vop)  # type: ignore[assignment]
            vop.ancestor = v
            shift = vim.prelim + sim - vip.prelim - sip + self._separation(vim, vip)
            if shift > 0:
                _move_subtree(_next_ancestor(vim, v, ancestor), v, shift)
                sip += shift
                sop += shift
            sim += vim.mod
            sip += vip.mod
            som += vom.mod
            sop += vop.mod
            vim = _next_right(vim)
            vip = _next_left(vip)

        if vim is not None and _next_right(vop) is None:
            vop.thread = vim
            vop.mod += sim - sop
        if vip is not None and _next_left(vom) is None:
            vom.thread = vip
            vom.mod += sip - som
            ancestor = v
        return ancestor

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def _collect(self, level_order: list[_Slot]) -> LayoutResult:
        cfg = self._config
        horizontal = cfg.orientation == Orientation.LEFT_TO_RIGHT
        unit = cfg.node_height if horizontal else cfg.node_width

        placed: dict[int, PositionedNode] = {}
        nodes: list[PositionedNode] = []
        links: list[LinkGeometry] = []

        for slot in level_order:
            node = slot.node
            assert node is not None
            if node.synthetic:
                continue
            along = slot.x * unit
            across = slot.depth * cfg.level_spacing
            x, y = (across, along) if horizontal else (along, across)
            positioned = PositionedNode(
                node=node,
                x=x,
                y=y,
                width=cfg.node_width,
                height=cfg.node_height,
                depth=slot.depth,
            )
            placed[id(slot)] = positioned
            nodes.append(positioned)

            parent = slot.parent
            if parent is not None and id(parent) in placed:
                links.append(
                    link_geometry(
                        placed[id(parent)], positioned, cfg.orientation, cfg.link_style
                    )
                )

        logger.debug("Layout pass: {} nodes, {} links", len(nodes), len(links))
        return LayoutResult(nodes=tuple(nodes), links=tuple(links))

