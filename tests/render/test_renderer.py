"""Tests for TransitionRenderer across successive layout passes.

Covers:
- First pass: everything enters with opacity 0 -> 1
- Collapse pass: removed links/nodes exit over half the duration, then leave
  the rendered set; surviving elements update
- Last-write-wins retargeting from sampled in-flight state
- Output order, SVG paths and the path cache
- sample(), prune() and reset()
"""

from __future__ import annotations

from typing import Any

import pytest

from tree_chart.algorithm.links import path_data
from tree_chart.algorithm.tidy import TidyTreeLayout
from tree_chart.render.renderer import TransitionRenderer
from tree_chart.render.transitions import TransitionKind
from tree_chart.result import LayoutResult, PositionedNode
from tree_chart.tree.collapse import toggle
from tree_chart.tree.nodes import TreeNode
from tree_chart.tree.normalizer import normalize


def _single(node: TreeNode, x: float, y: float = 0.0) -> LayoutResult:
    return LayoutResult(
        nodes=(PositionedNode(node=node, x=x, y=y, width=10, height=10, depth=0),)
    )


def _find(root: TreeNode, label: str) -> TreeNode:
    return next(n for n in root.walk() if n.payload.get("label") == label)


@pytest.fixture
def renderer(clock: Any) -> TransitionRenderer:
    return TransitionRenderer(duration_ms=1000.0, clock=clock)


@pytest.fixture
def root(example_forest: list[dict[str, Any]]) -> TreeNode:
    return normalize(example_forest)


class TestFirstPass:
    def test_everything_enters(
        self, renderer: TransitionRenderer, root: TreeNode
    ) -> None:
        frame = renderer.render(TidyTreeLayout().compute(root))
        assert len(frame.nodes) == 5
        assert len(frame.links) == 4
        assert all(t.kind == TransitionKind.ENTER for t in frame.nodes + frame.links)
        assert all(t.start_opacity == 0.0 and t.end_opacity == 1.0 for t in frame.nodes)
        assert all(t.duration_ms == 1000.0 for t in frame.links)

    def test_enter_geometry_is_target(
        self, renderer: TransitionRenderer, root: TreeNode
    ) -> None:
        frame = renderer.render(TidyTreeLayout().compute(root))
        for t in frame.links:
            assert t.start_points == t.end_points

    def test_layout_order(self, renderer: TransitionRenderer, root: TreeNode) -> None:
        layout = TidyTreeLayout().compute(root)
        frame = renderer.render(layout)
        assert [t.key for t in frame.nodes] == [n.key for n in layout.nodes]
        assert [t.key for t in frame.links] == [lk.link_id for lk in layout.links]

    def test_paths(self, renderer: TransitionRenderer, root: TreeNode) -> None:
        layout = TidyTreeLayout().compute(root)
        frame = renderer.render(layout)
        for link in layout.links:
            assert frame.paths[link.link_id] == path_data(link.points, link.style)

    def test_created_at_uses_clock(
        self, renderer: TransitionRenderer, root: TreeNode, clock: Any
    ) -> None:
        clock.now = 42.0
        frame = renderer.render(TidyTreeLayout().compute(root))
        assert frame.created_at == 42.0
        assert all(t.started_at == 42.0 for t in frame.nodes)


class TestCollapsePass:
    def _collapse_two(
        self, renderer: TransitionRenderer, root: TreeNode, clock: Any
    ) -> Any:
        layout = TidyTreeLayout()
        renderer.render(layout.compute(root))
        clock.advance(2000)
        toggle(_find(root, "2"))
        return renderer.render(layout.compute(root))

    def test_exits(
        self, renderer: TransitionRenderer, root: TreeNode, clock: Any
    ) -> None:
        frame = self._collapse_two(renderer, root, clock)
        assert len(frame.layout.nodes) == 3
        assert len(frame.layout.links) == 2
        assert len(frame.link_diff.exit) == 2
        assert len(frame.node_diff.exit) == 2
        exits = [t for t in frame.links if t.kind == TransitionKind.EXIT]
        assert len(exits) == 2
        assert all(t.start_opacity == 1.0 and t.end_opacity == 0.0 for t in exits)
        assert all(t.duration_ms == 500.0 for t in exits)
        assert all(t.start_points == t.end_points for t in exits)

    def test_leaving_elements_come_last(
        self, renderer: TransitionRenderer, root: TreeNode, clock: Any
    ) -> None:
        frame = self._collapse_two(renderer, root, clock)
        kinds = [t.kind for t in frame.nodes]
        assert kinds == [TransitionKind.UPDATE] * 3 + [TransitionKind.EXIT] * 2

    def test_survivors_update_from_previous_geometry(
        self, renderer: TransitionRenderer, root: TreeNode, clock: Any
    ) -> None:
        frame = self._collapse_two(renderer, root, clock)
        by_key = {t.key: t for t in frame.nodes}
        five = by_key[_find(root, "5").key]
        assert five.kind == TransitionKind.UPDATE
        assert five.start_points == ((50.0, 200.0),)
        assert five.start_opacity == 1.0
        assert five.end_points == ((50.0, 200.0),)

    def test_exits_removed_after_half_duration(
        self, renderer: TransitionRenderer, root: TreeNode, clock: Any
    ) -> None:
        self._collapse_two(renderer, root, clock)
        start = clock.now
        assert len(renderer.rendered_links(start + 0.4)) == 4
        assert len(renderer.rendered_links(start + 0.5)) == 2
        assert len(renderer.rendered_nodes(start + 0.5)) == 3

    def test_expand_again(
        self, renderer: TransitionRenderer, root: TreeNode, clock: Any
    ) -> None:
        self._collapse_two(renderer, root, clock)
        clock.advance(2000)
        toggle(_find(root, "2"))
        frame = renderer.render(TidyTreeLayout().compute(root))
        assert len(frame.layout.nodes) == 5
        assert len(frame.link_diff.enter) == 2
        assert len(frame.nodes) == 5


class TestRetargeting:
    def test_update_starts_from_sampled_position(
        self, renderer: TransitionRenderer, clock: Any
    ) -> None:
        node = TreeNode(key="n")
        renderer.render(_single(node, 0.0))
        clock.advance(1000)
        renderer.render(_single(node, 100.0))
        clock.advance(500)  # halfway: eased 0.5 -> x = 50
        frame = renderer.render(_single(node, 200.0))
        t = frame.nodes[0]
        assert t.kind == TransitionKind.UPDATE
        assert t.start_points[0] == pytest.approx((50.0, 0.0))
        assert t.end_points == ((200.0, 0.0),)
        assert t.started_at == clock.now

    def test_update_during_fade_in_keeps_opacity(
        self, renderer: TransitionRenderer, clock: Any
    ) -> None:
        node = TreeNode(key="n")
        renderer.render(_single(node, 0.0))
        clock.advance(500)
        frame = renderer.render(_single(node, 0.0))
        assert frame.nodes[0].start_opacity == pytest.approx(0.5)
        assert frame.nodes[0].end_opacity == 1.0

    def test_reenter_during_exit(
        self, renderer: TransitionRenderer, clock: Any
    ) -> None:
        node = TreeNode(key="n")
        renderer.render(_single(node, 0.0))
        clock.advance(2000)
        renderer.render(LayoutResult())
        clock.advance(250)  # halfway through the 500ms exit
        frame = renderer.render(_single(node, 0.0))
        t = frame.nodes[0]
        assert t.kind == TransitionKind.ENTER
        assert t.start_opacity == pytest.approx(0.5)
        assert len(frame.nodes) == 1

    def test_exit_mid_move_freezes_sampled_geometry(
        self, renderer: TransitionRenderer, clock: Any
    ) -> None:
        node = TreeNode(key="n")
        renderer.render(_single(node, 0.0))
        clock.advance(1000)
        renderer.render(_single(node, 100.0))
        clock.advance(500)
        frame = renderer.render(LayoutResult())
        t = frame.nodes[0]
        assert t.kind == TransitionKind.EXIT
        assert t.start_points == t.end_points
        assert t.end_points[0] == pytest.approx((50.0, 0.0))


class TestHousekeeping:
    def test_zero_duration_prunes_exits_immediately(
        self, clock: Any, root: TreeNode
    ) -> None:
        renderer = TransitionRenderer(duration_ms=0.0, clock=clock)
        layout = TidyTreeLayout()
        renderer.render(layout.compute(root))
        toggle(_find(root, "2"))
        frame = renderer.render(layout.compute(root))
        assert len(frame.nodes) == 3
        assert len(frame.links) == 2

    def test_prune_returns_count(
        self, renderer: TransitionRenderer, root: TreeNode, clock: Any
    ) -> None:
        layout = TidyTreeLayout()
        renderer.render(layout.compute(root))
        renderer.render(LayoutResult())
        clock.advance(500)
        assert renderer.prune() == 9  # five nodes and four links

    def test_sample(self, renderer: TransitionRenderer, clock: Any) -> None:
        node = TreeNode(key="n")
        renderer.render(_single(node, 0.0))
        clock.advance(1000)
        renderer.render(_single(node, 100.0))
        clock.advance(500)
        sample = renderer.sample()
        assert sample.nodes[0].points[0] == pytest.approx((50.0, 0.0))
        assert sample.nodes[0].opacity == 1.0

    def test_sample_paths(
        self, renderer: TransitionRenderer, root: TreeNode, clock: Any
    ) -> None:
        layout = TidyTreeLayout().compute(root)
        renderer.render(layout)
        clock.advance(1000)
        sample = renderer.sample()
        assert sample.paths == {
            link.link_id: path_data(link.points, link.style) for link in layout.links
        }

    def test_path_cache_hits_on_repeat(
        self, renderer: TransitionRenderer, root: TreeNode
    ) -> None:
        layout = TidyTreeLayout().compute(root)
        renderer.render(layout)
        misses = renderer.path_cache.misses
        renderer.render(layout)
        assert renderer.path_cache.misses == misses
        assert renderer.path_cache.hits >= 4

    def test_reset(self, renderer: TransitionRenderer, root: TreeNode) -> None:
        layout = TidyTreeLayout().compute(root)
        renderer.render(layout)
        renderer.reset()
        assert renderer.previous == LayoutResult()
        assert renderer.rendered_nodes() == set()
        frame = renderer.render(layout)
        assert all(t.kind == TransitionKind.ENTER for t in frame.nodes)
