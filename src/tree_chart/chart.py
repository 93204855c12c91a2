"""TreeChart: orchestrator that wires normalizer, layout, renderer and pan.

This is the central wiring layer between the pure components and a
presentation layer.  There is no implicit reactivity: every mutation that
affects the picture goes through an explicit pipeline.

Architecture:
- set_data() normalizes a raw dataset once, indexes every node by key,
  applies ``collapse_depth``, lays out, re-centres the pan transform and
  renders.  Normalization errors surface before any chart state changes.
- rebuild() is the pipeline: TidyTreeLayout.compute() on the current tree,
  then TransitionRenderer.render() against the previous pass.
- toggle_collapse() and configure() mutate state, then call rebuild().
  Configuration changes never re-normalize, so keys survive them.
- Pointer handlers only touch the PanController; layout coordinates are
  never affected by panning or zooming.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Any

from loguru import logger

from tree_chart.algorithm.tidy import TidyTreeLayout
from tree_chart.config import ChartConfig
from tree_chart.pan import PanController, PanTransform
from tree_chart.render.renderer import RenderFrame, TransitionRenderer
from tree_chart.result import LayoutResult
from tree_chart.tree.collapse import collapse_all, collapse_to_depth, expand_all, toggle
from tree_chart.tree.nodes import TreeNode
from tree_chart.tree.normalizer import TreeNormalizer, index_tree

if TYPE_CHECKING:
    from tree_chart.protocols import Clock

__all__ = ["TreeChart"]


class TreeChart:
    """Interactive tree chart engine for one chart instance.

    Owns the normalized tree (mutated only by normalization and collapse
    transitions) and the pan transform (mutated only by the pan controller).
    All methods are meant to be called from a single UI thread.

    Example::

        from tree_chart import TreeChart

        chart = TreeChart(container_width=1200)
        frame = chart.set_data([{"name": "CEO", "children": [{"name": "CTO"}]}])
        ceo = frame.layout.nodes[0].key
        chart.toggle_collapse(ceo)
        len(chart.frame.layout.nodes)   # 1
    """

    def __init__(
        self,
        config: ChartConfig | None = None,
        container_width: float = 800.0,
        clock: Clock | None = None,
        max_cache_size: int = 4096,
        normalizer: TreeNormalizer | None = None,
    ) -> None:
        """Initialise an empty chart.

        Args:
            config: Chart options.  Defaults to ``ChartConfig()``.
            container_width: Width of the visible container, used to centre
                the chart horizontally on first render and after a dataset
                replacement.
            clock: Time source for transitions.  Defaults to ``time.monotonic``.
            max_cache_size: Size of the renderer's SVG path cache.  This is an
                infrastructure parameter, not part of ``ChartConfig``.
            normalizer: Custom normalizer (e.g. a different children field).
        """
        self._config: ChartConfig = config if config is not None else ChartConfig()
        self._normalizer = normalizer if normalizer is not None else TreeNormalizer()
        self._layout = TidyTreeLayout(self._config)
        self._renderer = TransitionRenderer(
            duration_ms=self._config.duration_ms,
            clock=clock,
            max_cache_size=max_cache_size,
        )
        self._pan = PanController(self._config.min_scale, self._config.max_scale)
        self.container_width = container_width

        self._root: TreeNode = self._normalizer.normalize(None)
        self._index: dict[str, TreeNode] = {}
        self._frame: RenderFrame | None = None

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> ChartConfig:
        return self._config

    @property
    def root(self) -> TreeNode:
        """The synthetic super-root of the current normalized tree."""
        return self._root

    @property
    def frame(self) -> RenderFrame | None:
        """The most recent render frame, or None before the first pass."""
        return self._frame

    @property
    def transform(self) -> PanTransform:
        """Live pan transform (frames carry a snapshot from their pass)."""
        return self._pan.transform

    @property
    def pan(self) -> PanController:
        return self._pan

    @property
    def renderer(self) -> TransitionRenderer:
        return self._renderer

    def find(self, key: str) -> TreeNode | None:
        """Return the node with ``key``, hidden nodes included."""
        return self._index.get(key)

    # ------------------------------------------------------------------
    # Pipeline
    # ------------------------------------------------------------------

    def set_data(self, raw: Any) -> RenderFrame:
        """Replace the dataset and render it.

        Raises:
            TypeError: If ``raw`` is malformed.  The previous tree is kept.
        """
        root = self._normalizer.normalize(raw)
        self._root = root
        self._index = index_tree(root)
        if self._config.collapse_depth is not None:
            collapse_to_depth(root, self._config.collapse_depth)
        logger.debug("Dataset replaced: {} nodes", len(self._index))
        return self._emit(self._layout.compute(root), recenter=True)

    def rebuild(self) -> RenderFrame:
        """Re-run layout and rendering on the current tree and config."""
        return self._emit(self._layout.compute(self._root))

    def _emit(self, result: LayoutResult, recenter: bool = False) -> RenderFrame:
        if recenter or self._frame is None:
            self._pan.center(result.bounds(), self.container_width)
        frame = self._renderer.render(result)
        self._frame = replace(frame, transform=self._pan.transform)
        return self._frame

    # ------------------------------------------------------------------
    # Collapse / expand
    # ------------------------------------------------------------------

    def toggle_collapse(self, key: str) -> None:
        """Toggle the node with ``key`` and re-render.

        Unknown (or stale) keys, leaves, and a chart with collapsing disabled
        are all no-ops.
        """
        if not self._config.collapse_enabled:
            logger.debug("Collapse disabled; ignoring toggle of {}", key)
            return
        node = self._index.get(key)
        if node is None:
            logger.debug("Ignoring toggle of unknown key {}", key)
            return
        if toggle(node):
            self.rebuild()

    def expand_all(self) -> RenderFrame:
        expand_all(self._root)
        return self.rebuild()

    def collapse_all(self) -> RenderFrame:
        if self._config.collapse_enabled:
            collapse_all(self._root)
        return self.rebuild()

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def configure(self, **changes: Any) -> RenderFrame:
        """Apply option changes and re-render without re-normalizing.

        Raises:
            ValueError: If the resulting configuration is invalid.  The
                previous configuration stays in effect.
            TypeError: If an unknown option name is given.
        """
        config = replace(self._config, **changes)
        previous_depth = self._config.collapse_depth
        self._config = config
        self._layout = TidyTreeLayout(config)
        self._renderer.duration_ms = config.duration_ms
        self._pan.min_scale = config.min_scale
        self._pan.max_scale = config.max_scale
        self._pan.zoom(1.0)  # re-clamp the current scale
        if config.collapse_depth is not None and config.collapse_depth != previous_depth:
            collapse_to_depth(self._root, config.collapse_depth)
        return self.rebuild()

    def resize(self, container_width: float) -> None:
        """Record a new container width; used by the next re-centring."""
        self.container_width = container_width

    def recenter(self) -> PanTransform:
        """Centre the current layout in the container again."""
        bounds = self._frame.layout.bounds() if self._frame is not None else None
        transform = self._pan.center(bounds, self.container_width)
        if self._frame is not None:
            self._frame = replace(self._frame, transform=transform)
        return transform

    # ------------------------------------------------------------------
    # Pointer passthrough
    # ------------------------------------------------------------------

    def pointer_down(self, x: float, y: float) -> None:
        self._pan.pointer_down(x, y)

    def pointer_move(self, x: float, y: float) -> PanTransform:
        return self._pan.pointer_move(x, y)

    def pointer_up(self) -> None:
        self._pan.pointer_up()

    def zoom(self, factor: float, anchor: tuple[float, float] = (0.0, 0.0)) -> PanTransform:
        return self._pan.zoom(factor, anchor)
