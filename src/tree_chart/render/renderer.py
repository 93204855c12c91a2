"""TransitionRenderer: turns successive layout passes into keyed transitions.

Each ``render()`` call diffs the new LayoutResult against the previous one
(nodes by key, links by ``(source_key, target_key)``) and emits one
Transition per element:

- enter:  geometry set to the target immediately, opacity 0 -> 1 over
          ``duration_ms``.
- update: geometry interpolated old -> new over ``duration_ms``, opacity
          carried on toward 1.
- exit:   geometry frozen, opacity -> 0 over ``duration_ms / 2``, then the
          element leaves the rendered set.

Re-entrancy is last-write-wins: when a pass arrives while an element is still
animating, its in-flight transition is sampled at the current time and the
new transition starts from that sampled state.  Nothing is queued.

The renderer never waits for an animation to finish; it only records start
values, targets, start time and duration.  The presentation layer drives
frames, optionally through ``sample()``.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Hashable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, TypeVar

from loguru import logger

from tree_chart.algorithm.links import path_data
from tree_chart.cache import PathCache
from tree_chart.config import LinkStyle
from tree_chart.render.diff import KeyedDiff, diff_links, diff_nodes
from tree_chart.render.transitions import ElementState, Transition, TransitionKind
from tree_chart.result import LayoutResult, LinkGeometry, LinkId, Point, PositionedNode

if TYPE_CHECKING:
    from tree_chart.pan import PanTransform
    from tree_chart.protocols import Clock

__all__ = ["FrameSample", "RenderFrame", "TransitionRenderer"]

K = TypeVar("K", bound=Hashable)


@dataclass(frozen=True, slots=True)
class RenderFrame:
    """Everything the presentation layer needs after one layout pass.

    Attributes:
        layout:    The layout pass this frame was built from.
        nodes:     Node transitions: current nodes in layout order, then
                   nodes still fading out.
        links:     Link transitions in the same arrangement.
        paths:     Target SVG path per rendered link id.
        node_diff: Keyed diff of the node sets.
        link_diff: Keyed diff of the link sets.
        created_at: Clock time of the pass.
        transform: Pan/zoom transform to apply to both layers (set by the
                   chart; None when the renderer is used on its own).
    """

    layout: LayoutResult
    nodes: tuple[Transition, ...]
    links: tuple[Transition, ...]
    paths: Mapping[LinkId, str]
    node_diff: KeyedDiff[str, PositionedNode]
    link_diff: KeyedDiff[LinkId, LinkGeometry]
    created_at: float
    transform: PanTransform | None = None


@dataclass(frozen=True, slots=True)
class FrameSample:
    """Interpolated state of every rendered element at one instant."""

    nodes: tuple[ElementState, ...]
    links: tuple[ElementState, ...]
    paths: dict[LinkId, str] = field(default_factory=dict)


def _node_points(node: PositionedNode) -> tuple[Point, ...]:
    return ((node.x, node.y),)


def _link_points(link: LinkGeometry) -> tuple[Point, ...]:
    return link.points


def _node_key(node: PositionedNode) -> str:
    return node.key


def _link_id(link: LinkGeometry) -> LinkId:
    return link.link_id


def _no_style(_: PositionedNode) -> LinkStyle | None:
    return None


def _link_style(link: LinkGeometry) -> LinkStyle | None:
    return link.style


class TransitionRenderer:
    """Keyed diff + transition bookkeeping across layout passes.

    Example::

        renderer = TransitionRenderer(duration_ms=500)
        frame = renderer.render(layout(root))
        for t in frame.links:
            draw_path(t.key, frame.paths[t.key], t.start_opacity, t.end_opacity)

    Args:
        duration_ms: Enter/update duration.  Exits use half of it.
        clock: Time source in seconds.  Defaults to ``time.monotonic``.
        max_cache_size: Size of the per-instance SVG path cache.
    """

    def __init__(
        self,
        duration_ms: float = 750.0,
        clock: Clock | None = None,
        max_cache_size: int = 4096,
    ) -> None:
        self.duration_ms = duration_ms
        self._clock: Callable[[], float] = clock if clock is not None else time.monotonic
        self._paths = PathCache(max_size=max_cache_size)
        self._previous = LayoutResult()
        self._nodes: dict[str, Transition] = {}
        self._links: dict[LinkId, Transition] = {}

    @property
    def path_cache(self) -> PathCache:
        return self._paths

    @property
    def previous(self) -> LayoutResult:
        """The layout pass most recently rendered."""
        return self._previous

    # ------------------------------------------------------------------
    # Passes
    # ------------------------------------------------------------------

    def render(self, layout: LayoutResult, now: float | None = None) -> RenderFrame:
        """Diff ``layout`` against the previous pass and retarget transitions."""
        now = self._clock() if now is None else now

        node_diff = diff_nodes(self._previous.nodes, layout.nodes)
        link_diff = diff_links(self._previous.links, layout.links)

        self._nodes = self._retarget(
            self._nodes, node_diff, now, _node_key, _node_points, _no_style
        )
        self._links = self._retarget(
            self._links, link_diff, now, _link_id, _link_points, _link_style
        )
        self._previous = layout
        self.prune(now)

        logger.trace(
            "Render pass: links +{} ~{} -{}, nodes +{} ~{} -{}",
            len(link_diff.enter),
            len(link_diff.update),
            len(link_diff.exit),
            len(node_diff.enter),
            len(node_diff.update),
            len(node_diff.exit),
        )

        nodes = self._ordered(self._nodes, [n.key for n in layout.nodes])
        links = self._ordered(self._links, [link.link_id for link in layout.links])
        paths = {
            t.key: self._paths.path(t.end_points, t.style or LinkStyle.ELBOW)
            for t in links
        }
        return RenderFrame(
            layout=layout,
            nodes=nodes,
            links=links,
            paths=paths,  # type: ignore[arg-type]
            node_diff=node_diff,
            link_diff=link_diff,
            created_at=now,
        )

    def _retarget(
        self,
        active: dict[K, Transition],
        diff: KeyedDiff[K, Any],
        now: float,
        key: Callable[[Any], K],
        points: Callable[[Any], tuple[Point, ...]],
        style: Callable[[Any], LinkStyle | None],
    ) -> dict[K, Transition]:
        # Exits from earlier passes stay until pruned
        result = dict(active)
        duration = self.duration_ms

        for item in diff.enter:
            k = key(item)
            in_flight = active.get(k)
            opacity = in_flight.sample(now).opacity if in_flight is not None else 0.0
            target = points(item)
            result[k] = Transition(
                key=k,
                kind=TransitionKind.ENTER,
                start_points=target,
                end_points=target,
                start_opacity=opacity,
                end_opacity=1.0,
                started_at=now,
                duration_ms=duration,
                style=style(item),
            )

        for prev, item in diff.update:
            k = key(item)
            in_flight = active.get(k)
            if in_flight is not None:
                state = in_flight.sample(now)
                start, opacity = state.points, state.opacity
            else:
                start, opacity = points(prev), 1.0
            result[k] = Transition(
                key=k,
                kind=TransitionKind.UPDATE,
                start_points=start,
                end_points=points(item),
                start_opacity=opacity,
                end_opacity=1.0,
                started_at=now,
                duration_ms=duration,
                style=style(item),
            )

        for item in diff.exit:
            k = key(item)
            in_flight = active.get(k)
            if in_flight is not None:
                state = in_flight.sample(now)
                frozen, opacity = state.points, state.opacity
            else:
                frozen, opacity = points(item), 1.0
            result[k] = Transition(
                key=k,
                kind=TransitionKind.EXIT,
                start_points=frozen,
                end_points=frozen,
                start_opacity=opacity,
                end_opacity=0.0,
                started_at=now,
                duration_ms=duration / 2,
                style=style(item),
            )

        return result

    @staticmethod
    def _ordered(
        active: Mapping[K, Transition], current: Sequence[K]
    ) -> tuple[Transition, ...]:
        present = set(current)
        leaving = [t for k, t in active.items() if k not in present]
        return tuple(active[k] for k in current) + tuple(leaving)

    # ------------------------------------------------------------------
    # Housekeeping and sampling
    # ------------------------------------------------------------------

    def prune(self, now: float | None = None) -> int:
        """Drop exit transitions that have finished.  Returns how many."""
        now = self._clock() if now is None else now
        removed = 0
        for active in (self._nodes, self._links):
            done = [
                k
                for k, t in active.items()
                if t.kind == TransitionKind.EXIT and t.finished(now)
            ]
            for k in done:
                del active[k]
            removed += len(done)
        return removed

    def rendered_nodes(self, now: float | None = None) -> set[str]:
        """Keys of nodes currently on screen (finished exits excluded)."""
        self.prune(now)
        return set(self._nodes)

    def rendered_links(self, now: float | None = None) -> set[LinkId]:
        """Ids of links currently on screen (finished exits excluded)."""
        self.prune(now)
        return set(self._links)

    def sample(self, now: float | None = None) -> FrameSample:
        """Interpolate every rendered element at ``now``."""
        now = self._clock() if now is None else now
        self.prune(now)
        nodes = tuple(t.sample(now) for t in self._nodes.values())
        links = tuple(t.sample(now) for t in self._links.values())
        paths = {
            state.key: path_data(state.points, t.style or LinkStyle.ELBOW)
            for state, t in zip(links, self._links.values(), strict=True)
        }
        return FrameSample(nodes=nodes, links=links, paths=paths)  # type: ignore[arg-type]

    def reset(self) -> None:
        """Forget all previous passes and in-flight transitions."""
        self._previous = LayoutResult()
        self._nodes.clear()
        self._links.clear()
        self._paths.clear()
        logger.debug("Renderer reset")
