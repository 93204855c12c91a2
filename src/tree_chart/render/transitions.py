"""Transition records and their time-based interpolation.

A Transition is what the engine hands to the presentation layer: the start
and target values of one element plus a start time and duration.  The
presentation layer may drive its own animation from these values or call
``sample()`` every frame to get interpolated geometry and opacity.

Geometry is a sequence of control points: one point (the centre) for nodes,
the path control points for links.  Interpolation is pointwise with numpy,
eased with cubic-in-out.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from enum import StrEnum, auto

import numpy as np

from tree_chart.config import LinkStyle
from tree_chart.result import Point

__all__ = ["ElementState", "Transition", "TransitionKind", "ease_cubic_in_out"]


class TransitionKind(StrEnum):
    """Which side of a keyed diff an element came from."""

    ENTER = auto()
    UPDATE = auto()
    EXIT = auto()


def ease_cubic_in_out(t: float) -> float:
    """Symmetric cubic easing on [0, 1]."""
    t *= 2
    if t <= 1:
        return t * t * t / 2
    t -= 2
    return (t * t * t + 2) / 2


@dataclass(frozen=True, slots=True)
class ElementState:
    """Interpolated state of one element at a point in time."""

    key: Hashable
    kind: TransitionKind
    points: tuple[Point, ...]
    opacity: float


@dataclass(frozen=True, slots=True)
class Transition:
    """One element's animation from start values to target values.

    Attributes:
        key:           Node key or link id.
        kind:          Enter, update or exit.
        start_points:  Geometry at ``started_at``.
        end_points:    Target geometry.
        start_opacity: Opacity at ``started_at``.
        end_opacity:   Target opacity.
        started_at:    Clock time (seconds) when the transition began.
        duration_ms:   Length of the transition.
        style:         Link style for link transitions; None for nodes.
    """

    key: Hashable
    kind: TransitionKind
    start_points: tuple[Point, ...]
    end_points: tuple[Point, ...]
    start_opacity: float
    end_opacity: float
    started_at: float
    duration_ms: float
    style: LinkStyle | None = None

    def progress(self, now: float) -> float:
        """Linear progress in [0, 1] at clock time ``now``."""
        if self.duration_ms <= 0:
            return 1.0
        elapsed_ms = (now - self.started_at) * 1000.0
        return min(1.0, max(0.0, elapsed_ms / self.duration_ms))

    def finished(self, now: float) -> bool:
        return self.progress(now) >= 1.0

    def sample(self, now: float) -> ElementState:
        """Interpolated geometry and opacity at ``now``.

        When the start and end geometries have different shapes (the link
        style changed between passes) the geometry snaps to the target.
        """
        eased = ease_cubic_in_out(self.progress(now))

        start = np.asarray(self.start_points, dtype=float)
        end = np.asarray(self.end_points, dtype=float)
        if eased >= 1.0:
            return ElementState(
                key=self.key,
                kind=self.kind,
                points=self.end_points,
                opacity=self.end_opacity,
            )
        if start.shape != end.shape:
            points = end
        else:
            points = start + (end - start) * eased

        opacity = self.start_opacity + (self.end_opacity - self.start_opacity) * eased
        return ElementState(
            key=self.key,
            kind=self.kind,
            points=tuple((float(x), float(y)) for x, y in points),
            opacity=float(opacity),
        )
