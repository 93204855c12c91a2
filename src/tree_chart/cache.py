"""PathCache: LRU-backed memo of SVG path strings.

Successive layout passes mostly reproduce the same link geometry (only the
subtree around a toggled node moves), so serialising control points into a
``d`` attribute is cached by ``(style, points)``.  LRU eviction occurs
silently when ``max_size`` is exceeded.

Each ``PathCache`` instance maintains its own ``LRUCache`` — there is no
class-level shared state, so two charts never interfere with each other.

Example::

    from tree_chart.cache import PathCache
    from tree_chart.config import LinkStyle

    cache = PathCache(max_size=1024)
    cache.path(((0, 50), (0, 150), (100, 150)), LinkStyle.ELBOW)
    # "M 0,50 L 0,150 L 100,150"  (second identical call is a cache hit)
"""

from __future__ import annotations

from collections.abc import Sequence

from cachetools import LRUCache

from tree_chart.algorithm.links import path_data
from tree_chart.config import LinkStyle
from tree_chart.result import Point

__all__ = ["PathCache"]


class PathCache:
    """Per-instance LRU cache in front of ``path_data``.

    Args:
        max_size: Maximum number of path strings held.  Defaults to 4096.
            When exceeded, the least-recently-used entry is silently evicted.
    """

    def __init__(self, max_size: int = 4096) -> None:
        self._cache: LRUCache[tuple[LinkStyle, tuple[Point, ...]], str] = LRUCache(
            maxsize=max_size
        )
        self._hits = 0
        self._misses = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    @property
    def hits(self) -> int:
        return self._hits

    @property
    def misses(self) -> int:
        return self._misses

    # ------------------------------------------------------------------
    # Lookup
    # ------------------------------------------------------------------

    def path(self, points: Sequence[Point], style: LinkStyle = LinkStyle.ELBOW) -> str:
        """Return the SVG path for ``points``, serialising only on a miss."""
        key = (style, tuple((float(x), float(y)) for x, y in points))
        cached = self._cache.get(key)
        if cached is not None:
            self._hits += 1
            return cached
        self._misses += 1
        d = path_data(key[1], style)
        self._cache[key] = d
        return d

    def clear(self) -> None:
        self._cache.clear()
