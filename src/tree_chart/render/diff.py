"""Keyed enter/update/exit partitioning of two successive collections.

Elements are matched purely by identity key: node key for nodes,
``(source_key, target_key)`` for links.  Geometry is never compared.
"""

from __future__ import annotations

from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass
from typing import Generic, TypeVar

from tree_chart.result import LinkGeometry, LinkId, PositionedNode

__all__ = ["KeyedDiff", "diff_keyed", "diff_links", "diff_nodes"]

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class KeyedDiff(Generic[K, T]):
    """Disjoint partition of previous and current elements.

    Attributes:
        enter:  Current elements whose key was absent before (current order).
        update: ``(previous, current)`` pairs sharing a key (current order).
        exit:   Previous elements whose key is gone (previous order).
    """

    enter: tuple[T, ...]
    update: tuple[tuple[T, T], ...]
    exit: tuple[T, ...]

    @property
    def is_empty(self) -> bool:
        return not (self.enter or self.update or self.exit)


def diff_keyed(
    previous: Iterable[T],
    current: Iterable[T],
    key: Callable[[T], K],
) -> KeyedDiff[K, T]:
    """Partition ``previous``/``current`` by ``key`` into enter, update and exit.

    Duplicate keys within one collection keep the last occurrence.
    """
    before = {key(item): item for item in previous}
    after = {key(item): item for item in current}

    enter = tuple(item for k, item in after.items() if k not in before)
    update = tuple((before[k], item) for k, item in after.items() if k in before)
    exit_ = tuple(item for k, item in before.items() if k not in after)
    return KeyedDiff(enter=enter, update=update, exit=exit_)


def _link_id(link: LinkGeometry) -> LinkId:
    return link.link_id


def _node_key(node: PositionedNode) -> str:
    return node.key


def diff_links(
    previous: Iterable[LinkGeometry],
    current: Iterable[LinkGeometry],
) -> KeyedDiff[LinkId, LinkGeometry]:
    """Diff two link collections by ``(source_key, target_key)``."""
    return diff_keyed(previous, current, _link_id)


def diff_nodes(
    previous: Iterable[PositionedNode],
    current: Iterable[PositionedNode],
) -> KeyedDiff[str, PositionedNode]:
    """Diff two positioned-node collections by node key."""
    return diff_keyed(previous, current, _node_key)
