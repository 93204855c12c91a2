"""TreeNode dataclass: the internally-owned, keyed tree representation.

TreeNormalizer produces these from caller data; the collapse functions move
child lists between ``children`` and ``hidden_children`` in place.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any


@dataclass(slots=True, eq=False)
class TreeNode:
    """A node of the normalized tree.

    Equality is identity: two nodes are the same node only if they are the
    same object, whatever their payloads.

    Attributes:
        key:             Permanent unique identifier assigned at normalization.
        payload:         Caller fields for this node (everything except the
                         children field).
        children:        Visible child nodes; None for leaves and collapsed nodes.
        hidden_children: Children detached by a collapse; None otherwise.
        collapsed:       True while ``hidden_children`` holds the subtree.
        synthetic:       True only for the invisible super-root.
    """

    key: str
    payload: dict[str, Any] = field(default_factory=dict)
    children: list[TreeNode] | None = None
    hidden_children: list[TreeNode] | None = None
    collapsed: bool = False
    synthetic: bool = False

    @property
    def is_leaf(self) -> bool:
        """True when the node has neither visible nor hidden children."""
        return not self.children and not self.hidden_children

    def all_children(self) -> list[TreeNode]:
        """Visible or hidden children, whichever is populated."""
        return self.children or self.hidden_children or []

    def walk(self, *, include_hidden: bool = True) -> Iterator[TreeNode]:
        """Yield this node and its descendants in pre-order.

        Uses an explicit stack so long chains never hit the recursion limit.
        With ``include_hidden=False`` only visible descendants are yielded.
        """
        stack: list[TreeNode] = [self]
        while stack:
            node = stack.pop()
            yield node
            kids = node.all_children() if include_hidden else (node.children or [])
            stack.extend(reversed(kids))
