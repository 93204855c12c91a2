"""TreeNormalizer: converts caller tree data into a keyed TreeNode tree.

Accepts a single tree (a mapping) or a forest (a list or tuple of mappings).
Every raw node is copied into a fresh TreeNode with a new unique key, and the
copies hang beneath one synthetic, invisible super-root.

Ordering rule: forest members are attached beneath the super-root in REVERSE
input order.  Below the top level, child order is preserved exactly.

Paths used in error messages follow the raw structure, e.g. ``/0/children/1``
is the second child of the first forest member.
"""

from __future__ import annotations

import copy
import uuid
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import Any

from loguru import logger

from tree_chart.tree.nodes import TreeNode

__all__ = ["TreeNormalizer", "index_tree", "normalize"]


def _uuid_key() -> str:
    return uuid.uuid4().hex


@dataclass
class TreeNormalizer:
    """Builds normalized trees from raw caller data.

    Normalization is done once per logical dataset: running it again on the
    same input produces an equal-shaped tree with entirely new keys.

    Attributes:
        children_field: Name of the field holding a raw node's children.
        key_factory:    Zero-argument callable returning a fresh unique key.

    Example::
        normalizer = TreeNormalizer()
        root = normalizer.normalize([{"label": "a", "children": [{"label": "b"}]}])
        # root (synthetic) -> a -> b
    """

    children_field: str = "children"
    key_factory: Callable[[], str] = field(default=_uuid_key)

    def normalize(self, raw: Any) -> TreeNode:
        """Normalize a tree or forest into a fresh keyed tree.

        Args:
            raw: A mapping, a list/tuple of mappings, or None.

        Returns:
            The synthetic super-root.  Its ``children`` is None when ``raw``
            is None or an empty forest.

        Raises:
            TypeError: If any node is not a mapping, any children value is not
                a list or tuple, or ``raw`` itself is of another type.  No
                partial tree is returned.
        """
        root = TreeNode(key=self.key_factory(), synthetic=True)

        if raw is None:
            return root
        if isinstance(raw, Mapping):
            copies = [self._copy_tree(raw, "")]
        elif isinstance(raw, (list, tuple)):
            copies = [self._copy_tree(item, f"/{i}") for i, item in enumerate(raw)]
            copies.reverse()
        else:
            msg = f"Tree data must be a mapping, a list or None, got {type(raw).__name__}"
            raise TypeError(msg)

        root.children = copies or None
        logger.debug("Normalized {} top-level tree(s)", len(copies))
        return root

    def _copy_tree(self, raw: Any, path: str) -> TreeNode:
        """Copy one raw tree iteratively (no recursion on depth)."""
        top = self._make_node(raw, path)
        stack: list[tuple[TreeNode, Mapping[str, Any], str]] = [(top, raw, path)]
        while stack:
            node, raw_node, node_path = stack.pop()
            raw_kids = self._raw_children(raw_node, node_path)
            if not raw_kids:
                continue
            kids: list[TreeNode] = []
            for i, raw_kid in enumerate(raw_kids):
                kid_path = f"{node_path}/{self.children_field}/{i}"
                kid = self._make_node(raw_kid, kid_path)
                kids.append(kid)
                stack.append((kid, raw_kid, kid_path))
            node.children = kids
        return top

    def _make_node(self, raw: Any, path: str) -> TreeNode:
        if not isinstance(raw, Mapping):
            msg = (
                f"Tree node at {path or '/'} must be a mapping, "
                f"got {type(raw).__name__}"
            )
            raise TypeError(msg)
        payload = {
            k: copy.deepcopy(v) for k, v in raw.items() if k != self.children_field
        }
        return TreeNode(key=self.key_factory(), payload=payload)

    def _raw_children(self, raw: Mapping[str, Any], path: str) -> list[Any]:
        value = raw.get(self.children_field)
        if value is None:
            return []
        # str is a Sequence too, so accept only real containers
        if not isinstance(value, (list, tuple)):
            msg = (
                f"'{self.children_field}' at {path or '/'} must be a list or tuple, "
                f"got {type(value).__name__}"
            )
            raise TypeError(msg)
        return list(value)


# Module-level default normalizer (stateless apart from its key factory)
_default = TreeNormalizer()


def normalize(raw: Any) -> TreeNode:
    """Normalize ``raw`` with the default ``children`` field and uuid keys."""
    return _default.normalize(raw)


def index_tree(root: TreeNode) -> dict[str, TreeNode]:
    """Map every real node's key to the node, hidden subtrees included.

    The synthetic super-root is never part of the index.
    """
    return {node.key: node for node in root.walk() if not node.synthetic}
