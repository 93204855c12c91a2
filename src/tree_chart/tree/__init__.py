"""Tree subpackage: the keyed tree model and its state transitions.

Re-exports the public API for the tree module:
- TreeNode: dataclass for a normalized node (key, payload, child lists)
- TreeNormalizer: converts raw caller trees/forests into keyed TreeNode trees
- normalize / index_tree: module-level helpers
- toggle / collapse / expand (+ bulk variants): collapse state machine
"""

from tree_chart.tree.collapse import (
    collapse,
    collapse_all,
    collapse_to_depth,
    expand,
    expand_all,
    toggle,
)
from tree_chart.tree.nodes import TreeNode
from tree_chart.tree.normalizer import TreeNormalizer, index_tree, normalize

__all__ = [
    "TreeNode",
    "TreeNormalizer",
    "collapse",
    "collapse_all",
    "collapse_to_depth",
    "expand",
    "expand_all",
    "index_tree",
    "normalize",
    "toggle",
]
