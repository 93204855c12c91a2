"""Collapse/expand transitions over TreeNode.

Two states per node with descendants:

- expanded:  ``children`` populated, ``hidden_children`` None.
- collapsed: ``children`` None, ``hidden_children`` populated.

Transitions move the *same list object* between the two fields, so they are
O(1) and keep every descendant key and the child order exactly as they were.
Leaves and the synthetic super-root never change state.
"""

from __future__ import annotations

from tree_chart.tree.nodes import TreeNode

__all__ = [
    "collapse",
    "collapse_all",
    "collapse_to_depth",
    "expand",
    "expand_all",
    "toggle",
]


def collapse(node: TreeNode) -> bool:
    """Detach visible children.  Returns True if the node changed state."""
    if node.synthetic or not node.children:
        return False
    node.hidden_children = node.children
    node.children = None
    node.collapsed = True
    return True


def expand(node: TreeNode) -> bool:
    """Re-attach hidden children.  Returns True if the node changed state."""
    if node.synthetic or not node.hidden_children:
        return False
    node.children = node.hidden_children
    node.hidden_children = None
    node.collapsed = False
    return True


def toggle(node: TreeNode) -> bool:
    """Flip between expanded and collapsed.

    Returns:
        True when the node changed state; False for leaves and the
        synthetic super-root.
    """
    if node.collapsed:
        return expand(node)
    return collapse(node)


def expand_all(root: TreeNode) -> int:
    """Expand every collapsed node under ``root``.  Returns how many changed."""
    # walk() reads hidden children too, so expanding while iterating is safe
    return sum(expand(node) for node in root.walk())


def collapse_all(root: TreeNode) -> int:
    """Collapse every real node with children.  Returns how many changed."""
    return sum(collapse(node) for node in list(root.walk()))


def collapse_to_depth(root: TreeNode, depth: int) -> int:
    """Collapse nodes at ``depth`` or deeper; expand those above it.

    Depth counts from the top-level nodes (depth 0), not from the synthetic
    super-root.

    Returns:
        Number of nodes that changed state.
    """
    changed = 0
    stack: list[tuple[TreeNode, int]] = [(kid, 0) for kid in root.all_children()]
    while stack:
        node, level = stack.pop()
        if level >= depth:
            changed += collapse(node)
        else:
            changed += expand(node)
        stack.extend((kid, level + 1) for kid in node.all_children())
    return changed
