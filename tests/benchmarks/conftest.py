"""Deterministic tree generators for performance benchmarks.

All generators produce fixed, reproducible forests. No random values.
Three tiers: ~100 nodes (wide), ~1000 nodes (balanced), ~5000 nodes (bushy
and deep).
"""

from __future__ import annotations

from typing import Any

import pytest

from tree_chart.tree.nodes import TreeNode
from tree_chart.tree.normalizer import normalize


def generate_balanced(branching: int, depth: int, prefix: str = "n") -> dict[str, Any]:
    """Complete tree with ``branching`` children per inner node."""
    root: dict[str, Any] = {"label": prefix}
    level = [root]
    for d in range(depth):
        nxt: list[dict[str, Any]] = []
        for i, node in enumerate(level):
            node["children"] = [
                {"label": f"{prefix}.{d}.{i}.{k}"} for k in range(branching)
            ]
            nxt.extend(node["children"])
        level = nxt
    return root


def generate_ragged(size: int) -> list[dict[str, Any]]:
    """Uneven forest: node i hangs under node (i * 7) // 11."""
    nodes: list[dict[str, Any]] = [{"label": "0"}]
    for i in range(1, size):
        node: dict[str, Any] = {"label": str(i)}
        parent = nodes[(i * 7) // 11]
        parent.setdefault("children", []).append(node)
        nodes.append(node)
    return [nodes[0], {"label": "side", "children": [{"label": "s1"}, {"label": "s2"}]}]


# --- Fixtures for each size tier ---


@pytest.fixture
def tree_100() -> TreeNode:
    """Wide two-level tree: 1 + 9 + 81 = 91 nodes."""
    return normalize(generate_balanced(9, 2))


@pytest.fixture
def tree_1000() -> TreeNode:
    """Balanced tree: 1 + 10 + 100 + 1000 = 1111 nodes."""
    return normalize(generate_balanced(10, 3))


@pytest.fixture
def tree_5000() -> TreeNode:
    """Ragged forest of 5000 + 3 nodes."""
    return normalize(generate_ragged(5000))
