"""Shared fixtures for the tree-chart test suite."""

from __future__ import annotations

from typing import Any

import pytest


class FakeClock:
    """Controllable clock: tests advance ``now`` (seconds) explicitly."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> None:
        self.now += ms / 1000.0


@pytest.fixture
def clock() -> FakeClock:
    """A fake clock starting at t=0."""
    return FakeClock()


@pytest.fixture
def example_forest() -> list[dict[str, Any]]:
    """One tree: 1 -> (2 -> (3, 4), 5)."""
    return [
        {
            "label": "1",
            "children": [
                {"label": "2", "children": [{"label": "3"}, {"label": "4"}]},
                {"label": "5"},
            ],
        }
    ]


@pytest.fixture
def two_trees() -> list[dict[str, Any]]:
    """Forest of two small trees, A -> (A1, A2) and B -> B1."""
    return [
        {"label": "A", "children": [{"label": "A1"}, {"label": "A2"}]},
        {"label": "B", "children": [{"label": "B1"}]},
    ]
