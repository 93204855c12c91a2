"""Tests for ChartConfig validation and the option enums."""

from __future__ import annotations

from dataclasses import FrozenInstanceError, replace

import pytest

from tree_chart.config import ChartConfig, LinkStyle, Orientation


class TestDefaults:
    def test_values(self) -> None:
        config = ChartConfig()
        assert config.node_width == 100.0
        assert config.node_height == 100.0
        assert config.level_spacing == 200.0
        assert config.collapse_enabled is True
        assert config.orientation == Orientation.TOP_TO_BOTTOM
        assert config.link_style == LinkStyle.ELBOW
        assert config.duration_ms == 750.0
        assert config.collapse_depth is None

    def test_frozen(self) -> None:
        config = ChartConfig()
        with pytest.raises(FrozenInstanceError):
            config.node_width = 5.0  # type: ignore[misc]

    def test_replace(self) -> None:
        config = replace(ChartConfig(), level_spacing=120.0)
        assert config.level_spacing == 120.0
        assert config.node_width == 100.0

    def test_enums_are_strings(self) -> None:
        assert Orientation.LEFT_TO_RIGHT == "left_to_right"
        assert LinkStyle("curve") is LinkStyle.CURVE


class TestValidation:
    @pytest.mark.parametrize(
        "field",
        [
            "node_width",
            "node_height",
            "level_spacing",
            "sibling_separation",
            "subtree_separation",
            "min_scale",
        ],
    )
    @pytest.mark.parametrize("value", [0.0, -1.0])
    def test_positive_fields(self, field: str, value: float) -> None:
        with pytest.raises(ValueError, match=field):
            ChartConfig(**{field: value})  # type: ignore[arg-type]

    def test_negative_duration(self) -> None:
        with pytest.raises(ValueError, match="duration_ms"):
            ChartConfig(duration_ms=-1.0)

    def test_zero_duration_allowed(self) -> None:
        assert ChartConfig(duration_ms=0.0).duration_ms == 0.0

    def test_negative_collapse_depth(self) -> None:
        with pytest.raises(ValueError, match="collapse_depth"):
            ChartConfig(collapse_depth=-1)

    def test_scale_order(self) -> None:
        with pytest.raises(ValueError, match="max_scale"):
            ChartConfig(min_scale=2.0, max_scale=1.0)
