"""
Unit tests for cutout geometry.
"""

import pytest

from src.common.types import CropRegion
from src.region.cutout import (
    DOCUMENT_FRAME_RATIO,
    calculate_cutout_rect,
    cutout_relative_center,
    normalize_layer_rect,
)
from src.region.mapper import map_cutout_to_image
from src.region.types import Orientation


class TestCalculateCutoutRect:
    """Tests for calculate_cutout_rect function."""

    def test_default_layout(self):
        """Cutout fills 90% of the width, centered, 40% of free space above."""
        rect = calculate_cutout_rect(400, 800)

        assert rect.width == pytest.approx(360.0)
        assert rect.height == pytest.approx(360.0 / DOCUMENT_FRAME_RATIO)
        assert rect.x == pytest.approx(20.0)
        assert rect.y == pytest.approx((800 - rect.height) * 0.4)

    def test_ratio(self):
        rect = calculate_cutout_rect(1000, 500)

        assert rect.width / rect.height == pytest.approx(125.0 / 22.0)

    def test_custom_parameters(self):
        rect = calculate_cutout_rect(
            200, 300, width_fraction=0.5, document_ratio=2.0, top_offset_ratio=0.0
        )

        assert rect.to_tuple() == pytest.approx((50.0, 0.0, 100.0, 50.0))

    def test_invalid_view(self):
        with pytest.raises(ValueError, match="must be positive"):
            calculate_cutout_rect(0, 800)


class TestCutoutRelativeCenter:
    """Tests for cutout_relative_center function."""

    def test_center(self):
        cutout = CropRegion(x=100, y=100, width=200, height=100)

        assert cutout_relative_center(cutout, 400, 300) == pytest.approx((0.5, 0.5))


class TestNormalizeLayerRect:
    """Tests for normalize_layer_rect function."""

    def test_inside_view(self):
        rect = normalize_layer_rect(CropRegion(x=40, y=80, width=320, height=40), 400, 800)

        assert rect.x == pytest.approx(0.1)
        assert rect.y == pytest.approx(0.1)
        assert rect.width == pytest.approx(0.8)
        assert rect.height == pytest.approx(0.05)

    def test_clipped_to_view(self):
        rect = normalize_layer_rect(CropRegion(x=-40, y=0, width=240, height=100), 400, 100)

        assert rect.x == pytest.approx(0.0)
        assert rect.width == pytest.approx(0.5)
        assert rect.height == pytest.approx(1.0)

    def test_outside_view(self):
        with pytest.raises(ValueError, match="outside"):
            normalize_layer_rect(CropRegion(x=500, y=0, width=10, height=10), 400, 100)

    def test_default_cutout_round_trip(self):
        """The default cutout normalizes into the unit square."""
        cutout = calculate_cutout_rect(390, 844)
        rect = normalize_layer_rect(cutout, 390, 844)

        assert 0.0 <= rect.min_x < rect.max_x <= 1.0
        assert 0.0 <= rect.min_y < rect.max_y <= 1.0
        assert rect.width == pytest.approx(0.9)

    def test_portrait_rotates_into_sensor_space(self):
        """Portrait: x from view y, y from 1 - view max x, sides swapped."""
        rect = normalize_layer_rect(
            CropRegion(x=40, y=80, width=320, height=40), 400, 800, Orientation.PORTRAIT
        )

        assert rect.x == pytest.approx(0.1)
        assert rect.y == pytest.approx(1.0 - 0.9)
        assert rect.width == pytest.approx(0.05)
        assert rect.height == pytest.approx(0.8)

    def test_portrait_upside_down(self):
        rect = normalize_layer_rect(
            CropRegion(x=0, y=80, width=200, height=40),
            400,
            800,
            Orientation.PORTRAIT_UPSIDE_DOWN,
        )

        assert rect.x == pytest.approx(1.0 - 0.15)
        assert rect.y == pytest.approx(0.0)
        assert rect.width == pytest.approx(0.05)
        assert rect.height == pytest.approx(0.5)

    @pytest.mark.parametrize(
        "orientation", [None, Orientation.LANDSCAPE_LEFT, Orientation.LANDSCAPE_RIGHT]
    )
    def test_landscape_keeps_axes(self, orientation):
        rect = normalize_layer_rect(
            CropRegion(x=40, y=80, width=320, height=40), 400, 800, orientation
        )

        assert (rect.x, rect.y, rect.width, rect.height) == pytest.approx(
            (0.1, 0.1, 0.8, 0.05)
        )

    def test_portrait_cutout_maps_to_wide_crop(self):
        """The default portrait cutout crops a wide strip of the landscape frame."""
        cutout = calculate_cutout_rect(390, 844)
        rect = normalize_layer_rect(cutout, 390, 844, Orientation.PORTRAIT)

        region = map_cutout_to_image(rect, Orientation.PORTRAIT, 1920, 1080)

        assert region.width > region.height
        assert region.width == pytest.approx(0.9 * 1920)
