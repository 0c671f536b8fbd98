"""
Unit tests for image_models module.

Tests selection normalization and clamping, and brush geometry bounds.
"""

import pytest

from RC_Libs.constants import BRUSH_MAX_SIZE, BRUSH_MIN_SIZE, BRUSH_SAMPLE_WINDOW_RADIUS
from RC_Libs.ImageEditingLib.image_models import BrushGeometry, CanvasRect, Selection


class TestSelectionFromCorners:
    """Tests for Selection.from_corners."""

    @pytest.mark.parametrize("a, b", [
        ((10, 10), (40, 30)),
        ((40, 30), (10, 10)),
        ((40, 10), (10, 30)),
        ((10, 30), (40, 10)),
    ])
    def test_same_rectangle_for_any_drag_direction(self, a, b):
        """Should normalize regardless of which corner came first."""
        assert Selection.from_corners(a, b) == Selection(10, 10, 30, 20)

    @pytest.mark.parametrize("a, b", [
        ((0, 0), (0, 0)),
        ((5.5, 7.25), (1.2, 3.9)),
        ((-20, 15), (30, -4)),
        ((99.9, 0.1), (0.1, 99.9)),
    ])
    def test_non_negative_and_contains_both_points(self, a, b):
        """Width/height must be >= 0 and both corners must lie inside."""
        selection = Selection.from_corners(a, b)

        assert selection.width >= 0
        assert selection.height >= 0
        assert selection.contains(a)
        assert selection.contains(b)

    def test_single_point_is_empty(self):
        """A click without drag gives a zero-area selection."""
        assert Selection.from_corners((12, 12), (12, 12)).is_empty

    def test_fractional_click_is_empty(self):
        """Mapped display points are fractional; a click must still be empty."""
        assert Selection.from_corners((24.6, 24.6), (24.6, 24.6)).is_empty

    def test_one_axis_drag_is_empty(self):
        horizontal = Selection.from_corners((10.5, 20.5), (60.25, 20.5))
        vertical = Selection.from_corners((7.3, 1.5), (7.3, 40.8))

        assert horizontal == Selection(10, 20, 51, 0)
        assert horizontal.is_empty
        assert vertical == Selection(7, 1, 0, 40)
        assert vertical.is_empty

    def test_fractional_drag_covers_touched_pixels(self):
        assert Selection.from_corners((10.5, 20.5), (12.25, 22.75)) == Selection(10, 20, 3, 3)


class TestSelectionClamped:
    """Tests for Selection.clamped."""

    def test_inside_bounds_unchanged(self):
        selection = Selection(10, 10, 20, 20)
        assert selection.clamped(100, 100) == selection

    def test_overhanging_edges_are_trimmed(self):
        assert Selection(-10, 90, 30, 30).clamped(100, 100) == Selection(0, 90, 20, 10)

    def test_fully_outside_is_empty(self):
        assert Selection(150, 150, 10, 10).clamped(100, 100).is_empty
        assert Selection(-50, -50, 10, 10).clamped(100, 100).is_empty


class TestBrushGeometry:
    """Tests for BrushGeometry."""

    def test_defaults(self):
        geometry = BrushGeometry()
        assert geometry.diameter == 20
        assert geometry.radius == 10
        assert geometry.sample_window_radius == BRUSH_SAMPLE_WINDOW_RADIUS

    def test_size_is_clamped(self):
        assert BrushGeometry(1).diameter == BRUSH_MIN_SIZE
        assert BrushGeometry(500).diameter == BRUSH_MAX_SIZE

    def test_step_by_five_within_range(self):
        assert BrushGeometry(20).increased().diameter == 25
        assert BrushGeometry(20).decreased().diameter == 15
        assert BrushGeometry(BRUSH_MAX_SIZE).increased().diameter == BRUSH_MAX_SIZE
        assert BrushGeometry(BRUSH_MIN_SIZE).decreased().diameter == BRUSH_MIN_SIZE

    def test_window_does_not_depend_on_size(self):
        assert BrushGeometry(5).sample_window_radius == BrushGeometry(100).sample_window_radius


class TestCanvasRect:
    """Tests for CanvasRect."""

    def test_degenerate(self):
        assert CanvasRect(0, 0, 0, 100).is_degenerate
        assert not CanvasRect(0, 0, 10, 10).is_degenerate

    def test_contains(self):
        rect = CanvasRect(10, 10, 100, 50)
        assert rect.contains((10, 10))
        assert rect.contains((109.5, 59.5))
        assert not rect.contains((110, 30))
        assert not rect.contains((5, 30))
