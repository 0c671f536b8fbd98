"""
Unit tests for coordinate_mapper module.

Tests display-to-buffer mapping, touch resolution, the degenerate layout
case and the inverse mapping.
"""

import pytest

from RC_Libs.ImageEditingLib.coordinate_mapper import (
    brush_cursor_rect,
    display_transform,
    event_client_point,
    to_buffer,
    to_display,
)
from RC_Libs.ImageEditingLib.image_models import CanvasRect, PointerEvent


class TestEventClientPoint:
    """Tests for event_client_point."""

    def test_uses_pointer_coordinates_without_touches(self):
        assert event_client_point(PointerEvent(12, 34)) == (12.0, 34.0)

    def test_first_touch_wins(self):
        event = PointerEvent(0, 0, touches=((5, 6), (70, 80)))
        assert event_client_point(event) == (5.0, 6.0)


class TestToBuffer:
    """Tests for to_buffer."""

    def test_identity_when_rendered_at_native_size(self):
        rect = CanvasRect(0, 0, 200, 100)
        assert to_buffer(PointerEvent(50, 25), rect, (200, 100)) == (50.0, 25.0)

    def test_scales_and_offsets(self):
        # 800x600 image rendered at 400x300, offset by (10, 20)
        rect = CanvasRect(10, 20, 400, 300)
        assert to_buffer(PointerEvent(110, 170), rect, (800, 600)) == (200.0, 300.0)

    def test_touch_event_is_mapped(self):
        rect = CanvasRect(0, 0, 100, 100)
        event = PointerEvent(99, 99, touches=((10, 20),))
        assert to_buffer(event, rect, (200, 200)) == (20.0, 40.0)

    def test_degenerate_layout_returns_origin(self):
        """Zero-size bounding box must not divide by zero."""
        rect = CanvasRect(30, 30, 0, 0)
        assert to_buffer(PointerEvent(50, 50), rect, (100, 100)) == (0.0, 0.0)
        assert display_transform(rect, (100, 100)) == (0.0, 0.0)

    def test_transform_recomputed_per_call(self):
        event = PointerEvent(50, 50)
        assert to_buffer(event, CanvasRect(0, 0, 100, 100), (100, 100)) == (50.0, 50.0)
        assert to_buffer(event, CanvasRect(0, 0, 50, 50), (100, 100)) == (100.0, 100.0)


class TestRoundTrip:
    """Mapping buffer -> display -> buffer returns the original point."""

    @pytest.mark.parametrize("point", [
        (0, 0), (799, 599), (123, 456), (400.5, 17.25),
    ])
    def test_round_trip_within_one_pixel(self, point):
        rect = CanvasRect(13, 27, 333, 251)
        buffer_size = (800, 600)

        display_x, display_y = to_display(point, rect, buffer_size)
        x, y = to_buffer(PointerEvent(round(display_x), round(display_y)), rect, buffer_size)

        # Rounding to whole display pixels costs at most one display pixel
        scale_x, scale_y = display_transform(rect, buffer_size)
        assert abs(x - point[0]) <= max(1.0, scale_x)
        assert abs(y - point[1]) <= max(1.0, scale_y)

    def test_exact_round_trip_without_rounding(self):
        rect = CanvasRect(5, 5, 250, 125)
        display = to_display((321, 77), rect, (1000, 500))
        x, y = to_buffer(PointerEvent(*display), rect, (1000, 500))
        assert x == pytest.approx(321)
        assert y == pytest.approx(77)


class TestBrushCursorRect:
    """Tests for brush_cursor_rect."""

    def test_centered_and_scaled(self):
        # Image shown at half size: 20px brush appears 10px wide
        rect = CanvasRect(0, 0, 100, 100)
        left, top, width, height = brush_cursor_rect((100, 100), rect, (200, 200), 20)
        assert (width, height) == (10, 10)
        assert (left + width / 2, top + height / 2) == (50, 50)
