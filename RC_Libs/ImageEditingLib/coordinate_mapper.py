"""
Coordinate mapping between display space and pixel-buffer space.

The canvas is rendered at some display size that usually differs from the
image's native size. Every pointer event is mapped through a display
transform derived from the canvas's current bounding box. The transform is
recomputed on every call because layout can change between events.

Functions:
    event_client_point: Resolve the pointer position of a mouse or touch event
    display_transform: Scale factors from display pixels to buffer pixels
    to_buffer: Map an event into buffer coordinates
    to_display: Inverse mapping from buffer coordinates to display coordinates
    brush_cursor_rect: Display-space square outlining the brush footprint
"""

from typing import Tuple

from RC_Libs.ImageEditingLib.image_models import CanvasRect, Point, PointerEvent


def event_client_point(event: PointerEvent) -> Point:
    """
    Resolve the display position of a pointer or touch event.

    Args:
        event: The pointer event

    Returns:
        The first touch point if any touches are present, else (client_x, client_y)
    """
    if event.touches:
        touch_x, touch_y = event.touches[0]
        return (float(touch_x), float(touch_y))
    return (float(event.client_x), float(event.client_y))


def display_transform(rect: CanvasRect, buffer_size: Tuple[int, int]) -> Tuple[float, float]:
    """
    Compute display-to-buffer scale factors.

    Args:
        rect: Current rendered bounding box of the canvas
        buffer_size: (width, height) of the pixel buffer

    Returns:
        (buffer_width / display_width, buffer_height / display_height),
        or (0.0, 0.0) if the canvas has no layout yet
    """
    if rect.is_degenerate:
        return (0.0, 0.0)
    buffer_width, buffer_height = buffer_size
    return (buffer_width / rect.width, buffer_height / rect.height)


def to_buffer(event: PointerEvent, rect: CanvasRect, buffer_size: Tuple[int, int]) -> Point:
    """
    Map a pointer event into buffer coordinates.

    Args:
        event: Pointer or touch event in display coordinates
        rect: Current rendered bounding box of the canvas
        buffer_size: (width, height) of the pixel buffer

    Returns:
        (x, y) in buffer space; (0, 0) when the canvas is not laid out
    """
    if rect.is_degenerate:
        return (0.0, 0.0)

    scale_x, scale_y = display_transform(rect, buffer_size)
    client_x, client_y = event_client_point(event)
    return ((client_x - rect.left) * scale_x, (client_y - rect.top) * scale_y)


def to_display(point: Point, rect: CanvasRect, buffer_size: Tuple[int, int]) -> Point:
    """Map a buffer-space point back into display coordinates."""
    buffer_width, buffer_height = buffer_size
    if rect.is_degenerate or buffer_width <= 0 or buffer_height <= 0:
        return (rect.left, rect.top)
    return (
        rect.left + point[0] * rect.width / buffer_width,
        rect.top + point[1] * rect.height / buffer_height,
    )


def brush_cursor_rect(
    point: Point,
    rect: CanvasRect,
    buffer_size: Tuple[int, int],
    diameter: int,
) -> Tuple[float, float, float, float]:
    """
    Display-space square (left, top, width, height) outlining the brush.

    The outline is centered on the pointer and drawn at the brush's
    on-screen size, so it shrinks with the rendered image.
    """
    center_x, center_y = to_display(point, rect, buffer_size)
    buffer_width = buffer_size[0]
    scale = rect.width / buffer_width if buffer_width > 0 and not rect.is_degenerate else 1.0
    size = diameter * scale
    return (center_x - size / 2, center_y - size / 2, size, size)
