"""
Localized circular brush blur (baseline-referenced).

Every pixel inside the brush disc is replaced by the box average of the
baseline snapshot around it. The box window is fixed in size, so the brush
diameter controls the footprint and never the blur strength.

Because samples come from the untouched baseline rather than the live
buffer, dabbing the same spot twice yields the same pixels as dabbing it
once. Overlapping strokes re-blend toward the original image instead of
deepening the blur.

Example:
    >>> engine = BrushBlurEngine()
    >>> engine.apply(buffer, baseline, (50, 50), BrushGeometry(20))
    Selection(x=40, y=40, width=20, height=20)
"""

import math

import numpy as np
from scipy import ndimage

from RC_Libs.errors import DegenerateRegion
from RC_Libs.ImageEditingLib.image_models import (
    BrushGeometry,
    PixelBuffer,
    Point,
    Selection,
)


def brush_bounding_box(center: Point, radius: float, buffer_width: int, buffer_height: int) -> Selection:
    """Axis-aligned box around the brush disc, clamped to the buffer."""
    x, y = center
    start_x = max(0, math.floor(x - radius))
    start_y = max(0, math.floor(y - radius))
    end_x = min(buffer_width, math.ceil(x + radius))
    end_y = min(buffer_height, math.ceil(y + radius))
    return Selection(start_x, start_y, max(0, end_x - start_x), max(0, end_y - start_y))


def box_average(
    source: PixelBuffer,
    box: Selection,
    window_radius: int,
) -> np.ndarray:
    """
    Box-average every pixel of ``box`` over a square window of ``source``.

    The window has side 2 * window_radius + 1 and is clamped to the buffer:
    edge pixels average over fewer samples and nothing wraps around. Both
    the channel sums and the per-pixel sample counts come from a
    zero-padded uniform filter, so their ratio is the clamped average.

    Args:
        source: Buffer to sample from (H, W, 4)
        box: Pixels to compute averages for
        window_radius: Half-width of the sampling window

    Returns:
        float64 array of shape (box.height, box.width, 4)
    """
    height, width = source.shape[:2]

    # Only the rows/columns reachable from the box are summed
    read_top = max(0, box.y - window_radius)
    read_left = max(0, box.x - window_radius)
    read_bottom = min(height, box.bottom + window_radius)
    read_right = min(width, box.right + window_radius)

    tile = source[read_top:read_bottom, read_left:read_right].astype(np.float64)
    size = 2 * window_radius + 1
    area = size * size

    # Filters return means over the full window; scale back to exact integer sums
    sums = np.rint(ndimage.uniform_filter(tile, size=(size, size, 1), mode="constant", cval=0.0) * area)
    counts = np.rint(
        ndimage.uniform_filter(np.ones(tile.shape[:2]), size=size, mode="constant", cval=0.0) * area
    )

    rows = slice(box.y - read_top, box.bottom - read_top)
    cols = slice(box.x - read_left, box.right - read_left)
    return sums[rows, cols] / counts[rows, cols, np.newaxis]


def disc_mask(center: Point, radius: float, box: Selection) -> np.ndarray:
    """Boolean (box.height, box.width) mask of pixels within ``radius`` of center."""
    ys = np.arange(box.y, box.bottom, dtype=np.float64)[:, np.newaxis]
    xs = np.arange(box.x, box.right, dtype=np.float64)[np.newaxis, :]
    return (xs - center[0]) ** 2 + (ys - center[1]) ** 2 <= radius * radius


class BrushBlurEngine:
    """Circular box-blur brush that samples from the baseline snapshot."""

    name = "baseline-referenced"

    def apply(
        self,
        buffer: PixelBuffer,
        baseline: PixelBuffer,
        center: Point,
        geometry: BrushGeometry,
    ) -> Selection:
        """
        Blur the disc around ``center`` in place.

        Args:
            buffer: Live pixel buffer, mutated in the affected box only
            baseline: Immutable snapshot taken at load time
            center: Brush center in buffer coordinates
            geometry: Brush size and sampling window

        Returns:
            The box the caller should redraw

        Raises:
            DegenerateRegion: If the footprint lies entirely outside the buffer
            ValueError: If buffer and baseline dimensions differ
        """
        if buffer.shape != baseline.shape:
            raise ValueError(
                f"Baseline shape {baseline.shape} does not match buffer shape {buffer.shape}"
            )

        height, width = buffer.shape[:2]
        box = brush_bounding_box(center, geometry.radius, width, height)
        if box.is_empty:
            raise DegenerateRegion(f"Brush footprint at {center} is empty")

        # Whole read set is computed before the first write
        averaged = box_average(baseline, box, geometry.sample_window_radius)
        blurred = np.clip(np.rint(averaged), 0, 255).astype(np.uint8)
        mask = disc_mask(center, geometry.radius, box)

        target = buffer[box.y:box.bottom, box.x:box.right]
        target[mask] = blurred[mask]
        return box
