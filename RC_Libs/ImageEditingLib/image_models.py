"""
Image editing data models for Redact Canvas.

This module defines core data structures used throughout the redaction system.

Classes:
    Selection: Normalized rectangle in buffer coordinates
    BrushGeometry: Brush footprint size and fixed sampling window
    ToolState: Which interaction model is active on the canvas
    CanvasRect: Rendered bounding box of the canvas in display coordinates
    PointerEvent: Framework-neutral pointer or touch event

Type Aliases:
    PixelBuffer: numpy array of shape (height, width, 4), dtype uint8
    Point: An (x, y) pair of floats
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

import numpy as np

from RC_Libs.constants import (
    BRUSH_MAX_SIZE,
    BRUSH_MIN_SIZE,
    BRUSH_SAMPLE_WINDOW_RADIUS,
    BRUSH_SIZE_STEP,
    DEFAULT_BRUSH_SIZE,
)

PixelBuffer = np.ndarray
Point = Tuple[float, float]


@dataclass(frozen=True)
class Selection:
    """Rectangle in buffer coordinates with non-negative width and height.

    Attributes:
        x: Left edge (inclusive)
        y: Top edge (inclusive)
        width: Horizontal extent in pixels
        height: Vertical extent in pixels
    """
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def from_corners(cls, a: Point, b: Point) -> "Selection":
        """
        Build a normalized rectangle from two corner points.

        The drag direction does not matter: the rectangle spans the min/max
        of both points, widened to whole pixels so it contains both of them.
        An axis on which both points coincide has zero extent, so a click
        without a drag yields an empty selection.

        Args:
            a: Anchor corner (x, y)
            b: Opposite corner (x, y)

        Returns:
            Selection covering both points
        """
        min_x, max_x = sorted((a[0], b[0]))
        min_y, max_y = sorted((a[1], b[1]))
        left = math.floor(min_x)
        top = math.floor(min_y)
        right = left if max_x == min_x else math.ceil(max_x)
        bottom = top if max_y == min_y else math.ceil(max_y)
        return cls(left, top, right - left, bottom - top)

    @property
    def right(self) -> int:
        return self.x + self.width

    @property
    def bottom(self) -> int:
        return self.y + self.height

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains(self, point: Point) -> bool:
        return (self.x <= point[0] <= self.right
                and self.y <= point[1] <= self.bottom)

    def clamped(self, buffer_width: int, buffer_height: int) -> "Selection":
        """Intersect with the buffer bounds (may yield an empty selection)."""
        left = min(max(0, self.x), buffer_width)
        top = min(max(0, self.y), buffer_height)
        right = max(left, min(buffer_width, self.right))
        bottom = max(top, min(buffer_height, self.bottom))
        return Selection(left, top, right - left, bottom - top)



@dataclass
class BrushGeometry:
    """Brush configuration.

    Attributes:
        diameter: Brush footprint diameter in buffer pixels (5-100)
        sample_window_radius: Half-width of the box blur window, fixed
    """
    diameter: int = DEFAULT_BRUSH_SIZE
    sample_window_radius: int = field(default=BRUSH_SAMPLE_WINDOW_RADIUS, init=False)

    def __post_init__(self):
        self.diameter = self.clamp_size(self.diameter)

    @staticmethod
    def clamp_size(size: int) -> int:
        return max(BRUSH_MIN_SIZE, min(BRUSH_MAX_SIZE, int(size)))

    @property
    def radius(self) -> float:
        return self.diameter / 2

    def increased(self) -> "BrushGeometry":
        return BrushGeometry(self.diameter + BRUSH_SIZE_STEP)

    def decreased(self) -> "BrushGeometry":
        return BrushGeometry(self.diameter - BRUSH_SIZE_STEP)


class ToolState(Enum):
    BLUR_BRUSH = "blurBrush"
    BLUR_REGION = "blurRegion"
    NONE = "none"


@dataclass(frozen=True)
class CanvasRect:
    """Bounding box the canvas image is rendered into, in display pixels."""
    left: float
    top: float
    width: float
    height: float

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0

    def contains(self, point: Point) -> bool:
        return (self.left <= point[0] < self.left + self.width
                and self.top <= point[1] < self.top + self.height)


@dataclass(frozen=True)
class PointerEvent:
    """Pointer or touch event in display coordinates.

    Attributes:
        client_x: Pointer x position
        client_y: Pointer y position
        touches: Active touch points; the first one wins when present
        target: Optional hint of what was under the pointer ("control" for
                actionable toolbar buttons, "toolbar" for toolbar chrome)
    """
    client_x: float
    client_y: float
    touches: Tuple[Point, ...] = ()
    target: Optional[str] = None
