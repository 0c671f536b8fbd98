"""
Rectangular selection blur (live-referenced).

The whole live buffer is copied and Gaussian-blurred, then only the pixels
inside the selection are composited back. Blurring the full copy instead of
a cropped tile means samples near the rectangle edge come from the real
neighbouring image data, so no seams appear at the selection border.

The source is the live buffer, not the baseline: applying the blur to the
same rectangle again deepens it.

Example:
    >>> engine = RegionBlurEngine()
    >>> engine.apply(buffer, Selection(10, 10, 40, 20))
    Selection(x=10, y=10, width=40, height=20)
"""

import logging
from typing import Any

import numpy as np
from PIL import Image, ImageFilter

from RC_Libs.constants import REGION_BLUR_RADIUS
from RC_Libs.errors import DegenerateRegion
from RC_Libs.ImageEditingLib.image_models import PixelBuffer, Selection

logger = logging.getLogger(__name__)


def apply_gaussian_blur(
    image: Any,
    radius: float = REGION_BLUR_RADIUS,
) -> Any:
    """
    Apply Gaussian blur to image.

    Args:
        image: PIL Image
        radius: Blur radius in pixels (0 < radius <= 100)

    Returns:
        Blurred PIL Image (same mode as input)

    Raises:
        ValueError: If radius <= 0 or > 100
        TypeError: If image not PIL Image
    """
    if not hasattr(image, "filter"):
        raise TypeError(f"Expected PIL Image, got {type(image)}")

    if not (0 < radius <= 100):
        raise ValueError(f"radius must be 0 < r <= 100, got {radius}")

    return image.filter(ImageFilter.GaussianBlur(radius=radius))


class RegionBlurEngine:
    """Uniform Gaussian blur clipped to a rectangle of the live buffer."""

    name = "live-referenced"

    def __init__(self, radius: float = REGION_BLUR_RADIUS):
        if not (0 < radius <= 100):
            raise ValueError(f"radius must be 0 < r <= 100, got {radius}")
        self.radius = radius

    def apply(self, buffer: PixelBuffer, selection: Selection) -> Selection:
        """
        Blur the selected rectangle of ``buffer`` in place.

        Args:
            buffer: Live pixel buffer (H, W, 4), uint8
            selection: Rectangle in buffer coordinates, may extend past the edges

        Returns:
            The clamped rectangle that was blurred

        Raises:
            DegenerateRegion: If the rectangle is empty after clamping
        """
        height, width = buffer.shape[:2]
        region = selection.clamped(width, height)
        if region.is_empty:
            raise DegenerateRegion(f"Selection {selection} is empty after clamping")

        # Snapshot before blurring so reads never see our own writes
        source = Image.fromarray(np.ascontiguousarray(buffer).copy())
        blurred = np.asarray(apply_gaussian_blur(source, self.radius))

        buffer[region.y:region.bottom, region.x:region.right] = (
            blurred[region.y:region.bottom, region.x:region.right]
        )
        logger.debug(f"Region blur applied to {region}")
        return region
