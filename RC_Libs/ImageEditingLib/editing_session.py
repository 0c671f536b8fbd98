"""
Editing session: owner of the live pixel buffer.

The session holds the live buffer, its baseline snapshot, the brush
configuration and both blur strategies. Every blur entry point is a no-op
when no image is loaded; such failures are logged and never propagate.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple

import numpy as np

from RC_Libs.constants import BUFFER_CHANNELS
from RC_Libs.errors import DegenerateRegion, NoBaseline, NoImageLoaded
from RC_Libs.ImageEditingLib import image_io
from RC_Libs.ImageEditingLib.baseline_store import BaselineStore
from RC_Libs.ImageEditingLib.brush_blur import BrushBlurEngine
from RC_Libs.ImageEditingLib.image_models import (
    BrushGeometry,
    PixelBuffer,
    Point,
    Selection,
)
from RC_Libs.ImageEditingLib.region_blur import RegionBlurEngine

logger = logging.getLogger(__name__)


class EditingSession:
    """
    Single-image redaction session.

    Example:
        >>> session = EditingSession()
        >>> session.load_bytes(png_bytes, "image/png")
        >>> session.blur_brush_at((50, 50))
        >>> session.blur_region(Selection(0, 0, 40, 40))
        >>> data = session.export_png()
    """

    def __init__(
        self,
        brush_engine: Optional[BrushBlurEngine] = None,
        region_engine: Optional[RegionBlurEngine] = None,
    ):
        self.buffer: Optional[PixelBuffer] = None
        self.baseline = BaselineStore()
        self.geometry = BrushGeometry()
        self.brush_engine = brush_engine or BrushBlurEngine()
        self.region_engine = region_engine or RegionBlurEngine()

    @property
    def has_image(self) -> bool:
        return self.buffer is not None and self.baseline.has_baseline

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height) of the buffer, (0, 0) when empty."""
        if self.buffer is None:
            return (0, 0)
        return (self.buffer.shape[1], self.buffer.shape[0])

    # ------------------------------------------------------------------
    # Ingest
    # ------------------------------------------------------------------

    def load_buffer(self, buffer: PixelBuffer) -> None:
        """Replace the live buffer and capture a fresh baseline from it."""
        if buffer is None or buffer.ndim != 3 or buffer.shape[2] != BUFFER_CHANNELS:
            raise ValueError("Expected an (H, W, 4) pixel buffer")
        live = np.array(buffer, dtype=np.uint8, copy=True)
        # Baseline first: if capture fails the old image stays intact
        self.baseline.capture(live)
        self.buffer = live
        logger.info(f"Loaded image {live.shape[1]}x{live.shape[0]}")

    def load_bytes(self, data: bytes, mime_type: str) -> None:
        """
        Decode image data into the session.

        Raises:
            UnsupportedFormat: If mime_type is not an image type
            DecodeError: If the data cannot be decoded
        """
        buffer = image_io.decode_image(data, mime_type)
        self.load_buffer(buffer)

    def load_file(self, path: Path) -> None:
        self.load_bytes(*image_io.read_image_file(path))

    # ------------------------------------------------------------------
    # Blur
    # ------------------------------------------------------------------

    def set_brush_size(self, diameter: int) -> BrushGeometry:
        self.geometry = BrushGeometry(diameter)
        return self.geometry

    def blur_brush_at(self, point: Point) -> Optional[Selection]:
        """
        Apply one brush dab centered on ``point`` (buffer coordinates).

        Returns:
            The box to redraw, or None if nothing changed
        """
        try:
            buffer = self._require_image()
            baseline = self.baseline.get()
            return self.brush_engine.apply(buffer, baseline, point, self.geometry)
        except (NoImageLoaded, NoBaseline, DegenerateRegion) as e:
            logger.debug(f"Brush blur ignored: {e}")
            return None

    def blur_region(self, selection: Selection) -> Optional[Selection]:
        """
        Blur a rectangle of the live buffer.

        Returns:
            The clamped rectangle that changed, or None if nothing changed
        """
        try:
            return self.region_engine.apply(self._require_image(), selection)
        except (NoImageLoaded, DegenerateRegion) as e:
            logger.debug(f"Region blur ignored: {e}")
            return None

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def export_png(self) -> bytes:
        """
        Encode the current live buffer as PNG.

        Raises:
            NoImageLoaded: If there is nothing to export
        """
        return image_io.export_png(self._require_image())

    def save_png(self, output_path: Path) -> Path:
        """
        Raises:
            NoImageLoaded: If there is nothing to export
            ExportFailure: If the file cannot be written
        """
        return image_io.save_png(self._require_image(), output_path)

    def _require_image(self) -> PixelBuffer:
        if self.buffer is None:
            raise NoImageLoaded("No image loaded")
        return self.buffer
