"""
Baseline snapshot storage.

The baseline is a read-only copy of the pixel buffer taken once, when an
image is loaded. The brush blur samples from it so repeated strokes over the
same area do not compound.
"""

import logging
from typing import Optional

import numpy as np

from RC_Libs.errors import NoBaseline
from RC_Libs.ImageEditingLib.image_models import PixelBuffer

logger = logging.getLogger(__name__)


class BaselineStore:
    """Holds the immutable snapshot captured at ingest time."""

    def __init__(self):
        self._snapshot: Optional[PixelBuffer] = None

    @property
    def has_baseline(self) -> bool:
        return self._snapshot is not None

    def capture(self, buffer: PixelBuffer) -> PixelBuffer:
        """
        Store a deep, read-only copy of the buffer.

        Args:
            buffer: The freshly ingested pixel buffer

        Returns:
            The stored snapshot
        """
        snapshot = np.array(buffer, dtype=np.uint8, copy=True)
        snapshot.flags.writeable = False
        self._snapshot = snapshot
        logger.debug(f"Captured baseline {snapshot.shape[1]}x{snapshot.shape[0]}")
        return snapshot

    def get(self) -> PixelBuffer:
        """
        Get the baseline snapshot.

        Raises:
            NoBaseline: If no image has been loaded yet
        """
        if self._snapshot is None:
            raise NoBaseline("No baseline captured; load an image first")
        return self._snapshot
