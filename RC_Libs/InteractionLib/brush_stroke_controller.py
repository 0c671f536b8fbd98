"""
Freehand brush stroke state machine.

States: IDLE -> STROKING -> IDLE.

Pointer-down inside the canvas dabs once and starts a stroke; each move
while stroking dabs again; pointer-up ends the stroke.
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional

from RC_Libs.ImageEditingLib.image_models import Point

logger = logging.getLogger(__name__)


class StrokeState(Enum):
    IDLE = "idle"
    STROKING = "stroking"


class BrushStrokeController:
    """Streams brush dabs to ``on_dab`` while the pointer is held down."""

    def __init__(self, on_dab: Callable[[Point], Any]):
        if not callable(on_dab):
            raise ValueError(f"on_dab must be callable, got {type(on_dab)}")
        self._on_dab = on_dab
        self.state = StrokeState.IDLE
        self.dab_count = 0

    @property
    def is_active(self) -> bool:
        return self.state is StrokeState.STROKING

    def pointer_down(self, point: Point, inside_canvas: bool = True) -> bool:
        if self.state is not StrokeState.IDLE or not inside_canvas:
            return False

        self.state = StrokeState.STROKING
        self.dab_count = 0
        self._dab(point)
        return True

    def pointer_move(self, point: Point) -> bool:
        if self.state is not StrokeState.STROKING:
            return False
        self._dab(point)
        return True

    def pointer_up(self, point: Optional[Point] = None) -> None:
        if self.state is StrokeState.STROKING:
            logger.debug(f"Stroke finished after {self.dab_count} dabs")
        self.state = StrokeState.IDLE

    def cancel(self) -> None:
        self.state = StrokeState.IDLE

    def _dab(self, point: Point) -> None:
        self.dab_count += 1
        self._on_dab(point)
