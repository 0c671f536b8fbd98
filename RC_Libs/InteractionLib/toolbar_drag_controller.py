"""
Floating toolbar drag state machine.

States: IDLE -> DRAGGING -> IDLE.

Independent of the canvas tools and never touches the pixel buffer. The
toolbar position is clamped so the whole toolbar stays inside the viewport.
Presses that originate on an actionable control do not start a drag.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from RC_Libs.constants import (
    DEFAULT_TOOLBAR_X,
    DEFAULT_TOOLBAR_Y,
    TOOLBAR_HEIGHT,
    TOOLBAR_WIDTH,
)
from RC_Libs.ImageEditingLib.image_models import Point

logger = logging.getLogger(__name__)


class DragState(Enum):
    IDLE = "idle"
    DRAGGING = "dragging"


@dataclass(frozen=True)
class ToolbarPosition:
    x: float
    y: float


def clamp_position(
    x: float,
    y: float,
    viewport: Tuple[float, float],
    toolbar_size: Tuple[float, float],
) -> ToolbarPosition:
    """Clamp to [0, viewport - toolbar_size] on each axis."""
    max_x = max(0.0, viewport[0] - toolbar_size[0])
    max_y = max(0.0, viewport[1] - toolbar_size[1])
    return ToolbarPosition(min(max(0.0, x), max_x), min(max(0.0, y), max_y))


class ToolbarDragController:
    """Owns the floating toolbar's position and its drag interaction."""

    def __init__(
        self,
        viewport: Tuple[float, float],
        toolbar_size: Tuple[float, float] = (TOOLBAR_WIDTH, TOOLBAR_HEIGHT),
        position: Optional[ToolbarPosition] = None,
    ):
        self.viewport = viewport
        self.toolbar_size = toolbar_size
        # Where the user last put the toolbar; re-clamped on every resize
        self._preferred = position or ToolbarPosition(DEFAULT_TOOLBAR_X, DEFAULT_TOOLBAR_Y)
        self.position = clamp_position(self._preferred.x, self._preferred.y, viewport, toolbar_size)
        self.state = DragState.IDLE
        self._start_pointer: Optional[Point] = None
        self._start_position: Optional[ToolbarPosition] = None

    @property
    def is_active(self) -> bool:
        return self.state is DragState.DRAGGING

    def pointer_down(self, point: Point, on_control: bool = False) -> bool:
        """
        Begin dragging from the toolbar chrome.

        Args:
            point: Pointer position in viewport coordinates
            on_control: True when the press landed on a button or other control

        Returns:
            True if a drag started
        """
        if on_control or self.state is not DragState.IDLE:
            return False

        self._start_pointer = point
        self._start_position = self.position
        self.state = DragState.DRAGGING
        return True

    def pointer_move(self, point: Point) -> Optional[ToolbarPosition]:
        if self.state is not DragState.DRAGGING:
            return None

        dx = point[0] - self._start_pointer[0]
        dy = point[1] - self._start_pointer[1]
        self.position = clamp_position(
            self._start_position.x + dx,
            self._start_position.y + dy,
            self.viewport,
            self.toolbar_size,
        )
        self._preferred = self.position
        return self.position

    def pointer_up(self, point: Optional[Point] = None) -> None:
        if self.state is DragState.DRAGGING:
            logger.debug(f"Toolbar moved to ({self.position.x}, {self.position.y})")
        self.state = DragState.IDLE
        self._start_pointer = None
        self._start_position = None

    def cancel(self) -> None:
        self.pointer_up()

    def set_viewport(self, viewport: Tuple[float, float]) -> ToolbarPosition:
        """
        Update the viewport size and re-clamp the toolbar.

        Clamping starts from the preferred position, so a toolbar pushed in
        by a smaller viewport moves back out when the viewport grows again.
        """
        self.viewport = viewport
        self.position = clamp_position(self._preferred.x, self._preferred.y, viewport, self.toolbar_size)
        return self.position
