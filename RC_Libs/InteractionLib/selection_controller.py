"""
Drag-to-select rectangle state machine.

States: IDLE -> SELECTING -> IDLE.

Pointer-down inside the canvas records the anchor. Pointer-move updates a
preview rectangle without touching the buffer. Pointer-up commits the
normalized rectangle through the ``on_commit`` callback and clears the
preview. Once a selection has started, moves and releases are tracked
wherever the pointer goes, so releasing outside the canvas still commits.
"""

import logging
from enum import Enum
from typing import Any, Callable, Optional

from RC_Libs.ImageEditingLib.image_models import Point, Selection

logger = logging.getLogger(__name__)


class SelectionState(Enum):
    IDLE = "idle"
    SELECTING = "selecting"


class SelectionController:
    """Turns a pointer drag into a committed Selection."""

    def __init__(self, on_commit: Callable[[Selection], Any]):
        if not callable(on_commit):
            raise ValueError(f"on_commit must be callable, got {type(on_commit)}")
        self._on_commit = on_commit
        self.state = SelectionState.IDLE
        self._anchor: Optional[Point] = None
        self.preview: Optional[Selection] = None

    @property
    def is_active(self) -> bool:
        return self.state is SelectionState.SELECTING

    def pointer_down(self, point: Point, inside_canvas: bool = True) -> bool:
        """
        Start a selection at ``point``.

        Returns:
            True if a selection started; False when the press was outside
            the canvas or a selection is already in progress
        """
        if self.state is not SelectionState.IDLE or not inside_canvas:
            return False

        self._anchor = point
        self.preview = Selection.from_corners(point, point)
        self.state = SelectionState.SELECTING
        logger.debug(f"Selection started at {point}")
        return True

    def pointer_move(self, point: Point) -> Optional[Selection]:
        if self.state is not SelectionState.SELECTING:
            return None
        self.preview = Selection.from_corners(self._anchor, point)
        return self.preview

    def pointer_up(self, point: Point) -> Optional[Selection]:
        """
        Finish the selection and commit it.

        Returns:
            The committed rectangle, or None if no selection was active
        """
        if self.state is not SelectionState.SELECTING:
            return None

        selection = Selection.from_corners(self._anchor, point)
        self._reset()
        logger.debug(f"Selection committed: {selection}")
        self._on_commit(selection)
        return selection

    def cancel(self) -> None:
        """Abandon the current selection without committing it."""
        if self.state is SelectionState.SELECTING:
            logger.debug("Selection cancelled")
        self._reset()

    def _reset(self) -> None:
        self.state = SelectionState.IDLE
        self._anchor = None
        self.preview = None
