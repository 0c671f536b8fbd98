"""
Input dispatcher for the redaction canvas.

Routes pointer events to exactly one of three independent state machines:

- BrushStrokeController when the brush tool is active
- SelectionController when the region tool is active
- ToolbarDragController for presses on the floating toolbar's chrome

The state machine that accepted the pointer-down owns every following
move and release until the pointer is released, regardless of where the
pointer goes. Ownership is a single reference, so at most one interaction
stream is live at a time.

Example:
    >>> dispatcher = InputDispatcher(session, viewport=(1200, 800))
    >>> dispatcher.set_tool(ToolState.BLUR_REGION)
    >>> dispatcher.pointer_down(PointerEvent(10, 10), canvas_rect)
    >>> dispatcher.pointer_up(PointerEvent(60, 40), canvas_rect)
"""

import logging
from typing import Optional, Tuple, Union

from RC_Libs.ImageEditingLib.coordinate_mapper import event_client_point, to_buffer
from RC_Libs.ImageEditingLib.editing_session import EditingSession
from RC_Libs.ImageEditingLib.image_models import (
    CanvasRect,
    Point,
    PointerEvent,
    Selection,
    ToolState,
)
from RC_Libs.InteractionLib.brush_stroke_controller import BrushStrokeController
from RC_Libs.InteractionLib.selection_controller import SelectionController
from RC_Libs.InteractionLib.toolbar_drag_controller import ToolbarDragController

logger = logging.getLogger(__name__)

# Values of PointerEvent.target set by the GUI layer
TARGET_TOOLBAR = "toolbar"
TARGET_CONTROL = "control"

Controller = Union[BrushStrokeController, SelectionController, ToolbarDragController]


class InputDispatcher:
    """Multiplexes pointer input between the brush, selection and toolbar."""

    def __init__(
        self,
        session: EditingSession,
        viewport: Tuple[float, float] = (0, 0),
        tool: ToolState = ToolState.BLUR_BRUSH,
    ):
        self.session = session
        self.tool = tool
        self.brush = BrushStrokeController(on_dab=self._on_dab)
        self.selection = SelectionController(on_commit=self._on_commit)
        self.toolbar = ToolbarDragController(viewport)
        self.cursor_point: Optional[Point] = None
        self.dirty: Optional[Selection] = None
        self._active: Optional[Controller] = None

    @property
    def active(self) -> Optional[Controller]:
        return self._active

    @property
    def canvas_busy(self) -> bool:
        """True while a stroke or selection is in progress."""
        return self.brush.is_active or self.selection.is_active

    def set_tool(self, tool: ToolState) -> bool:
        """
        Switch the active canvas tool.

        Returns:
            False if refused because an interaction is in progress
        """
        if not isinstance(tool, ToolState):
            raise TypeError(f"Expected ToolState, got {type(tool)}")
        if self._active is not None:
            logger.warning(f"Tool change to {tool.value} refused during an active drag")
            return False
        self.tool = tool
        logger.debug(f"Tool set to {tool.value}")
        return True

    def pointer_down(self, event: PointerEvent, rect: CanvasRect) -> bool:
        """
        Route a press.

        Returns:
            True if a state machine took ownership of the interaction
        """
        if self._active is not None:
            return False

        if event.target == TARGET_CONTROL:
            return False

        if event.target == TARGET_TOOLBAR:
            if self.toolbar.pointer_down(event_client_point(event)):
                self._active = self.toolbar
                return True
            return False

        controller = self._canvas_controller()
        if controller is None or not self.session.has_image:
            return False

        inside = rect.contains(event_client_point(event))
        point = self._map(event, rect)
        if controller.pointer_down(point, inside_canvas=inside):
            self._active = controller
            return True
        return False

    def pointer_move(self, event: PointerEvent, rect: CanvasRect) -> None:
        if self._active is self.toolbar:
            self.toolbar.pointer_move(event_client_point(event))
            return

        point = self._map(event, rect)
        self.cursor_point = point if rect.contains(event_client_point(event)) else None
        if self._active is not None:
            self._active.pointer_move(point)

    def pointer_up(self, event: PointerEvent, rect: CanvasRect) -> None:
        active, self._active = self._active, None
        if active is None:
            return
        if active is self.toolbar:
            active.pointer_up(event_client_point(event))
        else:
            active.pointer_up(self._map(event, rect))

    def cancel(self) -> None:
        """Abort whatever interaction is in progress without committing it."""
        if self._active is not None:
            self._active.cancel()
        self._active = None

    def take_dirty(self) -> Optional[Selection]:
        """Return and clear the last region mutated in the buffer."""
        dirty, self.dirty = self.dirty, None
        return dirty

    def _canvas_controller(self) -> Optional[Controller]:
        if self.tool is ToolState.BLUR_BRUSH:
            return self.brush
        if self.tool is ToolState.BLUR_REGION:
            return self.selection
        return None

    def _map(self, event: PointerEvent, rect: CanvasRect) -> Point:
        return to_buffer(event, rect, self.session.size)

    def _on_dab(self, point: Point) -> None:
        changed = self.session.blur_brush_at(point)
        if changed is not None:
            self.dirty = changed

    def _on_commit(self, selection: Selection) -> None:
        changed = self.session.blur_region(selection)
        if changed is not None:
            self.dirty = changed
