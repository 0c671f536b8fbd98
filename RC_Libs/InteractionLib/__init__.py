"""
InteractionLib - Pointer-driven interaction state machines

This module provides the brush stroke, rectangle selection and toolbar
drag state machines and the dispatcher that routes input between them.
"""

from RC_Libs.InteractionLib.brush_stroke_controller import BrushStrokeController, StrokeState
from RC_Libs.InteractionLib.selection_controller import SelectionController, SelectionState
from RC_Libs.InteractionLib.toolbar_drag_controller import (
    DragState,
    ToolbarDragController,
    ToolbarPosition,
    clamp_position,
)
from RC_Libs.InteractionLib.input_dispatcher import (
    InputDispatcher,
    TARGET_CONTROL,
    TARGET_TOOLBAR,
)

__all__ = [
    "BrushStrokeController",
    "StrokeState",
    "SelectionController",
    "SelectionState",
    "DragState",
    "ToolbarDragController",
    "ToolbarPosition",
    "clamp_position",
    "InputDispatcher",
    "TARGET_CONTROL",
    "TARGET_TOOLBAR",
]
