"""
ImageEditingLib - Core redaction functionality

This module provides the pixel buffer models, coordinate mapping, the two
blur strategies, ingest/export and the editing session for the Redact
Canvas project.
"""

from RC_Libs.ImageEditingLib.image_models import (
    BrushGeometry,
    CanvasRect,
    PixelBuffer,
    PointerEvent,
    Selection,
    ToolState,
)
from RC_Libs.ImageEditingLib.baseline_store import BaselineStore
from RC_Libs.ImageEditingLib.brush_blur import BrushBlurEngine
from RC_Libs.ImageEditingLib.region_blur import RegionBlurEngine, apply_gaussian_blur
from RC_Libs.ImageEditingLib.image_io import (
    export_png,
    ingest,
    ingest_file,
    save_png,
)
from RC_Libs.ImageEditingLib.editing_session import EditingSession

__all__ = [
    "BrushGeometry",
    "CanvasRect",
    "PixelBuffer",
    "PointerEvent",
    "Selection",
    "ToolState",
    "BaselineStore",
    "BrushBlurEngine",
    "RegionBlurEngine",
    "apply_gaussian_blur",
    "export_png",
    "ingest",
    "ingest_file",
    "save_png",
    "EditingSession",
]
