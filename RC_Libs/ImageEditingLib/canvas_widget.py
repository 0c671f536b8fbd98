from typing import Optional

import numpy as np
from PyQt5.QtCore import QEvent, QPointF, QRect, QRectF, Qt
from PyQt5.QtGui import QColor, QImage, QMouseEvent, QPainter, QPaintEvent, QPen
from PyQt5.QtWidgets import QSizePolicy, QWidget

from RC_Libs.constants import (
    BRUSH_OUTLINE_COLOR,
    CANVAS_BACKGROUND_COLOR,
    CANVAS_HINT_TEXT,
    SELECTION_OUTLINE_COLOR,
)
from RC_Libs.ImageEditingLib.coordinate_mapper import brush_cursor_rect, to_display
from RC_Libs.ImageEditingLib.image_models import (
    CanvasRect,
    PixelBuffer,
    PointerEvent,
    Selection,
    ToolState,
)
from RC_Libs.InteractionLib.input_dispatcher import InputDispatcher


def buffer_to_qimage(buffer: PixelBuffer) -> QImage:
    height, width = buffer.shape[:2]
    data = np.ascontiguousarray(buffer)
    image = QImage(data.data, width, height, width * 4, QImage.Format_RGBA8888)
    # Detach from the numpy memory
    return image.copy()


class RedactCanvasWidget(QWidget):
    """Paints the live buffer and feeds pointer input to the dispatcher."""

    def __init__(self, dispatcher: InputDispatcher, parent=None) -> None:
        super().__init__(parent)
        self.dispatcher = dispatcher
        self._qimage: Optional[QImage] = None
        # Display area covered by the preview rectangle and brush outline at the last paint
        self._overlay = QRect()

        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Expanding)
        self.setMouseTracking(True)
        self.setAttribute(Qt.WA_AcceptTouchEvents, True)
        self.setCursor(Qt.CrossCursor)

    def refresh_image(self) -> None:
        session = self.dispatcher.session
        self._qimage = buffer_to_qimage(session.buffer) if session.has_image else None
        self.update()

    def refresh_region(self, region: Selection) -> None:
        """Copy one changed box of the buffer into the cached image and repaint it."""
        session = self.dispatcher.session
        if self._qimage is None or (self._qimage.width(), self._qimage.height()) != session.size:
            self.refresh_image()
            return

        patch = buffer_to_qimage(session.buffer[region.y:region.bottom, region.x:region.right])
        painter = QPainter(self._qimage)
        painter.setCompositionMode(QPainter.CompositionMode_Source)
        painter.drawImage(region.x, region.y, patch)
        painter.end()

        self.update(self._display_rect(region.x, region.y, region.right, region.bottom))

    def canvas_rect(self) -> CanvasRect:
        """Rectangle the image is drawn into: scaled down to fit, centered."""
        buffer_width, buffer_height = self.dispatcher.session.size
        if buffer_width == 0 or buffer_height == 0:
            return CanvasRect(0, 0, 0, 0)

        scale = min(1.0, self.width() / buffer_width, self.height() / buffer_height)
        width = buffer_width * scale
        height = buffer_height * scale
        return CanvasRect((self.width() - width) / 2, (self.height() - height) / 2, width, height)

    def paintEvent(self, event: QPaintEvent) -> None:
        painter = QPainter(self)
        painter.fillRect(event.rect(), QColor(CANVAS_BACKGROUND_COLOR))

        if self._qimage is None:
            painter.setPen(QColor("#666666"))
            painter.drawText(self.rect(), Qt.AlignCenter, CANVAS_HINT_TEXT)
            return

        rect = self.canvas_rect()
        if rect.is_degenerate:
            return

        painter.setRenderHint(QPainter.SmoothPixmapTransform)
        painter.drawImage(QRectF(rect.left, rect.top, rect.width, rect.height), self._qimage)

        preview = self._preview_rect()
        if preview is not None:
            pen = QPen(QColor(SELECTION_OUTLINE_COLOR), 2, Qt.DashLine)
            painter.setPen(pen)
            painter.setBrush(QColor(30, 144, 255, 40))
            painter.drawRect(preview)

        cursor = self._cursor_rect()
        if cursor is not None:
            painter.setPen(QPen(QColor(BRUSH_OUTLINE_COLOR), 2))
            painter.setBrush(Qt.NoBrush)
            painter.drawEllipse(cursor)

    def _display_rect(self, left: float, top: float, right: float, bottom: float) -> QRect:
        """Widget pixels covering a buffer-space box, padded for smoothing."""
        rect = self.canvas_rect()
        buffer_size = self.dispatcher.session.size
        x0, y0 = to_display((left, top), rect, buffer_size)
        x1, y1 = to_display((right, bottom), rect, buffer_size)
        return QRectF(QPointF(x0, y0), QPointF(x1, y1)).toAlignedRect().adjusted(-2, -2, 2, 2)

    def _preview_rect(self) -> Optional[QRectF]:
        preview = self.dispatcher.selection.preview
        if preview is None:
            return None
        rect = self.canvas_rect()
        buffer_size = self.dispatcher.session.size
        left, top = to_display((preview.x, preview.y), rect, buffer_size)
        right, bottom = to_display((preview.right, preview.bottom), rect, buffer_size)
        return QRectF(QPointF(left, top), QPointF(right, bottom))

    def _cursor_rect(self) -> Optional[QRectF]:
        cursor = self.dispatcher.cursor_point
        if self.dispatcher.tool is not ToolState.BLUR_BRUSH or cursor is None:
            return None
        x, y, w, h = brush_cursor_rect(
            cursor,
            self.canvas_rect(),
            self.dispatcher.session.size,
            self.dispatcher.session.geometry.diameter,
        )
        return QRectF(x, y, w, h)

    def update_overlay(self) -> None:
        """Repaint where the preview and brush outline were and where they are now."""
        overlay = QRectF()
        for shape in (self._preview_rect(), self._cursor_rect()):
            if shape is not None:
                overlay = overlay.united(shape)
        current = overlay.toAlignedRect().adjusted(-3, -3, 3, 3) if not overlay.isNull() else QRect()
        self.update(self._overlay.united(current))
        self._overlay = current

    # ------------------------------------------------------------------
    # Pointer input
    # ------------------------------------------------------------------

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        self.dispatcher.pointer_down(self._pointer(event), self.canvas_rect())
        self._after_input()

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        # Qt keeps delivering moves to the pressed widget even outside it
        self.dispatcher.pointer_move(self._pointer(event), self.canvas_rect())
        self._after_input()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.LeftButton:
            super().mouseReleaseEvent(event)
            return
        self.dispatcher.pointer_up(self._pointer(event), self.canvas_rect())
        self._after_input()

    def leaveEvent(self, event: QEvent) -> None:
        self.dispatcher.cursor_point = None
        self.update_overlay()
        super().leaveEvent(event)

    def event(self, event: QEvent) -> bool:
        if event.type() in (QEvent.TouchBegin, QEvent.TouchUpdate, QEvent.TouchEnd):
            points = event.touchPoints()
            touches = tuple((p.pos().x(), p.pos().y()) for p in points)
            pointer = PointerEvent(touches[0][0], touches[0][1], touches) if touches else None
            if pointer is not None:
                rect = self.canvas_rect()
                if event.type() == QEvent.TouchBegin:
                    self.dispatcher.pointer_down(pointer, rect)
                elif event.type() == QEvent.TouchUpdate:
                    self.dispatcher.pointer_move(pointer, rect)
                else:
                    self.dispatcher.pointer_up(pointer, rect)
                self._after_input()
            event.accept()
            return True
        return super().event(event)

    def _pointer(self, event: QMouseEvent) -> PointerEvent:
        return PointerEvent(event.localPos().x(), event.localPos().y())

    def _after_input(self) -> None:
        dirty = self.dispatcher.take_dirty()
        if dirty is not None:
            self.refresh_region(dirty)
        self.update_overlay()
