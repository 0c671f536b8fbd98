import logging
from pathlib import Path
from typing import Optional

from PyQt5.QtCore import QBuffer, QByteArray, QIODevice, QPointF, Qt, QTimer
from PyQt5.QtGui import QImage, QKeySequence, QResizeEvent
from PyQt5.QtWidgets import (
    QApplication,
    QFileDialog,
    QLabel,
    QMainWindow,
    QShortcut,
    QVBoxLayout,
    QWidget,
)

from RC_Libs.constants import (
    DEFAULT_EXPORT_FILENAME,
    DEFAULT_OUTPUT_FORMAT,
    DEFAULT_WINDOW_HEIGHT,
    DEFAULT_WINDOW_WIDTH,
    EXPORT_MIME_TYPE,
    PNG_FILTER,
    STANDARD_IMAGE_FILTER,
    TOAST_DURATION_MS,
)
from RC_Libs.errors import ExportFailure, NoImageLoaded, RedactError
from RC_Libs.ImageEditingLib.canvas_widget import RedactCanvasWidget
from RC_Libs.ImageEditingLib.editing_session import EditingSession
from RC_Libs.ImageEditingLib.floating_toolbar import FloatingToolbar
from RC_Libs.ImageEditingLib.image_models import PointerEvent, ToolState
from RC_Libs.InteractionLib.input_dispatcher import TARGET_TOOLBAR, InputDispatcher

logger = logging.getLogger(__name__)


class RedactEditorWindow(QMainWindow):
    def __init__(self, image_path: Optional[Path] = None) -> None:
        super().__init__()
        self.setWindowTitle("Redact Canvas")
        self.resize(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)

        self.session = EditingSession()
        self.dispatcher = InputDispatcher(
            self.session, viewport=(DEFAULT_WINDOW_WIDTH, DEFAULT_WINDOW_HEIGHT)
        )

        self._build_ui()
        self._connect_signals()
        self._sync_toolbar()

        if image_path is not None:
            self.load_file(image_path)

    def _build_ui(self) -> None:
        central = QWidget(self)
        self.setCentralWidget(central)

        root = QVBoxLayout(central)
        root.setContentsMargins(0, 0, 0, 0)

        self.canvas = RedactCanvasWidget(self.dispatcher, central)
        root.addWidget(self.canvas)

        # Not in the layout: positioned by the drag controller
        self.toolbar = FloatingToolbar(central)
        self.toolbar.raise_()

        self.toast = QLabel(central)
        self.toast.setAlignment(Qt.AlignCenter)
        self.toast.setStyleSheet(
            "background: rgba(40, 40, 40, 220); color: white; padding: 8px 16px; border-radius: 6px;"
        )
        self.toast.hide()
        self._toast_timer = QTimer(self)
        self._toast_timer.setSingleShot(True)
        self._toast_timer.timeout.connect(self.toast.hide)

    def _connect_signals(self) -> None:
        QShortcut(QKeySequence.Paste, self, activated=self.paste_from_clipboard)
        QShortcut(QKeySequence.Open, self, activated=self.open_image)
        QShortcut(QKeySequence.Save, self, activated=self.download)
        QShortcut(QKeySequence(Qt.Key_Escape), self, activated=self.cancel_interaction)

        self.toolbar.dragPressed.connect(self._on_toolbar_pressed)
        self.toolbar.dragMoved.connect(self._on_toolbar_moved)
        self.toolbar.dragReleased.connect(self._on_toolbar_released)
        self.toolbar.brushSmaller.connect(lambda: self.set_brush_size(self.session.geometry.decreased().diameter))
        self.toolbar.brushLarger.connect(lambda: self.set_brush_size(self.session.geometry.increased().diameter))
        self.toolbar.toolSelected.connect(self.set_tool)
        self.toolbar.copyRequested.connect(self.copy_to_clipboard)
        self.toolbar.downloadRequested.connect(self.download)

    # ------------------------------------------------------------------
    # Ingest
    # ------------------------------------------------------------------

    def paste_from_clipboard(self) -> None:
        if self.dispatcher.canvas_busy:
            return

        mime = QApplication.clipboard().mimeData()
        try:
            if mime is not None and mime.hasImage():
                image = QImage(mime.imageData())
                self.session.load_bytes(self._qimage_to_png(image), EXPORT_MIME_TYPE)
            elif mime is not None and mime.hasUrls() and mime.urls()[0].isLocalFile():
                self.session.load_file(Path(mime.urls()[0].toLocalFile()))
            else:
                formats = ", ".join(mime.formats()) if mime is not None else "nothing"
                self._show_toast(f"Clipboard has no image ({formats})")
                return
        except RedactError as e:
            logger.warning(f"Paste rejected: {e}")
            self._show_toast(f"Paste rejected: {e}")
            return

        self._on_image_loaded()

    def open_image(self) -> None:
        file_path, _ = QFileDialog.getOpenFileName(self, "Open Image", "", STANDARD_IMAGE_FILTER)
        if file_path:
            self.load_file(Path(file_path))

    def load_file(self, path: Path) -> None:
        try:
            self.session.load_file(path)
        except RedactError as e:
            logger.warning(f"Upload rejected: {e}")
            self._show_toast(f"Could not open {path.name}: {e}")
            return
        self._on_image_loaded()

    def _on_image_loaded(self) -> None:
        self.canvas.refresh_image()
        width, height = self.session.size
        self._show_toast(f"Image loaded ({width}x{height})")

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def copy_to_clipboard(self) -> None:
        if self.dispatcher.canvas_busy:
            return
        try:
            data = self.session.export_png()
            image = QImage.fromData(data, DEFAULT_OUTPUT_FORMAT)
            if image.isNull():
                raise ExportFailure("Encoded image could not be read back")
            QApplication.clipboard().setImage(image)
        except NoImageLoaded:
            self._show_toast("Nothing to copy yet")
            return
        except ExportFailure as e:
            logger.warning(f"Copy failed: {e}")
            self._show_toast(f"Copy failed: {e}")
            return
        self._show_toast("Copied to clipboard")

    def download(self) -> None:
        if self.dispatcher.canvas_busy:
            return
        if not self.session.has_image:
            self._show_toast("Nothing to save yet")
            return

        save_path, _ = QFileDialog.getSaveFileName(self, "Save Redacted Image", DEFAULT_EXPORT_FILENAME, PNG_FILTER)
        if not save_path:
            return

        try:
            written = self.session.save_png(Path(save_path))
        except ExportFailure as e:
            logger.warning(f"Save failed: {e}")
            self._show_toast(f"Save failed: {e}")
            return
        self._show_toast(f"Saved {written.name}")

    # ------------------------------------------------------------------
    # Tools
    # ------------------------------------------------------------------

    def set_tool(self, tool: ToolState) -> None:
        self.dispatcher.set_tool(tool)
        self._sync_toolbar()
        self.canvas.update()

    def set_brush_size(self, diameter: int) -> None:
        self.session.set_brush_size(diameter)
        self._sync_toolbar()
        self.canvas.update()

    def cancel_interaction(self) -> None:
        self.dispatcher.cancel()
        self.canvas.update()

    def _sync_toolbar(self) -> None:
        self.toolbar.set_brush_size(self.session.geometry.diameter)
        self.toolbar.set_tool(self.dispatcher.tool)

    # ------------------------------------------------------------------
    # Toolbar drag
    # ------------------------------------------------------------------

    def _on_toolbar_pressed(self, point: QPointF) -> None:
        self.dispatcher.pointer_down(self._toolbar_event(point), self.canvas.canvas_rect())

    def _on_toolbar_moved(self, point: QPointF) -> None:
        if self.dispatcher.toolbar.is_active:
            self.dispatcher.pointer_move(self._toolbar_event(point), self.canvas.canvas_rect())
            self._place_toolbar()

    def _on_toolbar_released(self, point: QPointF) -> None:
        self.dispatcher.pointer_up(self._toolbar_event(point), self.canvas.canvas_rect())
        self._place_toolbar()

    def _toolbar_event(self, point: QPointF) -> PointerEvent:
        return PointerEvent(point.x(), point.y(), target=TARGET_TOOLBAR)

    def _place_toolbar(self) -> None:
        position = self.dispatcher.toolbar.position
        self.toolbar.move(int(position.x), int(position.y))

    def resizeEvent(self, event: QResizeEvent) -> None:
        super().resizeEvent(event)
        central = self.centralWidget()
        self.dispatcher.toolbar.set_viewport((central.width(), central.height()))
        self._place_toolbar()
        self._position_toast()

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def _show_toast(self, message: str) -> None:
        self.toast.setText(message)
        self.toast.adjustSize()
        self._position_toast()
        self.toast.show()
        self.toast.raise_()
        self._toast_timer.start(TOAST_DURATION_MS)

    def _position_toast(self) -> None:
        central = self.centralWidget()
        x = (central.width() - self.toast.width()) // 2
        y = central.height() - self.toast.height() - 24
        self.toast.move(max(0, x), max(0, y))

    def _qimage_to_png(self, image: QImage) -> bytes:
        data = QByteArray()
        buffer = QBuffer(data)
        buffer.open(QIODevice.WriteOnly)
        image.save(buffer, DEFAULT_OUTPUT_FORMAT)
        buffer.close()
        return bytes(data)
