from PyQt5.QtCore import QPointF, Qt, pyqtSignal
from PyQt5.QtGui import QMouseEvent
from PyQt5.QtWidgets import (
    QButtonGroup,
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
)

from RC_Libs.constants import BRUSH_MAX_SIZE, BRUSH_MIN_SIZE, TOOLBAR_HEIGHT, TOOLBAR_WIDTH
from RC_Libs.ImageEditingLib.image_models import ToolState


class FloatingToolbar(QFrame):
    """
    Draggable control panel floating over the canvas.

    Presses on the frame itself are reported through the drag signals in
    parent coordinates. Buttons accept their own presses, so clicking a
    control never reaches the frame and never starts a drag.
    """

    dragPressed = pyqtSignal(QPointF)
    dragMoved = pyqtSignal(QPointF)
    dragReleased = pyqtSignal(QPointF)

    brushSmaller = pyqtSignal()
    brushLarger = pyqtSignal()
    toolSelected = pyqtSignal(object)
    copyRequested = pyqtSignal()
    downloadRequested = pyqtSignal()

    def __init__(self, parent=None) -> None:
        super().__init__(parent)
        self.setFixedSize(TOOLBAR_WIDTH, TOOLBAR_HEIGHT)
        self.setFrameShape(QFrame.StyledPanel)
        self.setCursor(Qt.OpenHandCursor)
        self.setStyleSheet(
            "FloatingToolbar { background: #ffffff; border: 1px solid #ccc; border-radius: 6px; }"
        )
        self._build_ui()
        self._connect_signals()

    def _build_ui(self) -> None:
        layout = QHBoxLayout(self)
        layout.setContentsMargins(8, 4, 8, 4)
        layout.setSpacing(4)

        self.btn_smaller = QPushButton("-")
        self.btn_larger = QPushButton("+")
        self.label_size = QLabel()
        self.label_size.setMinimumWidth(44)
        self.label_size.setAlignment(Qt.AlignCenter)

        self.btn_brush = QPushButton("Brush")
        self.btn_region = QPushButton("Region")
        self.btn_none = QPushButton("Off")
        self.tool_group = QButtonGroup(self)
        self.tool_group.setExclusive(True)
        for button, tool in (
            (self.btn_brush, ToolState.BLUR_BRUSH),
            (self.btn_region, ToolState.BLUR_REGION),
            (self.btn_none, ToolState.NONE),
        ):
            button.setCheckable(True)
            button.setProperty("tool", tool)
            self.tool_group.addButton(button)

        self.btn_copy = QPushButton("Copy")
        self.btn_download = QPushButton("Save")

        for button in (self.btn_smaller, self.btn_larger, self.btn_brush, self.btn_region,
                       self.btn_none, self.btn_copy, self.btn_download):
            button.setCursor(Qt.PointingHandCursor)
            button.setFocusPolicy(Qt.NoFocus)
            # Disabled buttons would otherwise pass presses up to the frame
            button.setAttribute(Qt.WA_NoMousePropagation, True)

        layout.addWidget(self.btn_smaller)
        layout.addWidget(self.label_size)
        layout.addWidget(self.btn_larger)
        layout.addSpacing(6)
        layout.addWidget(self.btn_brush)
        layout.addWidget(self.btn_region)
        layout.addWidget(self.btn_none)
        layout.addSpacing(6)
        layout.addWidget(self.btn_copy)
        layout.addWidget(self.btn_download)

    def _connect_signals(self) -> None:
        self.btn_smaller.clicked.connect(lambda: self.brushSmaller.emit())
        self.btn_larger.clicked.connect(lambda: self.brushLarger.emit())
        self.tool_group.buttonClicked.connect(
            lambda button: self.toolSelected.emit(button.property("tool"))
        )
        self.btn_copy.clicked.connect(lambda: self.copyRequested.emit())
        self.btn_download.clicked.connect(lambda: self.downloadRequested.emit())

    def set_brush_size(self, diameter: int) -> None:
        self.label_size.setText(f"{diameter}px")
        self.btn_smaller.setEnabled(diameter > BRUSH_MIN_SIZE)
        self.btn_larger.setEnabled(diameter < BRUSH_MAX_SIZE)

    def set_tool(self, tool: ToolState) -> None:
        for button in self.tool_group.buttons():
            button.setChecked(button.property("tool") is tool)

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        self.setCursor(Qt.ClosedHandCursor)
        self.dragPressed.emit(self._in_parent(event))

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        self.dragMoved.emit(self._in_parent(event))

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.LeftButton:
            super().mouseReleaseEvent(event)
            return
        self.setCursor(Qt.OpenHandCursor)
        self.dragReleased.emit(self._in_parent(event))

    def _in_parent(self, event: QMouseEvent) -> QPointF:
        return QPointF(self.mapToParent(event.pos()))
