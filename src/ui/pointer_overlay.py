"""
Transparent overlay that draws the gesture pointer.
"""
from typing import Optional, Tuple
from PyQt5.QtWidgets import QWidget
from PyQt5.QtCore import Qt, QPoint, QTimer
from PyQt5.QtGui import QPainter, QColor, QPen


class PointerOverlay(QWidget):
    """Draws a dot at the normalized pointer position; hides it when stale."""

    def __init__(self, timeout_ms: int = 500, parent=None):
        super().__init__(parent)
        self.setAttribute(Qt.WA_TransparentForMouseEvents)
        self.setAttribute(Qt.WA_TranslucentBackground)
        self._pointer: Optional[Tuple[float, float]] = None

        # Pointer disappears when no update arrives within the timeout
        self._hide_timer = QTimer(self)
        self._hide_timer.setSingleShot(True)
        self._hide_timer.setInterval(timeout_ms)
        self._hide_timer.timeout.connect(self.clear)

    def set_pointer(self, x: float, y: float):
        self._pointer = (x, y)
        self._hide_timer.start()
        self.update()

    def clear(self):
        self._pointer = None
        self.update()

    def paintEvent(self, event):
        if self._pointer is None:
            return
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing)

        x, y = self._pointer
        px, py = int(x * self.width()), int(y * self.height())

        painter.setBrush(QColor(239, 68, 68, 200))
        painter.setPen(QPen(QColor(255, 255, 255, 220), 2))
        painter.drawEllipse(QPoint(px, py), 12, 12)
