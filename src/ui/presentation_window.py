"""
Presentation window - full-screen slide view driven by gestures.
"""
from typing import Optional
from PyQt5.QtWidgets import QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton
from PyQt5.QtCore import Qt, QTimer, pyqtSignal
from PyQt5.QtGui import QImage, QPixmap
import numpy as np

from gestures.activity import ActivityMonitor, ActivityState
from gestures.config import UIConfig
from slides.deck import SlideDeck
from .pointer_overlay import PointerOverlay


STATE_LABELS = {
    ActivityState.POINTER: "Pointer mode",
    ActivityState.GESTURE: "Gesture mode",
    ActivityState.IDLE: "Idle",
}


class PresentationWindow(QMainWindow):
    """
    Shows the current slide of a deck.

    Controls:
    - Right/Left arrows or gestures: next/previous slide
    - Home/End: first/last slide
    - Enter/Escape: end the presentation
    - Click: toggle header bar
    - G: toggle gesture control
    """

    gesture_toggled = pyqtSignal(bool)
    presentation_ended = pyqtSignal()

    def __init__(self, deck: SlideDeck, ui_config: Optional[UIConfig] = None,
                 start_index: int = 0, parent=None):
        super().__init__(parent)
        self._deck = deck
        self._ui_config = ui_config or UIConfig()
        self._gestures_enabled = self._ui_config.show_gesture_overlay
        self._activity = ActivityMonitor(timeout_ms=self._ui_config.pointer_timeout_ms)
        self._pixmap: Optional[QPixmap] = None
        self._debug_text = ""

        self.setWindowTitle(deck.title or "Presentation")
        self._setup_ui()

        # Mode indicator refresh
        self._status_timer = QTimer(self)
        self._status_timer.timeout.connect(self._refresh_status)
        self._status_timer.start(100)

        self._deck.start(start_index)
        self._show_current()

    def _setup_ui(self):
        central = QWidget()
        central.setObjectName("CentralWidget")
        central.setStyleSheet("#CentralWidget { background-color: white; }")
        layout = QVBoxLayout(central)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        self.setCentralWidget(central)

        # Header (hidden until the screen is clicked)
        self.header = QWidget()
        self.header.setFixedHeight(47)
        self.header.setStyleSheet("background-color: #232323; color: white;")
        header_layout = QHBoxLayout(self.header)
        header_layout.setContentsMargins(16, 0, 16, 0)
        end_button = QPushButton("End")
        end_button.setStyleSheet("border: 1px solid white; padding: 4px 12px; border-radius: 4px;")
        end_button.clicked.connect(self.end_presentation)
        header_layout.addWidget(end_button)
        self.title_label = QLabel()
        self.title_label.setAlignment(Qt.AlignCenter)
        header_layout.addWidget(self.title_label, 1)
        self.header.hide()
        layout.addWidget(self.header)

        self.slide_label = QLabel()
        self.slide_label.setAlignment(Qt.AlignCenter)
        self.slide_label.setMinimumSize(320, 240)
        layout.addWidget(self.slide_label, 1)

        footer = QWidget()
        footer_layout = QHBoxLayout(footer)
        self.status_label = QLabel()
        self.status_label.setStyleSheet("color: #6b7280;")
        footer_layout.addWidget(self.status_label)
        footer_layout.addStretch(1)
        self.prev_button = QPushButton("←")
        self.prev_button.clicked.connect(self.previous_slide)
        footer_layout.addWidget(self.prev_button)
        self.counter_label = QLabel()
        footer_layout.addWidget(self.counter_label)
        self.next_button = QPushButton("→")
        self.next_button.clicked.connect(self.next_slide)
        footer_layout.addWidget(self.next_button)
        footer_layout.addStretch(1)
        self.webcam_preview = QLabel()
        self.webcam_preview.setFixedSize(160, 120)
        self.webcam_preview.setScaledContents(True)
        self.webcam_preview.setVisible(self._ui_config.debug_overlay)
        footer_layout.addWidget(self.webcam_preview)
        layout.addWidget(footer)

        # Direct child of window, not in layout, to cover the whole slide area
        self.pointer_overlay = PointerOverlay(self._ui_config.pointer_timeout_ms, self)
        self.pointer_overlay.raise_()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.pointer_overlay.setGeometry(self.rect())
        self._render_pixmap()

    # Slide display

    def _show_current(self):
        slide = self._deck.current_slide
        if slide is None:
            self._pixmap = None
            self.slide_label.setText("No slides")
        else:
            pixmap = QPixmap(slide.image_path)
            if pixmap.isNull():
                self._pixmap = None
                self.slide_label.setText(slide.name)
            else:
                self._pixmap = pixmap
            self.title_label.setText(slide.name)
        self._render_pixmap()

        self.counter_label.setText(f"{self._deck.current_index + 1} / {len(self._deck)}")
        self.prev_button.setEnabled(not self._deck.is_first)
        self.next_button.setEnabled(not self._deck.is_last)

    def _render_pixmap(self):
        if self._pixmap is None:
            return
        self.slide_label.setPixmap(self._pixmap.scaled(
            self.slide_label.size(), Qt.KeepAspectRatio, Qt.SmoothTransformation
        ))

    # Navigation slots

    def next_slide(self):
        if self._deck.next_slide():
            self._show_current()

    def previous_slide(self):
        if self._deck.previous_slide():
            self._show_current()

    def go_to(self, index: int):
        if self._deck.go_to(index):
            self._show_current()

    def on_gesture_next(self):
        if self._gestures_enabled:
            self._activity.record_next()
            self.next_slide()

    def on_gesture_previous(self):
        if self._gestures_enabled:
            self._activity.record_prev()
            self.previous_slide()

    def move_pointer(self, x: float, y: float):
        if self._gestures_enabled:
            self._activity.record_pointer(x, y)
            self.pointer_overlay.set_pointer(x, y)

    def end_presentation(self):
        self._deck.end()
        self.presentation_ended.emit()
        self.close()

    def toggle_gestures(self):
        self._gestures_enabled = not self._gestures_enabled
        if not self._gestures_enabled:
            self.pointer_overlay.clear()
        print(f"Gesture control {'ON' if self._gestures_enabled else 'OFF'}")
        self.gesture_toggled.emit(self._gestures_enabled)

    def _refresh_status(self):
        if not self._gestures_enabled:
            self.status_label.setText("Gestures off (G)")
            return
        text = STATE_LABELS[self._activity.state()]
        if self._activity.last_action:
            text += f" | {self._activity.last_action}"
        if self._debug_text:
            text += f" | {self._debug_text}"
        self.status_label.setText(text)

    def set_debug_info(self, info):
        """Show classifier diagnostics next to the mode indicator."""
        dx = f"{info.dx:+.3f}" if info.dx is not None else "-"
        self._debug_text = f"centerX {info.center_x:.3f}  dx {dx}"

    def set_webcam_frame(self, frame: np.ndarray):
        """
        Update the webcam preview with a BGR frame from HandTracker.
        """
        if frame is None:
            self.webcam_preview.clear()
            return
        rgb = frame[:, :, ::-1].copy()
        h, w, ch = rgb.shape
        qimg = QImage(rgb.data, w, h, ch * w, QImage.Format_RGB888)
        self.webcam_preview.setPixmap(QPixmap.fromImage(qimg))

    # Input events

    def keyPressEvent(self, event):
        key = event.key()
        if key == Qt.Key_Right:
            self.next_slide()
        elif key == Qt.Key_Left:
            self.previous_slide()
        elif key == Qt.Key_Home:
            self.go_to(0)
        elif key == Qt.Key_End:
            self.go_to(len(self._deck) - 1)
        elif key in (Qt.Key_Return, Qt.Key_Enter, Qt.Key_Escape):
            self.end_presentation()
        elif key == Qt.Key_G:
            self.toggle_gestures()
        else:
            super().keyPressEvent(event)

    def mousePressEvent(self, event):
        self.header.setVisible(not self.header.isVisible())
        super().mousePressEvent(event)
