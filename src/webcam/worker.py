"""
Background worker for MediaPipe hand tracking and gesture classification.
Runs in a separate QThread to avoid blocking the UI.
"""
import time
from typing import Optional
from PyQt5.QtCore import QObject, pyqtSignal

from gestures.classifier import GestureClassifier, GestureCallbacks, DebugInfo, Pointer
from gestures.config import Config, GestureConfig
from .hand_tracker import HandTracker


class WebcamWorker(QObject):
    """
    Worker class that owns the detection loop.
    Each delivered frame goes through the classifier exactly once, in order.
    """
    # Signals
    navigate_next = pyqtSignal()
    navigate_previous = pyqtSignal()
    pointer_moved = pyqtSignal(float, float)
    debug_info = pyqtSignal(object)   # Emits DebugInfo
    frame_ready = pyqtSignal(object)  # Emits numpy array (BGR frame with landmarks)
    error = pyqtSignal(str)

    def __init__(self, config: Config, parent=None):
        super().__init__(parent)
        self._config = config
        self._gesture_config: GestureConfig = config.gestures
        self._tracker: Optional[HandTracker] = None
        self._classifier = GestureClassifier(config.gestures)
        self._is_running = False
        self._enabled = True

        self._callbacks = GestureCallbacks(
            on_next=self.navigate_next.emit,
            on_prev=self.navigate_previous.emit,
            on_pointer_move=self._emit_pointer,
            on_debug=self._emit_debug if config.ui.debug_overlay else None,
        )

    def _emit_pointer(self, pointer: Pointer):
        self.pointer_moved.emit(pointer.x, pointer.y)

    def _emit_debug(self, info: DebugInfo):
        self.debug_info.emit(info)

    def update_gesture_config(self, config: GestureConfig):
        """Swap thresholds; picked up on the next frame."""
        self._gesture_config = config

    def set_enabled(self, enabled: bool):
        """Pause or resume classification. Frames keep being captured."""
        self._enabled = enabled

    def start_process(self):
        """Main processing loop. Runs in worker thread."""
        self._tracker = HandTracker(self._config)

        if not self._tracker.start():
            self.error.emit("Could not open camera")
            return

        self._is_running = True
        min_interval = self._config.camera.frame_interval_ms / 1000.0
        frame_interval = 1.0 / 5  # Low FPS for landmarks preview
        last_frame_time = 0.0

        try:
            while self._is_running:
                loop_start = time.perf_counter()

                landmarks = self._tracker.get_landmarks()

                if self._enabled:
                    # Config is read once per frame
                    self._classifier.process_frame(
                        landmarks, self._gesture_config, self._callbacks
                    )
                elif self._classifier.history:
                    # Paused: resume from an empty window
                    self._classifier.reset()

                if self._config.ui.debug_overlay and landmarks is not None:
                    now = time.perf_counter()
                    if now - last_frame_time >= frame_interval:
                        frame = self._tracker.get_frame_with_landmarks(landmarks, black_background=True)
                        if frame is not None:
                            self.frame_ready.emit(frame)
                        last_frame_time = now

                elapsed = time.perf_counter() - loop_start
                sleep_time = min_interval - elapsed
                if sleep_time > 0:
                    time.sleep(sleep_time)

        except Exception as e:
            self.error.emit(f"Worker Exception: {str(e)}")
        finally:
            self._is_running = False
            if self._tracker:
                self._tracker.stop()

    def stop_process(self):
        """Signal the loop to stop and release resources in worker thread."""
        self._is_running = False
