"""
Interaction mode indicator (idle / pointer / gesture).
"""
from enum import Enum
from typing import Callable, Optional, Tuple
import time


class ActivityState(Enum):
    IDLE = "idle"
    POINTER = "pointer"
    GESTURE = "gesture"


class ActivityMonitor:
    """
    Derives the current interaction mode from the time of the last
    pointer and navigation events. Pointer activity wins over gestures.
    """

    def __init__(self, timeout_ms: float = 500,
                 clock: Callable[[], float] = time.perf_counter):
        self.timeout_ms = timeout_ms
        self._clock = clock
        self._last_pointer_time: Optional[float] = None
        self._last_gesture_time: Optional[float] = None
        self.last_action = ""
        self.pointer: Optional[Tuple[float, float]] = None

    def _now(self) -> float:
        return self._clock() * 1000.0

    def record_next(self, now: Optional[float] = None) -> None:
        self.last_action = "Next slide"
        self._last_gesture_time = self._now() if now is None else now

    def record_prev(self, now: Optional[float] = None) -> None:
        self.last_action = "Prev slide"
        self._last_gesture_time = self._now() if now is None else now

    def record_pointer(self, x: float, y: float, now: Optional[float] = None) -> None:
        self.pointer = (x, y)
        self.last_action = "Pointer"
        self._last_pointer_time = self._now() if now is None else now

    def _active(self, last: Optional[float], now: float) -> bool:
        return last is not None and now - last < self.timeout_ms

    def state(self, now: Optional[float] = None) -> ActivityState:
        if now is None:
            now = self._now()
        if self._active(self._last_pointer_time, now):
            return ActivityState.POINTER
        if self._active(self._last_gesture_time, now):
            return ActivityState.GESTURE
        return ActivityState.IDLE

    def clear(self) -> None:
        self.last_action = ""
        self.pointer = None
        self._last_pointer_time = None
        self._last_gesture_time = None
