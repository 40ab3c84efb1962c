"""
Gesture classification from hand landmarks.
Turns a stream of per-frame observations into next/previous navigation
events and a smoothed pointer position.
"""
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, NamedTuple, Optional, Sequence, Tuple, Union
import time

from .config import GestureConfig
from .landmarks import HandLandmarks, FOLDED_FINGERS, as_landmark


HISTORY_SIZE = 30        # Center-x samples kept for swipe estimation
SWIPE_WINDOW = 5         # Samples per averaged window (recent vs earlier)
FINGER_SLACK = 0.03      # Tip must be this far above its pip to count as extended


class Pointer(NamedTuple):
    """Pointer position, normalized 0-1."""
    x: float
    y: float


@dataclass
class DebugInfo:
    """Per-frame diagnostics."""
    center_x: float
    dx: Optional[float] = None
    pointer: Optional[Pointer] = None


@dataclass
class GestureCallbacks:
    """
    Notification channels invoked synchronously from process_frame.
    Any of them may be None.
    """
    on_next: Optional[Callable[[], None]] = None
    on_prev: Optional[Callable[[], None]] = None
    on_pointer_move: Optional[Callable[[Pointer], None]] = None
    on_debug: Optional[Callable[[DebugInfo], None]] = None


Observation = Union[HandLandmarks, Sequence, None]


def _clamp(v: float, lo: float = 0.0, hi: float = 1.0) -> float:
    return max(lo, min(hi, v))


class GestureClassifier:
    """
    Classifies hand landmarks into slide navigation and pointer updates.

    Gestures detected:
    - Swipe: net horizontal displacement of the hand center between two
      adjacent 5-sample windows
    - Thumb direction: thumb tip offset from its base joint (optional)
    - Pointer: index finger extended (optionally with the others folded)

    Swipe and thumb detection share a single navigation cooldown clock.
    Call process_frame once per delivered detection frame from a single loop.
    """

    def __init__(self, config: Optional[GestureConfig] = None,
                 clock: Callable[[], float] = time.perf_counter):
        """
        Initialize gesture classifier.

        Args:
            config: Default thresholds, used when process_frame gets none
            clock: Monotonic clock in seconds
        """
        self._config = config or GestureConfig()
        self._clock = clock

        # (center_x, timestamp_ms) samples
        self._history: Deque[Tuple[float, float]] = deque(maxlen=HISTORY_SIZE)

        # Shared by swipe and thumb detection
        self._last_navigation_time: Optional[float] = None
        self._last_pointer_time: Optional[float] = None
        self._pointer: Optional[Pointer] = None

    @property
    def config(self) -> GestureConfig:
        return self._config

    @config.setter
    def config(self, config: GestureConfig) -> None:
        self._config = config

    @property
    def history(self) -> Tuple[Tuple[float, float], ...]:
        return tuple(self._history)

    @property
    def pointer(self) -> Optional[Pointer]:
        """Last emitted (smoothed) pointer, or None."""
        return self._pointer

    def process_frame(
        self,
        observation: Observation,
        config: Optional[GestureConfig] = None,
        callbacks: Optional[GestureCallbacks] = None,
        now: Optional[float] = None,
    ) -> None:
        """
        Process one detection frame.

        Args:
            observation: 21 landmarks for one hand, or None when no hand is seen
            config: Thresholds for this frame (defaults to the classifier's own)
            callbacks: Event sinks
            now: Frame time in milliseconds (defaults to the monotonic clock)
        """
        hand = self._coerce(observation)
        if hand is None:
            return

        cfg = config if config is not None else self._config
        callbacks = callbacks or GestureCallbacks()
        if now is None:
            now = self._clock() * 1000.0

        # 1. Center tracking
        center_x = hand.center_x
        self._history.append((center_x, now))

        # 2. Swipe detection
        dx = self._horizontal_displacement()
        navigated = False
        if dx is not None:
            navigated = self._detect_swipe(dx, cfg, callbacks, now)

        # 3. Thumb direction
        if cfg.enable_thumb_direction and not navigated:
            navigated = self._detect_thumb_direction(hand, cfg, callbacks, now)

        # 4. Pointer
        if not navigated and callbacks.on_pointer_move is not None:
            pointer = self._detect_pointer(hand, dx, cfg, now)
            if pointer is not None:
                callbacks.on_pointer_move(pointer)

        # 5. Diagnostics
        if callbacks.on_debug is not None:
            callbacks.on_debug(DebugInfo(center_x=center_x, dx=dx, pointer=self._pointer))

    def reset(self) -> None:
        """Drop history, pointer and cooldown state."""
        self._history.clear()
        self._last_navigation_time = None
        self._last_pointer_time = None
        self._pointer = None

    @staticmethod
    def _coerce(observation: Observation) -> Optional[HandLandmarks]:
        if observation is None:
            return None
        if isinstance(observation, HandLandmarks):
            hand = observation
        else:
            try:
                if len(observation) < HandLandmarks.NUM_LANDMARKS:
                    return None
                hand = HandLandmarks([as_landmark(p) for p in observation])
            except (TypeError, ValueError, KeyError, IndexError):
                # Malformed point anywhere drops the whole frame
                return None
        if not hand.is_complete:
            return None
        return hand

    def _horizontal_displacement(self) -> Optional[float]:
        """Mean x of the last window minus mean x of the window before it."""
        if len(self._history) < 2 * SWIPE_WINDOW:
            return None
        samples = list(self._history)[-2 * SWIPE_WINDOW:]
        earlier = samples[:SWIPE_WINDOW]
        recent = samples[SWIPE_WINDOW:]
        avg_earlier = sum(x for x, _ in earlier) / SWIPE_WINDOW
        avg_recent = sum(x for x, _ in recent) / SWIPE_WINDOW
        return avg_recent - avg_earlier

    def _cooldown_elapsed(self, now: float, cooldown: float) -> bool:
        if self._last_navigation_time is None:
            return True
        return now - self._last_navigation_time > cooldown

    def _detect_swipe(self, dx: float, cfg: GestureConfig,
                      callbacks: GestureCallbacks, now: float) -> bool:
        if cfg.invert_horizontal:
            dx = -dx
        if not self._cooldown_elapsed(now, cfg.swipe_cooldown):
            return False
        if dx > cfg.swipe_threshold:
            self._navigate(True, cfg, callbacks, now)
            return True
        if dx < -cfg.swipe_threshold:
            self._navigate(False, cfg, callbacks, now)
            return True
        return False

    def _detect_thumb_direction(self, hand: HandLandmarks, cfg: GestureConfig,
                                callbacks: GestureCallbacks, now: float) -> bool:
        dx_thumb = hand.thumb_tip.x - hand.thumb_base.x
        if cfg.invert_horizontal:
            dx_thumb = -dx_thumb
        # The shared window never closes earlier than the swipe cooldown
        cooldown = max(cfg.thumb_cooldown, cfg.swipe_cooldown)
        if not self._cooldown_elapsed(now, cooldown):
            return False
        if dx_thumb > cfg.thumb_direction_threshold:
            self._navigate(True, cfg, callbacks, now)
            return True
        if dx_thumb < -cfg.thumb_direction_threshold:
            self._navigate(False, cfg, callbacks, now)
            return True
        return False

    def _navigate(self, forward: bool, cfg: GestureConfig,
                  callbacks: GestureCallbacks, now: float) -> None:
        self._last_navigation_time = now
        if cfg.invert_actions:
            forward = not forward
        handler = callbacks.on_next if forward else callbacks.on_prev
        if handler is not None:
            handler()

    @staticmethod
    def _is_extended(hand: HandLandmarks, tip_idx: int, pip_idx: int) -> bool:
        # Smaller y is higher in the image
        return hand.get(tip_idx).y < hand.get(pip_idx).y - FINGER_SLACK

    def _is_pointing(self, hand: HandLandmarks, cfg: GestureConfig) -> bool:
        if not self._is_extended(hand, HandLandmarks.INDEX_TIP, HandLandmarks.INDEX_PIP):
            return False
        if cfg.require_index_only:
            return not any(self._is_extended(hand, tip, pip) for tip, pip in FOLDED_FINGERS)
        return True

    def _detect_pointer(self, hand: HandLandmarks, dx: Optional[float],
                        cfg: GestureConfig, now: float) -> Optional[Pointer]:
        if not self._is_pointing(hand, cfg):
            return None

        # Hand is mid-swipe. dx is None until the history fills up.
        if dx is not None and abs(dx) > cfg.pointer_movement_threshold:
            return None

        if (self._last_pointer_time is not None
                and now - self._last_pointer_time < cfg.pointer_throttle):
            return None
        self._last_pointer_time = now

        tip = hand.index_tip
        target = Pointer(_clamp(tip.x), _clamp(tip.y))

        prev = self._pointer
        if prev is None:
            smoothed = target
        else:
            alpha = cfg.smoothing_alpha
            smoothed = Pointer(
                _clamp(prev.x * (1.0 - alpha) + target.x * alpha),
                _clamp(prev.y * (1.0 - alpha) + target.y * alpha),
            )

        self._pointer = smoothed
        return smoothed
