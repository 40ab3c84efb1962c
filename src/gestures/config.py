"""
Config loader for Gesture Presenter.
Loads YAML configuration with dataclass validation.
"""
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import yaml


@dataclass
class CameraConfig:
    device_id: int = 0
    width: int = 640
    height: int = 480
    fps: int = 30
    mirror: bool = True
    frame_interval_ms: int = 50    # Min spacing between frames sent to MediaPipe


@dataclass
class MediaPipeConfig:
    max_num_hands: int = 1
    min_detection_confidence: float = 0.6
    min_tracking_confidence: float = 0.5


@dataclass(frozen=True)
class GestureConfig:
    """
    Tunables for the gesture classifier.

    Thresholds are fractions of frame width/height, cooldowns and throttle
    are milliseconds. Frozen so a live settings change swaps the whole value.
    """
    swipe_threshold: float = 0.12
    swipe_cooldown: float = 800
    pointer_throttle: float = 30
    smoothing_alpha: float = 0.6     # EMA weight of the new target (1 = no smoothing)
    pointer_movement_threshold: float = 0.12
    require_index_only: bool = False

    # Thumb-direction navigation
    enable_thumb_direction: bool = False
    thumb_direction_threshold: float = 0.08
    thumb_cooldown: float = 800

    # Direction mapping
    invert_horizontal: bool = False
    invert_actions: bool = False


@dataclass
class SlidesConfig:
    directory: str = "presentations"
    title: str = "Presentation"
    max_file_size: int = 50 * 1024 * 1024


@dataclass
class UIConfig:
    fullscreen: bool = True
    show_gesture_overlay: bool = True
    show_settings: bool = False
    pointer_timeout_ms: int = 500
    debug_overlay: bool = False


@dataclass
class Config:
    camera: CameraConfig = field(default_factory=CameraConfig)
    mediapipe: MediaPipeConfig = field(default_factory=MediaPipeConfig)
    gestures: GestureConfig = field(default_factory=GestureConfig)
    slides: SlidesConfig = field(default_factory=SlidesConfig)
    ui: UIConfig = field(default_factory=UIConfig)


def _dict_to_dataclass(cls, data: dict):
    """Convert a dict to a dataclass, ignoring unknown keys."""
    if data is None:
        return cls()
    field_names = {f.name for f in cls.__dataclass_fields__.values()}
    filtered = {k: v for k, v in data.items() if k in field_names}
    return cls(**filtered)


def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config file. If None, uses default config.yaml
                    in project root.

    Returns:
        Config dataclass with all settings.
    """
    if config_path is None:
        # Default to config.yaml in project root
        config_path = Path(__file__).parent.parent.parent / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        # Return defaults if no config file
        return Config()

    with open(config_path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    return Config(
        camera=_dict_to_dataclass(CameraConfig, data.get('camera')),
        mediapipe=_dict_to_dataclass(MediaPipeConfig, data.get('mediapipe')),
        gestures=_dict_to_dataclass(GestureConfig, data.get('gestures')),
        slides=_dict_to_dataclass(SlidesConfig, data.get('slides')),
        ui=_dict_to_dataclass(UIConfig, data.get('ui')),
    )
