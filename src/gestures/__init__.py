"""
Gesture Presenter core module

Configuration, landmark types and the gesture classifier.
"""
from .config import Config, GestureConfig, load_config
from .landmarks import Landmark, HandLandmarks, HAND_CONNECTIONS
from .classifier import GestureClassifier, GestureCallbacks, DebugInfo, Pointer
from .activity import ActivityMonitor, ActivityState

__all__ = [
    'Config',
    'GestureConfig',
    'load_config',
    'Landmark',
    'HandLandmarks',
    'HAND_CONNECTIONS',
    'GestureClassifier',
    'GestureCallbacks',
    'DebugInfo',
    'Pointer',
    'ActivityMonitor',
    'ActivityState',
]
