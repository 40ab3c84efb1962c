"""
Gesture Presenter Webcam Module

Hand tracking using MediaPipe and the background detection loop.
"""
from .hand_tracker import HandTracker
from .worker import WebcamWorker

__all__ = [
    'HandTracker',
    'WebcamWorker',
]
