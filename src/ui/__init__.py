"""
Gesture Presenter UI Module

PyQt5 presentation window and live settings panel.
"""
from .pointer_overlay import PointerOverlay
from .presentation_window import PresentationWindow
from .settings_panel import SettingsPanel

__all__ = [
    'PointerOverlay',
    'PresentationWindow',
    'SettingsPanel',
]
