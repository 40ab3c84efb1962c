"""
Live gesture settings panel.
"""
from dataclasses import fields, replace
from typing import Dict
from PyQt5.QtWidgets import QWidget, QFormLayout, QDoubleSpinBox, QCheckBox, QLabel
from PyQt5.QtCore import pyqtSignal

from gestures.config import GestureConfig


# field -> (label, min, max, step, decimals)
NUMERIC_FIELDS = {
    'swipe_threshold': ("Swipe threshold", 0.02, 0.3, 0.01, 2),
    'swipe_cooldown': ("Swipe cooldown (ms)", 0, 2000, 50, 0),
    'pointer_throttle': ("Pointer throttle (ms)", 0, 200, 5, 0),
    'pointer_movement_threshold': ("Pointer movement threshold", 0.0, 0.5, 0.005, 3),
    'thumb_direction_threshold': ("Thumb direction threshold", 0.01, 0.2, 0.005, 3),
    'thumb_cooldown': ("Thumb cooldown (ms)", 0, 2000, 50, 0),
    'smoothing_alpha': ("Smoothing α", 0.0, 1.0, 0.05, 2),
}

BOOL_FIELDS = {
    'require_index_only': "Index finger only",
    'enable_thumb_direction': "Thumb-direction navigation",
    'invert_horizontal': "Invert horizontal direction",
    'invert_actions': "Invert prev/next actions",
}


class SettingsPanel(QWidget):
    """
    One editor per GestureConfig field. Every edit emits a new config value;
    nothing is written to disk.
    """

    settings_changed = pyqtSignal(object)  # Emits GestureConfig

    def __init__(self, config: GestureConfig, parent=None):
        super().__init__(parent)
        self._config = config
        self._editors: Dict[str, QWidget] = {}
        self.setWindowTitle("Gesture Settings")

        layout = QFormLayout(self)
        layout.addRow(QLabel("<b>Gesture Debug</b>"))

        for f in fields(GestureConfig):
            value = getattr(config, f.name)
            if f.name in BOOL_FIELDS:
                box = QCheckBox(BOOL_FIELDS[f.name])
                box.setChecked(bool(value))
                box.toggled.connect(lambda checked, name=f.name: self._update(name, checked))
                layout.addRow(box)
                self._editors[f.name] = box
            elif f.name in NUMERIC_FIELDS:
                label, lo, hi, step, decimals = NUMERIC_FIELDS[f.name]
                spin = QDoubleSpinBox()
                spin.setDecimals(decimals)
                # Never clamp a configured value the classifier is already using
                spin.setRange(min(lo, value), max(hi, value))
                spin.setSingleStep(step)
                spin.setValue(float(value))
                spin.valueChanged.connect(lambda v, name=f.name: self._update(name, v))
                layout.addRow(label, spin)
                self._editors[f.name] = spin

    @property
    def config(self) -> GestureConfig:
        return self._config

    def _update(self, name: str, value):
        self._config = replace(self._config, **{name: value})
        self.settings_changed.emit(self._config)
