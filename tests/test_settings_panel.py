import os
import sys
from pathlib import Path
import pytest

pytest.importorskip("PyQt5.QtWidgets")
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Same import root as main.py
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from PyQt5.QtWidgets import QApplication  # noqa: E402
from gestures.config import GestureConfig  # noqa: E402
from ui.settings_panel import SettingsPanel  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QApplication.instance() or QApplication([])
    yield app


def test_out_of_range_values_are_shown_unclamped(qapp):
    config = GestureConfig(swipe_threshold=0.5, swipe_cooldown=5000, smoothing_alpha=1.5)
    panel = SettingsPanel(config)

    assert panel._editors['swipe_threshold'].value() == pytest.approx(0.5)
    assert panel._editors['swipe_cooldown'].value() == 5000
    assert panel._editors['smoothing_alpha'].value() == pytest.approx(1.5)
    assert panel.config == config


def test_edit_emits_replaced_config(qapp):
    panel = SettingsPanel(GestureConfig())
    received = []
    panel.settings_changed.connect(received.append)

    panel._editors['swipe_threshold'].setValue(0.2)
    panel._editors['invert_actions'].setChecked(True)

    assert received[-1].swipe_threshold == pytest.approx(0.2)
    assert received[-1].invert_actions is True
    assert panel.config == received[-1]
