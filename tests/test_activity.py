import pytest
from src.gestures.activity import ActivityMonitor, ActivityState


@pytest.fixture
def monitor():
    return ActivityMonitor(timeout_ms=500)


def test_idle_without_events(monitor):
    assert monitor.state(now=0) == ActivityState.IDLE
    assert monitor.last_action == ""


def test_navigation_sets_gesture_mode(monitor):
    monitor.record_next(now=1000)
    assert monitor.state(now=1200) == ActivityState.GESTURE
    assert monitor.last_action == "Next slide"

    monitor.record_prev(now=1300)
    assert monitor.last_action == "Prev slide"


def test_modes_time_out(monitor):
    monitor.record_next(now=1000)
    assert monitor.state(now=1500) == ActivityState.IDLE


def test_pointer_wins_over_gesture(monitor):
    monitor.record_next(now=1000)
    monitor.record_pointer(0.25, 0.75, now=1100)

    assert monitor.state(now=1200) == ActivityState.POINTER
    assert monitor.pointer == (0.25, 0.75)
    # Pointer expired, gesture still fresh
    monitor.record_next(now=1400)
    assert monitor.state(now=1650) == ActivityState.GESTURE


def test_clear(monitor):
    monitor.record_pointer(0.5, 0.5, now=0)
    monitor.clear()

    assert monitor.state(now=10) == ActivityState.IDLE
    assert monitor.pointer is None
    assert monitor.last_action == ""
