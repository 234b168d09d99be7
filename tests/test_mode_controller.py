import math

import pytest

from waterdots import config
from waterdots.core.mode_controller import ModeController


def test_initial_state_is_idle():
    mode = ModeController()
    assert mode.scroll_velocity == 0.0
    assert mode.pointer_position == (config.FAR_AWAY, config.FAR_AWAY)
    assert not mode.is_scrolling
    assert not mode.interaction_active(0.0)
    assert not mode.flow_active(1e9)


def test_scroll_sets_velocity_and_opens_window():
    mode = ModeController()
    mode.on_scroll(-12.5, now=1000.0)
    assert mode.scroll_velocity == -12.5
    assert mode.scroll_speed == 12.5
    assert mode.is_scrolling
    assert mode.interaction_active(1000.0)
    assert mode.interaction_active(1179.0)
    assert not mode.interaction_active(1180.0)


def test_pointer_move_records_position_and_window():
    mode = ModeController()
    mode.on_pointer_move(40, 12, now=500.0)
    assert mode.pointer_position == (40.0, 12.0)
    assert mode.interaction_active(600.0)
    assert not mode.is_scrolling
    assert mode.flow_active(600.0)
    assert not mode.flow_active(700.0)


def test_touch_moves_pointer_without_interaction():
    mode = ModeController()
    mode.on_touch_move(3, 4)
    assert mode.pointer_position == (3.0, 4.0)
    assert not mode.interaction_active(0.0)


def test_decay_settles_scroll_velocity():
    mode = ModeController()
    mode.on_scroll(10.0, now=0.0)
    mode.decay()
    assert mode.scroll_velocity == pytest.approx(9.0)
    for _ in range(60):
        mode.decay()
    assert not mode.is_scrolling


def test_scroll_threshold_is_exclusive():
    mode = ModeController()
    mode.on_scroll(config.SCROLL_THRESHOLD, now=0.0)
    assert not mode.is_scrolling
    mode.on_scroll(config.SCROLL_THRESHOLD + 1e-9, now=0.0)
    assert mode.is_scrolling


@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_non_finite_input_is_ignored(value):
    mode = ModeController()
    mode.on_scroll(value, now=10.0)
    mode.on_pointer_move(value, 5.0, now=10.0)
    mode.on_touch_move(1.0, value)
    assert mode.scroll_velocity == 0.0
    assert mode.pointer_position == (config.FAR_AWAY, config.FAR_AWAY)
    assert not mode.interaction_active(10.0)
