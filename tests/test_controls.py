import pytest

from rsdkcore.controls import (
    LSTICK_DEADZONE,
    Button,
    InputButton,
    InputData,
    InputState,
    axis_delta,
    trigger_delta,
)


def test_set_held_presses_only_first_frame():
    button = InputButton()
    button.set_held()
    assert (button.press, button.hold) == (True, True)
    button.set_held()
    assert (button.press, button.hold) == (False, True)


def test_set_released_clears_state():
    button = InputButton(press=True, hold=True)
    button.set_released()
    assert (button.press, button.hold) == (False, False)
    assert button.down() is False


def test_down_is_press_or_hold():
    assert InputButton(press=True).down() is True
    assert InputButton(hold=True).down() is True
    assert InputButton().down() is False


def test_update_buttons_press_then_hold():
    state = InputState()
    state.update_buttons([Button.A])
    assert state.buttons[Button.A].press is True
    assert state.buttons[Button.ANY].hold is True
    state.update_buttons([Button.A])
    assert state.buttons[Button.A].press is False
    assert state.buttons[Button.A].hold is True


def test_update_buttons_release():
    state = InputState()
    state.update_buttons([Button.UP, Button.B])
    state.update_buttons([Button.B])
    assert state.buttons[Button.UP].down() is False
    assert state.buttons[Button.B].hold is True
    state.update_buttons([])
    assert state.buttons[Button.B].down() is False
    assert state.buttons[Button.ANY].down() is False


def test_check_key_press_only_selected_flags():
    state = InputState()
    state.update_buttons([Button.UP, Button.START])
    target = InputData(down=True)
    result = state.check_key_press(target, 0x01)
    assert result is target
    assert target.up is True
    assert target.start is False
    assert target.down is True


def test_check_key_press_all_flags_sets_any_press():
    state = InputState()
    state.update_buttons([Button.C])
    target = state.check_key_press(InputData(), 0xFF)
    assert target.C is True
    assert target.up is False
    assert state.any_press is True


def test_any_press_from_touch():
    state = InputState(touch_down=[False, True])
    state.check_key_press(InputData(), 0x80)
    assert state.any_press is True
    state.touch_down = [False]
    state.check_key_press(InputData(), 0x80)
    assert state.any_press is False


def test_check_key_down_reads_hold():
    state = InputState()
    state.update_buttons([Button.LEFT])
    state.update_buttons([Button.LEFT])
    pressed = state.check_key_press(InputData(), 0xFF)
    held = state.check_key_down(InputData(), 0xFF)
    assert pressed.left is False
    assert held.left is True
    assert held.right is False


def test_axis_delta_bounds():
    assert axis_delta(0) == 0.0
    assert axis_delta(32767) == 1.0
    assert axis_delta(-32768) == -1.0


def test_axis_delta_monotonic_and_deadzone():
    values = [axis_delta(v) for v in range(-32768, 32768, 1024)]
    assert values == sorted(values)
    assert abs(axis_delta(1000)) < LSTICK_DEADZONE
    assert axis_delta(-30000) < -LSTICK_DEADZONE


def test_trigger_delta_range():
    assert trigger_delta(0) == 0.0
    assert trigger_delta(32767) == 1.0
    assert trigger_delta(16000) == pytest.approx(16000 / 32767)