"""Button state tracking and key polling for the engine's input layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

LSTICK_DEADZONE = 0.3
RSTICK_DEADZONE = 0.3
LTRIGGER_DEADZONE = 0.3
RTRIGGER_DEADZONE = 0.3


class Button(IntEnum):
    """Logical input buttons; ANY reflects whether any other button is held."""

    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3
    A = 4
    B = 5
    C = 6
    START = 7
    ANY = 8


@dataclass
class InputData:
    """A snapshot of the eight game buttons."""

    up: bool = False
    down: bool = False
    left: bool = False
    right: bool = False
    A: bool = False
    B: bool = False
    C: bool = False
    start: bool = False


@dataclass
class InputButton:
    """Press/hold state of one button plus its device mappings."""

    press: bool = False
    hold: bool = False
    key_mapping: int = 0
    controller_mapping: int = 0

    def set_held(self) -> None:
        """Mark the button held; it counts as pressed only on the first frame."""
        self.press = not self.hold
        self.hold = True

    def set_released(self) -> None:
        self.press = False
        self.hold = False

    def down(self) -> bool:
        return self.press or self.hold


_FLAG_MAP: tuple[tuple[int, str, Button], ...] = (
    (0x01, "up", Button.UP),
    (0x02, "down", Button.DOWN),
    (0x04, "left", Button.LEFT),
    (0x08, "right", Button.RIGHT),
    (0x10, "A", Button.A),
    (0x20, "B", Button.B),
    (0x40, "C", Button.C),
    (0x80, "start", Button.START),
)

_GAME_BUTTONS = tuple(button for button in Button if button is not Button.ANY)


@dataclass
class InputState:
    """All button states together with touch points and the any-press flag."""

    buttons: dict[Button, InputButton] = field(
        default_factory=lambda: {button: InputButton() for button in Button}
    )
    touch_down: list[bool] = field(default_factory=list)
    any_press: bool = False

    def check_key_press(self, target: InputData, flags: int) -> InputData:
        """Copy the press state of the buttons selected by ``flags`` into ``target``."""
        for flag, attr, button in _FLAG_MAP:
            if flags & flag:
                setattr(target, attr, self.buttons[button].press)
        if flags & 0x80:
            self.any_press = self.buttons[Button.ANY].press or any(self.touch_down)
        return target

    def check_key_down(self, target: InputData, flags: int) -> InputData:
        """Copy the hold state of the buttons selected by ``flags`` into ``target``."""
        for flag, attr, button in _FLAG_MAP:
            if flags & flag:
                setattr(target, attr, self.buttons[button].hold)
        return target

    def update_buttons(self, pressed) -> None:
        """Advance one frame given the game buttons currently pressed."""
        pressed = {Button(button) for button in pressed}
        any_button = self.buttons[Button.ANY]
        for button in _GAME_BUTTONS:
            state = self.buttons[button]
            if button in pressed:
                state.set_held()
                if not any_button.hold:
                    any_button.set_held()
            elif state.hold:
                state.set_released()
        if not any(button in pressed for button in _GAME_BUTTONS):
            any_button.set_released()


def _normalize(value: float, low: float, high: float) -> float:
    return (float(value) - float(low)) / (float(high) - float(low))


def axis_delta(axis: int) -> float:
    """Map a signed 16-bit stick axis onto -1.0 .. 1.0."""
    if axis < 0:
        return -_normalize(-axis, 1, 32768)
    return _normalize(axis, 0, 32767)


def trigger_delta(axis: int) -> float:
    """Map a trigger axis (0 .. 32767) onto 0.0 .. 1.0."""
    return _normalize(axis, 0, 32767)