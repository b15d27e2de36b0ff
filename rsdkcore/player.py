"""Player records and per-frame control handling, including sidekick delay."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional

from rsdkcore.controls import InputData

PLAYER_COUNT = 2

_MASK16 = 0xFFFF


class ControlMode(IntEnum):
    """Where a player's control inputs come from."""

    NONE = -1
    NORMAL = 0
    SIDEKICK = 1


@dataclass
class Player:
    """State of one player character."""

    entity_no: int = 0
    x_pos: int = 0
    y_pos: int = 0
    x_velocity: int = 0
    y_velocity: int = 0
    speed: int = 0
    screen_x_pos: int = 0
    screen_y_pos: int = 0
    angle: int = 0
    timer: int = 0
    look_pos: int = 0
    values: list[int] = field(default_factory=lambda: [0] * 8)
    collision_mode: int = 0
    skidding: int = 0
    pushing: int = 0
    collision_plane: int = 0
    control_mode: int = ControlMode.NORMAL
    control_lock: int = 0
    top_speed: int = 0
    acceleration: int = 0
    deceleration: int = 0
    air_acceleration: int = 0
    air_deceleration: int = 0
    gravity_strength: int = 0
    jump_strength: int = 0
    jump_cap: int = 0
    rolling_acceleration: int = 0
    rolling_deceleration: int = 0
    visible: int = 0
    tile_collisions: int = 0
    object_interactions: int = 0
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    jump_press: bool = False
    jump_hold: bool = False
    follow_player1: int = 0
    track_scroll: int = 0
    gravity: int = 0
    water: int = 0
    flailing: list[int] = field(default_factory=lambda: [0] * 3)
    animation_file: Optional[object] = None
    bound_entity: Optional[object] = None


@dataclass
class ControlBuffers:
    """Sixteen-frame histories of the lead player's inputs."""

    up: int = 0
    down: int = 0
    left: int = 0
    right: int = 0
    jump_press: int = 0
    jump_hold: int = 0

    _FIELDS = ("up", "down", "left", "right", "jump_press", "jump_hold")

    def push(self, player: Player) -> None:
        """Record the player's current inputs as the newest frame."""
        for name in self._FIELDS:
            bit = 1 if getattr(player, name) else 0
            setattr(self, name, ((getattr(self, name) << 1) | bit) & _MASK16)

    def delayed(self) -> tuple[bool, bool, bool, bool, bool, bool]:
        """Inputs from sixteen frames ago: up, down, left, right, jump_press, jump_hold."""
        return tuple(bool(getattr(self, name) >> 15) for name in self._FIELDS)


def process_player_control(
    player: Player,
    key_down: InputData,
    key_press: InputData,
    buffers: ControlBuffers,
) -> None:
    """Update a player's inputs for this frame according to its control mode."""
    mode = player.control_mode
    if mode == ControlMode.NONE:
        buffers.push(player)
    elif mode == ControlMode.SIDEKICK:
        (
            player.up,
            player.down,
            player.left,
            player.right,
            player.jump_press,
            player.jump_hold,
        ) = buffers.delayed()
    else:
        player.up = key_down.up
        player.down = key_down.down
        if not key_down.left or not key_down.right:
            player.left = key_down.left
            player.right = key_down.right
        else:
            player.left = False
            player.right = False
        player.jump_hold = key_down.C or key_down.B or key_down.A
        player.jump_press = key_press.C or key_press.B or key_press.A
        buffers.push(player)