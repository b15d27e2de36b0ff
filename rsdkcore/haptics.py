"""Haptic effect identifiers and the one-slot queue the engine hands out."""

from __future__ import annotations

from enum import IntEnum


class HapticID(IntEnum):
    """Effect ids of the haptic effect library, plus the two special values."""

    NONE = -2
    STOP = -1
    SHARP_CLICK_100 = 0
    SHARP_CLICK_66 = 1
    SHARP_CLICK_33 = 2
    STRONG_CLICK_100 = 3
    STRONG_CLICK_66 = 4
    STRONG_CLICK_33 = 5
    BUMP_100 = 6
    BUMP_66 = 7
    BUMP_33 = 8
    BOUNCE_100 = 9
    BOUNCE_66 = 10
    BOUNCE_33 = 11
    DOUBLE_SHARP_CLICK_100 = 12
    DOUBLE_SHARP_CLICK_66 = 13
    DOUBLE_SHARP_CLICK_33 = 14
    DOUBLE_STRONG_CLICK_100 = 15
    DOUBLE_STRONG_CLICK_66 = 16
    DOUBLE_STRONG_CLICK_33 = 17
    DOUBLE_BUMP_100 = 18
    DOUBLE_BUMP_66 = 19
    DOUBLE_BUMP_33 = 20
    TRIPLE_STRONG_CLICK_100 = 21
    TRIPLE_STRONG_CLICK_66 = 22
    TRIPLE_STRONG_CLICK_33 = 23
    TICK_100 = 24
    TICK_66 = 25
    TICK_33 = 26
    LONG_BUZZ_100 = 27
    LONG_BUZZ_66 = 28
    LONG_BUZZ_33 = 29
    SHORT_BUZZ_100 = 30
    SHORT_BUZZ_66 = 31
    SHORT_BUZZ_33 = 32
    LONG_TRANSITION_RAMP_UP_100 = 33
    LONG_TRANSITION_RAMP_UP_66 = 34
    LONG_TRANSITION_RAMP_UP_33 = 35
    SHORT_TRANSITION_RAMP_UP_100 = 36
    SHORT_TRANSITION_RAMP_UP_66 = 37
    SHORT_TRANSITION_RAMP_UP_33 = 38
    LONG_TRANSITION_RAMP_DOWN_100 = 39
    LONG_TRANSITION_RAMP_DOWN_66 = 40
    LONG_TRANSITION_RAMP_DOWN_33 = 41
    SHORT_TRANSITION_RAMP_DOWN_100 = 42
    SHORT_TRANSITION_RAMP_DOWN_66 = 43
    SHORT_TRANSITION_RAMP_DOWN_33 = 44
    FAST_PULSE_100 = 45
    FAST_PULSE_66 = 46
    FAST_PULSE_33 = 47
    FAST_PULSING_100 = 48
    FAST_PULSING_66 = 49
    FAST_PULSING_33 = 50
    SLOW_PULSE_100 = 51
    SLOW_PULSE_66 = 52
    SLOW_PULSE_33 = 53
    SLOW_PULSING_100 = 54
    SLOW_PULSING_66 = 55
    SLOW_PULSING_33 = 56
    TRANSITION_BUMP_100 = 57
    TRANSITION_BUMP_66 = 58
    TRANSITION_BUMP_33 = 59
    TRANSITION_BOUNCE_100 = 60
    TRANSITION_BOUNCE_66 = 61
    TRANSITION_BOUNCE_33 = 62
    ALERT1 = 63
    ALERT2 = 64
    ALERT3 = 65
    ALERT4 = 66
    ALERT5 = 67
    ALERT6 = 68
    ALERT7 = 69
    ALERT8 = 70
    ALERT9 = 71
    ALERT10 = 72
    EXPLOSION1 = 73
    EXPLOSION2 = 74
    EXPLOSION3 = 75
    EXPLOSION4 = 76
    EXPLOSION5 = 77
    EXPLOSION6 = 78
    EXPLOSION7 = 79
    EXPLOSION8 = 80
    EXPLOSION9 = 81
    EXPLOSION10 = 82
    WEAPON1 = 83
    WEAPON2 = 84
    WEAPON3 = 85
    WEAPON4 = 86
    WEAPON5 = 87
    WEAPON6 = 88
    WEAPON7 = 89
    WEAPON8 = 90
    WEAPON9 = 91
    WEAPON10 = 92
    IMPACT_WOOD_100 = 93
    IMPACT_WOOD_66 = 94
    IMPACT_WOOD_33 = 95
    IMPACT_METAL_100 = 96
    IMPACT_METAL_66 = 97
    IMPACT_METAL_33 = 98
    IMPACT_RUBBER_100 = 99
    IMPACT_RUBBER_66 = 100
    IMPACT_RUBBER_33 = 101
    TEXTURE1 = 102
    TEXTURE2 = 103
    TEXTURE3 = 104
    TEXTURE4 = 105
    TEXTURE5 = 106
    TEXTURE6 = 107
    TEXTURE7 = 108
    TEXTURE8 = 109
    TEXTURE9 = 110
    TEXTURE10 = 111
    ENGINE1_100 = 112
    ENGINE1_66 = 113
    ENGINE1_33 = 114
    ENGINE2_100 = 115
    ENGINE2_66 = 116
    ENGINE2_33 = 117
    ENGINE3_100 = 118
    ENGINE3_66 = 119
    ENGINE3_33 = 120
    ENGINE4_100 = 121
    ENGINE4_66 = 122
    ENGINE4_33 = 123


class HapticQueue:
    """Holds the most recently requested haptic effect until it is taken."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self.pending: int = HapticID.NONE

    def queue(self, haptic_id: int) -> None:
        """Request an effect; ignored while haptics are disabled."""
        if self.enabled:
            self.pending = int(haptic_id)

    def take(self) -> int:
        """Return the pending effect and clear the slot."""
        pending = self.pending
        self.pending = HapticID.NONE
        return pending