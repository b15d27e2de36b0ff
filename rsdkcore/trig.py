"""Fixed-point trigonometry lookup tables."""

from __future__ import annotations

import math
import struct


def _f32(value: float) -> float:
    return struct.unpack("f", struct.pack("f", value))[0]


_ATAN_SCALE = _f32(40.743664)


def _build_m_tables() -> tuple[tuple[int, ...], tuple[int, ...]]:
    sin_m = [int(math.sin((i / 256.0) * math.pi) * 4096.0) for i in range(0x200)]
    cos_m = [int(math.cos((i / 256.0) * math.pi) * 4096.0) for i in range(0x200)]
    cos_m[0x00], cos_m[0x80], cos_m[0x100], cos_m[0x180] = 0x1000, 0, -0x1000, 0
    sin_m[0x00], sin_m[0x80], sin_m[0x100], sin_m[0x180] = 0, 0x1000, 0, -0x1000
    return tuple(sin_m), tuple(cos_m)


def _build_512_tables() -> tuple[tuple[int, ...], tuple[int, ...]]:
    args = [_f32((i / 256.0) * math.pi) for i in range(0x200)]
    sin512 = [int(_f32(math.sin(a)) * 512.0) for a in args]
    cos512 = [int(_f32(math.cos(a)) * 512.0) for a in args]
    cos512[0x00], cos512[0x80], cos512[0x100], cos512[0x180] = 0x200, 0, -0x200, 0
    sin512[0x00], sin512[0x80], sin512[0x100], sin512[0x180] = 0, 0x200, 0, -0x200
    return tuple(sin512), tuple(cos512)


def _build_arc_tan_table() -> bytes:
    table = bytearray(0x10000)
    for x in range(0x100):
        for y in range(0x100):
            angle = _f32(math.atan2(y, x))
            table[(x << 8) + y] = int(_f32(angle * _ATAN_SCALE)) & 0xFF
    return bytes(table)


_SIN_M, _COS_M = _build_m_tables()
_SIN_512, _COS_512 = _build_512_tables()
_SIN_256 = tuple(value >> 1 for value in _SIN_512[::2])
_COS_256 = tuple(value >> 1 for value in _COS_512[::2])
_ARC_TAN_256 = _build_arc_tan_table()


def _wrap(angle: int, size: int) -> int:
    if angle < 0:
        angle = size - angle
    return angle & (size - 1)


def sin_m(angle: int) -> int:
    """Sine of a 512-step angle, scaled by 4096."""
    return _SIN_M[_wrap(angle, 0x200)]


def cos_m(angle: int) -> int:
    """Cosine of a 512-step angle, scaled by 4096."""
    return _COS_M[_wrap(angle, 0x200)]


def sin512(angle: int) -> int:
    """Sine of a 512-step angle, scaled by 512."""
    return _SIN_512[_wrap(angle, 0x200)]


def cos512(angle: int) -> int:
    """Cosine of a 512-step angle, scaled by 512."""
    return _COS_512[_wrap(angle, 0x200)]


def sin256(angle: int) -> int:
    """Sine of a 256-step angle, scaled by 256."""
    return _SIN_256[_wrap(angle, 0x100)]


def cos256(angle: int) -> int:
    """Cosine of a 256-step angle, scaled by 256."""
    return _COS_256[_wrap(angle, 0x100)]


def arc_tan_lookup(x: int, y: int) -> int:
    """Angle of the vector (x, y) as a byte, 256 steps per turn."""
    ax, ay = abs(x), abs(y)
    if ax <= ay:
        while ay > 0xFF:
            ax >>= 4
            ay >>= 4
    else:
        while ax > 0xFF:
            ax >>= 4
            ay >>= 4
    value = _ARC_TAN_256[(ax << 8) + ay]
    if x <= 0:
        if y <= 0:
            return (value - 0x80) & 0xFF
        return (-0x80 - value) & 0xFF
    if y <= 0:
        return (-value) & 0xFF
    return value