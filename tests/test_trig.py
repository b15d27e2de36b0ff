import math

import pytest

from rsdkcore.trig import (
    arc_tan_lookup,
    cos256,
    cos512,
    cos_m,
    sin256,
    sin512,
    sin_m,
)


def test_fixed_points_m():
    assert cos_m(0) == 0x1000
    assert sin_m(0x80) == 0x1000
    assert cos_m(0x100) == -0x1000
    assert sin_m(0x180) == -0x1000
    assert sin_m(0) == 0
    assert cos_m(0x80) == 0


def test_fixed_points_512():
    assert cos512(0) == 0x200
    assert sin512(0x80) == 0x200
    assert cos512(0x100) == -0x200
    assert sin512(0x180) == -0x200
    assert sin512(0x100) == 0
    assert cos512(0x180) == 0


def test_fixed_points_256():
    assert cos256(0) == 0x100
    assert sin256(0x40) == 0x100
    assert cos256(0x80) == -0x100
    assert sin256(0) == 0


@pytest.mark.parametrize("angle", range(0, 0x200, 7))
def test_512_is_periodic(angle):
    assert sin512(angle + 0x200) == sin512(angle)
    assert cos512(angle + 0x400) == cos512(angle)
    assert sin_m(angle + 0x200) == sin_m(angle)


@pytest.mark.parametrize("angle", range(1, 0x100, 5))
def test_negative_angle_mirrors_positive(angle):
    assert sin512(-angle) == sin512(angle)
    assert cos256(-angle) == cos256(angle)


def test_pythagorean_identity_512():
    for angle in range(0x200):
        s, c = sin512(angle), cos512(angle)
        assert abs(math.hypot(s, c) - 512) <= 2


def test_pythagorean_identity_m():
    for angle in range(0x200):
        s, c = sin_m(angle), cos_m(angle)
        assert abs(math.hypot(s, c) - 4096) <= 2


def test_half_turn_negates():
    for angle in range(0x100):
        assert abs(sin512(angle + 0x100) + sin512(angle)) <= 1
        assert abs(cos_m(angle + 0x100) + cos_m(angle)) <= 1


def test_256_table_derives_from_512():
    for angle in range(0x100):
        assert sin256(angle) == sin512(angle * 2) >> 1
        assert cos256(angle) == cos512(angle * 2) >> 1


def test_arc_tan_axes():
    assert arc_tan_lookup(5, 0) == 0
    assert arc_tan_lookup(0, 0) == 0x80


def test_arc_tan_range():
    for x in range(-300, 301, 37):
        for y in range(-300, 301, 41):
            assert 0 <= arc_tan_lookup(x, y) <= 0xFF


@pytest.mark.parametrize("x, y", [(3, 7), (100, 50), (12, 200), (255, 1)])
def test_arc_tan_opposite_is_half_turn(x, y):
    assert (arc_tan_lookup(-x, -y) - arc_tan_lookup(x, y)) & 0xFF == 0x80


@pytest.mark.parametrize("x, y", [(100, 50), (40, 200), (255, 17)])
def test_arc_tan_scale_invariance(x, y):
    assert arc_tan_lookup(x * 16, y * 16) == arc_tan_lookup(x, y)


def test_arc_tan_monotonic_in_first_quadrant():
    values = [arc_tan_lookup(100, y) for y in range(1, 101)]
    assert values == sorted(values)
    assert values[0] < values[-1]