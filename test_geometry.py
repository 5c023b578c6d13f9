#!/usr/bin/env python3
"""
Tests for the vector and screen-wrap helpers
"""

import math

import pytest

from geometry import Vector2D, dist_between_points, heading_offset, wrap_coordinate


def test_vector_magnitude():
    assert Vector2D(3, 4).magnitude() == 5
    assert Vector2D().magnitude() == 0


def test_dist_between_points():
    assert dist_between_points(0, 0, 3, 4) == 5
    assert dist_between_points(0, 0, -3, -4) == 5


def test_heading_offset_uses_y_up_angles():
    """90 degrees points up the screen, i.e. towards smaller y"""
    x, y = heading_offset(100, 100, 10, math.pi / 2)
    assert x == pytest.approx(100)
    assert y == pytest.approx(90)

    x, y = heading_offset(100, 100, 10, 0)
    assert (x, y) == pytest.approx((110, 100))


@pytest.mark.parametrize("value, expected", [
    (-31, 830),   # past the left margin -> right side
    (-30, -30),   # exactly on the margin stays
    (831, -30),   # past the right margin -> left side
    (830, 830),
    (400, 400),
])
def test_wrap_coordinate_with_margin(value, expected):
    assert wrap_coordinate(value, 800, 30) == expected


def test_wrap_coordinate_without_margin():
    assert wrap_coordinate(-0.5, 600) == 600
    assert wrap_coordinate(600.5, 600) == 0
