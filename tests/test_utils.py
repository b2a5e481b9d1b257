import math

import pytest

from game.roar.utils import angle_between, circle_collide, clamp, distance


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2


def test_distance_and_angle():
    assert distance(0, 0, 3, 4) == pytest.approx(5.0)
    assert angle_between(0, 0, 0, 10) == pytest.approx(math.pi / 2)
    assert angle_between(10, 0, 0, 0) == pytest.approx(math.pi)


def test_circle_collide_tolerance():
    # gap of exactly 0.5 between the circles
    assert circle_collide(0, 0, 10, 20.5, 0, 10, tolerance=1.0)
    assert not circle_collide(0, 0, 10, 21.0, 0, 10, tolerance=1.0)
    assert not circle_collide(0, 0, 10, 20.5, 0, 10)
