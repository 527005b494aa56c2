import random

import pytest

from recursia.mountains import Point, make_mountain_range


class _MaxRng:
    """Always picks the top of the requested range."""

    def randint(self, low, high):
        return high


@pytest.mark.parametrize(
    "left, right, amplitude, decay",
    [
        (Point(0, 0), Point(-1, 0), 10, 1),
        (Point(0, 0), Point(10, 10), -137, 1),
        (Point(0, 0), Point(10, 10), 137, -0.1),
        (Point(0, 0), Point(10, 10), 137, 1.1),
    ],
)
def test_invalid_inputs(left, right, amplitude, decay):
    with pytest.raises(ValueError):
        make_mountain_range(left, right, amplitude, decay)


def test_close_points_give_straight_line():
    mountain = make_mountain_range(Point(0, 0), Point(1, 0), 100, 0.1)
    assert mountain == [Point(0, 0), Point(1, 0)]


def test_close_points_zero_amplitude():
    mountain = make_mountain_range(Point(0, 0), Point(6, 6), 0, 1)
    assert mountain == [Point(0, 0), Point(3, 3), Point(6, 6)]


def test_far_points_zero_amplitude():
    points = [Point(3 * i, 3 * i) for i in range(33)]
    assert make_mountain_range(points[0], points[-1], 0, 1) == points


def test_uses_supplied_rng():
    mountain = make_mountain_range(Point(10, 0), Point(16, 0), 1, 1, _MaxRng())
    assert mountain == [Point(10, 0), Point(13, 1), Point(16, 0)]


@pytest.mark.parametrize("amplitude", [1, 10])
def test_close_points_displacement_covers_range(amplitude):
    rng = random.Random(1234)
    seen = set()
    for _ in range(2000):
        mountain = make_mountain_range(Point(10, 0), Point(16, 0), amplitude, 1, rng)
        assert len(mountain) == 3
        assert mountain[0] == Point(10, 0)
        assert mountain[2] == Point(16, 0)
        assert mountain[1].x == 13
        assert -amplitude <= mountain[1].y <= amplitude
        seen.add(mountain[1].y)
    assert seen == set(range(-amplitude, amplitude + 1))


def test_decaying_amplitude_ranges():
    rng = random.Random(99)
    centre, left_mid, right_mid = set(), set(), set()
    for _ in range(3000):
        mountain = make_mountain_range(Point(10, 0), Point(22, 12), 2, 0.5, rng)
        assert len(mountain) == 5
        assert mountain[0] == Point(10, 0)
        assert mountain[4] == Point(22, 12)
        assert [p.x for p in mountain[1:4]] == [13, 16, 19]
        assert 4 <= mountain[2].y <= 8
        assert 1 <= mountain[1].y <= 5
        assert 7 <= mountain[3].y <= 11
        centre.add(mountain[2].y)
        left_mid.add(mountain[1].y)
        right_mid.add(mountain[3].y)
    assert centre == set(range(4, 9))
    assert left_mid == set(range(1, 6))
    assert right_mid == set(range(7, 12))


def test_x_coordinates_strictly_increase():
    rng = random.Random(7)
    mountain = make_mountain_range(Point(0, 50), Point(400, 80), 40, 0.6, rng)
    xs = [p.x for p in mountain]
    assert xs == sorted(set(xs))
    assert mountain[0] == Point(0, 50)
    assert mountain[-1] == Point(400, 80)