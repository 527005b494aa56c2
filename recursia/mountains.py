"""Random mountain ranges built by recursive midpoint displacement."""

from __future__ import annotations

import random
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """A point on the integer grid."""

    x: int
    y: int


def _half(value: int) -> int:
    """Halve an integer, rounding toward zero."""
    return value // 2 if value >= 0 else -((-value) // 2)


def make_mountain_range(
    left: Point,
    right: Point,
    amplitude: int,
    decay_rate: float,
    rng: random.Random | None = None,
) -> list[Point]:
    """Return the points of a mountain range running from ``left`` to ``right``.

    The midpoint of the segment is displaced vertically by a uniformly random
    integer in ``[-amplitude, amplitude]``, and both halves are built the same
    way with the amplitude scaled by ``decay_rate``. Segments whose endpoints
    are at most three units apart horizontally are left as they are.
    """
    if left.x > right.x:
        raise ValueError("Left point cannot be to the right of right point")
    if amplitude < 0:
        raise ValueError("Amplitude must be positive")
    if decay_rate < 0 or decay_rate > 1:
        raise ValueError("Decay rate must be between 0 and 1")

    if right.x - left.x <= 3:
        return [left, right]

    source = rng if rng is not None else random
    offset = source.randint(-amplitude, amplitude)
    midpoint = Point(_half(left.x + right.x), _half(left.y + right.y) + offset)

    next_amplitude = int(amplitude * decay_rate)
    left_range = make_mountain_range(left, midpoint, next_amplitude, decay_rate, rng)
    right_range = make_mountain_range(midpoint, right, next_amplitude, decay_rate, rng)

    return left_range + right_range[1:]