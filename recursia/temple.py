"""Recursive temple figures made of nested rectangles."""

from __future__ import annotations

from dataclasses import dataclass, replace


@dataclass(frozen=True)
class Rectangle:
    """An axis-aligned rectangle; ``(x, y)`` is its upper-left corner."""

    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class TempleParameters:
    """Proportions and recursion settings for :func:`make_temple`."""

    base_height: float = 0.1
    base_width: float = 0.9
    column_width: float = 0.5
    column_height: float = 0.3
    upper_temple_height: float = 0.6
    order: int = 6
    num_small_temples: int = 4
    small_temple_width: float = 0.2
    small_temple_height: float = 0.5


def make_temple(bounds: Rectangle, params: TempleParameters) -> list[Rectangle]:
    """Return the rectangles of a temple of order ``params.order`` inside ``bounds``.

    An order-0 temple is empty. An order-n temple is a base and a column,
    an order-(n-1) temple on top of the column, and a row of smaller
    order-(n-1) temples standing on the base.
    """
    if params.order < 0:
        raise ValueError("order can't be negative")
    if params.order == 0:
        return []

    base_width = bounds.width * params.base_width
    base_height = bounds.height * params.base_height
    base = Rectangle(
        x=bounds.x + (bounds.width - base_width) / 2,
        y=bounds.y + (bounds.height - base_height),
        width=base_width,
        height=base_height,
    )

    column_width = bounds.width * params.column_width
    column_height = bounds.height * params.column_height
    column = Rectangle(
        x=bounds.x + (bounds.width - column_width) / 2,
        y=bounds.y + (bounds.height - (column_height + base.height)),
        width=column_width,
        height=column_height,
    )

    temple = [base, column]
    smaller = replace(params, order=params.order - 1)

    upper_height = params.upper_temple_height * bounds.height
    upper_bounds = Rectangle(
        x=column.x,
        y=column.y - upper_height,
        width=column.width,
        height=upper_height,
    )
    temple += make_temple(upper_bounds, smaller)

    small_width = bounds.width * params.small_temple_width
    small_height = bounds.height * params.small_temple_height
    small_bounds = Rectangle(
        x=base.x,
        y=base.y - small_height,
        width=small_width,
        height=small_height,
    )
    temple += make_temple(small_bounds, smaller)

    extra = params.num_small_temples - 1
    if extra > 0:
        spacing = int(
            (base.width - small_width * params.num_small_temples) / extra
        )
        for _ in range(extra):
            small_bounds = replace(
                small_bounds, x=small_bounds.x + small_width + spacing
            )
            temple += make_temple(small_bounds, smaller)

    return temple