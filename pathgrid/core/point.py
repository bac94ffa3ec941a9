"""2D integer points and grid distance metrics."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class Point:
    """Simple 2D coordinate, hashable by value."""

    x: int
    y: int

    def __add__(self, other: "Point") -> "Point":
        return add(self, other)

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


def equals(a: Point, b: Point) -> bool:
    """Return ``True`` if ``a`` and ``b`` share both coordinates."""

    return a.x == b.x and a.y == b.y


def add(a: Point, b: Point) -> Point:
    """Return the component-wise sum of ``a`` and ``b``."""

    return Point(a.x + b.x, a.y + b.y)


def distance(a: Point, b: Point, cost_cardinal: int, cost_diagonal: int) -> int:
    """Return the 8-directional distance between ``a`` and ``b``.

    The kind of distance depends on the two costs:

    * ``cost_cardinal == cost_diagonal == 1`` gives Chebyshev distance, the
      exact number of unit moves between two open cells.
    * ``cost_cardinal=70, cost_diagonal=99`` gives octile distance with
      ``1`` and ``sqrt(2)`` scaled to integers. It never overestimates the
      cost of a path under the same move costs.
    """

    dx = abs(a.x - b.x)
    dy = abs(a.y - b.y)
    cost_difference = abs(cost_cardinal - cost_diagonal)
    return cost_cardinal * max(dx, dy) + cost_difference * min(dx, dy)


def chebyshev(a: Point, b: Point) -> int:
    return distance(a, b, 1, 1)


def octile(a: Point, b: Point) -> int:
    return distance(a, b, 70, 99)


# 8 directional movement, y grows southwards
MOVES: Tuple[Point, ...] = (
    Point(0, -1),   # north
    Point(1, -1),   # north-east
    Point(1, 0),    # east
    Point(1, 1),    # south-east
    Point(0, 1),    # south
    Point(-1, 1),   # south-west
    Point(-1, 0),   # west
    Point(-1, -1),  # north-west
)


def is_cardinal(move: Point) -> bool:
    """Return ``True`` if ``move`` changes exactly one coordinate."""

    return (move.x == 0) != (move.y == 0)


__all__ = [
    "Point",
    "equals",
    "add",
    "distance",
    "chebyshev",
    "octile",
    "MOVES",
    "is_cardinal",
]
