"""
Grid Geometry Primitives
========================

Point and direction arithmetic plus bounds checking.
"""

from typing import List, NamedTuple

from longcat.core.definitions import Direction, DIRECTION_DELTAS


class Point(NamedTuple):
    """Integer grid coordinate. Equality is structural."""
    x: int
    y: int

    def to_dict(self) -> dict:
        return {'x': self.x, 'y': self.y}

    @classmethod
    def from_dict(cls, data: dict) -> 'Point':
        return cls(int(data['x']), int(data['y']))


def neighbor(point: Point, direction: Direction) -> Point:
    """Cell one step away from ``point`` in ``direction``."""
    dx, dy = DIRECTION_DELTAS[direction]
    return Point(point.x + dx, point.y + dy)


def neighbors(point: Point) -> List[Point]:
    """All four orthogonal neighbours, in canonical direction order."""
    return [neighbor(point, d) for d in Direction]


def in_bounds(point: Point, width: int, height: int) -> bool:
    return 0 <= point.x < width and 0 <= point.y < height


def manhattan_distance(a: Point, b: Point) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


def direction_between(a: Point, b: Point) -> Direction:
    """
    Direction of a single orthogonal step from ``a`` to ``b``.

    Raises:
        ValueError: if ``b`` is not adjacent to ``a``
    """
    delta = (b.x - a.x, b.y - a.y)
    for direction, offset in DIRECTION_DELTAS.items():
        if offset == delta:
            return direction
    raise ValueError(f"Points {a} and {b} are not orthogonally adjacent")
