"""
Puzzle Model
============

Static level description shared by the generator, the analyzers and the
interactive session:

- Path: ordered points plus the step directions connecting them
- Puzzle: identity, size, walkability mask, start, optional solution and
  optional difficulty

A Puzzle is immutable once built. Attaching a difficulty produces a new
Puzzle value (``with_difficulty``) so earlier holders never observe a change.
"""

import time
import uuid
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np

from longcat.core.definitions import Direction, DIRECTION_CODES, CODE_TO_DIRECTION
from longcat.core.geometry import Point, direction_between, in_bounds
from longcat.utils.grid_utils import as_mask, count_walkable


def new_puzzle_id() -> str:
    """Opaque, practically unique level id (timestamp + random suffix)."""
    return f"level_{int(time.time() * 1000)}_{uuid.uuid4().hex[:9]}"


@dataclass(frozen=True)
class Path:
    """
    Ordered sequence of points and the directions between consecutive points.

    Invariant: ``len(directions) == len(points) - 1`` and each direction is the
    single step from ``points[i]`` to ``points[i + 1]``.
    """
    points: Tuple[Point, ...]
    directions: Tuple[Direction, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'points', tuple(Point(*p) for p in self.points))
        object.__setattr__(self, 'directions', tuple(Direction(d) for d in self.directions))
        if not self.points:
            raise ValueError("Path must contain at least one point")
        if len(self.directions) != len(self.points) - 1:
            raise ValueError(
                f"Path has {len(self.points)} points but {len(self.directions)} directions"
            )
        for i, d in enumerate(self.directions):
            if direction_between(self.points[i], self.points[i + 1]) != d:
                raise ValueError(f"Direction {d.name} at index {i} does not match path points")

    @classmethod
    def from_points(cls, points: Sequence[Point]) -> 'Path':
        """Build a path from adjacent points, deriving the directions."""
        pts = [Point(*p) for p in points]
        dirs = [direction_between(a, b) for a, b in zip(pts, pts[1:])]
        return cls(points=tuple(pts), directions=tuple(dirs))

    def __len__(self) -> int:
        return len(self.points)

    @property
    def start(self) -> Point:
        return self.points[0]

    @property
    def end(self) -> Point:
        return self.points[-1]

    def runs(self) -> List[Tuple[Direction, int]]:
        """Collapse consecutive equal directions into (direction, length) runs."""
        runs: List[Tuple[Direction, int]] = []
        for d in self.directions:
            if runs and runs[-1][0] == d:
                runs[-1] = (d, runs[-1][1] + 1)
            else:
                runs.append((d, 1))
        return runs

    def slide_directions(self) -> List[Direction]:
        """One direction per run: the slide moves that retrace this path."""
        return [d for d, _ in self.runs()]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'points': [p.to_dict() for p in self.points],
            'directions': [DIRECTION_CODES[d] for d in self.directions],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Path':
        try:
            directions = tuple(CODE_TO_DIRECTION[c] for c in data.get('directions', []))
        except KeyError as exc:
            raise ValueError(f"Unknown direction code {exc.args[0]!r}") from exc
        return cls(
            points=tuple(Point.from_dict(p) for p in data['points']),
            directions=directions,
        )


@dataclass(frozen=True, eq=False)
class Puzzle:
    """
    A single level.

    Attributes:
        id: Opaque identity used by caches to re-fetch the level
        width, height: Grid size in cells
        mask: Read-only bool array (height, width); True = walkable
        start: Starting cell of the cat
        solution: Known solution path (set by the generator)
        difficulty: Scalar difficulty once scored
    """
    id: str
    width: int
    height: int
    mask: np.ndarray
    start: Point
    solution: Optional[Path] = None
    difficulty: Optional[float] = None

    def __post_init__(self):
        mask = as_mask(self.mask)
        if mask.shape != (self.height, self.width):
            raise ValueError(
                f"Mask shape {mask.shape} does not match height x width "
                f"({self.height}, {self.width})"
            )
        start = Point(*self.start)
        if not in_bounds(start, self.width, self.height):
            raise ValueError(f"Start {start} is outside a {self.width}x{self.height} grid")
        object.__setattr__(self, 'mask', mask)
        object.__setattr__(self, 'start', start)

    def __eq__(self, other):
        if not isinstance(other, Puzzle):
            return NotImplemented
        return (
            self.id == other.id and
            self.width == other.width and
            self.height == other.height and
            np.array_equal(self.mask, other.mask) and
            self.start == other.start and
            self.solution == other.solution and
            self.difficulty == other.difficulty
        )

    __hash__ = object.__hash__

    @property
    def total_cells(self) -> int:
        return self.width * self.height

    @property
    def walkable_count(self) -> int:
        return count_walkable(self.mask)

    def is_walkable(self, point: Point) -> bool:
        return in_bounds(point, self.width, self.height) and bool(self.mask[point.y, point.x])

    def with_difficulty(self, difficulty: float) -> 'Puzzle':
        """Copy of this puzzle carrying ``difficulty``."""
        return replace(self, difficulty=difficulty)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for JSON export."""
        return {
            'id': self.id,
            'width': self.width,
            'height': self.height,
            'mask': self.mask.tolist(),
            'start': self.start.to_dict(),
            'solution': self.solution.to_dict() if self.solution is not None else None,
            'difficulty': self.difficulty,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Puzzle':
        """Deserialize from JSON. Raises ValueError on malformed input."""
        try:
            solution = data.get('solution')
            return cls(
                id=str(data['id']),
                width=int(data['width']),
                height=int(data['height']),
                mask=data['mask'],
                start=Point.from_dict(data['start']),
                solution=Path.from_dict(solution) if solution else None,
                difficulty=data.get('difficulty'),
            )
        except (KeyError, TypeError) as exc:
            raise ValueError(f"Malformed puzzle record: {exc}") from exc
