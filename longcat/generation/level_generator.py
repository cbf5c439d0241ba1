"""
Solution-Down Level Generation for Longcat
==========================================

Builds a puzzle by first growing a random solution path and then deriving the
wall layout from it, so every generated level has at least one solution.

Algorithm:
1. Pick a uniformly random start cell; the working mask starts fully walkable
2. Repeatedly collect the directions leading to an in-bounds, walkable,
   unvisited, non-body cell; stop when there are none
3. Pick one uniformly at random. On a turn, carve a wall where a straight
   continuation of the previous direction would have landed (unless that
   cell is body), which blocks the slide at the corner
4. Advance the head and extend the path
5. Emit a mask whose walkable cells are exactly the path cells

Because of step 5 the solution always covers the entire walkable region.

Output: Puzzle with ``solution`` set and no difficulty
"""

import logging
import random
from typing import List, Optional, Set, Tuple

import numpy as np

from longcat.core.definitions import Direction
from longcat.core.geometry import Point, in_bounds, neighbor
from longcat.core.puzzle import Path, Puzzle, new_puzzle_id
from longcat.utils.grid_utils import check_connectivity, create_open_mask, mask_from_points

logger = logging.getLogger(__name__)


class LevelGenerator:
    """
    Procedural level generator using solution-down path growth.

    Features:
    - Guaranteed solvability (the grown path is a solution)
    - Reproducible output with a seed
    - Walls carved at the outside of every turn
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None):
        """
        Args:
            seed: Random seed for reproducibility
            rng: Explicit random source (takes precedence over ``seed``)
        """
        self.rng = rng if rng is not None else random.Random(seed)

    def generate(self, width: int, height: int) -> Puzzle:
        """
        Generate a complete level.

        Raises:
            ValueError: if either dimension is smaller than 1
        """
        if width < 1 or height < 1:
            raise ValueError(f"Grid must be at least 1x1, got {width}x{height}")

        start = Point(self.rng.randrange(width), self.rng.randrange(height))
        path, carved = self._grow_path(start, width, height)
        mask = mask_from_points(path.points, width, height)

        puzzle = Puzzle(
            id=new_puzzle_id(),
            width=width,
            height=height,
            mask=mask,
            start=start,
            solution=path,
        )
        logger.debug(
            f"Generated {width}x{height} level {puzzle.id}: path length {len(path)}, "
            f"{carved} turn walls, start {start}"
        )
        return puzzle

    def _available_directions(
        self,
        position: Point,
        mask: np.ndarray,
        width: int,
        height: int,
        body: Set[Point],
        visited: Set[Point],
    ) -> List[Direction]:
        """Directions leading to an in-bounds, walkable, unvisited, non-body cell."""
        available = []
        for direction in Direction:
            n = neighbor(position, direction)
            if (
                in_bounds(n, width, height) and
                mask[n.y, n.x] and
                n not in visited and
                n not in body
            ):
                available.append(direction)
        return available

    def _grow_path(self, start: Point, width: int, height: int) -> Tuple[Path, int]:
        """
        Random self-avoiding walk from ``start`` with turn walls.

        Returns:
            (path, number of turn walls carved)
        """
        mask = create_open_mask(width, height)
        points = [start]
        directions: List[Direction] = []
        body: Set[Point] = set()
        visited = {start}
        current = start
        previous: Optional[Direction] = None
        carved = 0

        while True:
            available = self._available_directions(current, mask, width, height, body, visited)
            if not available:
                break

            direction = self.rng.choice(available)

            if previous is not None and previous != direction:
                turn_wall = neighbor(current, previous)
                if in_bounds(turn_wall, width, height) and turn_wall not in body:
                    mask[turn_wall.y, turn_wall.x] = False
                    carved += 1

            body.add(current)
            current = neighbor(current, direction)
            visited.add(current)
            points.append(current)
            directions.append(direction)
            previous = direction

        return Path(points=tuple(points), directions=tuple(directions)), carved


def validate_level(puzzle: Puzzle) -> Tuple[bool, List[str]]:
    """
    Structural acceptance check for a level.

    Checks:
    - walkable cells form a single connected component
    - the start cell is walkable

    Returns:
        (is_valid, errors)
    """
    errors = []
    if not check_connectivity(puzzle.mask):
        errors.append("Walkable cells are not a single connected component")
    if not puzzle.is_walkable(puzzle.start):
        errors.append(f"Start cell {puzzle.start} is not walkable")

    if errors:
        logger.warning(f"Level {puzzle.id} failed validation: {errors}")
    return len(errors) == 0, errors


def generate_level(width: int, height: int, seed: Optional[int] = None) -> Puzzle:
    """Convenience wrapper: ``LevelGenerator(seed).generate(width, height)``."""
    return LevelGenerator(seed=seed).generate(width, height)
