"""
Play State
==========

The state shared by the interactive session and the state-space graph
builder: where the head is, the trail of cells the cat's body occupies, and
which cells have been visited.

Invariants:
- ``visited[start]`` is always True
- every body cell and the head are visited
- the head never re-enters a body cell

PlayState values are never mutated in place; ``advance`` returns a new state.
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from longcat.core.definitions import Direction
from longcat.core.geometry import Point, neighbor
from longcat.core.puzzle import Puzzle

# Canonical state identity: (head, body, packed visited bitmap)
StateKey = Tuple[Point, Tuple[Point, ...], bytes]


@dataclass(frozen=True, eq=False)
class PlayState:
    """Head position, body trail (oldest first) and visited bitmap."""
    head: Point
    body: Tuple[Point, ...]
    visited: np.ndarray

    @classmethod
    def initial(cls, puzzle: Puzzle) -> 'PlayState':
        """Cat on the start cell, empty body, only the start visited."""
        visited = np.zeros((puzzle.height, puzzle.width), dtype=bool)
        visited[puzzle.start.y, puzzle.start.x] = True
        visited.setflags(write=False)
        return cls(head=puzzle.start, body=(), visited=visited)

    def key(self) -> StateKey:
        """Identity used to deduplicate states; all three parts must match."""
        return (self.head, self.body, np.packbits(self.visited).tobytes())

    def __eq__(self, other):
        if not isinstance(other, PlayState):
            return NotImplemented
        return (
            self.head == other.head and
            self.body == other.body and
            np.array_equal(self.visited, other.visited)
        )

    def __hash__(self):
        return hash(self.key())

    def is_body(self, point: Point) -> bool:
        return point in self.body

    def can_step(self, puzzle: Puzzle, direction: Direction) -> bool:
        """One-cell move is legal: in bounds, walkable, not body, not the head."""
        target = neighbor(self.head, direction)
        return (
            puzzle.is_walkable(target) and
            target != self.head and
            not self.is_body(target)
        )

    def legal_directions(self, puzzle: Puzzle) -> List[Direction]:
        return [d for d in Direction if self.can_step(puzzle, d)]

    def has_legal_step(self, puzzle: Puzzle) -> bool:
        return any(self.can_step(puzzle, d) for d in Direction)

    def advance(self, direction: Direction) -> 'PlayState':
        """
        State after one step; the old head joins the body.

        Legality is the caller's responsibility (see ``can_step``).
        """
        target = neighbor(self.head, direction)
        visited = self.visited.copy()
        visited[target.y, target.x] = True
        visited.setflags(write=False)
        return PlayState(head=target, body=self.body + (self.head,), visited=visited)

    def unvisited_mask(self, puzzle: Puzzle) -> np.ndarray:
        return puzzle.mask & ~self.visited

    def covers(self, puzzle: Puzzle) -> bool:
        """Every walkable cell has been visited."""
        return not self.unvisited_mask(puzzle).any()

    def visited_count(self) -> int:
        return int(np.count_nonzero(self.visited))
