"""
Interactive Game Session
========================

Discrete simulator for a single play-through of a puzzle.

Handles:
- Slide moves: one submitted direction advances the cat cell by cell until
  the next step is blocked by a wall, the border or its own body
- Win / lose detection after every move
- Undo history (oldest first; entry 0 is always the initial state)
- Reset to the initial state

This is a "headless" environment: no rendering, no input handling.
Illegal operations return False and leave the session untouched.

States:
    ACTIVE -> COMPLETE (terminal)
    ACTIVE -> FAILED   (terminal)
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

from longcat.core.definitions import Direction
from longcat.core.puzzle import Puzzle
from longcat.core.state import PlayState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionSnapshot:
    """One entry of the undo history."""
    state: PlayState
    moves: Tuple[Direction, ...] = ()
    is_complete: bool = False
    is_failed: bool = False

    @property
    def is_active(self) -> bool:
        return not (self.is_complete or self.is_failed)


def slide(state: PlayState, puzzle: Puzzle, direction: Direction) -> Optional[PlayState]:
    """
    Slide from ``state`` in ``direction`` until blocked.

    Returns:
        The stopped state, or None if not even one cell of travel is possible
    """
    if not state.can_step(puzzle, direction):
        return None
    current = state
    while current.can_step(puzzle, direction):
        current = current.advance(direction)
    return current


class GameSession:
    """
    Live session over a puzzle with undo history.

    Usage:
        session = GameSession(puzzle)
        session.move(Direction.RIGHT)
        if session.is_failed:
            session.undo()
    """

    def __init__(self, puzzle: Optional[Puzzle] = None):
        self.puzzle: Optional[Puzzle] = None
        self._history: List[SessionSnapshot] = []
        if puzzle is not None:
            self.start(puzzle)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self, puzzle: Puzzle) -> PlayState:
        """Begin a fresh session on ``puzzle``; history = [initial state]."""
        self.puzzle = puzzle
        self._history = [SessionSnapshot(state=PlayState.initial(puzzle))]
        logger.debug(f"Session started on {puzzle.id} ({puzzle.width}x{puzzle.height})")
        return self.state

    @property
    def started(self) -> bool:
        return bool(self._history)

    @property
    def current(self) -> Optional[SessionSnapshot]:
        return self._history[-1] if self._history else None

    @property
    def state(self) -> Optional[PlayState]:
        return self.current.state if self._history else None

    @property
    def is_complete(self) -> bool:
        return bool(self._history) and self.current.is_complete

    @property
    def is_failed(self) -> bool:
        return bool(self._history) and self.current.is_failed

    @property
    def is_active(self) -> bool:
        return bool(self._history) and self.current.is_active

    @property
    def moves(self) -> List[Direction]:
        return list(self.current.moves) if self._history else []

    @property
    def history_length(self) -> int:
        return len(self._history)

    def history(self) -> List[SessionSnapshot]:
        return list(self._history)

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def move(self, direction: Direction) -> bool:
        """
        Slide the cat in ``direction``.

        Returns:
            True if the cat travelled at least one cell. False (no change)
            when the session is not active or the first step is illegal.
        """
        if not self.is_active:
            return False

        current = self.current
        new_state = slide(current.state, self.puzzle, direction)
        if new_state is None:
            return False

        is_complete = new_state.covers(self.puzzle)
        is_failed = not is_complete and not new_state.has_legal_step(self.puzzle)

        self._history.append(SessionSnapshot(
            state=new_state,
            moves=current.moves + (direction,),
            is_complete=is_complete,
            is_failed=is_failed,
        ))

        if is_complete:
            logger.debug(f"Session on {self.puzzle.id} complete after {len(current.moves) + 1} moves")
        elif is_failed:
            logger.debug(f"Session on {self.puzzle.id} failed at {new_state.head}")
        return True

    def undo(self) -> bool:
        """Drop the latest move. False if only the initial state remains."""
        if len(self._history) <= 1:
            return False
        self._history.pop()
        return True

    def reset(self) -> bool:
        """Restore the initial state and truncate history to it."""
        if not self._history:
            return False
        del self._history[1:]
        return True

    def replay(self, directions: Iterable[Direction]) -> int:
        """
        Submit a sequence of slide moves.

        Returns:
            Number of moves that succeeded
        """
        return sum(1 for d in directions if self.move(d))
