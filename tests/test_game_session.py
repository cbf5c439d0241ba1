"""
Tests for the interactive GameSession (slide moves, win/lose, undo, reset).

Run with: pytest tests/test_game_session.py -v
"""

import pytest
import numpy as np

from longcat.core.definitions import Direction
from longcat.core.geometry import Point
from longcat.core.puzzle import Puzzle
from longcat.core.state import PlayState
from longcat.simulation.session import GameSession, slide


def make_puzzle(rows, start=(0, 0)):
    mask = np.array(rows, dtype=bool)
    height, width = mask.shape
    return Puzzle(id="session_test", width=width, height=height, mask=mask, start=Point(*start))


# ==============================================================================
# FIXTURES
# ==============================================================================

@pytest.fixture
def open_3x3():
    return make_puzzle([[True] * 3] * 3, start=(1, 1))


@pytest.fixture
def t_shape():
    """
    Three cells across the top and one below the middle; start at the bottom.

        . . .
        # S #
    """
    return make_puzzle([[True, True, True], [False, True, False]], start=(1, 1))


# ==============================================================================
# SLIDING
# ==============================================================================

class TestSlide:

    def test_slide_stops_at_border(self, open_3x3):
        session = GameSession(open_3x3)
        assert session.move(Direction.RIGHT)

        state = session.state
        assert state.head == Point(2, 1)
        assert state.body == (Point(1, 1),)
        assert not session.is_complete
        assert not session.is_failed
        assert session.is_active

    def test_slide_travels_multiple_cells(self):
        puzzle = make_puzzle([[True] * 4])
        session = GameSession(puzzle)
        session.move(Direction.RIGHT)
        assert session.state.head == Point(3, 0)
        assert session.state.body == (Point(0, 0), Point(1, 0), Point(2, 0))
        assert session.is_complete

    def test_slide_stops_at_wall(self):
        puzzle = make_puzzle([[True, True, False, True]])
        new_state = slide(PlayState.initial(puzzle), puzzle, Direction.RIGHT)
        assert new_state.head == Point(1, 0)

    def test_slide_stops_at_body(self):
        puzzle = make_puzzle([[True] * 3] * 2, start=(0, 1))
        session = GameSession(puzzle)
        session.replay([Direction.UP, Direction.RIGHT, Direction.DOWN, Direction.LEFT])
        assert session.state.head == Point(1, 1)
        assert session.is_complete

    def test_blocked_move_is_noop(self, open_3x3):
        session = GameSession(open_3x3)
        session.move(Direction.RIGHT)
        before = session.state

        assert not session.move(Direction.RIGHT)
        assert not session.move(Direction.LEFT)
        assert session.state is before
        assert session.history_length == 2

    def test_slide_returns_none_when_blocked(self, open_3x3):
        state = PlayState.initial(open_3x3).advance(Direction.RIGHT)
        assert slide(state, open_3x3, Direction.LEFT) is None


# ==============================================================================
# WIN / LOSE
# ==============================================================================

class TestOutcome:

    def test_completion(self):
        session = GameSession(make_puzzle([[True, True]]))
        assert session.move(Direction.RIGHT)
        assert session.is_complete
        assert not session.is_failed

    def test_no_moves_after_completion(self):
        session = GameSession(make_puzzle([[True, True]]))
        session.move(Direction.RIGHT)
        assert not session.move(Direction.LEFT)
        assert session.history_length == 2
        assert session.is_complete

    def test_failure(self, t_shape):
        session = GameSession(t_shape)
        assert session.move(Direction.UP)
        assert session.is_active
        assert session.move(Direction.LEFT)
        assert session.state.head == Point(0, 0)
        assert session.is_failed
        assert not session.is_complete

    def test_no_moves_after_failure(self, t_shape):
        session = GameSession(t_shape)
        session.replay([Direction.UP, Direction.LEFT])
        assert not session.move(Direction.RIGHT)
        assert session.is_failed
        assert session.history_length == 3

    def test_single_cell_never_marked_complete_before_a_move(self):
        session = GameSession(make_puzzle([[True]]))
        assert session.is_active
        assert not session.move(Direction.RIGHT)


# ==============================================================================
# UNDO / RESET
# ==============================================================================

class TestHistory:

    def test_undo_restores_previous_state(self, t_shape):
        session = GameSession(t_shape)
        session.move(Direction.UP)
        before = session.state
        session.move(Direction.LEFT)
        assert session.is_failed

        assert session.undo()
        assert session.state == before
        assert session.is_active
        assert session.moves == [Direction.UP]

    def test_undo_then_other_branch(self, t_shape):
        session = GameSession(t_shape)
        session.replay([Direction.UP, Direction.LEFT])
        session.undo()
        assert session.move(Direction.RIGHT)
        assert session.state.head == Point(2, 0)
        assert session.is_failed

    def test_undo_at_initial_state_is_noop(self, open_3x3):
        session = GameSession(open_3x3)
        assert not session.undo()
        assert session.history_length == 1
        assert session.state == PlayState.initial(open_3x3)

    def test_reset(self, open_3x3):
        session = GameSession(open_3x3)
        session.replay([Direction.RIGHT, Direction.UP, Direction.LEFT])
        assert session.history_length == 4

        assert session.reset()
        assert session.history_length == 1
        assert session.state == PlayState.initial(open_3x3)
        assert session.moves == []
        assert session.is_active

    def test_history_records_moves(self, open_3x3):
        session = GameSession(open_3x3)
        session.replay([Direction.RIGHT, Direction.UP])
        history = session.history()
        assert [len(s.moves) for s in history] == [0, 1, 2]
        assert session.moves == [Direction.RIGHT, Direction.UP]


# ==============================================================================
# LIFECYCLE
# ==============================================================================

class TestLifecycle:

    def test_operations_before_start(self):
        session = GameSession()
        assert not session.started
        assert session.state is None
        assert not session.move(Direction.UP)
        assert not session.undo()
        assert not session.reset()
        assert not session.is_complete
        assert not session.is_failed

    def test_start_replaces_session(self, open_3x3, t_shape):
        session = GameSession(open_3x3)
        session.move(Direction.RIGHT)
        session.start(t_shape)
        assert session.puzzle is t_shape
        assert session.history_length == 1
        assert session.state.head == Point(1, 1)

    def test_puzzle_not_mutated(self, open_3x3):
        mask_before = open_3x3.mask.copy()
        session = GameSession(open_3x3)
        session.replay([Direction.RIGHT, Direction.UP, Direction.LEFT, Direction.DOWN])
        assert np.array_equal(open_3x3.mask, mask_before)
        assert open_3x3.start == Point(1, 1)

    def test_replay_counts_successful_moves(self, open_3x3):
        session = GameSession(open_3x3)
        assert session.replay([Direction.RIGHT, Direction.RIGHT, Direction.UP]) == 2
