"""
LONGCAT DEFINITIONS
===================
Central constants and type definitions for the entire project.

This file is the SINGLE SOURCE OF TRUTH for:
- Move directions and their grid offsets
- State classification tags used by the state-space graph
- Analysis size gate
- Difficulty bands

Import from here instead of duplicating constants across modules.

Coordinates are (x, y) with x growing to the right and y growing downward;
grids are stored row-major, so a mask is indexed ``mask[y, x]``.
"""

from typing import Dict, Tuple
from enum import Enum, IntEnum


# ==========================================
# DIRECTIONS
# ==========================================

class Direction(IntEnum):
    """The four slide directions. Iteration order is the canonical move order."""
    UP = 0
    DOWN = 1
    LEFT = 2
    RIGHT = 3


# Direction to coordinate offset (dx, dy)
DIRECTION_DELTAS: Dict[Direction, Tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}

# One-letter codes used in serialized paths
DIRECTION_CODES: Dict[Direction, str] = {
    Direction.UP: 'U',
    Direction.DOWN: 'D',
    Direction.LEFT: 'L',
    Direction.RIGHT: 'R',
}

CODE_TO_DIRECTION: Dict[str, Direction] = {v: k for k, v in DIRECTION_CODES.items()}


# ==========================================
# STATE CLASSIFICATION
# ==========================================

class StateType(str, Enum):
    """
    Classification tag of a state-space graph node.

    START is for callers that label the entry node themselves; the graph
    builder never assigns it and classifies the start node like any other.
    """
    START = 'start'
    SUCCESS = 'success'
    FAIL = 'fail'
    DEAD = 'dead'
    INDETERMINATE = 'indeterminate'


# Tags whose nodes are never expanded by the graph builder
TERMINAL_STATE_TYPES = frozenset({StateType.SUCCESS, StateType.FAIL, StateType.DEAD})


# ==========================================
# ANALYSIS / DIFFICULTY
# ==========================================

# Grids with more cells than this use the density heuristic
EXACT_ANALYSIS_CELL_LIMIT: int = 100

# Upper bound of the size-based fallback difficulty
FALLBACK_DIFFICULTY_CAP: int = 100

# Half-open [min, max) difficulty ranges
DIFFICULTY_BANDS: Dict[str, Tuple[float, float]] = {
    'easy': (0.0, 30.0),
    'medium': (30.0, 60.0),
    'hard': (60.0, 100.0),
    'expert': (100.0, float('inf')),
}

# Default side-length range for catalog batches
DEFAULT_MIN_SIZE: int = 6
DEFAULT_MAX_SIZE: int = 9


# ==========================================
# EXPORTS
# ==========================================

__all__ = [
    # Enums
    'Direction',
    'StateType',

    # Direction tables
    'DIRECTION_DELTAS',
    'DIRECTION_CODES',
    'CODE_TO_DIRECTION',

    # Classification
    'TERMINAL_STATE_TYPES',

    # Analysis / difficulty
    'EXACT_ANALYSIS_CELL_LIMIT',
    'FALLBACK_DIFFICULTY_CAP',
    'DIFFICULTY_BANDS',
    'DEFAULT_MIN_SIZE',
    'DEFAULT_MAX_SIZE',
]
