"""
Longcat Core Module
===================

Definitions, geometry and the value types every other module builds on.

Components:
- definitions: Directions, state tags and project-wide constants
- geometry: Point and direction arithmetic, bounds checks
- puzzle: Path and Puzzle (the immutable level description)
- state: PlayState and its canonical identity key

Usage:
    from longcat.core import Direction, Point
    from longcat.core.puzzle import Puzzle, Path
    from longcat.core.state import PlayState
"""

from longcat.core.definitions import (
    Direction,
    StateType,
    DIRECTION_DELTAS,
    DIRECTION_CODES,
    CODE_TO_DIRECTION,
    TERMINAL_STATE_TYPES,
    EXACT_ANALYSIS_CELL_LIMIT,
    FALLBACK_DIFFICULTY_CAP,
    DIFFICULTY_BANDS,
)
from longcat.core.geometry import (
    Point,
    neighbor,
    neighbors,
    in_bounds,
    manhattan_distance,
    direction_between,
)

__all__ = [
    # Definitions
    'Direction',
    'StateType',
    'DIRECTION_DELTAS',
    'DIRECTION_CODES',
    'CODE_TO_DIRECTION',
    'TERMINAL_STATE_TYPES',
    'EXACT_ANALYSIS_CELL_LIMIT',
    'FALLBACK_DIFFICULTY_CAP',
    'DIFFICULTY_BANDS',
    # Geometry
    'Point',
    'neighbor',
    'neighbors',
    'in_bounds',
    'manhattan_distance',
    'direction_between',
]
