"""
Longcat Simulation Module
=========================
State-space enumeration and interactive play for Longcat puzzles.

This module contains:
- state_graph: Breadth-first state-space graph builder and state classifier
- session: Slide-move game session with undo history
"""

from .state_graph import (
    StateGraph,
    StateGraphBuilder,
    GraphEdge,
    BuildMetrics,
    build_state_graph,
    classify_state,
    is_dead_state,
)
from .session import (
    GameSession,
    SessionSnapshot,
    slide,
)

__all__ = [
    # State-space graph
    'StateGraph',
    'StateGraphBuilder',
    'GraphEdge',
    'BuildMetrics',
    'build_state_graph',
    'classify_state',
    'is_dead_state',
    # Interactive session
    'GameSession',
    'SessionSnapshot',
    'slide',
]
