"""
State-Space Graph Builder for Longcat Puzzles
=============================================

Breadth-first enumeration of every play state reachable from a puzzle's
start, producing a directed graph whose edges are single one-cell steps.

Key Features:
- State-space aware: nodes are keyed by (head, body, visited bitmap)
- Each node is classified exactly once as Success / Fail / Dead / Indeterminate
- Terminal nodes (Success, Fail, Dead) are never expanded
- Step-level granularity: every choice point is visible to branch counting,
  unlike the session's slide-until-blocked moves

Complexity:
- Exponential in the worst case (positions x visited subsets); callers gate
  usage by grid size, see ``AnalysisOptions.exact_cell_limit``
- An optional ``max_states`` guard aborts runaway searches with RuntimeError
"""

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import networkx as nx

from longcat.core.definitions import Direction, StateType, TERMINAL_STATE_TYPES
from longcat.core.puzzle import Puzzle
from longcat.core.state import PlayState, StateKey
from longcat.utils.grid_utils import is_connected

logger = logging.getLogger(__name__)


# ==========================================
# CLASSIFICATION
# ==========================================

def is_dead_state(state: PlayState, puzzle: Puzzle) -> bool:
    """
    The unvisited walkable cells are split into disconnected regions.

    Such a state can never cover the grid even if a legal step remains.
    """
    unvisited = state.unvisited_mask(puzzle)
    if not unvisited.any():
        return False
    return not is_connected(unvisited)


def classify_state(state: PlayState, puzzle: Puzzle) -> StateType:
    """
    Classify a state. Checks run in priority order:

    1. SUCCESS: every walkable cell visited
    2. FAIL: no legal single step from the head
    3. DEAD: remaining cells split into several regions
    4. INDETERMINATE: otherwise
    """
    if state.covers(puzzle):
        return StateType.SUCCESS
    if not state.has_legal_step(puzzle):
        return StateType.FAIL
    if is_dead_state(state, puzzle):
        return StateType.DEAD
    return StateType.INDETERMINATE


# ==========================================
# DATA STRUCTURES
# ==========================================

@dataclass(frozen=True)
class GraphEdge:
    """One single-step transition between two states."""
    source: StateKey
    target: StateKey
    direction: Direction


@dataclass
class BuildMetrics:
    """Performance metrics for a graph build."""
    states_explored: int = 0
    edges_created: int = 0
    max_queue_size: int = 0
    time_taken_ms: float = 0.0


@dataclass
class StateGraph:
    """
    Completed state-space graph.

    Node ids are StateKeys. Node attributes: ``state`` (PlayState) and
    ``type`` (StateType). Edge attribute: ``direction``.
    """
    graph: nx.DiGraph
    start_id: StateKey
    success_ids: List[StateKey] = field(default_factory=list)
    fail_ids: List[StateKey] = field(default_factory=list)
    dead_ids: List[StateKey] = field(default_factory=list)
    indeterminate_ids: List[StateKey] = field(default_factory=list)
    metrics: BuildMetrics = field(default_factory=BuildMetrics)

    def __len__(self) -> int:
        return self.graph.number_of_nodes()

    def __contains__(self, node_id) -> bool:
        return node_id in self.graph

    def node_ids(self) -> List[StateKey]:
        return list(self.graph.nodes)

    def node_type(self, node_id: StateKey) -> StateType:
        return self.graph.nodes[node_id]['type']

    def state(self, node_id: StateKey) -> PlayState:
        return self.graph.nodes[node_id]['state']

    def out_degree(self, node_id: StateKey) -> int:
        return self.graph.out_degree(node_id)

    def out_edges(self, node_id: StateKey) -> List[GraphEdge]:
        return [
            GraphEdge(u, v, data['direction'])
            for u, v, data in self.graph.out_edges(node_id, data=True)
        ]

    def in_edges(self, node_id: StateKey) -> List[GraphEdge]:
        return [
            GraphEdge(u, v, data['direction'])
            for u, v, data in self.graph.in_edges(node_id, data=True)
        ]

    def ids_by_type(self) -> Dict[StateType, List[StateKey]]:
        return {
            StateType.SUCCESS: self.success_ids,
            StateType.FAIL: self.fail_ids,
            StateType.DEAD: self.dead_ids,
            StateType.INDETERMINATE: self.indeterminate_ids,
        }

    def summary(self) -> str:
        """Human-readable summary of the graph."""
        return (
            f"StateGraph: {len(self)} states, {self.graph.number_of_edges()} edges "
            f"(success={len(self.success_ids)}, fail={len(self.fail_ids)}, "
            f"dead={len(self.dead_ids)}, indeterminate={len(self.indeterminate_ids)}) "
            f"in {self.metrics.time_taken_ms:.1f}ms"
        )


# ==========================================
# BUILDER
# ==========================================

class StateGraphBuilder:
    """
    Breadth-first state-space enumerator.

    Algorithm:
    1. Seed the queue with the initial state (head at start, empty body)
    2. Pop a state and classify it
    3. Terminal states stop there; otherwise generate one edge per legal
       single step and enqueue unseen target states
    4. After the queue drains, bucket node ids by classification

    Termination is guaranteed: the state space is finite and every enqueued
    state is deduplicated by its key.
    """

    def __init__(self, max_states: Optional[int] = None):
        """
        Args:
            max_states: Abort with RuntimeError once this many distinct states
                exist (None = unlimited)
        """
        self.max_states = max_states
        self.metrics = BuildMetrics()

    def build(self, puzzle: Puzzle) -> StateGraph:
        """
        Enumerate all states reachable from ``puzzle.start``.

        Raises:
            RuntimeError: if ``max_states`` is exceeded
        """
        start_time = time.perf_counter()
        self.metrics = BuildMetrics()

        graph = nx.DiGraph()
        initial = PlayState.initial(puzzle)
        start_id = initial.key()
        graph.add_node(start_id, state=initial, type=StateType.INDETERMINATE)

        queue = deque([initial])

        while queue:
            self.metrics.max_queue_size = max(self.metrics.max_queue_size, len(queue))
            state = queue.popleft()
            node_id = state.key()
            self.metrics.states_explored += 1

            state_type = classify_state(state, puzzle)
            graph.nodes[node_id]['type'] = state_type

            if state_type in TERMINAL_STATE_TYPES:
                continue

            for direction in state.legal_directions(puzzle):
                next_state = state.advance(direction)
                next_id = next_state.key()

                if next_id not in graph:
                    if self.max_states is not None and graph.number_of_nodes() >= self.max_states:
                        raise RuntimeError(
                            f"State graph exceeded max_states={self.max_states}"
                        )
                    graph.add_node(next_id, state=next_state, type=StateType.INDETERMINATE)
                    queue.append(next_state)

                graph.add_edge(node_id, next_id, direction=direction)
                self.metrics.edges_created += 1

        result = StateGraph(graph=graph, start_id=start_id, metrics=self.metrics)
        buckets = result.ids_by_type()
        for node_id, node_type in graph.nodes(data='type'):
            buckets[node_type].append(node_id)

        self.metrics.time_taken_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(result.summary())
        return result


def build_state_graph(puzzle: Puzzle, max_states: Optional[int] = None) -> StateGraph:
    """Convenience wrapper around ``StateGraphBuilder(max_states).build(puzzle)``."""
    return StateGraphBuilder(max_states=max_states).build(puzzle)
