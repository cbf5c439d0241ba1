"""
Branch Metrics for State-Space Graphs
=====================================

Combinatorial quantities extracted from a completed StateGraph. They are the
inputs of the linear difficulty model.

Metrics:
- solutions: number of Success nodes
- indeterminate_branches: sum over Indeterminate nodes of max(0, outdegree - 1)
- solution_branches: the same per-node penalty summed over solution nodes,
  i.e. nodes lying on at least one path from the start to a Success node

Solution nodes are found by walking incoming edges backwards from every
Success node with an explicit stack and one shared visited set, so each node
is expanded at most once no matter how many Success nodes reach it.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Set

from longcat.core.puzzle import Puzzle
from longcat.core.state import StateKey
from longcat.simulation.state_graph import StateGraph, StateGraphBuilder

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BranchMetrics:
    """The three difficulty features of a puzzle."""
    indeterminate_branches: int
    solutions: int
    solution_branches: int

    def to_dict(self) -> Dict[str, int]:
        return {
            'indeterminate_branches': self.indeterminate_branches,
            'solutions': self.solutions,
            'solution_branches': self.solution_branches,
        }


def _branch_penalty(graph: StateGraph, node_ids: Iterable[StateKey]) -> int:
    """Sum of (outdegree - 1) over nodes with more than one continuation."""
    return sum(max(0, graph.out_degree(n) - 1) for n in node_ids)


def count_solutions(graph: StateGraph) -> int:
    return len(graph.success_ids)


def count_indeterminate_branches(graph: StateGraph) -> int:
    return _branch_penalty(graph, graph.indeterminate_ids)


def find_solution_nodes(graph: StateGraph) -> Set[StateKey]:
    """
    All nodes from which some Success node is reachable (Success nodes included).

    Reverse traversal over predecessors using an explicit stack.
    """
    solution_nodes: Set[StateKey] = set()
    for success_id in graph.success_ids:
        if success_id in solution_nodes:
            continue
        solution_nodes.add(success_id)
        stack = [success_id]
        while stack:
            node = stack.pop()
            for pred in graph.graph.predecessors(node):
                if pred not in solution_nodes:
                    solution_nodes.add(pred)
                    stack.append(pred)
    return solution_nodes


def count_solution_branches(graph: StateGraph) -> int:
    return _branch_penalty(graph, find_solution_nodes(graph))


def compute_branch_metrics(graph: StateGraph) -> BranchMetrics:
    """Extract all three metrics from a completed graph."""
    metrics = BranchMetrics(
        indeterminate_branches=count_indeterminate_branches(graph),
        solutions=count_solutions(graph),
        solution_branches=count_solution_branches(graph),
    )
    logger.debug(
        f"Branch metrics: indeterminate={metrics.indeterminate_branches}, "
        f"solutions={metrics.solutions}, solution_branches={metrics.solution_branches}"
    )
    return metrics


def analyze_puzzle(puzzle: Puzzle, builder: Optional[StateGraphBuilder] = None) -> BranchMetrics:
    """Build the state graph of ``puzzle`` and return its branch metrics."""
    builder = builder or StateGraphBuilder()
    return compute_branch_metrics(builder.build(puzzle))
