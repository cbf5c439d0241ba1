"""
Longcat Evaluation Module
=========================

- Branch metrics extracted from state-space graphs
- Linear difficulty model with density and size fallbacks
- Difficulty bands and labels
"""

from .branch_metrics import (
    BranchMetrics,
    analyze_puzzle,
    compute_branch_metrics,
    count_indeterminate_branches,
    count_solutions,
    count_solution_branches,
    find_solution_nodes,
)
from .difficulty_calculator import (
    DifficultyCalculator,
    DifficultyModel,
    DifficultyBreakdown,
    AnalysisOptions,
    density_difficulty,
    fallback_difficulty,
    linear_difficulty,
    difficulty_band,
    difficulty_label,
    round_half_up,
)

__all__ = [
    # Branch metrics
    'BranchMetrics',
    'analyze_puzzle',
    'compute_branch_metrics',
    'count_indeterminate_branches',
    'count_solutions',
    'count_solution_branches',
    'find_solution_nodes',
    # Difficulty
    'DifficultyCalculator',
    'DifficultyModel',
    'DifficultyBreakdown',
    'AnalysisOptions',
    'density_difficulty',
    'fallback_difficulty',
    'linear_difficulty',
    'difficulty_band',
    'difficulty_label',
    'round_half_up',
]
