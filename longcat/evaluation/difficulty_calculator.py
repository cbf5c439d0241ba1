"""
Linear Difficulty Calculator for Longcat Puzzles
================================================

Maps a puzzle to a non-negative scalar difficulty.

Policy:
1. Large grids (width * height > exact_cell_limit): density heuristic
       difficulty = round((1 - walkable / total) * 100)
2. Otherwise: exact state-space analysis and a linear model
       difficulty = intercept
                    + c1 * indeterminate_branches
                    + c2 * solutions
                    + c3 * solution_branches
   rounded to one decimal and clamped at zero
3. Any failure during exact analysis falls back to
       difficulty = min(100, walkable)
   Scoring never raises; it must not abort level generation.

The model is an approximate heuristic, not a claim of optimality. Its
coefficients are owned by the calculator instance and can be replaced
wholesale at runtime (``update_model``). Replacement is last-writer-wins and
not safe for concurrent refresh.

Usage:
    calc = DifficultyCalculator()
    difficulty = calc.predict(puzzle)
    breakdown = calc.compute(puzzle)
    print(breakdown.method, breakdown.to_dict())
"""

import json
import logging
import math
from dataclasses import dataclass, asdict
from pathlib import Path as FilePath
from typing import Any, Dict, Iterable, Optional, Union

from longcat.core.definitions import (
    DIFFICULTY_BANDS,
    EXACT_ANALYSIS_CELL_LIMIT,
    FALLBACK_DIFFICULTY_CAP,
)
from longcat.core.puzzle import Puzzle
from longcat.evaluation.branch_metrics import BranchMetrics, compute_branch_metrics
from longcat.simulation.state_graph import StateGraphBuilder

logger = logging.getLogger(__name__)


METHOD_EXACT = 'exact'
METHOD_DENSITY = 'density'
METHOD_FALLBACK = 'fallback'


# ==========================================
# CONFIGURATION
# ==========================================

@dataclass(frozen=True)
class DifficultyModel:
    """Coefficients of the linear difficulty model."""
    indeterminate_branches: float = 0.5
    solutions: float = -0.3
    solution_branches: float = 0.2
    intercept: float = 10.0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'DifficultyModel':
        """
        Build a model from a record of four floats.

        Raises:
            ValueError: if a coefficient is missing or not numeric
        """
        try:
            return cls(
                indeterminate_branches=float(data['indeterminate_branches']),
                solutions=float(data['solutions']),
                solution_branches=float(data['solution_branches']),
                intercept=float(data['intercept']),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise ValueError(f"Invalid difficulty model record: {exc}") from exc

    @classmethod
    def load_json(cls, filepath: Union[str, FilePath]) -> 'DifficultyModel':
        with open(filepath, 'r') as f:
            model = cls.from_dict(json.load(f))
        logger.info(f"Loaded difficulty model from {filepath}")
        return model

    def save_json(self, filepath: Union[str, FilePath]):
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Saved difficulty model to {filepath}")


@dataclass
class AnalysisOptions:
    """
    Configuration options for exact analysis.

    exact_cell_limit: grids with more cells use the density heuristic
    max_states: optional cap on enumerated states (None = unlimited);
        exceeding it counts as an analysis failure
    """
    exact_cell_limit: int = EXACT_ANALYSIS_CELL_LIMIT
    max_states: Optional[int] = None


@dataclass
class DifficultyBreakdown:
    """Difficulty plus how it was obtained."""
    difficulty: float
    method: str
    walkable_cells: int
    total_cells: int
    metrics: Optional[BranchMetrics] = None

    def to_dict(self) -> Dict:
        return {
            'difficulty': self.difficulty,
            'method': self.method,
            'walkable_cells': self.walkable_cells,
            'total_cells': self.total_cells,
            'metrics': self.metrics.to_dict() if self.metrics else None,
        }


# ==========================================
# FORMULAS
# ==========================================

def round_half_up(value: float, digits: int = 0) -> float:
    """Round halves away from -inf, so 2.5 -> 3 and 0.25 -> 0.3 at one digit."""
    scale = 10 ** digits
    return math.floor(value * scale + 0.5) / scale


def density_difficulty(walkable: int, total: int) -> float:
    """Share of wall cells, as a 0-100 integer value."""
    return round_half_up((1 - walkable / total) * 100)


def fallback_difficulty(walkable: int) -> float:
    return float(min(FALLBACK_DIFFICULTY_CAP, walkable))


def linear_difficulty(metrics: BranchMetrics, model: DifficultyModel) -> float:
    raw = (
        model.intercept +
        metrics.indeterminate_branches * model.indeterminate_branches +
        metrics.solutions * model.solutions +
        metrics.solution_branches * model.solution_branches
    )
    return max(0.0, round_half_up(raw, 1))


def difficulty_band(difficulty: Optional[float]) -> Optional[str]:
    """Name of the band containing ``difficulty`` (None if unscored)."""
    if difficulty is None:
        return None
    for name, (low, high) in DIFFICULTY_BANDS.items():
        if low <= difficulty < high:
            return name
    return None


def difficulty_label(difficulty: Optional[float]) -> str:
    """
    Display label for a score. Only an unscored level (None) is 'Unknown';
    a score of 0 is a real, clamped result and labels as 'Easy'.
    """
    band = difficulty_band(difficulty)
    return band.capitalize() if band else 'Unknown'


# ==========================================
# CALCULATOR
# ==========================================

class DifficultyCalculator:
    """
    Computes puzzle difficulty with the size-gated linear model.

    Args:
        model: Initial coefficients (defaults to DifficultyModel())
        options: Size gate and state cap
        graph_builder: Builder used for exact analysis; a fresh
            StateGraphBuilder(options.max_states) per call when omitted
    """

    def __init__(
        self,
        model: Optional[DifficultyModel] = None,
        options: Optional[AnalysisOptions] = None,
        graph_builder: Optional[StateGraphBuilder] = None,
    ):
        self._model = model or DifficultyModel()
        self.options = options or AnalysisOptions()
        self.graph_builder = graph_builder

    @property
    def model(self) -> DifficultyModel:
        return self._model

    def update_model(self, model: Union[DifficultyModel, Dict[str, Any]]):
        """Replace all coefficients at once."""
        if not isinstance(model, DifficultyModel):
            model = DifficultyModel.from_dict(model)
        self._model = model
        logger.info(f"Difficulty model updated: {model.to_dict()}")

    def get_coefficients(self) -> Dict[str, float]:
        return self._model.to_dict()

    def compute(self, puzzle: Puzzle) -> DifficultyBreakdown:
        """Difficulty of ``puzzle`` with the method and metrics used."""
        total = puzzle.total_cells
        walkable = puzzle.walkable_count

        if total > self.options.exact_cell_limit:
            return DifficultyBreakdown(
                difficulty=density_difficulty(walkable, total),
                method=METHOD_DENSITY,
                walkable_cells=walkable,
                total_cells=total,
            )

        try:
            builder = self.graph_builder or StateGraphBuilder(max_states=self.options.max_states)
            graph = builder.build(puzzle)
            metrics = compute_branch_metrics(graph)
            difficulty = linear_difficulty(metrics, self._model)
        except Exception as exc:
            logger.warning(f"Exact analysis failed for {puzzle.id}, using fallback: {exc}")
            return DifficultyBreakdown(
                difficulty=fallback_difficulty(walkable),
                method=METHOD_FALLBACK,
                walkable_cells=walkable,
                total_cells=total,
            )

        logger.debug(f"Difficulty of {puzzle.id}: {difficulty} ({metrics.to_dict()})")
        return DifficultyBreakdown(
            difficulty=difficulty,
            method=METHOD_EXACT,
            walkable_cells=walkable,
            total_cells=total,
            metrics=metrics,
        )

    def predict(self, puzzle: Puzzle) -> float:
        return self.compute(puzzle).difficulty

    def predict_many(self, puzzles: Iterable[Puzzle]) -> Dict[str, float]:
        """Difficulty per puzzle id."""
        return {p.id: self.predict(p) for p in puzzles}

    def score(self, puzzle: Puzzle) -> Puzzle:
        """Copy of ``puzzle`` with its difficulty attached."""
        return puzzle.with_difficulty(self.predict(puzzle))
