"""
Generation and Analysis Pipeline for Longcat
============================================

Generate levels and score them using:
1. Solution-down generation with structural validation
2. Exact state-space analysis for small grids
3. Density heuristic for large grids

Usage:
    python -m longcat.generate --count 20 --save --output-dir ./levels

    # Analyze a saved level
    python -m longcat.generate --analyze ./levels/level_123.json

    # Custom difficulty coefficients
    python -m longcat.generate --model coefficients.json --count 5
"""

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict, List

from longcat.core.puzzle import Puzzle
from longcat.evaluation.difficulty_calculator import (
    AnalysisOptions,
    DifficultyCalculator,
    DifficultyModel,
    difficulty_label,
)
from longcat.generation.level_catalog import GeneratorOptions, LevelCatalog
from longcat.generation.level_generator import LevelGenerator, validate_level
from longcat.simulation.session import GameSession
from longcat.utils.grid_utils import render_mask

logger = logging.getLogger(__name__)


# =============================================================================
# FILE I/O
# =============================================================================

def save_levels(puzzles: List[Puzzle], output_dir: str) -> List[Path]:
    """Write each puzzle as ``<id>.json`` under ``output_dir``."""
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    saved_files = []
    for puzzle in puzzles:
        filepath = out / f"{puzzle.id}.json"
        with open(filepath, 'w') as f:
            json.dump(puzzle.to_dict(), f, indent=2)
        saved_files.append(filepath)

    logger.info(f"Saved {len(saved_files)} levels to {output_dir}")
    return saved_files


def load_level(filepath: str) -> Puzzle:
    with open(filepath, 'r') as f:
        return Puzzle.from_dict(json.load(f))


# =============================================================================
# ANALYSIS
# =============================================================================

def analyze_level(puzzle: Puzzle, calculator: DifficultyCalculator) -> Dict[str, Any]:
    """Validation, difficulty breakdown and solution replay for one level."""
    is_valid, errors = validate_level(puzzle)
    breakdown = calculator.compute(puzzle)

    replay_complete = None
    if puzzle.solution is not None:
        session = GameSession(puzzle)
        session.replay(puzzle.solution.slide_directions())
        replay_complete = session.is_complete

    return {
        'id': puzzle.id,
        'size': f"{puzzle.width}x{puzzle.height}",
        'is_valid': is_valid,
        'errors': errors,
        'label': difficulty_label(breakdown.difficulty),
        'breakdown': breakdown.to_dict(),
        'solution_replay_complete': replay_complete,
    }


# =============================================================================
# CLI
# =============================================================================

def main():
    parser = argparse.ArgumentParser(
        description='Generate and Analyze Longcat Levels',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )

    parser.add_argument(
        '--count', type=int, default=20,
        help='Number of levels to generate'
    )
    parser.add_argument(
        '--min-size', type=int, default=6,
        help='Minimum grid side length'
    )
    parser.add_argument(
        '--max-size', type=int, default=9,
        help='Maximum grid side length'
    )
    parser.add_argument(
        '--seed', type=int, default=None,
        help='Random seed for reproducibility'
    )
    parser.add_argument(
        '--model', type=str, default=None,
        help='JSON file with difficulty model coefficients'
    )
    parser.add_argument(
        '--max-states', type=int, default=None,
        help='Abort exact analysis beyond this many states'
    )
    parser.add_argument(
        '--save', action='store_true',
        help='Save generated levels as JSON files'
    )
    parser.add_argument(
        '--output-dir', type=str, default='./generated_levels',
        help='Directory to save generated levels'
    )
    parser.add_argument(
        '--analyze', type=str, default=None,
        help='Analyze a saved level JSON file instead of generating'
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true',
        help='Verbose output'
    )

    args = parser.parse_args()

    # Setup logging
    log_level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format='%(asctime)s | %(levelname)s | %(message)s',
        datefmt='%H:%M:%S',
    )

    model = DifficultyModel.load_json(args.model) if args.model else DifficultyModel()
    calculator = DifficultyCalculator(
        model=model,
        options=AnalysisOptions(max_states=args.max_states),
    )

    if args.analyze:
        puzzle = load_level(args.analyze)
        report = analyze_level(puzzle, calculator)
        print(render_mask(puzzle.mask, [puzzle.start]))
        print(json.dumps(report, indent=2))
        return report

    catalog = LevelCatalog(generator=LevelGenerator(seed=args.seed), calculator=calculator)
    options = GeneratorOptions(
        count=args.count,
        min_size=args.min_size,
        max_size=args.max_size,
    )
    puzzles = catalog.generate_batch(options)

    for puzzle in puzzles:
        logger.info(
            f"{puzzle.id}: {puzzle.width}x{puzzle.height}, "
            f"{puzzle.walkable_count} walkable, difficulty {puzzle.difficulty} "
            f"({difficulty_label(puzzle.difficulty)})"
        )

    if args.save and puzzles:
        save_levels(puzzles, args.output_dir)

    return puzzles


if __name__ == '__main__':
    main()
