"""
Level Catalog
=============

In-memory cache of generated levels, ordered for play.

Responsibilities:
- Look up a previously generated level by id
- Keep the play order and answer "which level comes next"
- Track the currently selected level
- Generate scored batches (random sizes, sorted by difficulty)
- Filter by difficulty band

Validation retries are a caller policy; ``generate_validated`` is the
bounded-retry helper used by batch generation.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from longcat.core.definitions import DEFAULT_MAX_SIZE, DEFAULT_MIN_SIZE, DIFFICULTY_BANDS
from longcat.core.puzzle import Puzzle
from longcat.evaluation.difficulty_calculator import DifficultyCalculator
from longcat.generation.level_generator import LevelGenerator, validate_level

logger = logging.getLogger(__name__)


@dataclass
class GeneratorOptions:
    """Configuration for catalog batches."""
    count: int = 20
    min_size: int = DEFAULT_MIN_SIZE
    max_size: int = DEFAULT_MAX_SIZE
    max_attempts: int = 10

    def __post_init__(self):
        if self.min_size < 1 or self.max_size < self.min_size:
            raise ValueError(f"Invalid size range [{self.min_size}, {self.max_size}]")
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")


class LevelCatalog:
    """
    Ordered, id-addressable collection of levels.

    Usage:
        catalog = LevelCatalog(generator=LevelGenerator(seed=7))
        levels = catalog.generate_batch(GeneratorOptions(count=5))
        first = catalog.get(levels[0].id)
        second = catalog.next_level(first.id)
    """

    def __init__(
        self,
        generator: Optional[LevelGenerator] = None,
        calculator: Optional[DifficultyCalculator] = None,
    ):
        self.generator = generator or LevelGenerator()
        self.calculator = calculator or DifficultyCalculator()
        self._cache: Dict[str, Puzzle] = {}
        self._order: List[Puzzle] = []
        self._selected: Optional[Puzzle] = None

    def __len__(self) -> int:
        return len(self._order)

    def __contains__(self, level_id: str) -> bool:
        return level_id in self._cache

    # ------------------------------------------------------------------
    # Cache / order
    # ------------------------------------------------------------------

    def add(self, puzzle: Puzzle):
        """Cache ``puzzle``; append it to the play order if not present."""
        self._cache[puzzle.id] = puzzle
        for i, existing in enumerate(self._order):
            if existing.id == puzzle.id:
                self._order[i] = puzzle
                return
        self._order.append(puzzle)

    def replace_all(self, puzzles: List[Puzzle]):
        """Cache every puzzle and make ``puzzles`` the play order."""
        for p in puzzles:
            self._cache[p.id] = p
        self._order = list(puzzles)

    def get(self, level_id: str) -> Optional[Puzzle]:
        return self._cache.get(level_id)

    def levels(self) -> List[Puzzle]:
        return list(self._order)

    def next_level(self, level_id: str) -> Optional[Puzzle]:
        for i, p in enumerate(self._order[:-1]):
            if p.id == level_id:
                return self._order[i + 1]
        return None

    def select(self, puzzle: Puzzle):
        self._selected = puzzle
        self._cache[puzzle.id] = puzzle

    @property
    def selected(self) -> Optional[Puzzle]:
        return self._selected

    def clear_selection(self):
        self._selected = None

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    def generate_validated(self, width: int, height: int, max_attempts: int = 10) -> Puzzle:
        """
        Generate until a level passes ``validate_level``.

        Raises:
            RuntimeError: if no attempt produced a valid level
        """
        for attempt in range(1, max_attempts + 1):
            puzzle = self.generator.generate(width, height)
            is_valid, errors = validate_level(puzzle)
            if is_valid:
                return puzzle
            logger.warning(f"Attempt {attempt}/{max_attempts} rejected: {errors}")
        raise RuntimeError(
            f"No valid {width}x{height} level after {max_attempts} attempts"
        )

    def generate_one(self, options: Optional[GeneratorOptions] = None) -> Puzzle:
        """Generate, score and cache a single level of random size."""
        options = options or GeneratorOptions(count=1)
        rng = self.generator.rng
        width = rng.randint(options.min_size, options.max_size)
        height = rng.randint(options.min_size, options.max_size)
        puzzle = self.calculator.score(
            self.generate_validated(width, height, options.max_attempts)
        )
        self.add(puzzle)
        self._order.sort(key=lambda p: p.difficulty or 0)
        return puzzle

    def generate_batch(self, options: Optional[GeneratorOptions] = None) -> List[Puzzle]:
        """
        Generate ``options.count`` scored levels sorted by difficulty.

        The batch replaces the current play order.
        """
        options = options or GeneratorOptions()
        rng = self.generator.rng
        puzzles = []
        for _ in range(options.count):
            width = rng.randint(options.min_size, options.max_size)
            height = rng.randint(options.min_size, options.max_size)
            puzzle = self.generate_validated(width, height, options.max_attempts)
            puzzles.append(self.calculator.score(puzzle))

        puzzles.sort(key=lambda p: p.difficulty or 0)
        self.replace_all(puzzles)
        logger.info(f"Generated batch of {len(puzzles)} levels")
        return puzzles

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    def filter_by_band(self, band: str = 'all') -> List[Puzzle]:
        """
        Levels whose difficulty falls in ``band`` ('easy', 'medium', 'hard',
        'expert' or 'all'). Unscored levels count as difficulty 0.
        """
        if band == 'all':
            return self.levels()
        if band not in DIFFICULTY_BANDS:
            raise ValueError(f"Unknown difficulty band: {band}")
        low, high = DIFFICULTY_BANDS[band]
        return [p for p in self._order if low <= (p.difficulty or 0) < high]
