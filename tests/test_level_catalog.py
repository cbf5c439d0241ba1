"""
Tests for the LevelCatalog (batch generation, play order, band filtering).

Run with: pytest tests/test_level_catalog.py -v
"""

import random

import pytest
import numpy as np

from longcat.core.geometry import Point
from longcat.core.puzzle import Puzzle
from longcat.evaluation.difficulty_calculator import difficulty_band
from longcat.generation.level_catalog import GeneratorOptions, LevelCatalog
from longcat.generation.level_generator import LevelGenerator


def make_puzzle(puzzle_id, difficulty=None):
    return Puzzle(
        id=puzzle_id,
        width=2,
        height=1,
        mask=np.array([[True, True]]),
        start=Point(0, 0),
        difficulty=difficulty,
    )


class BrokenGenerator:
    """Generator stand-in that always yields a disconnected level."""

    def __init__(self):
        self.rng = random.Random(0)
        self.calls = 0

    def generate(self, width, height):
        self.calls += 1
        return Puzzle(
            id=f"broken_{self.calls}",
            width=3,
            height=1,
            mask=np.array([[True, False, True]]),
            start=Point(0, 0),
        )


# ==============================================================================
# FIXTURES
# ==============================================================================

@pytest.fixture
def small_options():
    return GeneratorOptions(count=5, min_size=3, max_size=4)


@pytest.fixture
def catalog():
    return LevelCatalog(generator=LevelGenerator(seed=11))


@pytest.fixture
def filled_catalog():
    catalog = LevelCatalog()
    catalog.replace_all([
        make_puzzle("a", 5.0),
        make_puzzle("b", 35.0),
        make_puzzle("c", 75.0),
        make_puzzle("d", 120.0),
        make_puzzle("e", None),
    ])
    return catalog


# ==============================================================================
# BATCH GENERATION
# ==============================================================================

class TestBatchGeneration:

    def test_batch_size_and_order(self, catalog, small_options):
        levels = catalog.generate_batch(small_options)
        assert len(levels) == 5
        assert len(catalog) == 5
        difficulties = [p.difficulty for p in levels]
        assert all(d is not None for d in difficulties)
        assert difficulties == sorted(difficulties)

    def test_sizes_within_range(self, catalog, small_options):
        for puzzle in catalog.generate_batch(small_options):
            assert 3 <= puzzle.width <= 4
            assert 3 <= puzzle.height <= 4

    def test_batch_levels_are_cached(self, catalog, small_options):
        levels = catalog.generate_batch(small_options)
        for puzzle in levels:
            assert puzzle.id in catalog
            assert catalog.get(puzzle.id) is puzzle

    def test_batch_replaces_order(self, catalog, small_options):
        first = catalog.generate_batch(small_options)
        second = catalog.generate_batch(small_options)
        assert catalog.levels() == second
        assert catalog.get(first[0].id) is first[0]

    def test_generate_one_appends_scored_level(self, catalog, small_options):
        puzzle = catalog.generate_one(small_options)
        assert puzzle.difficulty is not None
        assert catalog.levels() == [puzzle]


# ==============================================================================
# VALIDATED GENERATION
# ==============================================================================

class TestGenerateValidated:

    def test_returns_valid_level(self, catalog):
        puzzle = catalog.generate_validated(5, 5)
        assert puzzle.width == 5

    def test_gives_up_after_max_attempts(self):
        generator = BrokenGenerator()
        catalog = LevelCatalog(generator=generator)
        with pytest.raises(RuntimeError):
            catalog.generate_validated(3, 1, max_attempts=4)
        assert generator.calls == 4


# ==============================================================================
# ORDER / SELECTION
# ==============================================================================

class TestPlayOrder:

    def test_get_unknown(self, filled_catalog):
        assert filled_catalog.get("missing") is None

    def test_next_level(self, filled_catalog):
        assert filled_catalog.next_level("a").id == "b"
        assert filled_catalog.next_level("d").id == "e"

    def test_next_level_of_last_or_unknown(self, filled_catalog):
        assert filled_catalog.next_level("e") is None
        assert filled_catalog.next_level("missing") is None

    def test_add_updates_in_place(self, filled_catalog):
        filled_catalog.add(make_puzzle("b", 40.0))
        assert len(filled_catalog) == 5
        assert filled_catalog.levels()[1].difficulty == 40.0
        filled_catalog.add(make_puzzle("f", 1.0))
        assert filled_catalog.levels()[-1].id == "f"

    def test_selection(self, filled_catalog):
        assert filled_catalog.selected is None
        puzzle = filled_catalog.get("c")
        filled_catalog.select(puzzle)
        assert filled_catalog.selected is puzzle
        filled_catalog.clear_selection()
        assert filled_catalog.selected is None


# ==============================================================================
# BAND FILTERING
# ==============================================================================

class TestBandFilter:

    @pytest.mark.parametrize("band,expected", [
        ('all', ['a', 'b', 'c', 'd', 'e']),
        ('easy', ['a', 'e']),
        ('medium', ['b']),
        ('hard', ['c']),
        ('expert', ['d']),
    ])
    def test_filter(self, filled_catalog, band, expected):
        assert [p.id for p in filled_catalog.filter_by_band(band)] == expected

    def test_unknown_band(self, filled_catalog):
        with pytest.raises(ValueError):
            filled_catalog.filter_by_band('impossible')

    def test_bands_partition_generated_batch(self, catalog, small_options):
        levels = catalog.generate_batch(small_options)
        counted = sum(
            len(catalog.filter_by_band(band))
            for band in ('easy', 'medium', 'hard', 'expert')
        )
        assert counted == len(levels)
        for puzzle in levels:
            assert difficulty_band(puzzle.difficulty) is not None


# ==============================================================================
# OPTIONS
# ==============================================================================

class TestGeneratorOptions:

    def test_defaults(self):
        options = GeneratorOptions()
        assert options.count == 20
        assert (options.min_size, options.max_size) == (6, 9)

    @pytest.mark.parametrize("kwargs", [
        {'min_size': 0},
        {'min_size': 8, 'max_size': 6},
        {'max_attempts': 0},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            GeneratorOptions(**kwargs)
