"""
Tests for the generation/analysis pipeline entry points.

Run with: pytest tests/test_generate_pipeline.py -v
"""

import json
import sys

import pytest

from longcat.evaluation.difficulty_calculator import DifficultyCalculator
from longcat.generate import analyze_level, load_level, main, save_levels
from longcat.generation.level_generator import LevelGenerator


@pytest.fixture
def levels():
    gen = LevelGenerator(seed=5)
    calc = DifficultyCalculator()
    return [calc.score(gen.generate(4, 4)) for _ in range(3)]


class TestFileIO:

    def test_save_and_load(self, levels, tmp_path):
        saved = save_levels(levels, str(tmp_path / "out"))
        assert len(saved) == 3
        for puzzle, filepath in zip(levels, saved):
            assert filepath.name == f"{puzzle.id}.json"
            assert load_level(str(filepath)) == puzzle


class TestAnalyzeLevel:

    def test_report(self, levels):
        report = analyze_level(levels[0], DifficultyCalculator())
        assert report['is_valid']
        assert report['errors'] == []
        assert report['breakdown']['method'] == 'exact'
        assert report['solution_replay_complete'] is True
        assert report['size'] == "4x4"
        json.dumps(report)


class TestMain:

    def test_generate_and_save(self, tmp_path, monkeypatch):
        out_dir = tmp_path / "levels"
        monkeypatch.setattr(sys, 'argv', [
            'generate', '--count', '3', '--min-size', '3', '--max-size', '4',
            '--seed', '9', '--save', '--output-dir', str(out_dir),
        ])
        puzzles = main()
        assert len(puzzles) == 3
        assert len(list(out_dir.glob('*.json'))) == 3

    def test_analyze_saved_level(self, levels, tmp_path, monkeypatch, capsys):
        filepath = save_levels(levels[:1], str(tmp_path))[0]
        monkeypatch.setattr(sys, 'argv', ['generate', '--analyze', str(filepath)])
        report = main()
        assert report['id'] == levels[0].id
        assert levels[0].id in capsys.readouterr().out
