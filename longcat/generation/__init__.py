"""
Longcat Generation Module
=========================

- level_generator: solution-down level construction and structural validation
- level_catalog: id cache, play order and scored batch generation
"""

from .level_generator import LevelGenerator, generate_level, validate_level
from .level_catalog import LevelCatalog, GeneratorOptions

__all__ = [
    'LevelGenerator',
    'generate_level',
    'validate_level',
    'LevelCatalog',
    'GeneratorOptions',
]
