"""
Longcat Source Package
======================

Puzzle state-space engine for a single-player path-covering grid game: the
cat slides across a grid of walkable cells, trailing its body behind it, and
must visit every walkable cell exactly once.

Submodules:
- core: Directions, geometry, Puzzle and PlayState value types
- simulation: State-space graph builder and interactive slide-move session
- evaluation: Branch metrics and the linear difficulty model
- generation: Solution-down level generator, validation and level catalog
- utils: Walkability mask helpers

Pipeline:
    LevelGenerator -> DifficultyCalculator (StateGraphBuilder + branch metrics)
                   -> GameSession
"""

__version__ = "1.0.0"

__all__ = ['core', 'simulation', 'evaluation', 'generation', 'utils']
