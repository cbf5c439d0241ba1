"""
Grid Mask Utilities
===================

Utility functions for boolean walkability masks.

This module provides:
- Mask construction and normalisation (read-only numpy bool arrays)
- Walkable cell counting and enumeration
- Flood fill over an arbitrary boolean region
- Connectivity checks (single connected component)

All masks are numpy arrays of shape (height, width) indexed ``mask[y, x]``,
where True means walkable.

Usage:
    from longcat.utils.grid_utils import as_mask, check_connectivity

    mask = as_mask([[True, True], [False, True]])
    if not check_connectivity(mask):
        print("Mask is split into several regions")
"""

import logging
from collections import deque
from typing import Iterable, List, Optional, Sequence, Set

import numpy as np

from longcat.core.geometry import Point, neighbors

logger = logging.getLogger(__name__)


# ==========================================
# CONSTRUCTION
# ==========================================

def as_mask(rows) -> np.ndarray:
    """
    Convert nested rows (or an array) into a read-only boolean mask.

    Raises:
        ValueError: if the input is not a non-empty 2D grid
    """
    mask = np.array(rows, dtype=bool)
    if mask.ndim != 2 or mask.shape[0] == 0 or mask.shape[1] == 0:
        raise ValueError(f"Mask must be a non-empty 2D grid, got shape {mask.shape}")
    mask.setflags(write=False)
    return mask


def create_open_mask(width: int, height: int) -> np.ndarray:
    """Fully walkable, writable mask."""
    return np.ones((height, width), dtype=bool)


def mask_from_points(points: Iterable[Point], width: int, height: int) -> np.ndarray:
    """Read-only mask with exactly ``points`` walkable."""
    mask = np.zeros((height, width), dtype=bool)
    for p in points:
        mask[p.y, p.x] = True
    mask.setflags(write=False)
    return mask


# ==========================================
# QUERIES
# ==========================================

def count_walkable(mask: np.ndarray) -> int:
    return int(np.count_nonzero(mask))


def walkable_cells(mask: np.ndarray) -> List[Point]:
    """Walkable cells in row-major order."""
    ys, xs = np.nonzero(mask)
    return [Point(int(x), int(y)) for y, x in zip(ys, xs)]


def first_walkable(mask: np.ndarray) -> Optional[Point]:
    ys, xs = np.nonzero(mask)
    if len(ys) == 0:
        return None
    return Point(int(xs[0]), int(ys[0]))


def is_walkable(mask: np.ndarray, point: Point) -> bool:
    height, width = mask.shape
    return 0 <= point.x < width and 0 <= point.y < height and bool(mask[point.y, point.x])


# ==========================================
# FLOOD FILL / CONNECTIVITY
# ==========================================

def flood_fill(region: np.ndarray, start: Point) -> Set[Point]:
    """
    Breadth-first flood fill over the True cells of ``region``.

    Args:
        region: Boolean array; True cells are passable
        start: Seed cell (must be True in ``region``)

    Returns:
        Set of reachable cells including ``start``; empty if the seed is blocked
    """
    if not is_walkable(region, start):
        return set()

    reached = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        for n in neighbors(current):
            if n not in reached and is_walkable(region, n):
                reached.add(n)
                queue.append(n)
    return reached


def is_connected(region: np.ndarray) -> bool:
    """
    True if the True cells of ``region`` form a single 4-connected component.

    An empty region is considered connected.
    """
    seed = first_walkable(region)
    if seed is None:
        return True
    return len(flood_fill(region, seed)) == count_walkable(region)


def check_connectivity(mask: np.ndarray) -> bool:
    """
    Walkable cells of ``mask`` form exactly one connected component.

    A mask with no walkable cells fails the check.
    """
    if mask.size == 0 or count_walkable(mask) == 0:
        return False
    return is_connected(mask)


def render_mask(mask: np.ndarray, marks: Optional[Sequence[Point]] = None) -> str:
    """ASCII rendering for logs: '.' walkable, '#' wall, 'S' first mark, 'o' others."""
    rows = [['.' if cell else '#' for cell in row] for row in mask]
    for i, p in enumerate(marks or []):
        rows[p.y][p.x] = 'S' if i == 0 else 'o'
    return '\n'.join(''.join(r) for r in rows)
