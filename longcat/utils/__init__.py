"""
Utility Module for Longcat
==========================

Common helpers for walkability masks.

Components:
    - Mask construction: as_mask, create_open_mask, mask_from_points
    - Queries: count_walkable, walkable_cells, first_walkable, is_walkable
    - Connectivity: flood_fill, is_connected, check_connectivity
"""

from .grid_utils import (
    as_mask,
    create_open_mask,
    mask_from_points,
    count_walkable,
    walkable_cells,
    first_walkable,
    is_walkable,
    flood_fill,
    is_connected,
    check_connectivity,
    render_mask,
)

__all__ = [
    'as_mask',
    'create_open_mask',
    'mask_from_points',
    'count_walkable',
    'walkable_cells',
    'first_walkable',
    'is_walkable',
    'flood_fill',
    'is_connected',
    'check_connectivity',
    'render_mask',
]
