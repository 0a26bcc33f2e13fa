"""
Map-level logic for the skirmish decision core.

This module provides:
- Grid: Spatial logic and geometry
- A* pathfinding (find_path, hop_distance, GridPathfinder)
- WorldSnapshot: Read-only inbound view of the host world
"""

from .grid import Grid, chebyshev_distance, manhattan_distance, is_aligned
from .pathfinding import (
    HEURISTICS,
    REPLAN_RADIUS,
    GridPathfinder,
    find_path,
    hop_distance,
    should_replan,
)
from .snapshot import UnitView, WorldSnapshot

__all__ = [
    "Grid",
    "chebyshev_distance",
    "manhattan_distance",
    "is_aligned",
    "HEURISTICS",
    "REPLAN_RADIUS",
    "GridPathfinder",
    "find_path",
    "hop_distance",
    "should_replan",
    "UnitView",
    "WorldSnapshot",
]
