"""
Grid - Spatial logic for the skirmish map.

The Grid handles:
- Coordinate validation
- Distance calculations
- Obstacle-aware neighbour queries

Coordinate System:
- X increases to the RIGHT
- Y increases UPWARD (mathematical convention)
- Origin (0, 0) is at BOTTOM-LEFT
"""

from __future__ import annotations
from typing import AbstractSet, Iterable, Optional

from ..core.types import Cell, MoveDir


def chebyshev_distance(a: Iterable[int], b: Iterable[int]) -> int:
    """Chebyshev distance, max(|dx|, |dy|)."""
    ax, ay = a
    bx, by = b
    return max(abs(ax - bx), abs(ay - by))


def manhattan_distance(a: Iterable[int], b: Iterable[int]) -> int:
    """Manhattan (taxicab) distance, |dx| + |dy|."""
    ax, ay = a
    bx, by = b
    return abs(ax - bx) + abs(ay - by)


def is_aligned(a: Iterable[int], b: Iterable[int]) -> bool:
    """True when both cells share a row or a column."""
    ax, ay = a
    bx, by = b
    return ax == bx or ay == by


class Grid:
    """
    A 2D grid with mathematical coordinates (Y+ = UP) and a fixed set of
    obstacle cells.

    Provides spatial queries without game logic and or unit state.

    Attributes:
        width: Grid width (X dimension)
        height: Grid height (Y dimension)
        obstacles: Cells that can never be entered
    """

    def __init__(self, width: int, height: int, obstacles: Optional[Iterable[Iterable[int]]] = None):
        """
        Initialize a grid.

        Args:
            width: Grid width (must be positive)
            height: Grid height (must be positive)
            obstacles: Optional obstacle cells

        Raises:
            ValueError: If dimensions are invalid
        """
        if width <= 0 or height <= 0:
            raise ValueError(f"Grid dimensions must be positive: {width}x{height}")

        self.width = width
        self.height = height
        self.obstacles: frozenset[Cell] = frozenset(Cell(*cell) for cell in (obstacles or ()))

    def in_bounds(self, pos: Iterable[int]) -> bool:
        """Check if a position is within grid boundaries."""
        x, y = pos
        return 0 <= x < self.width and 0 <= y < self.height

    def is_passable(self, pos: Iterable[int]) -> bool:
        """In bounds and not an obstacle."""
        return self.in_bounds(pos) and Cell(*pos) not in self.obstacles

    def get_neighbors(
        self,
        pos: Iterable[int],
        blocked: Optional[AbstractSet[Cell]] = None,
    ) -> list[Cell]:
        """
        Get passable 4-connected neighbours in MoveDir order.

        Args:
            pos: Center position
            blocked: Extra cells to treat as impassable (e.g. units)

        Returns:
            List of neighbouring cells that can be entered
        """
        center = Cell(*pos)
        extra = blocked or frozenset()
        neighbors = []
        for direction in MoveDir:
            candidate = center.offset(*direction.delta)
            if self.is_passable(candidate) and candidate not in extra:
                neighbors.append(candidate)
        return neighbors

    def __str__(self) -> str:
        """String representation."""
        return f"Grid({self.width}x{self.height})"

    def __repr__(self) -> str:
        """Detailed representation."""
        return f"Grid(width={self.width}, height={self.height}, obstacles={len(self.obstacles)})"
