"""
A* pathfinding on a 4-connected grid.

find_path() returns the cells to walk through, excluding the start and
including the goal, or an empty list when the goal cannot be reached.
hop_distance() is the length of that list and is used as a distance
feature by the evaluator, where 0 means "no path".

The default heuristic is Chebyshev distance. On a 4-connected grid with
unit step cost it never exceeds the true cost (max(|dx|, |dy|) <=
|dx| + |dy|), so returned paths are shortest paths. Manhattan distance
is tighter and is available for callers that want fewer expansions.
"""

from __future__ import annotations

import heapq
import itertools
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from ..core.types import Cell
from .grid import Grid, chebyshev_distance, manhattan_distance

Heuristic = Callable[[Cell, Cell], int]

HEURISTICS: Dict[str, Heuristic] = {
    "chebyshev": chebyshev_distance,
    "manhattan": manhattan_distance,
}

# Chebyshev radius within which a blocker on the held path forces a replan.
REPLAN_RADIUS = 3


@dataclass(eq=False)
class PathNode:
    """A cell plus A* bookkeeping. Lives for a single find_path() call."""
    cell: Cell
    g: int
    f: int
    parent: Optional[PathNode] = field(default=None, repr=False)


class OpenSet:
    """
    Priority queue of PathNodes keyed by (f, insertion order).

    Nodes are never edited while queued: update() retires the current
    entry for a cell and pushes a fresh node in its place. Retired heap
    entries are skipped on pop.
    """

    def __init__(self) -> None:
        self._heap: List[Tuple[int, int, Cell]] = []
        self._entries: Dict[Cell, Tuple[int, int, PathNode]] = {}
        self._counter = itertools.count()

    def push(self, node: PathNode) -> None:
        """Insert a node for a cell that is not queued yet."""
        if node.cell in self._entries:
            raise KeyError(f"{node.cell} is already queued; use update()")
        order = next(self._counter)
        self._entries[node.cell] = (node.f, order, node)
        heapq.heappush(self._heap, (node.f, order, node.cell))

    def update(self, node: PathNode) -> None:
        """Replace the queued node for node.cell (remove, then reinsert)."""
        self._entries.pop(node.cell, None)
        self.push(node)

    def pop(self) -> PathNode:
        """Remove and return the node with the lowest f."""
        while self._heap:
            f, order, cell = heapq.heappop(self._heap)
            entry = self._entries.get(cell)
            if entry is not None and entry[1] == order:
                del self._entries[cell]
                return entry[2]
        raise IndexError("pop from an empty open set")

    def get(self, cell: Cell) -> Optional[PathNode]:
        entry = self._entries.get(cell)
        return entry[2] if entry else None

    def __contains__(self, cell: object) -> bool:
        return cell in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def find_path(
    start: Iterable[int],
    goal: Iterable[int],
    width: int,
    height: int,
    obstacles: Iterable[Iterable[int]] = (),
    blocker: Optional[Iterable[int]] = None,
    *,
    heuristic: Heuristic = chebyshev_distance,
) -> List[Cell]:
    """
    Shortest 4-connected path from start to goal.

    Args:
        start: Cell the walker stands on (not part of the result)
        goal: Cell to reach (last element of the result)
        width: Map width
        height: Map height
        obstacles: Impassable cells
        blocker: Optional dynamic blocker cell, impassable for this call
        heuristic: Estimate of remaining cost, see HEURISTICS

    Returns:
        Cells from just after start up to and including goal, or [] when
        the goal is unreachable or start == goal.
    """
    grid = Grid(width, height, obstacles)
    return _astar(grid, Cell(*start), Cell(*goal), _as_cell(blocker), heuristic)


def hop_distance(
    start: Iterable[int],
    goal: Iterable[int],
    width: int,
    height: int,
    obstacles: Iterable[Iterable[int]] = (),
    blocker: Optional[Iterable[int]] = None,
    *,
    heuristic: Heuristic = chebyshev_distance,
) -> int:
    """Number of steps from start to goal; 0 when there is no path."""
    return len(find_path(start, goal, width, height, obstacles, blocker, heuristic=heuristic))


def should_replan(
    path: Sequence[Iterable[int]],
    unit_cell: Iterable[int],
    blocker_cell: Optional[Iterable[int]],
    radius: int = REPLAN_RADIUS,
) -> bool:
    """
    Decide whether a held path must be recomputed.

    True when the blocker stands on a remaining cell of the path and is
    within `radius` (Chebyshev) of the unit following it.
    """
    if blocker_cell is None or not path:
        return False
    blocker = Cell(*blocker_cell)
    if chebyshev_distance(unit_cell, blocker) > radius:
        return False
    return any(Cell(*cell) == blocker for cell in path)


class GridPathfinder:
    """
    Pathfinding service bound to one map.

    The obstacle set is fixed for the lifetime of the instance, so query
    results are memoized per (start, goal, blocker). Inject one instance
    into the evaluator instead of rebuilding it per snapshot.
    """

    def __init__(
        self,
        width: int,
        height: int,
        obstacles: Iterable[Iterable[int]] = (),
        heuristic: Heuristic | str = chebyshev_distance,
    ):
        self.grid = Grid(width, height, obstacles)
        if isinstance(heuristic, str):
            if heuristic not in HEURISTICS:
                raise ValueError(f"Unknown heuristic '{heuristic}', expected one of {sorted(HEURISTICS)}")
            heuristic = HEURISTICS[heuristic]
        self.heuristic = heuristic
        self._cache: Dict[Tuple[Cell, Cell, Optional[Cell]], Tuple[Cell, ...]] = {}

    @property
    def width(self) -> int:
        return self.grid.width

    @property
    def height(self) -> int:
        return self.grid.height

    @property
    def obstacles(self) -> frozenset:
        return self.grid.obstacles

    def find_path(
        self,
        start: Iterable[int],
        goal: Iterable[int],
        blocker: Optional[Iterable[int]] = None,
    ) -> List[Cell]:
        key = (Cell(*start), Cell(*goal), _as_cell(blocker))
        path = self._cache.get(key)
        if path is None:
            path = tuple(_astar(self.grid, key[0], key[1], key[2], self.heuristic))
            self._cache[key] = path
        return list(path)

    def distance(
        self,
        start: Iterable[int],
        goal: Iterable[int],
        blocker: Optional[Iterable[int]] = None,
    ) -> int:
        """Hop distance; 0 when there is no path."""
        return len(self.find_path(start, goal, blocker))

    def clear_cache(self) -> None:
        self._cache.clear()

    def __repr__(self) -> str:
        return f"GridPathfinder({self.grid!r}, cached={len(self._cache)})"


def _as_cell(pos: Optional[Iterable[int]]) -> Optional[Cell]:
    return None if pos is None else Cell(*pos)


def _astar(grid: Grid, start: Cell, goal: Cell, blocker: Optional[Cell], heuristic: Heuristic) -> List[Cell]:
    blocked = frozenset((blocker,)) if blocker is not None else frozenset()

    open_set = OpenSet()
    open_set.push(PathNode(start, 0, heuristic(start, goal)))
    closed: set[Cell] = set()

    while open_set:
        current = open_set.pop()
        closed.add(current.cell)

        if current.cell == goal:
            return _reconstruct_path(current)

        for cell in grid.get_neighbors(current.cell, blocked):
            if cell in closed:
                continue

            tentative_g = current.g + 1
            queued = open_set.get(cell)
            if queued is None:
                open_set.push(PathNode(cell, tentative_g, tentative_g + heuristic(cell, goal), current))
            elif tentative_g < queued.g:
                open_set.update(PathNode(cell, tentative_g, tentative_g + heuristic(cell, goal), current))

    return []


def _reconstruct_path(node: PathNode) -> List[Cell]:
    path = []
    while node.parent is not None:
        path.append(node.cell)
        node = node.parent
    path.reverse()
    return path
