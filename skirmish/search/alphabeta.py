"""
Depth-limited minimax with alpha-beta pruning over CombatSnapshots.

Depth counts plies: every recursive call consumes one ply whichever side
is to move. The friendly side maximizes, the enemy side minimizes.

Children are ordered by their static evaluation before recursing,
best-first for the side to move. Pruning then cuts more of the tree but
never changes the value found.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Callable, List, Optional

from ..core.actions import JointAction
from ..core.types import Side
from ..model.state import CombatSnapshot, SearchNode, generate_children

INFINITY = float("inf")

EvaluationFn = Callable[[CombatSnapshot], float]


@dataclass
class SearchStats:
    """Work counters for one search call."""
    nodes_expanded: int = 0
    evaluations: int = 0
    cutoffs: int = 0
    depth_reached: int = 0
    elapsed: float = 0.0

    def reset(self) -> None:
        self.nodes_expanded = 0
        self.evaluations = 0
        self.cutoffs = 0
        self.depth_reached = 0
        self.elapsed = 0.0


@dataclass(frozen=True)
class SearchResult:
    """Chosen root child and its backed-up value."""
    node: SearchNode
    value: float

    @property
    def action(self) -> JointAction:
        return self.node.action


class AlphaBetaSearch:
    """
    Alpha-beta search engine.

    Attributes:
        evaluate: Snapshot -> utility for the friendly side
        allow_stacking: Passed through to child generation
        stats: Counters of the most recent best_child()/search() call
    """

    def __init__(self, evaluate: EvaluationFn, *, allow_stacking: bool = False):
        self.evaluate = evaluate
        self.allow_stacking = allow_stacking
        self.stats = SearchStats()

    # ------------------------------------------------------------------
    # Root selection
    # ------------------------------------------------------------------
    def best_child(self, snapshot: CombatSnapshot, depth: int) -> Optional[SearchResult]:
        """
        Pick the friendly joint action with the highest backed-up value.

        Each root child is searched at depth - 1 with the full window.
        The first child reaching a strictly greater value wins, so ties go
        to the earlier child in heuristic order.

        Returns:
            None when the friendly side has no legal joint action
        """
        self.stats.reset()
        started = time.perf_counter()

        children = self.children(snapshot, Side.FRIENDLY)
        best: Optional[SearchResult] = None
        for child in self.order_children(children, maximizing=True):
            value = self.search(child, depth - 1, -INFINITY, INFINITY, maximizing=False)
            if best is None or value > best.value:
                best = SearchResult(child, value)

        self.stats.depth_reached = depth
        self.stats.elapsed = time.perf_counter() - started
        return best

    def best_action(self, snapshot: CombatSnapshot, depth: int) -> Optional[JointAction]:
        result = self.best_child(snapshot, depth)
        return result.action if result else None

    def iterative_deepening(
        self,
        snapshot: CombatSnapshot,
        max_depth: int,
        time_budget: float,
    ) -> Optional[SearchResult]:
        """
        Run best_child() at depth 1, 2, ... max_depth while time remains.

        The budget is checked between iterations only; an iteration that
        has started always completes. Returns the deepest finished result.
        """
        started = time.perf_counter()
        result: Optional[SearchResult] = None
        for depth in range(1, max_depth + 1):
            result = self.best_child(snapshot, depth)
            if result is None:
                break
            if time.perf_counter() - started >= time_budget:
                break
        return result

    # ------------------------------------------------------------------
    # Recursive search
    # ------------------------------------------------------------------
    def search(
        self,
        node: SearchNode,
        depth: int,
        alpha: float = -INFINITY,
        beta: float = INFINITY,
        maximizing: bool = True,
    ) -> float:
        """
        Backed-up value of `node` with `depth` plies left.

        `maximizing` tells whose ply it is at this node: True for the
        friendly side, False for the enemy.
        """
        if depth <= 0:
            return self._leaf(node)

        side = Side.FRIENDLY if maximizing else Side.ENEMY
        children = self.children(node.snapshot, side)
        if not children:
            return self._leaf(node)

        self.stats.nodes_expanded += 1
        if maximizing:
            value = -INFINITY
            for child in self.order_children(children, maximizing=True):
                value = max(value, self.search(child, depth - 1, alpha, beta, False))
                alpha = max(alpha, value)
                if beta <= alpha:
                    self.stats.cutoffs += 1
                    break
        else:
            value = INFINITY
            for child in self.order_children(children, maximizing=False):
                value = min(value, self.search(child, depth - 1, alpha, beta, True))
                beta = min(beta, value)
                if beta <= alpha:
                    self.stats.cutoffs += 1
                    break
        return value

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def children(self, snapshot: CombatSnapshot, side: Side) -> List[SearchNode]:
        return generate_children(snapshot, side, allow_stacking=self.allow_stacking)

    def order_children(self, children: List[SearchNode], maximizing: bool) -> List[SearchNode]:
        """
        Sort by static evaluation, descending for the maximizer and
        ascending for the minimizer. The sort is stable, so equal scores
        keep generation order.
        """
        return sorted(children, key=lambda child: self.evaluate(child.snapshot), reverse=maximizing)

    def _leaf(self, node: SearchNode) -> float:
        self.stats.evaluations += 1
        return self.evaluate(node.snapshot)


def minimax(
    node: SearchNode,
    depth: int,
    evaluate: EvaluationFn,
    maximizing: bool = True,
    *,
    allow_stacking: bool = False,
) -> float:
    """
    Plain minimax without pruning or ordering.

    Shares child generation and evaluation with AlphaBetaSearch and must
    return the same value for the same node and depth.
    """
    if depth <= 0:
        return evaluate(node.snapshot)

    side = Side.FRIENDLY if maximizing else Side.ENEMY
    children = generate_children(node.snapshot, side, allow_stacking=allow_stacking)
    if not children:
        return evaluate(node.snapshot)

    values = [
        minimax(child, depth - 1, evaluate, not maximizing, allow_stacking=allow_stacking)
        for child in children
    ]
    return max(values) if maximizing else min(values)
