"""
Position evaluation for the adversarial search.

The utility of a snapshot is a weighted sum of three features, higher
being better for the friendly (maximizing) side:

- hp: total friendly HP minus total enemy HP
- distance: for every live mobile friendly unit, the hop distance to its
  nearest live enemy, summed. The other live friendly unit acts as the
  pathfinder's dynamic blocker. Unreachable enemies count as
  width * height, which is longer than any real path.
- force: live friendly units minus live enemy units

Dead units contribute no HP and their positions are ignored. A dead mobile
friendly unit is still charged the unreachable distance, so a unit never
scores better dead than stranded. The distance weight is non-positive, so
closing in on the enemy never lowers the utility.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.types import Cell, Side
from ..world.pathfinding import GridPathfinder
from .state import CombatSnapshot
from .unit import UnitStat


@dataclass(frozen=True)
class EvaluationWeights:
    """Linear weights of the evaluation features."""
    hp: float = 1.0
    distance: float = -2.0
    force: float = 50.0

    def __post_init__(self):
        if self.hp <= 0:
            raise ValueError(f"hp weight must be positive, got {self.hp}")
        if self.distance > 0:
            raise ValueError(f"distance weight must not be positive, got {self.distance}")
        if self.force < 0:
            raise ValueError(f"force weight must not be negative, got {self.force}")


class Evaluator:
    """
    Scores snapshots for the friendly side.

    The pathfinder is injected and must describe the same map (extents
    and obstacles) as the snapshots being scored.
    """

    def __init__(self, pathfinder: GridPathfinder, weights: Optional[EvaluationWeights] = None):
        self.pathfinder = pathfinder
        self.weights = weights or EvaluationWeights()

    @classmethod
    def for_snapshot(
        cls,
        snapshot: CombatSnapshot,
        weights: Optional[EvaluationWeights] = None,
        heuristic: str = "chebyshev",
    ) -> Evaluator:
        """Build an evaluator with a pathfinder bound to the snapshot's map."""
        pathfinder = GridPathfinder(snapshot.width, snapshot.height, snapshot.obstacles, heuristic)
        return cls(pathfinder, weights)

    def __call__(self, snapshot: CombatSnapshot) -> float:
        return self.evaluate(snapshot)

    def evaluate(self, snapshot: CombatSnapshot) -> float:
        weights = self.weights
        return (
            weights.hp * self.hp_term(snapshot)
            + weights.distance * self.distance_term(snapshot)
            + weights.force * self.force_term(snapshot)
        )

    # ------------------------------------------------------------------
    # Features
    # ------------------------------------------------------------------
    @staticmethod
    def hp_term(snapshot: CombatSnapshot) -> int:
        return snapshot.total_hp(Side.FRIENDLY) - snapshot.total_hp(Side.ENEMY)

    @staticmethod
    def force_term(snapshot: CombatSnapshot) -> int:
        return len(snapshot.live_units(Side.FRIENDLY)) - len(snapshot.live_units(Side.ENEMY))

    def distance_term(self, snapshot: CombatSnapshot) -> int:
        enemies = snapshot.live_units(Side.ENEMY)
        if not enemies:
            return 0

        friendlies = snapshot.live_units(Side.FRIENDLY)
        unreachable = snapshot.width * snapshot.height
        total = 0
        for unit in snapshot.friendly:
            if not unit.kind.mobile:
                continue
            if not unit.alive:
                total += unreachable
                continue
            blocker = _first_other(friendlies, unit)
            total += min(self.hop_distance(snapshot, unit.pos, enemy.pos, blocker) for enemy in enemies)
        return total

    def hop_distance(
        self,
        snapshot: CombatSnapshot,
        start: Cell,
        goal: Cell,
        blocker: Optional[Cell] = None,
    ) -> int:
        """Pathfinder hop distance with "no path" mapped to width * height."""
        hops = self.pathfinder.distance(start, goal, blocker)
        if hops == 0 and start != goal:
            return snapshot.width * snapshot.height
        return hops


def _first_other(units: list[UnitStat], unit: UnitStat) -> Optional[Cell]:
    return next((other.pos for other in units if other.id != unit.id), None)
