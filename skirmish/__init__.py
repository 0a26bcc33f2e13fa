"""
Skirmish decision core: A* grid pathfinding and alpha-beta search over
joint unit actions.

Usage:
    from skirmish import CombatSnapshot, Evaluator, AlphaBetaSearch
    from skirmish.scenarios import create_skirmish_scenario

    world = create_skirmish_scenario()
    snapshot = CombatSnapshot.from_world(world, player=0)
    engine = AlphaBetaSearch(Evaluator.for_snapshot(snapshot))
    joint_action = engine.best_action(snapshot, depth=3)
"""

from .core import Action, Cell, JointAction, MoveDir, Side, UnitKind
from .model import CombatSnapshot, EvaluationWeights, Evaluator, SearchNode, UnitStat, generate_children
from .search import AlphaBetaSearch, minimax
from .world import GridPathfinder, WorldSnapshot, find_path, hop_distance, should_replan

__version__ = "0.1.0"

__all__ = [
    "Action",
    "Cell",
    "JointAction",
    "MoveDir",
    "Side",
    "UnitKind",
    "CombatSnapshot",
    "EvaluationWeights",
    "Evaluator",
    "SearchNode",
    "UnitStat",
    "generate_children",
    "AlphaBetaSearch",
    "minimax",
    "GridPathfinder",
    "WorldSnapshot",
    "find_path",
    "hop_distance",
    "should_replan",
]
