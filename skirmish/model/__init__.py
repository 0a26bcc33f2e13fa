"""
Combat State Model.

This module provides:
- UnitStat: Immutable unit record
- CombatSnapshot / SearchNode: Search-tree states and child generation
- Evaluator: Heuristic utility of a snapshot
"""

from .unit import UnitStat
from .state import CombatSnapshot, SearchNode, generate_children
from .evaluation import EvaluationWeights, Evaluator

__all__ = [
    "UnitStat",
    "CombatSnapshot",
    "SearchNode",
    "generate_children",
    "EvaluationWeights",
    "Evaluator",
]
