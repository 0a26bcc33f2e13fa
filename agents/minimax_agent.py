"""
Minimax agent: alpha-beta search over joint actions of all friendly units.

Every turn the host world is converted into a CombatSnapshot, searched to
the configured number of plies and the best root joint action returned.
The ply count is mandatory; constructing the agent without one raises
ConfigurationError before any turn is played.
"""

from __future__ import annotations

import time
from typing import Any, Optional

from infra.logger import get_logger
from skirmish.config import SearchSettings, load_settings
from skirmish.core.actions import JointAction, describe_joint_action
from skirmish.model.evaluation import Evaluator
from skirmish.model.state import CombatSnapshot
from skirmish.search.alphabeta import AlphaBetaSearch, SearchResult
from skirmish.world.snapshot import WorldSnapshot
from .base_agent import BaseAgent
from .registry import register_agent

log = get_logger(__name__)


@register_agent("minimax")
class MinimaxAgent(BaseAgent):
    """
    Agent driven by depth-limited alpha-beta search.

    Attributes:
        settings: Validated search settings (depth, weights, stacking)
        last_result: Root result of the most recent turn, if any
        total_search_time: Seconds spent searching over the episode
    """

    def __init__(
        self,
        player: int,
        name: str = None,
        plies: Any = None,
        settings: Optional[SearchSettings] = None,
        **overrides: Any,
    ):
        """
        Initialize the agent.

        Args:
            player: Player to control
            name: Agent name (default: "MinimaxAgent")
            plies: Search depth; falls back to $SKIRMISH_PLIES when None
            settings: Pre-built settings, used as is when given
            **overrides: Other SearchSettings fields (weights, heuristic...)

        Raises:
            ConfigurationError: If no valid ply count is available
        """
        super().__init__(player, name)
        self.settings = settings if settings is not None else load_settings(plies, **overrides)
        self.last_result: Optional[SearchResult] = None
        self.total_search_time = 0.0
        self.turns_searched = 0

    def on_episode_start(self, world: WorldSnapshot) -> None:
        self.last_result = None
        self.total_search_time = 0.0
        self.turns_searched = 0
        log.info("%s searching %d plies (stacking=%s)", self, self.settings.depth, self.settings.allow_stacking)

    def on_turn(self, world: WorldSnapshot) -> JointAction:
        snapshot = CombatSnapshot.from_world(world, self.player)
        evaluator = Evaluator.for_snapshot(snapshot, self.settings.weights, self.settings.heuristic)
        engine = AlphaBetaSearch(evaluator, allow_stacking=self.settings.allow_stacking)

        started = time.perf_counter()
        if self.settings.time_budget is not None:
            result = engine.iterative_deepening(snapshot, self.settings.depth, self.settings.time_budget)
        else:
            result = engine.best_child(snapshot, self.settings.depth)
        elapsed = time.perf_counter() - started

        self.total_search_time += elapsed
        self.turns_searched += 1
        self.last_result = result

        stats = engine.stats
        if result is None:
            log.info("%s turn %d: no joint action available (%.3fs)", self, world.turn, elapsed)
            return {}

        log.info(
            "%s turn %d: %s value=%.1f depth=%d nodes=%d leaves=%d cutoffs=%d (%.3fs)",
            self,
            world.turn,
            describe_joint_action(result.action),
            result.value,
            stats.depth_reached,
            stats.nodes_expanded,
            stats.evaluations,
            stats.cutoffs,
            elapsed,
        )
        return dict(result.action)

    def on_episode_end(self, world: WorldSnapshot) -> None:
        log.info(
            "%s finished: %d searches, %.3fs total search time",
            self,
            self.turns_searched,
            self.total_search_time,
        )
