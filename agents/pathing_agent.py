"""
Navigation agent: walks a footman to the enemy townhall along an A* path
and attacks it on arrival.

The path is planned once at episode start and kept across turns. It is
only recomputed when the enemy footman steps onto it close to our unit
(see skirmish.world.pathfinding.should_replan).
"""

from __future__ import annotations

import time
from typing import List, Optional

from infra.logger import get_logger
from skirmish.core.actions import Action, JointAction
from skirmish.core.errors import ActionTranslationError, WorldLookupError
from skirmish.core.types import Cell, Side, UnitKind
from skirmish.model.unit import UnitStat
from skirmish.world.pathfinding import REPLAN_RADIUS, GridPathfinder, should_replan
from skirmish.world.snapshot import UnitView, WorldSnapshot
from .base_agent import BaseAgent
from .registry import register_agent
from .translation import move_toward

log = get_logger(__name__)


@register_agent("astar")
class PathingAgent(BaseAgent):
    """
    Single-footman A* navigation agent.

    Attributes:
        footman_id: Our footman (first unit of the controlled player)
        townhall_id: Enemy townhall to reach
        enemy_footman_id: Enemy footman acting as a dynamic blocker, if any
        path: Remaining cells to walk, front first. The townhall cell itself
            is never part of it.
        total_plan_time: Seconds spent in A* over the episode
        total_execution_time: Seconds spent in on_turn over the episode
    """

    def __init__(self, player: int, name: str = None, heuristic: str = "chebyshev", replan_radius: int = REPLAN_RADIUS, **_):
        super().__init__(player, name)
        self.heuristic = heuristic
        self.replan_radius = replan_radius
        self._reset()

    def _reset(self) -> None:
        self.footman_id: Optional[int] = None
        self.townhall_id: Optional[int] = None
        self.enemy_footman_id: Optional[int] = None
        self.pathfinder: Optional[GridPathfinder] = None
        self.path: List[Cell] = []
        self.replans = 0
        self.total_plan_time = 0.0
        self.total_execution_time = 0.0

    # ------------------------------------------------------------------
    # Episode hooks
    # ------------------------------------------------------------------
    def on_episode_start(self, world: WorldSnapshot) -> None:
        self._reset()
        try:
            self.locate_units(world)
        except WorldLookupError as exc:
            log.error("%s cannot start: %s", self, exc)
            return
        self.pathfinder = GridPathfinder(world.width, world.height, world.obstacles, self.heuristic)
        self.plan(world)

    def on_turn(self, world: WorldSnapshot) -> JointAction:
        started = time.perf_counter()
        try:
            return self._step(world)
        except WorldLookupError as exc:
            log.error("%s turn %d skipped: %s", self, world.turn, exc)
            return {}
        finally:
            self.total_execution_time += time.perf_counter() - started

    def on_episode_end(self, world: WorldSnapshot) -> None:
        log.info(
            "%s finished: plan time %.4fs, execution time %.4fs, %d replans",
            self,
            self.total_plan_time,
            self.total_execution_time,
            self.replans,
        )

    # ------------------------------------------------------------------
    # Planning
    # ------------------------------------------------------------------
    def locate_units(self, world: WorldSnapshot) -> None:
        """
        Find our footman, the enemy player, its townhall and its footman.

        Raises:
            WorldLookupError: If the footman, enemy player or townhall is missing
        """
        own = world.units_of(self.player)
        if not own:
            raise WorldLookupError(f"No units found for player {self.player}")
        footman = own[0]
        if footman.kind != UnitKind.MELEE:
            raise WorldLookupError(f"Footman unit not found, first unit is {footman.label()}")

        enemy_player = world.enemy_player_of(self.player)
        if enemy_player is None:
            raise WorldLookupError("Failed to find the enemy player")

        enemies = world.units_of(enemy_player)
        if not enemies:
            raise WorldLookupError(f"Failed to find units of player {enemy_player}")

        townhall_id = None
        enemy_footman_id = None
        for unit in enemies:
            if unit.kind == UnitKind.STRUCTURE:
                townhall_id = unit.id
            elif unit.kind == UnitKind.MELEE:
                enemy_footman_id = unit.id
            else:
                log.warning("Ignoring enemy unit of unknown role: %s", unit.label())

        if townhall_id is None:
            raise WorldLookupError("Couldn't find the enemy townhall")

        self.footman_id = footman.id
        self.townhall_id = townhall_id
        self.enemy_footman_id = enemy_footman_id
        log.info("%s controls %s, target %s", self, footman.label(), world.get_unit(townhall_id).label())

    def plan(self, world: WorldSnapshot) -> List[Cell]:
        """Recompute the held path from the footman's current cell."""
        footman = self._require(world, self.footman_id, "footman")
        townhall = self._require(world, self.townhall_id, "townhall")

        started = time.perf_counter()
        route = self.pathfinder.find_path(footman.pos, townhall.pos, self._blocker_cell(world))
        self.total_plan_time += time.perf_counter() - started

        # drop the townhall cell; the footman attacks from the cell before it
        self.path = route[:-1]
        if not route:
            log.warning("%s found no path from %s to %s", self, footman.pos, townhall.pos)
        else:
            log.debug("%s planned %d steps: %s", self, len(self.path), self.path)
        return self.path

    # ------------------------------------------------------------------
    # Execution
    # ------------------------------------------------------------------
    def _step(self, world: WorldSnapshot) -> JointAction:
        if self.pathfinder is None:
            raise WorldLookupError("Units were never located")

        footman = self._require(world, self.footman_id, "footman")
        townhall = self._require(world, self.townhall_id, "townhall")

        replanned = should_replan(self.path, footman.pos, self._blocker_cell(world), self.replan_radius)
        if replanned:
            log.info("%s replanning: enemy footman blocks the path", self)
            self.replans += 1
            self.plan(world)

        while self.path and self.path[0] == footman.pos:
            self.path.pop(0)

        attacker = UnitStat.from_view(footman, Side.FRIENDLY)
        if not self.path and not replanned and not attacker.in_reach(townhall.pos):
            # stranded, e.g. the blocker sealed the only corridor last time
            self.replans += 1
            self.plan(world)

        if self.path:
            try:
                action = move_toward(footman.pos, self.path[0])
            except ActionTranslationError as exc:
                # the footman is no longer next to its path
                log.warning("%s: %s, replanning", self, exc)
                self.replans += 1
                if not self.plan(world):
                    return {}
                action = move_toward(footman.pos, self.path[0])
            return {footman.id: action}

        if attacker.in_reach(townhall.pos):
            return {footman.id: Action.attack(townhall.id)}

        return {}

    def _blocker_cell(self, world: WorldSnapshot) -> Optional[Cell]:
        if self.enemy_footman_id is None:
            return None
        unit = world.get_unit(self.enemy_footman_id)
        return unit.pos if unit is not None and unit.alive else None

    @staticmethod
    def _require(world: WorldSnapshot, unit_id: Optional[int], role: str) -> UnitView:
        unit = world.get_unit(unit_id) if unit_id is not None else None
        if unit is None or not unit.alive:
            raise WorldLookupError(f"The {role} (id {unit_id}) is missing or dead")
        return unit
